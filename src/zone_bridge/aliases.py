"""Fixed alias table between commonly confused time zone spellings."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

# Hosts have disagreed on these spellings (Azure shipped both UTC forms,
# Mono used IANA names where Windows uses its own).
DEFAULT_ALIAS_PAIRS: tuple[tuple[str, str], ...] = (
    ("UTC", "Coordinated Universal Time"),
    ("Central European Standard Time", "CET"),
    ("Eastern Standard Time", "US/Eastern"),
    ("Central Standard Time", "US/Central"),
    ("US Central Standard Time", "US/Indiana-Stark"),
    ("Mountain Standard Time", "US/Mountain"),
    ("US Mountain Standard Time", "US/Arizona"),
    ("Pacific Standard Time", "US/Pacific"),
    ("Alaskan Standard Time", "US/Alaska"),
    ("Hawaiian Standard Time", "US/Hawaii"),
)


class AliasTable(Mapping[str, str]):
    """Immutable, symmetric mapping of identifier to alternate spelling.

    Every pair ``(a, b)`` is stored as ``a -> b`` and ``b -> a``. Adding a
    pair whose side already maps somewhere else raises ``ValueError``.
    """

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        entries: dict[str, str] = {}
        registered: list[tuple[str, str]] = []
        for first, second in pairs:
            if first == second:
                raise ValueError(f"Alias pair maps {first!r} to itself")
            for key, value in ((first, second), (second, first)):
                existing = entries.get(key)
                if existing is not None and existing != value:
                    raise ValueError(
                        f"Alias {key!r} already maps to {existing!r}, cannot map to {value!r}"
                    )
            if entries.get(first) == second:
                continue
            entries[first] = second
            entries[second] = first
            registered.append((first, second))
        self._entries = MappingProxyType(entries)
        self._pairs = tuple(registered)

    @classmethod
    def default(cls, extra_pairs: Iterable[tuple[str, str]] = ()) -> AliasTable:
        """Built-in aliases plus any configured extras."""
        return cls((*DEFAULT_ALIAS_PAIRS, *extra_pairs))

    def lookup(self, zone_id: str) -> str | None:
        return self._entries.get(zone_id)

    def pairs(self) -> tuple[tuple[str, str], ...]:
        return self._pairs

    def __getitem__(self, zone_id: str) -> str:
        return self._entries[zone_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AliasTable({len(self._pairs)} pairs)"
