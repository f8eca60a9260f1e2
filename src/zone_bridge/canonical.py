"""Canonical identifier index and IANA <-> native identifier mapping."""

from __future__ import annotations

import logging
import threading
import zoneinfo
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from zoneinfo import ZoneInfoNotFoundError

from babel.core import get_global
from tzlocal.windows_tz import tz_win, win_tz

from zone_bridge.platform import PlatformZoneDatabase

logger = logging.getLogger(__name__)

NATIVE_UTC = "UTC"
IANA_UTC = "Etc/UTC"
IANA_UTC_SPELLINGS = frozenset({"Etc/UTC", "Etc/UCT", "Etc/GMT"})


@dataclass(frozen=True)
class NativeZoneMapping:
    """One native zone and the IANA identifiers it represents."""

    native_id: str
    iana_ids: tuple[str, ...]


@runtime_checkable
class CanonicalIndex(Protocol):
    """Read-only view of an IANA-compatible zone database."""

    def canonical_id(self, zone_id: str) -> str | None:
        """Canonical identifier for ``zone_id``, or None when unknown."""
        ...

    def links_to(self, canonical_id: str) -> frozenset[str]:
        """Link identifiers that resolve to ``canonical_id``."""
        ...

    def native_zones(self) -> Sequence[NativeZoneMapping]:
        """Native-to-IANA mapping table, in lookup order."""
        ...

    def map_native_id(self, native_id: str) -> str | None:
        """Primary IANA identifier for a native identifier."""
        ...


class StaticCanonicalIndex:
    """Canonical index over in-memory tables.

    Args:
        links: Mapping of link identifier to canonical identifier.
        native_zones: Native zone table, searched in order.
        canonical_ids: Extra identifiers known to be canonical.
        primary: Mapping of native identifier to its primary IANA
            identifier. Defaults to the first IANA id of each native zone.
    """

    def __init__(
        self,
        links: Mapping[str, str],
        native_zones: Sequence[NativeZoneMapping],
        canonical_ids: frozenset[str] = frozenset(),
        primary: Mapping[str, str] | None = None,
    ) -> None:
        canonical: dict[str, str] = {zone_id: zone_id for zone_id in canonical_ids}
        canonical.update({target: target for target in links.values()})
        canonical.update(links)
        self._canonical = canonical

        reverse: dict[str, set[str]] = {}
        for link, target in links.items():
            if link != target:
                reverse.setdefault(target, set()).add(link)
        self._links = {target: frozenset(ids) for target, ids in reverse.items()}

        self._native_zones = tuple(native_zones)
        if primary is None:
            primary = {
                zone.native_id: zone.iana_ids[0] for zone in self._native_zones if zone.iana_ids
            }
        self._primary = dict(primary)

    def canonical_id(self, zone_id: str) -> str | None:
        return self._canonical.get(zone_id)

    def links_to(self, canonical_id: str) -> frozenset[str]:
        return self._links.get(canonical_id, frozenset())

    def native_zones(self) -> Sequence[NativeZoneMapping]:
        return self._native_zones

    def map_native_id(self, native_id: str) -> str | None:
        return self._primary.get(native_id)


class CldrCanonicalIndex:
    """Canonical index built from CLDR data.

    Links come from babel's ``zone_aliases``, the native table from the
    Windows mapping shipped with tzlocal. Built once, on first use.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._index: StaticCanonicalIndex | None = None

    def _get(self) -> StaticCanonicalIndex:
        if self._index is None:
            with self._lock:
                if self._index is None:
                    self._index = self._build()
        return self._index

    @staticmethod
    def _build() -> StaticCanonicalIndex:
        links: dict[str, str] = dict(get_global("zone_aliases"))

        grouped: dict[str, list[str]] = {native_id: [] for native_id in win_tz}
        for iana_id, native_id in tz_win.items():
            if iana_id and native_id:
                grouped.setdefault(native_id, []).append(iana_id)
        native_zones = [
            NativeZoneMapping(native_id=native_id, iana_ids=tuple(iana_ids))
            for native_id, iana_ids in grouped.items()
        ]

        index = StaticCanonicalIndex(
            links=links,
            native_zones=native_zones,
            canonical_ids=frozenset(zoneinfo.available_timezones()),
            primary=win_tz,
        )
        logger.debug(
            "Canonical index built: %d links, %d native zones", len(links), len(native_zones)
        )
        return index

    def canonical_id(self, zone_id: str) -> str | None:
        return self._get().canonical_id(zone_id)

    def links_to(self, canonical_id: str) -> frozenset[str]:
        return self._get().links_to(canonical_id)

    def native_zones(self) -> Sequence[NativeZoneMapping]:
        return self._get().native_zones()

    def map_native_id(self, native_id: str) -> str | None:
        return self._get().map_native_id(native_id)


class CanonicalMapper:
    """Converts identifiers between the IANA and native conventions."""

    def __init__(self, index: CanonicalIndex, platform: PlatformZoneDatabase) -> None:
        self._index = index
        self._platform = platform

    def iana_to_native(self, iana_id: str) -> str | None:
        """Return the native zone that matches the IANA zone, if one exists."""
        if iana_id in IANA_UTC_SPELLINGS:
            return NATIVE_UTC

        # The native table does not necessarily use canonical ids, so match
        # on the whole link family as well as the input itself.
        candidates = {iana_id}
        canonical = self._index.canonical_id(iana_id)
        if canonical is not None:
            candidates.add(canonical)
            candidates.update(self._index.links_to(canonical))

        for zone in self._index.native_zones():
            if not candidates.isdisjoint(zone.iana_ids):
                return zone.native_id
        return None

    def native_to_iana(self, native_id: str) -> str | None:
        """Return the primary IANA zone for a native zone, resolved to canonical."""
        if native_id == NATIVE_UTC:
            return IANA_UTC

        try:
            self._platform.find(native_id)
        except ZoneInfoNotFoundError:
            return None

        iana_id = self._index.map_native_id(native_id)
        if iana_id is None:
            return None
        return self._index.canonical_id(iana_id) or iana_id
