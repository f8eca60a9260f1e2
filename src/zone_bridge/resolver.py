"""Time zone lookup with ordered fallbacks across naming conventions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import tzinfo
from zoneinfo import ZoneInfoNotFoundError

import structlog

from zone_bridge.aliases import AliasTable
from zone_bridge.canonical import CanonicalMapper
from zone_bridge.platform import PlatformZoneDatabase

logger = logging.getLogger(__name__)

ResolverHook = Callable[[str], tzinfo | None]
Strategy = Callable[[str], tzinfo | None]


class TimeZoneNotFoundError(KeyError):
    """No resolution strategy produced a zone for the requested identifier."""

    def __init__(self, zone_id: str) -> None:
        super().__init__(zone_id)
        self.zone_id = zone_id

    def __str__(self) -> str:
        return f"Time zone {self.zone_id!r} not found"


def no_hook(zone_id: str) -> tzinfo | None:
    """Default resolver hook: never resolves anything."""
    return None


def first_success(
    strategies: Iterable[tuple[str, Strategy]],
    zone_id: str,
) -> tzinfo | None:
    """Run strategies in order and return the first non-None result.

    A strategy that raises is logged and treated as having found nothing.
    """
    for name, strategy in strategies:
        try:
            result = strategy(zone_id)
        except Exception:
            logger.warning("Time zone fallback %r failed for %r", name, zone_id, exc_info=True)
            continue
        if result is not None:
            if name != "direct":
                logger.info("Resolved time zone %r via %s fallback", zone_id, name)
            return result
    return None


@dataclass(frozen=True)
class Resolver:
    """Turns any identifier into a zone handle.

    Order:
    1. Direct lookup in the platform zone database.
    2. Cross-convention mapping (IANA -> native, else native -> IANA).
    3. Alias table.
    4. Resolver hook.
    """

    platform: PlatformZoneDatabase
    mapper: CanonicalMapper
    aliases: AliasTable
    hook: ResolverHook = no_hook

    def with_hook(self, hook: ResolverHook) -> Resolver:
        return replace(self, hook=hook)

    def find_by_id(self, zone_id: str) -> tzinfo:
        """Find the zone for ``zone_id``, falling back when necessary.

        Raises:
            TimeZoneNotFoundError: carrying ``zone_id`` when every strategy
                came up empty.
        """
        with structlog.contextvars.bound_contextvars(zone_id=zone_id):
            zone = first_success(self._strategies(), zone_id)
        if zone is None:
            raise TimeZoneNotFoundError(zone_id)
        return zone

    def _strategies(self) -> tuple[tuple[str, Strategy], ...]:
        return (
            ("direct", self._direct),
            ("cross-convention", self._cross_convention),
            ("alias", self._alias),
            ("hook", self.hook),
        )

    def _direct(self, zone_id: str) -> tzinfo | None:
        try:
            return self.platform.find(zone_id)
        except ZoneInfoNotFoundError:
            logger.debug("Time zone %r not in %s zone database", zone_id, self.platform.convention)
            return None

    def _retry(self, zone_id: str, mapped_id: str, step: str) -> tzinfo | None:
        try:
            return self.platform.find(mapped_id)
        except ZoneInfoNotFoundError:
            logger.warning(
                "Could not find time zone %r using %s id %r", zone_id, step, mapped_id
            )
            return None

    def _cross_convention(self, zone_id: str) -> tzinfo | None:
        mapped_id = self.mapper.iana_to_native(zone_id) or self.mapper.native_to_iana(zone_id)
        if mapped_id is None:
            return None
        return self._retry(zone_id, mapped_id, "mapped")

    def _alias(self, zone_id: str) -> tzinfo | None:
        alias_id = self.aliases.lookup(zone_id)
        if alias_id is None:
            return None
        return self._retry(zone_id, alias_id, "alias")
