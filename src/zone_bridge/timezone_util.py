"""Process-wide time zone helpers built on a default Resolver.

The defaults are built from ``TimeZoneConfig()`` on import. Call
``configure()`` and ``set_resolver_hook()`` during start-up, before any
concurrent lookups.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo

from zone_bridge.aliases import AliasTable
from zone_bridge.canonical import CanonicalIndex, CanonicalMapper, CldrCanonicalIndex
from zone_bridge.config.schema import TimeZoneConfig
from zone_bridge.offsets import OffsetCalculator
from zone_bridge.platform import PlatformZoneDatabase, create_platform_database
from zone_bridge.resolver import Resolver, ResolverHook, no_hook

logger = logging.getLogger(__name__)

# Shared across configure() calls; building it reads the whole tz database.
_cldr_index = CldrCanonicalIndex()


def build_resolver(
    config: TimeZoneConfig,
    hook: ResolverHook = no_hook,
    platform: PlatformZoneDatabase | None = None,
    index: CanonicalIndex | None = None,
) -> Resolver:
    """Wire a Resolver from configuration."""
    platform = platform or create_platform_database(config.platform)
    mapper = CanonicalMapper(index or _cldr_index, platform)
    aliases = AliasTable.default(config.alias_pairs())
    return Resolver(platform=platform, mapper=mapper, aliases=aliases, hook=hook)


_resolver: Resolver = build_resolver(TimeZoneConfig())
_calculator: OffsetCalculator = OffsetCalculator()


def configure(
    config: TimeZoneConfig,
    platform: PlatformZoneDatabase | None = None,
    index: CanonicalIndex | None = None,
) -> Resolver:
    """Rebuild the default resolver and offset calculator, keeping the hook."""
    global _resolver, _calculator
    _resolver = build_resolver(config, _resolver.hook, platform=platform, index=index)
    _calculator = OffsetCalculator(utc_conversion_fallback=config.utc_conversion_fallback)
    logger.info(
        "Time zone resolution configured: platform=%s, %d aliases",
        _resolver.platform.convention,
        len(_resolver.aliases.pairs()),
    )
    return _resolver


def set_resolver_hook(hook: ResolverHook | None) -> None:
    """Install the last-resort resolver hook. ``None`` restores the default."""
    global _resolver
    _resolver = _resolver.with_hook(hook or no_hook)


def get_resolver() -> Resolver:
    return _resolver


def get_offset_calculator() -> OffsetCalculator:
    return _calculator


def find_time_zone_by_id(zone_id: str) -> tzinfo:
    """Find the time zone with the given id, with fallbacks when necessary.

    Raises:
        TimeZoneNotFoundError: when no strategy resolves ``zone_id``.
    """
    return _resolver.find_by_id(zone_id)


def convert_time(instant: datetime, zone: tzinfo) -> datetime:
    return _calculator.convert_time(instant, zone)


def get_utc_offset(when: datetime, zone: tzinfo) -> timedelta:
    """UTC offset for an aware instant or a naive local time in ``zone``.

    Ambiguous local times resolve to the daylight-saving offset.
    """
    return _calculator.get_utc_offset(when, zone)


def iana_to_native(zone_id: str) -> str | None:
    return _resolver.mapper.iana_to_native(zone_id)


def native_to_iana(zone_id: str) -> str | None:
    return _resolver.mapper.native_to_iana(zone_id)
