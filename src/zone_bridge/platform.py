"""Host zone databases, looked up by native identifier."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import tzinfo
from typing import Protocol, runtime_checkable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tzlocal.windows_tz import win_tz

logger = logging.getLogger(__name__)


@runtime_checkable
class PlatformZoneDatabase(Protocol):
    """Protocol for the host's zone database.

    Implementations: SystemZoneDatabase, WindowsZoneDatabase.
    """

    @property
    def convention(self) -> str:
        """Naming convention of native identifiers ("system" or "windows")."""
        ...

    def find(self, zone_id: str) -> tzinfo:
        """Return the rules for ``zone_id``.

        Raises ZoneInfoNotFoundError when the identifier is unknown.
        """
        ...


def _load_zoneinfo(key: str) -> ZoneInfo:
    try:
        return ZoneInfo(key)
    except (ValueError, OSError) as e:
        # malformed keys, directories like "America", over-long names
        raise ZoneInfoNotFoundError(f"No time zone found with key {key}") from e


class SystemZoneDatabase:
    """IANA-convention host: identifiers are tz database keys."""

    convention = "system"

    def find(self, zone_id: str) -> tzinfo:
        return _load_zoneinfo(zone_id)


class WindowsZoneDatabase:
    """Windows-convention host: identifiers are Windows zone names.

    Names are resolved through the CLDR Windows table, then the rules are
    loaded from the IANA database.
    """

    convention = "windows"

    def __init__(self, native_to_iana: Mapping[str, str] | None = None) -> None:
        self._native_to_iana = native_to_iana if native_to_iana is not None else win_tz

    def find(self, zone_id: str) -> tzinfo:
        iana_id = self._native_to_iana.get(zone_id)
        if iana_id is None:
            raise ZoneInfoNotFoundError(f"No time zone found with key {zone_id}")
        return _load_zoneinfo(iana_id)


def create_platform_database(convention: str) -> PlatformZoneDatabase:
    """Build the platform database for a configured naming convention."""
    if convention == "windows":
        return WindowsZoneDatabase()
    if convention != "system":
        logger.warning("Unknown platform convention %r, using system zone database", convention)
    return SystemZoneDatabase()
