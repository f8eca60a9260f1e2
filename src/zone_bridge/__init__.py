"""zone-bridge: time zone resolution across IANA and native naming conventions."""

try:
    from importlib.metadata import version as _pkg_version
    __version__ = _pkg_version("zone-bridge")
except Exception:
    __version__ = "dev"

from zone_bridge.resolver import Resolver, TimeZoneNotFoundError
from zone_bridge.timezone_util import (
    configure,
    convert_time,
    find_time_zone_by_id,
    get_utc_offset,
    iana_to_native,
    native_to_iana,
    set_resolver_hook,
)

__all__ = [
    "Resolver",
    "TimeZoneNotFoundError",
    "configure",
    "convert_time",
    "find_time_zone_by_id",
    "get_utc_offset",
    "iana_to_native",
    "native_to_iana",
    "set_resolver_hook",
]
