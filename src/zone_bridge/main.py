"""Command-line entry point for zone resolution and offset queries."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timedelta, tzinfo
from pathlib import Path

from zone_bridge import timezone_util
from zone_bridge.config.manager import ConfigManager
from zone_bridge.logging.structured import setup_logging
from zone_bridge.resolver import TimeZoneNotFoundError

logger = logging.getLogger(__name__)


def format_offset(offset: timedelta) -> str:
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def zone_name(zone: tzinfo) -> str:
    return getattr(zone, "key", None) or str(zone)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="zone-bridge", description=__doc__)
    parser.add_argument("--config", default="config.yaml")
    parser.add_argument("--defaults", default="config.defaults.yaml")
    parser.add_argument("--platform", choices=["system", "windows"], default=None)

    sub = parser.add_subparsers(dest="command", required=True)

    resolve = sub.add_parser("resolve", help="Resolve an identifier to a zone")
    resolve.add_argument("zone_id")

    offset = sub.add_parser("offset", help="UTC offset of a local time or instant")
    offset.add_argument("zone_id")
    offset.add_argument("when", type=datetime.fromisoformat)

    convert = sub.add_parser("convert", help="Convert an instant into a zone")
    convert.add_argument("zone_id")
    convert.add_argument("when", type=datetime.fromisoformat)

    to_native = sub.add_parser("iana-to-native", help="Map an IANA id to a native id")
    to_native.add_argument("zone_id")

    to_iana = sub.add_parser("native-to-iana", help="Map a native id to an IANA id")
    to_iana.add_argument("zone_id")

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> str | None:
    """Execute a parsed command and return its output line."""
    if args.command == "iana-to-native":
        return timezone_util.iana_to_native(args.zone_id)
    if args.command == "native-to-iana":
        return timezone_util.native_to_iana(args.zone_id)

    zone = timezone_util.find_time_zone_by_id(args.zone_id)
    if args.command == "resolve":
        return zone_name(zone)
    if args.command == "offset":
        return format_offset(timezone_util.get_utc_offset(args.when, zone))
    return timezone_util.convert_time(args.when, zone).isoformat()


def main(argv: list[str] | None = None) -> None:
    """Entry point for the zone-bridge command."""
    args = parse_args(argv)

    config_manager = ConfigManager(Path(args.defaults), Path(args.config))
    config = config_manager.load()

    setup_logging(config.logging)
    timezone_util.configure(config_manager.timezone_config(platform=args.platform))
    logger.debug("Running %s for %r", args.command, args.zone_id)

    try:
        output = run(args)
    except TimeZoneNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)

    if output is None:
        print(f"error: no mapping for {args.zone_id!r}", file=sys.stderr)
        sys.exit(1)
    print(output)


if __name__ == "__main__":
    main()
