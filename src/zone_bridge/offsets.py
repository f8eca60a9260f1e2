"""UTC offset computation around daylight-saving transitions."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo

logger = logging.getLogger(__name__)


def _is_aware(when: datetime) -> bool:
    return when.tzinfo is not None and when.utcoffset() is not None


def _fold_offsets(local: datetime, zone: tzinfo) -> tuple[timedelta, timedelta]:
    early = local.replace(tzinfo=zone, fold=0).utcoffset()
    late = local.replace(tzinfo=zone, fold=1).utcoffset()
    return early, late  # type: ignore[return-value]


def _survives_round_trip(local: datetime, zone: tzinfo) -> bool:
    placed = local.replace(tzinfo=zone, fold=0)
    back = placed.astimezone(timezone.utc).astimezone(zone)
    return back.replace(tzinfo=None, fold=0) == local.replace(fold=0)


class OffsetCalculator:
    """Computes UTC offsets for instants and zone-naive local times.

    Ambiguous local times (the repeated hour when clocks go back) resolve to
    the larger, daylight-saving offset: that occurrence comes first, so wall
    time maps to instants monotonically. Skipped local times are left to
    the zone's own PEP 495 behaviour.

    Args:
        utc_conversion_fallback: Convert instants by shifting to UTC and
            calling ``zone.fromutc`` directly instead of ``astimezone``.
            Results are identical; this exists for tzinfo implementations
            that only get ``fromutc`` right.
    """

    def __init__(self, utc_conversion_fallback: bool = False) -> None:
        self.utc_conversion_fallback = utc_conversion_fallback

    def convert_time(self, instant: datetime, zone: tzinfo) -> datetime:
        """Express an aware instant in ``zone``'s local representation."""
        if not _is_aware(instant):
            raise ValueError(
                f"Cannot convert naive datetime {instant.isoformat()}; an instant is required"
            )

        if self.utc_conversion_fallback:
            utc_naive = (instant - instant.utcoffset()).replace(tzinfo=None)  # type: ignore[operator]
            return zone.fromutc(utc_naive.replace(tzinfo=zone))

        return instant.astimezone(zone)

    def get_utc_offset(self, when: datetime, zone: tzinfo) -> timedelta:
        """Return the UTC offset in ``zone`` for an instant or a local time.

        Aware datetimes are absolute instants. Naive datetimes are wall-clock
        times in ``zone``; when ambiguous, the daylight-saving offset wins.
        """
        if _is_aware(when):
            return self.convert_time(when, zone).utcoffset()  # type: ignore[return-value]

        if self.is_ambiguous_time(when, zone):
            offset = max(self.get_ambiguous_time_offsets(when, zone))
            logger.debug("Ambiguous local time %s in %s, using offset %s", when, zone, offset)
            return offset

        return when.replace(tzinfo=zone).utcoffset()  # type: ignore[return-value]

    def is_ambiguous_time(self, local: datetime, zone: tzinfo) -> bool:
        """True when ``local`` occurs twice in ``zone`` (fall-back overlap)."""
        local = local.replace(tzinfo=None)
        early, late = _fold_offsets(local, zone)
        if early == late:
            return False
        return _survives_round_trip(local, zone)

    def is_skipped_time(self, local: datetime, zone: tzinfo) -> bool:
        """True when ``local`` never occurs in ``zone`` (spring-forward gap)."""
        local = local.replace(tzinfo=None)
        early, late = _fold_offsets(local, zone)
        if early == late:
            return False
        return not _survives_round_trip(local, zone)

    def get_ambiguous_time_offsets(self, local: datetime, zone: tzinfo) -> tuple[timedelta, ...]:
        """Candidate offsets for an ambiguous local time, smallest first."""
        local = local.replace(tzinfo=None)
        if not self.is_ambiguous_time(local, zone):
            return ()
        return tuple(sorted(set(_fold_offsets(local, zone))))
