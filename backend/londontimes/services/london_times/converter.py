# This module turns London wall-clock strings into absolute UTC instants.
import datetime
import logging
import zoneinfo
from typing import Optional

from ..helpers.constants import DEFAULT_TIMEZONE
from ...utils.time_utils import parse_time_internal, date_components

logger = logging.getLogger(__name__)

UTC = zoneinfo.ZoneInfo("UTC")


def get_zone(zone_id: str) -> Optional[zoneinfo.ZoneInfo]:
    """Returns the ZoneInfo for `zone_id`, or None if the tz database has no such zone."""
    try:
        return zoneinfo.ZoneInfo(zone_id)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Unknown time zone '{zone_id}': {e}")
        return None


def to_civil_datetime(time_str: str, date_like) -> Optional[datetime.datetime]:
    """
    Combines an "HH:mm" string with a calendar date into a naive (zone-less) datetime.
    Returns None when the time string is invalid, a date component is missing,
    or the components do not form a real calendar date.
    """
    parsed = parse_time_internal(time_str)
    if parsed is None:
        return None
    year, month, day = date_components(date_like)
    if year is None or month is None or day is None:
        return None
    hour, minute = parsed
    try:
        return datetime.datetime(year, month, day, hour, minute)
    except (TypeError, ValueError):
        return None


def convert_to_utc(time_str: str, date_like, zone_id: str = DEFAULT_TIMEZONE) -> Optional[datetime.datetime]:
    """
    Interprets `time_str` as civil time in `zone_id` on the given date and returns
    the matching instant as an aware UTC datetime.

    The offset comes from the zone's own transition rules for that date, so
    "06:26" on 2025-01-01 is 06:26 UTC (GMT) while "02:47" on 2025-07-01 is
    01:47 UTC (BST). Ambiguous or skipped wall-clock times around a transition
    resolve with fold=0, i.e. the offset in force before the change.
    """
    civil = to_civil_datetime(time_str, date_like)
    if civil is None:
        return None
    zone = get_zone(zone_id)
    if zone is None:
        return None
    try:
        return civil.replace(tzinfo=zone).astimezone(UTC)
    except (OverflowError, ValueError) as e:
        logger.warning(f"Could not resolve {civil.isoformat()} in '{zone_id}': {e}")
        return None
