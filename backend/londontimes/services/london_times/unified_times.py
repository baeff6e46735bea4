# This module turns a London timetable hit into absolute prayer times.
import datetime
import logging
from typing import Dict, Mapping, Optional

from ..helpers.constants import DEFAULT_TIMEZONE, PRAYER_FIELDS
from ...metrics import CONVERSION_FAILURES
from ...utils.time_utils import add_minutes_to_instant
from .converter import convert_to_utc
from .day_record import DayRecord
from .store import LondonTimesStore

logger = logging.getLogger(__name__)


def validate_adjustments(adjustments: Optional[Mapping[str, int]]) -> Dict[str, int]:
    """
    Keeps only known prayer names from `adjustments`.
    Raises ValueError if a delta is not a whole number of minutes.
    """
    cleaned = {}
    for prayer_name, minutes in (adjustments or {}).items():
        if prayer_name not in PRAYER_FIELDS:
            logger.warning(f"Ignoring adjustment for unknown prayer '{prayer_name}'.")
            continue
        if minutes is None:
            continue
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise ValueError(f"Adjustment for {prayer_name} must be an integer number of minutes, got {minutes!r}")
        cleaned[prayer_name] = minutes
    return cleaned


def get_unified_london_times(
    store: LondonTimesStore,
    date_obj: datetime.date,
    adjustments: Optional[Mapping[str, int]] = None,
    zone_id: str = DEFAULT_TIMEZONE,
) -> Optional[Dict[str, datetime.datetime]]:
    """
    Returns the six prayer times for `date_obj` as aware UTC datetimes, in
    timetable order, or None if the store has no usable record for the day.

    Minute adjustments are added to the converted instants, never to the
    wall-clock strings, so a +5 on a BST day still lands five real minutes later.
    Callers fall back to astronomical calculation when this returns None.
    """
    deltas = validate_adjustments(adjustments)

    record = store.get(date_obj)
    if record is None:
        return None
    return convert_day_record(record, date_obj, deltas, zone_id)


def convert_day_record(
    record: DayRecord,
    date_obj: datetime.date,
    deltas: Optional[Mapping[str, int]] = None,
    zone_id: str = DEFAULT_TIMEZONE,
) -> Optional[Dict[str, datetime.datetime]]:
    """Converts every time in `record` to UTC and applies `deltas`. None if any time fails."""
    deltas = deltas or {}
    prayer_times = {}
    for prayer_name, time_str in record.times().items():
        instant = convert_to_utc(time_str, date_obj, zone_id)
        if instant is None:
            CONVERSION_FAILURES.labels(prayer=prayer_name).inc()
            logger.warning(f"Could not convert {prayer_name} '{time_str}' for {record.date}.")
            return None
        prayer_times[prayer_name] = add_minutes_to_instant(instant, deltas.get(prayer_name, 0))

    return prayer_times
