# This module defines the per-date London timetable record and its decode step.
import datetime
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from marshmallow import ValidationError

from ..helpers.constants import DEFAULT_TIMEZONE, PRAYER_FIELDS
from ...schemas import DayRecordSchema
from .converter import convert_to_utc

logger = logging.getLogger(__name__)

_day_record_schema = DayRecordSchema()


@dataclass(frozen=True)
class DayRecord:
    """One day of London prayer times, as 24-hour "HH:mm" strings."""

    date: str
    fajr: str
    sunrise: str
    dhuhr: str
    asr: str
    maghrib: str
    isha: str

    @classmethod
    def from_mapping(cls, raw: Any) -> Optional["DayRecord"]:
        """
        Builds a record from a decoded JSON object.
        Returns None (never raises) if any field is missing or not a string.
        """
        return decode_day_record(raw).record

    def times(self) -> Dict[str, str]:
        """Returns the six prayer-time strings keyed by canonical prayer name."""
        return {name: getattr(self, name) for name in PRAYER_FIELDS}

    def parse_time(self, time_str: str, date_like, zone_id: str = DEFAULT_TIMEZONE) -> Optional[datetime.datetime]:
        """Interprets `time_str` as London civil time on `date_like` and returns the UTC instant."""
        return convert_to_utc(time_str, date_like, zone_id)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decoding a raw day-record: either a record, or the per-field errors."""

    record: Optional[DayRecord] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.record is not None


def decode_day_record(raw: Any) -> DecodeResult:
    """
    Validates a raw day-record and reports which fields were missing or mistyped.
    Both `maghrib` and `magrib` are accepted; the record only ever carries `maghrib`.
    """
    if not isinstance(raw, Mapping):
        return DecodeResult(errors={"_schema": [f"Expected an object, got {type(raw).__name__}."]})
    try:
        data = _day_record_schema.load(dict(raw))
    except ValidationError as err:
        errors = err.normalized_messages()
        logger.debug(f"Rejected day-record {raw.get('date')!r}: {errors}")
        return DecodeResult(errors=errors)
    return DecodeResult(record=DayRecord(**data))
