# londontimes/schemas.py

from marshmallow import Schema, fields, pre_load, EXCLUDE, ValidationError

from .services.helpers.constants import MAGHRIB_KEYS


class StrictStr(fields.Str):
    """A string field that rejects bytes and other non-str input instead of coercing it."""

    def _deserialize(self, value, attr, data, **kwargs):
        if not isinstance(value, str):
            raise ValidationError("Not a valid string.")
        return super()._deserialize(value, attr, data, **kwargs)


class DayRecordSchema(Schema):
    """
    Validates one raw day-record from a timetable document.
    `magrib` is accepted as an alternate spelling and folded into `maghrib`.
    """

    class Meta:
        unknown = EXCLUDE

    date = StrictStr(required=True)
    fajr = StrictStr(required=True)
    sunrise = StrictStr(required=True)
    dhuhr = StrictStr(required=True)
    asr = StrictStr(required=True)
    maghrib = StrictStr(required=True)
    isha = StrictStr(required=True)

    @pre_load
    def normalize_maghrib(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        canonical = MAGHRIB_KEYS[0]
        # A string under the canonical key wins; otherwise take the first alternate spelling that is a string.
        if isinstance(data.get(canonical), str):
            return data
        for key in MAGHRIB_KEYS[1:]:
            if isinstance(data.get(key), str):
                data = dict(data)
                data[canonical] = data[key]
                break
        return data


class LondonTimesArgsSchema(Schema):
    """Query arguments for the daily lookup endpoint."""
    date = fields.Date(required=False)
    adjust_fajr = fields.Int(load_default=None)
    adjust_sunrise = fields.Int(load_default=None)
    adjust_dhuhr = fields.Int(load_default=None)
    adjust_asr = fields.Int(load_default=None)
    adjust_maghrib = fields.Int(load_default=None)
    adjust_isha = fields.Int(load_default=None)


class PrayerInstantSchema(Schema):
    local = fields.Str(required=True)
    utc = fields.DateTime(required=True)


class LondonTimesSchema(Schema):
    """Schema for serializing a day's lookup result."""
    date = fields.Str(required=True)
    timezone = fields.Str(required=True)
    fajr = fields.Nested(PrayerInstantSchema, required=True)
    sunrise = fields.Nested(PrayerInstantSchema, required=True)
    dhuhr = fields.Nested(PrayerInstantSchema, required=True)
    asr = fields.Nested(PrayerInstantSchema, required=True)
    maghrib = fields.Nested(PrayerInstantSchema, required=True)
    isha = fields.Nested(PrayerInstantSchema, required=True)


class CacheClearArgsSchema(Schema):
    reload_default = fields.Bool(load_default=True)


class AvailableDatesSchema(Schema):
    source = fields.Str(allow_none=True)
    count = fields.Int(required=True)
    dates = fields.List(fields.Str(), required=True)


class MessageSchema(Schema):
    message = fields.Str(required=True)
