# backend/tests/test_day_record.py

import dataclasses
import datetime
import pytest

from londontimes.services.london_times.day_record import DayRecord, decode_day_record


def test_day_record_from_mapping(sample_day):
    record = DayRecord.from_mapping(sample_day)

    assert record is not None
    assert record.date == "2025-01-01"
    assert record.fajr == "06:26"
    assert record.maghrib == "16:04"
    assert record.isha == "17:41"

def test_magrib_spelling_is_normalized(sample_day):
    """The alternate 'magrib' key ends up in the canonical maghrib field."""
    canonical = DayRecord.from_mapping(sample_day)
    sample_day["magrib"] = sample_day.pop("maghrib")

    record = DayRecord.from_mapping(sample_day)

    assert record is not None
    assert record.maghrib == "16:04"
    assert record == canonical
    assert not hasattr(record, "magrib")

def test_maghrib_wins_when_both_spellings_present(sample_day):
    sample_day["magrib"] = "16:10"
    assert DayRecord.from_mapping(sample_day).maghrib == "16:04"

def test_magrib_used_when_maghrib_is_not_a_string(sample_day):
    sample_day["maghrib"] = 1604
    sample_day["magrib"] = "16:04"
    assert DayRecord.from_mapping(sample_day).maghrib == "16:04"

@pytest.mark.parametrize("missing_key", ["date", "fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha"])
def test_missing_field_returns_none(sample_day, missing_key):
    del sample_day[missing_key]
    assert DayRecord.from_mapping(sample_day) is None

@pytest.mark.parametrize("bad_value", [626, None, 6.26, b"06:26", ["06:26"], {"time": "06:26"}])
def test_mistyped_field_returns_none(sample_day, bad_value):
    sample_day["fajr"] = bad_value
    assert DayRecord.from_mapping(sample_day) is None

def test_non_mapping_input_returns_none():
    assert DayRecord.from_mapping(None) is None
    assert DayRecord.from_mapping("2025-01-01") is None
    assert DayRecord.from_mapping(["06:26"]) is None

def test_extra_keys_are_ignored(sample_day):
    sample_day["sunset"] = "16:02"
    sample_day["city"] = "london"
    assert DayRecord.from_mapping(sample_day) is not None

def test_record_is_immutable(sample_day):
    record = DayRecord.from_mapping(sample_day)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.fajr = "05:00"

def test_construction_does_not_mutate_input(sample_day):
    sample_day["magrib"] = sample_day.pop("maghrib")
    snapshot = dict(sample_day)
    DayRecord.from_mapping(sample_day)
    assert sample_day == snapshot

def test_times_in_timetable_order(sample_day):
    record = DayRecord.from_mapping(sample_day)
    assert list(record.times()) == ["fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha"]
    assert record.times()["asr"] == "13:45"

def test_parse_time_uses_london_time(sample_day):
    record = DayRecord.from_mapping(sample_day)
    parsed = record.parse_time("06:26", datetime.date(2025, 1, 1))
    assert parsed == datetime.datetime(2025, 1, 1, 6, 26, tzinfo=datetime.timezone.utc)

# --- Structured decode diagnostics ---

def test_decode_reports_missing_and_mistyped_fields(sample_day):
    del sample_day["isha"]
    sample_day["asr"] = 1345

    result = decode_day_record(sample_day)

    assert not result.ok
    assert result.record is None
    assert set(result.errors) == {"isha", "asr"}

def test_decode_reports_missing_maghrib_under_canonical_name(sample_day):
    del sample_day["maghrib"]
    result = decode_day_record(sample_day)
    assert set(result.errors) == {"maghrib"}

def test_decode_reports_non_object_input():
    result = decode_day_record(42)
    assert not result.ok
    assert "_schema" in result.errors

def test_decode_success_has_no_errors(sample_day):
    result = decode_day_record(sample_day)
    assert result.ok
    assert result.errors == {}
