import datetime
import zoneinfo
from types import SimpleNamespace
from londontimes.utils.time_utils import (
    parse_time_internal, format_time_internal, add_minutes_to_instant,
    format_date_key, date_components
)

UTC = datetime.timezone.utc

# Test case for well-formed 24-hour strings
def test_parse_time_internal_valid():
    assert parse_time_internal("06:26") == (6, 26)
    assert parse_time_internal("00:00") == (0, 0)
    assert parse_time_internal("23:59") == (23, 59)
    # Single-digit components are still two integers
    assert parse_time_internal("6:5") == (6, 5)

# Test case for strings that must be rejected
def test_parse_time_internal_invalid():
    assert parse_time_internal("24:00") is None
    assert parse_time_internal("12:60") is None
    assert parse_time_internal("06:26:00") is None
    assert parse_time_internal("06-26") is None
    assert parse_time_internal("N/A") is None
    assert parse_time_internal(None) is None
    assert parse_time_internal(626) is None

# Test case for strings int() would accept but are not HH:mm
def test_parse_time_internal_rejects_loose_integers():
    assert parse_time_internal(" 06:26 ") is None
    assert parse_time_internal("0_6:2_6") is None
    assert parse_time_internal("-0:30") is None
    assert parse_time_internal("\u0660\u0666:\u0662\u0666") is None

def test_format_time_internal():
    instant = datetime.datetime(2025, 7, 1, 1, 47, tzinfo=UTC)
    assert format_time_internal(instant) == "01:47"
    # Shown in London time, 1 July is BST
    assert format_time_internal(instant, zoneinfo.ZoneInfo("Europe/London")) == "02:47"
    assert format_time_internal(None) == "N/A"

# Test case for adding minutes across midnight
def test_add_minutes_to_instant_crosses_midnight():
    instant = datetime.datetime(2025, 1, 1, 23, 58, tzinfo=UTC)
    assert add_minutes_to_instant(instant, 5) == datetime.datetime(2025, 1, 2, 0, 3, tzinfo=UTC)
    assert add_minutes_to_instant(instant, -10) == datetime.datetime(2025, 1, 1, 23, 48, tzinfo=UTC)
    assert add_minutes_to_instant(instant, None) is None
    assert add_minutes_to_instant(None, 5) is None

def test_format_date_key_pads_components():
    assert format_date_key(2025, 1, 1) == "2025-01-01"
    assert format_date_key(987, 12, 31) == "0987-12-31"

def test_date_components():
    assert date_components(datetime.date(2025, 7, 1)) == (2025, 7, 1)
    assert date_components(SimpleNamespace(year=2025)) == (2025, None, None)
