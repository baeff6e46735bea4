import datetime
from typing import Optional, Tuple


def parse_time_internal(time_str: Optional[str]) -> Optional[Tuple[int, int]]:
    """
    Parses a 24-hour "HH:mm" string into an (hour, minute) tuple.
    Returns None unless the string is two ASCII digit groups joined by ":"
    with both components in range.
    """
    if not isinstance(time_str, str):
        return None
    parts = time_str.split(":")
    if len(parts) != 2:
        return None
    if not all(len(part) <= 2 and part.isascii() and part.isdigit() for part in parts):
        return None
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour, minute


def format_time_internal(dt_obj: Optional[datetime.datetime], tz: Optional[datetime.tzinfo] = None) -> str:
    """
    Formats a datetime into an HH:MM string, optionally after moving it into `tz`.
    Returns "N/A" if dt_obj is None.
    """
    if not dt_obj: return "N/A"
    if tz is not None:
        dt_obj = dt_obj.astimezone(tz)
    return dt_obj.strftime("%H:%M")


def add_minutes_to_instant(dt_obj: Optional[datetime.datetime], minutes_to_add: Optional[int]) -> Optional[datetime.datetime]:
    """
    Adds a signed number of minutes to an absolute instant. Handles crossing midnight.
    Returns None if inputs are invalid.
    """
    if not dt_obj or minutes_to_add is None: return None
    return dt_obj + datetime.timedelta(minutes=int(minutes_to_add))


def format_date_key(year: int, month: int, day: int) -> str:
    """Formats date components as the "YYYY-MM-DD" key used by timetable documents."""
    return f"{year:04d}-{month:02d}-{day:02d}"


def date_components(date_like) -> Tuple[Optional[int], Optional[int], Optional[int]]:
    """
    Extracts (year, month, day) from a datetime.date or any object carrying
    those attributes. Missing attributes come back as None.
    """
    return (
        getattr(date_like, "year", None),
        getattr(date_like, "month", None),
        getattr(date_like, "day", None),
    )
