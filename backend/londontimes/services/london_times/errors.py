# londontimes/services/london_times/errors.py


class LondonTimesError(Exception):
    """Base class for lookup table errors."""


class InvalidDataError(LondonTimesError):
    """Raised when timetable source text does not parse into an object-shaped document."""


class MissingDataError(LondonTimesError):
    """Raised by strict lookups when no valid day-record exists for a date."""
