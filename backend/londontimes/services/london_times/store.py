# This module holds the in-process cache of the London timetable document.
import copy
import enum
import json
import logging
import threading
from dataclasses import dataclass, field
from importlib import resources
from typing import Any, Dict, List, Mapping, Optional, Union

from ..helpers.constants import DEFAULT_RESOURCE_NAME
from ...utils.time_utils import date_components, format_date_key, parse_time_internal
from .day_record import DayRecord, decode_day_record
from .errors import InvalidDataError, MissingDataError
from ...metrics import LOOKUP_RESULTS, TIMETABLE_LOADS

logger = logging.getLogger(__name__)

RESOURCE_PACKAGE = "londontimes"
RESOURCE_DIR = "data"


class LookupStatus(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class LookupResult:
    status: LookupStatus
    date_key: Optional[str] = None
    record: Optional[DayRecord] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND


def parse_document(raw_text: Union[str, bytes]) -> Dict[str, Any]:
    """Parses timetable source text. Raises InvalidDataError if it is not a JSON object."""
    if isinstance(raw_text, bytes):
        try:
            raw_text = raw_text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidDataError("Invalid JSON string encoding") from e
    try:
        document = json.loads(raw_text)
    except (json.JSONDecodeError, TypeError) as e:
        raise InvalidDataError(f"Failed to parse JSON: {e}") from e
    if not isinstance(document, dict):
        raise InvalidDataError("JSON root must be an object")
    return document


def read_bundled_document(resource_name: str = DEFAULT_RESOURCE_NAME) -> Optional[Dict[str, Any]]:
    """
    Reads and parses a timetable shipped in the package data directory.
    Returns None if the resource is missing or does not parse.
    """
    try:
        raw_text = resources.files(RESOURCE_PACKAGE).joinpath(RESOURCE_DIR).joinpath(resource_name).read_text(encoding="utf-8")
    except (FileNotFoundError, ModuleNotFoundError, OSError) as e:
        logger.warning(f"Bundled timetable '{resource_name}' is unavailable: {e}")
        return None
    try:
        return parse_document(raw_text)
    except InvalidDataError as e:
        logger.error(f"Bundled timetable '{resource_name}' is unusable: {e}")
        return None


class LondonTimesStore:
    """
    Holds at most one timetable document, shaped {"times": {"YYYY-MM-DD": {...}}}.

    The bundled default is loaded lazily on the first lookup and day-records
    are decoded on demand. A re-entrant lock guards every replace and read.
    """

    def __init__(self, resource_name: str = DEFAULT_RESOURCE_NAME):
        self.resource_name = resource_name
        self._document: Optional[Dict[str, Any]] = None
        self._source: Optional[str] = None
        self._lock = threading.RLock()

    @property
    def is_loaded(self) -> bool:
        with self._lock:
            return self._document is not None

    @property
    def source(self) -> Optional[str]:
        """Where the current document came from: "default", "text", "document" or None."""
        with self._lock:
            return self._source

    def load(self, data: Union[str, bytes, Mapping[str, Any]]) -> None:
        """
        Replaces the current document.
        A mapping is deep-copied, so later changes by the caller do not reach
        the store. Text is parsed first; on a parse failure
        InvalidDataError is raised and the current document is left untouched.
        """
        if isinstance(data, Mapping):
            document, source = copy.deepcopy(dict(data)), "document"
        else:
            try:
                document, source = parse_document(data), "text"
            except InvalidDataError as e:
                logger.error(f"Rejected timetable load: {e}")
                raise
        with self._lock:
            self._document = document
            self._source = source
        TIMETABLE_LOADS.labels(source=source).inc()
        logger.info(f"Loaded timetable from {source} with {self._count_days(document)} day entries.")

    def load_default(self) -> bool:
        """Loads the bundled default timetable. Returns False if it is unavailable."""
        document = read_bundled_document(self.resource_name)
        if document is None:
            return False
        with self._lock:
            self._document = document
            self._source = "default"
        TIMETABLE_LOADS.labels(source="default").inc()
        logger.info(f"Loaded bundled timetable '{self.resource_name}' with {self._count_days(document)} day entries.")
        return True

    def invalidate(self) -> None:
        """Drops the current document without reloading anything."""
        with self._lock:
            self._document = None
            self._source = None
        logger.info("Timetable cache invalidated.")

    def clear(self, reload_default: bool = True) -> None:
        """
        Drops the current document and, unless told otherwise, immediately
        reloads the bundled default. A missing or broken default leaves the
        store unset.
        """
        with self._lock:
            self.invalidate()
            if reload_default:
                self.load_default()

    def lookup(self, date_like) -> LookupResult:
        """Looks up a date and reports whether it was found, absent, or stored in a malformed shape."""
        result = self._lookup(date_like)
        LOOKUP_RESULTS.labels(status=result.status.value).inc()
        return result

    def _lookup(self, date_like) -> LookupResult:
        year, month, day = date_components(date_like)
        if year is None or month is None or day is None:
            return LookupResult(LookupStatus.NOT_FOUND)
        try:
            date_key = format_date_key(year, month, day)
        except (TypeError, ValueError):
            logger.debug(f"Unusable date components: {year!r}, {month!r}, {day!r}.")
            return LookupResult(LookupStatus.NOT_FOUND)

        with self._lock:
            if self._document is None:
                self.load_default()
            document = self._document

        if document is None:
            logger.debug(f"No timetable loaded; cannot look up {date_key}.")
            return LookupResult(LookupStatus.NOT_FOUND, date_key)

        times = document.get("times")
        if not isinstance(times, Mapping):
            logger.warning("Timetable document has no 'times' object.")
            return LookupResult(LookupStatus.MALFORMED, date_key, errors={"times": ["Missing or not an object."]})

        raw_day = times.get(date_key)
        if raw_day is None:
            logger.debug(f"Timetable MISS for {date_key}.")
            return LookupResult(LookupStatus.NOT_FOUND, date_key)

        decoded = decode_day_record(raw_day)
        if not decoded.ok:
            logger.warning(f"Malformed timetable entry for {date_key}: {decoded.errors}")
            return LookupResult(LookupStatus.MALFORMED, date_key, errors=decoded.errors)

        return LookupResult(LookupStatus.FOUND, date_key, record=decoded.record)

    def get(self, date_like) -> Optional[DayRecord]:
        """Returns the day-record for a date, or None if there is no valid one."""
        return self.lookup(date_like).record

    def require(self, date_like) -> DayRecord:
        """Strict variant of get(): raises MissingDataError instead of returning None."""
        result = self.lookup(date_like)
        if result.record is None:
            raise MissingDataError(f"No valid London times for {result.date_key or date_like!r} ({result.status.value})")
        return result.record

    def dates(self) -> List[str]:
        """Returns the sorted date keys of the current document (without triggering a load)."""
        with self._lock:
            document = self._document
        if document is None:
            return []
        times = document.get("times")
        if not isinstance(times, Mapping):
            return []
        return sorted(times.keys())

    def audit(self) -> Dict[str, Dict[str, List[str]]]:
        """
        Decodes every day in the current document and returns the problems found,
        keyed by date. Times that are strings but not valid "HH:mm" values are
        reported too. An empty dict means every entry is usable.
        """
        with self._lock:
            document = self._document
        if document is None:
            return {}
        times = document.get("times")
        if not isinstance(times, Mapping):
            return {"_document": {"times": ["Missing or not an object."]}}

        problems = {}
        for date_key, raw_day in times.items():
            decoded = decode_day_record(raw_day)
            if not decoded.ok:
                problems[date_key] = decoded.errors
                continue
            bad_times = {
                name: [f"Not a valid HH:mm time: {value!r}."]
                for name, value in decoded.record.times().items()
                if parse_time_internal(value) is None
            }
            if decoded.record.date != date_key:
                bad_times["date"] = [f"Does not match its key {date_key!r}."]
            if bad_times:
                problems[date_key] = bad_times
        return problems

    @staticmethod
    def _count_days(document: Mapping[str, Any]) -> int:
        times = document.get("times")
        return len(times) if isinstance(times, Mapping) else 0
