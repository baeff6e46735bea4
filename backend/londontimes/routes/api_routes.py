# londontimes/routes/api_routes.py
from flask import request, current_app
import datetime
import time
import zoneinfo
from flask_smorest import Blueprint, abort
from typing import Dict, Any

from ..extensions import get_store
from ..metrics import API_REQUEST_DURATION_SECONDS
from ..schemas import (
    LondonTimesArgsSchema, LondonTimesSchema, CacheClearArgsSchema,
    AvailableDatesSchema, MessageSchema
)
from ..services.helpers.constants import PRAYER_FIELDS
from ..services.london_times.errors import InvalidDataError
from ..services.london_times.store import LookupStatus
from ..services.london_times.unified_times import convert_day_record, validate_adjustments
from ..utils.time_utils import format_time_internal
from prometheus_client import generate_latest

api_bp = Blueprint('API', __name__, url_prefix='/api')

@api_bp.route('/metrics')
def metrics():
    return generate_latest(), 200, {'Content-Type': 'text/plain; version=0.0.4; charset=utf-8'}


def _requested_adjustments(args: Dict[str, Any]) -> Dict[str, int]:
    """Config defaults overridden by any adjust_<prayer> query arguments."""
    adjustments = dict(current_app.config.get('LONDON_TIMES_ADJUSTMENTS') or {})
    for prayer_name in PRAYER_FIELDS:
        value = args.get(f"adjust_{prayer_name}")
        if value is not None:
            adjustments[prayer_name] = value
    return adjustments


@api_bp.route('/london-times')
@api_bp.arguments(LondonTimesArgsSchema, location='query')
@api_bp.response(200, LondonTimesSchema, description="Prayer times for the requested day.")
@api_bp.alt_response(404, schema=MessageSchema, description="No timetable entry for the requested day.")
@api_bp.alt_response(422, schema=MessageSchema, description="The timetable entry for the day is malformed.")
def get_london_times(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Get the London timetable for one day.
    Each prayer is returned as the local wall-clock time and the UTC instant,
    with any configured or requested minute adjustments applied after conversion.
    """
    started = time.perf_counter()
    try:
        return _london_times_response(args)
    finally:
        API_REQUEST_DURATION_SECONDS.labels(endpoint='london_times').observe(time.perf_counter() - started)


def _london_times_response(args: Dict[str, Any]) -> Dict[str, Any]:
    zone_id = current_app.config.get('LONDON_TIMEZONE', 'Europe/London')
    date_obj = args.get('date') or datetime.datetime.now(zoneinfo.ZoneInfo(zone_id)).date()

    try:
        deltas = validate_adjustments(_requested_adjustments(args))
    except ValueError as e:
        current_app.logger.warning(f"Rejected adjustments: {e}")
        abort(422, message=str(e))

    result = get_store().lookup(date_obj)
    if result.status is LookupStatus.NOT_FOUND:
        abort(404, message=f"No London times available for {date_obj.isoformat()}.")
    if result.status is LookupStatus.MALFORMED:
        current_app.logger.error(f"Malformed timetable entry for {result.date_key}: {result.errors}")
        abort(422, message=f"The timetable entry for {result.date_key} is malformed.", errors=result.errors)

    prayer_times = convert_day_record(result.record, date_obj, deltas, zone_id)
    if prayer_times is None:
        abort(422, message=f"The timetable entry for {result.date_key} contains an invalid time.")

    zone = zoneinfo.ZoneInfo(zone_id)
    response_data = {"date": result.record.date, "timezone": zone_id}
    for prayer_name, instant in prayer_times.items():
        response_data[prayer_name] = {"local": format_time_internal(instant, zone), "utc": instant}

    return response_data


@api_bp.route('/london-times/dates')
@api_bp.response(200, AvailableDatesSchema, description="Dates covered by the current timetable.")
def get_available_dates() -> Dict[str, Any]:
    """List the dates present in the current timetable document."""
    store = get_store()
    if not store.is_loaded:
        store.load_default()
    dates = store.dates()
    return {"source": store.source, "count": len(dates), "dates": dates}


@api_bp.route('/london-times/data', methods=['PUT'])
@api_bp.response(200, MessageSchema, description="Timetable loaded.")
@api_bp.alt_response(400, schema=MessageSchema, description="The body is not a JSON object.")
def put_timetable() -> Dict[str, Any]:
    """
    Replace the current timetable with the JSON document in the request body.
    The previous timetable stays in place if the body does not parse.
    """
    store = get_store()
    try:
        store.load(request.get_data())
    except InvalidDataError as e:
        abort(400, message=str(e))
    current_app.logger.info(f"Timetable replaced via API from {request.remote_addr}.")
    return {"message": f"Timetable loaded with {len(store.dates())} days."}


@api_bp.route('/london-times/cache', methods=['DELETE'])
@api_bp.arguments(CacheClearArgsSchema, location='query')
@api_bp.response(200, MessageSchema, description="Cache cleared.")
def clear_timetable_cache(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Drop the current timetable. By default the bundled timetable is reloaded
    straight away; pass reload_default=false to leave the store empty.
    """
    store = get_store()
    if args.get('reload_default', True):
        store.clear()
        if store.is_loaded:
            return {"message": "Timetable cache cleared and bundled timetable reloaded."}
        return {"message": "Timetable cache cleared; bundled timetable is unavailable."}
    store.invalidate()
    return {"message": "Timetable cache cleared."}
