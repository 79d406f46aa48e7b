from flask import Blueprint, current_app, request
from pydantic import ValidationError

from ..auth import check_admin
from ..extensions import db
from ..http import jerror, jresult
from ..schemas import CreateReservationRequest
from ..service import SchedulingService
from ..store import ReservationStore

bp = Blueprint("turnos", __name__)

_FAILURE_STATUS = {
    "SLOT_TAKEN": 409,
    "NOT_FOUND": 404,
}


def scheduling_service(notify: bool = True) -> SchedulingService:
    """Builds a service bound to the current app context's session."""
    cfg = current_app.config
    return SchedulingService(
        ReservationStore(db.session),
        current_app.extensions.get("turnos.notifier") if notify else None,
        tz=cfg["TIMEZONE"],
        business_hours=(cfg["BUSINESS_HOURS_START"], cfg["BUSINESS_HOURS_END"]),
        clock=current_app.extensions.get("turnos.clock"),
    )


def _respond(result, ok_status: int = 200):
    if result.success:
        return jresult(result, ok_status)
    return jresult(result, _FAILURE_STATUS.get(result.code, 422))


def _flag(value: str | None, default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


@bp.get("/availability")
def availability():
    date = request.args.get("date")
    time = request.args.get("time")
    if not date or not time:
        return jerror(400, "MISSING_PARAMS", "Missing 'date' (YYYY-MM-DD) or 'time' (HH:MM) query parameter.")
    return _respond(scheduling_service().check_availability(date, time))


@bp.post("")
def create_reservation():
    payload = request.get_json(silent=True)
    if not payload:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    try:
        data = CreateReservationRequest.model_validate(payload)
    except ValidationError as e:
        return jerror(422, "VALIDATION_ERROR", "Invalid input.", details=e.errors(include_url=False))

    result = scheduling_service().reserve(data.date, data.time, data.name, data.email)
    return _respond(result, 201)


@bp.get("")
def list_reservations():
    """
    Admin list for a date range.
    Query: ?from=YYYY-MM-DD&to=YYYY-MM-DD&active_only=true
    """
    if not check_admin():
        return jerror(401, "UNAUTHORIZED", "Missing or invalid bearer token.")
    result = scheduling_service().list_reservations(
        request.args.get("from") or None,
        request.args.get("to") or None,
        _flag(request.args.get("active_only")),
    )
    return _respond(result)


@bp.get("/<reservation_id>")
def get_reservation(reservation_id: str):
    return _respond(scheduling_service().get_reservation(reservation_id))


@bp.post("/<reservation_id>/cancel")
def cancel_reservation(reservation_id: str):
    return _respond(scheduling_service().cancel(reservation_id))
