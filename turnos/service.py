"""
Scheduling operations over the reservation store.

Each public method validates its arguments before touching the store and
always returns a result model. Expected business outcomes (bad input, a taken
slot, an unknown id) come back as ``success=False`` with a ``code``; only
store faults (``StoreError``) are raised.
"""
import logging
from datetime import datetime
from typing import Callable

from pydantic import ValidationError as PydanticValidationError

from .errors import DuplicateError, NotFoundError, ValidationError
from .models import ReservationStatus
from .notifier import Notifier
from .schemas import (
    AvailabilityResult,
    CustomerDetails,
    ListResult,
    ReservationOut,
    ReservationResult,
    ReserveResult,
)
from .utils.time import format_date, get_zone, local_now, parse_date, parse_time
from .utils import validators

logger = logging.getLogger(__name__)


class SchedulingService:
    def __init__(
        self,
        store,
        notifier: Notifier | None = None,
        *,
        tz: str = "UTC",
        business_hours: tuple[str, str] = ("09:00", "18:00"),
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.notifier = notifier
        self.tz = get_zone(tz)
        self.business_hours = business_hours
        self._clock = clock or (lambda: local_now(self.tz))

    def now(self) -> datetime:
        return self._clock().astimezone(self.tz)

    def today(self) -> str:
        return format_date(self.now().date())

    # --- validation ---

    def _check_date(self, date: str) -> None:
        if not validators.is_valid_date_format(date):
            raise ValidationError(
                "BAD_DATE",
                f'The date "{date}" is not valid. Use the format YYYY-MM-DD (for example 2024-12-25).',
            )

    def _check_time(self, time: str) -> None:
        if not validators.is_valid_time_format(time):
            raise ValidationError(
                "BAD_TIME",
                f'The time "{time}" is not valid. Use 24-hour HH:MM (for example 14:30).',
            )

    def _check_slot(self, date: str, time: str) -> None:
        self._check_date(date)
        self._check_time(time)
        if not validators.is_future_date(date, now=self.now()):
            raise ValidationError("PAST_DATE", f"The date {date} is in the past. Pick today or a later date.")

    def _check_customer(self, name: str, email: str) -> CustomerDetails:
        try:
            return CustomerDetails(name=name, email=email)
        except PydanticValidationError as e:
            fields = {err["loc"][0] for err in e.errors() if err.get("loc")}
            if "name" in fields:
                raise ValidationError("BAD_NAME", "The customer name must not be empty.") from e
            raise ValidationError("BAD_EMAIL", f'"{email}" is not a valid e-mail address.') from e

    # --- operations ---

    def check_availability(self, date: str, time: str) -> AvailabilityResult:
        logger.info("check_availability date=%s time=%s", date, time)
        try:
            self._check_slot(date, time)
        except ValidationError as e:
            return AvailabilityResult(success=False, available=False, code=e.code, message=e.message, date=date, time=time)

        available = not self.store.exists_active(parse_date(date), parse_time(time))
        if available:
            message = f"The slot on {date} at {time} is available."
        else:
            message = f"The slot on {date} at {time} is not available. It is already booked."
        return AvailabilityResult(success=True, available=available, message=message, date=date, time=time)

    def reserve(self, date: str, time: str, customer_name: str, customer_email: str) -> ReserveResult:
        logger.info("reserve date=%s time=%s", date, time)
        try:
            self._check_slot(date, time)
            if not validators.is_future_datetime(date, time, now=self.now()):
                raise ValidationError(
                    "PAST_DATETIME",
                    f"Cannot book a slot in the past. {date} {time} has already passed.",
                )
            customer = self._check_customer(customer_name, customer_email)
        except ValidationError as e:
            return ReserveResult(success=False, code=e.code, message=e.message)

        warnings = []
        start, end = self.business_hours
        if not validators.is_within_business_hours(time, start, end):
            logger.warning("Reservation at %s is outside business hours (%s-%s)", time, start, end)
            warnings.append(f"{time} is outside business hours ({start}-{end}).")

        try:
            res = self.store.insert(
                date=parse_date(date),
                time=parse_time(time),
                customer_name=customer.name,
                customer_email=str(customer.email).lower(),
            )
        except DuplicateError:
            return ReserveResult(
                success=False,
                code="SLOT_TAKEN",
                message=f"Sorry, the slot on {date} at {time} is not available. Please pick another date or time.",
            )

        out = ReservationOut.from_model(res)
        logger.info("Reservation %s created for %s %s", out.id, out.date, out.time)

        notified = self._notify(out, warnings)
        message = f"Reservation confirmed for {out.date} at {out.time}. Your reservation ID is {out.id}."
        if notified:
            message += " A confirmation e-mail has been sent."
        return ReserveResult(success=True, message=message, reservation=out, notified=notified, warnings=warnings)

    def _notify(self, out: ReservationOut, warnings: list[str]) -> bool:
        """Runs after the insert has committed; failures only add a warning."""
        if self.notifier is None:
            return False
        try:
            sent = bool(
                self.notifier.notify_confirmation(out.customer_email, out.customer_name, out.date, out.time, out.id)
            )
        except Exception:
            logger.exception("Notifier failed for reservation %s", out.id)
            sent = False
        if not sent:
            warnings.append("The confirmation e-mail could not be sent.")
        return sent

    def list_reservations(
        self, date_from: str | None = None, date_to: str | None = None, active_only: bool = True
    ) -> ListResult:
        date_from = date_from or self.today()
        date_to = date_to or date_from
        logger.info("list_reservations from=%s to=%s active_only=%s", date_from, date_to, active_only)
        try:
            self._check_date(date_from)
            self._check_date(date_to)
            if parse_date(date_to) < parse_date(date_from):
                raise ValidationError("BAD_RANGE", f"The end date {date_to} is before the start date {date_from}.")
        except ValidationError as e:
            return ListResult(success=False, code=e.code, message=e.message, date_from=date_from, date_to=date_to)

        rows = self.store.list(parse_date(date_from), parse_date(date_to), active_only)
        items = [ReservationOut.from_model(r) for r in rows]
        if not items:
            message = f"There are no reservations between {date_from} and {date_to}."
        else:
            message = f"There are {len(items)} reservation(s) between {date_from} and {date_to}."
        return ListResult(
            success=True, message=message, date_from=date_from, date_to=date_to, count=len(items), items=items
        )

    def cancel(self, reservation_id: str) -> ReservationResult:
        logger.info("cancel id=%s", reservation_id)
        try:
            res, changed = self.store.set_status(reservation_id, ReservationStatus.CANCELLED)
        except NotFoundError:
            return ReservationResult(
                success=False,
                code="NOT_FOUND",
                message=f"No reservation found with id: {reservation_id}. Check that the ID is correct.",
            )
        out = ReservationOut.from_model(res)
        if changed:
            message = f"The reservation for {out.date} at {out.time} has been cancelled."
        else:
            message = f"The reservation for {out.date} at {out.time} was already cancelled."
        return ReservationResult(success=True, message=message, reservation=out)

    def get_reservation(self, reservation_id: str) -> ReservationResult:
        res = self.store.get(reservation_id)
        if res is None:
            return ReservationResult(
                success=False, code="NOT_FOUND", message=f"No reservation found with id: {reservation_id}."
            )
        out = ReservationOut.from_model(res)
        return ReservationResult(success=True, message=f"Reservation {out.id} is {out.status}.", reservation=out)
