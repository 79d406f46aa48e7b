"""
Data access for the ``turnos`` table.

The store is bound to an explicit SQLAlchemy session and finishes every
operation with a commit or a rollback, so nothing is held between calls.
Slot exclusivity is decided by the partial unique index on insert, not by a
read beforehand.
"""
import logging
import uuid
from datetime import date, time

from sqlalchemy import select, update, exists
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import DuplicateError, NotFoundError, StoreError
from .models import SLOT_INDEX, Reservation, ReservationStatus

logger = logging.getLogger(__name__)


def _as_uuid(value) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (ValueError, AttributeError, TypeError):
        return None


def _is_slot_conflict(err: IntegrityError) -> bool:
    """True when the violated constraint is the one-active-reservation-per-slot index."""
    orig = err.orig
    diag = getattr(orig, "diag", None)
    if diag is not None and getattr(diag, "constraint_name", None):
        return diag.constraint_name == SLOT_INDEX
    text = str(orig)
    # SQLite names the columns instead of the index.
    return SLOT_INDEX in text or "UNIQUE constraint failed: turnos.date, turnos.time" in text


class ReservationStore:
    def __init__(self, session: Session):
        self.session = session

    def insert(self, *, date: date, time: time, customer_name: str, customer_email: str) -> Reservation:
        res = Reservation(
            date=date,
            time=time,
            customer_name=customer_name,
            customer_email=customer_email,
            status=ReservationStatus.ACTIVE,
        )
        self.session.add(res)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if not _is_slot_conflict(e):
                raise StoreError(f"Could not create reservation: {e.orig}") from e
            logger.info("Slot %s %s already has an active reservation", date, time)
            raise DuplicateError(f"Slot {date} {time} is already taken.") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"Could not create reservation: {e}") from e
        return res

    def list(self, date_from: date, date_to: date, active_only: bool = True) -> list[Reservation]:
        q = select(Reservation).where(Reservation.date >= date_from, Reservation.date <= date_to)
        if active_only:
            q = q.where(Reservation.status == ReservationStatus.ACTIVE)
        q = q.order_by(Reservation.date.asc(), Reservation.time.asc(), Reservation.created_at.asc())
        try:
            rows = list(self.session.execute(q).scalars().all())
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"Could not list reservations: {e}") from e
        return rows

    def exists_active(self, date: date, time: time) -> bool:
        q = select(
            exists().where(
                Reservation.date == date,
                Reservation.time == time,
                Reservation.status == ReservationStatus.ACTIVE,
            )
        )
        try:
            found = bool(self.session.execute(q).scalar())
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"Could not check availability: {e}") from e
        return found

    def get(self, reservation_id) -> Reservation | None:
        rid = _as_uuid(reservation_id)
        if rid is None:
            return None
        try:
            res = self.session.execute(
                select(Reservation).where(Reservation.id == rid).execution_options(populate_existing=True)
            ).scalar_one_or_none()
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"Could not load reservation: {e}") from e
        return res

    def set_status(self, reservation_id, status: ReservationStatus) -> tuple[Reservation, bool]:
        """
        Moves a reservation to `status` and returns it with whether the row
        changed. Only CANCELLED is a legal target; setting it on an already
        cancelled reservation succeeds with changed=False.
        """
        if status != ReservationStatus.CANCELLED:
            raise ValueError(f"Reservations can only be moved to {ReservationStatus.CANCELLED.value!r}.")
        rid = _as_uuid(reservation_id)
        if rid is None:
            raise NotFoundError(reservation_id)

        stmt = (
            update(Reservation)
            .where(Reservation.id == rid, Reservation.status == ReservationStatus.ACTIVE)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        try:
            changed = bool(self.session.execute(stmt).rowcount)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"Could not update reservation: {e}") from e

        res = self.get(rid)
        if res is None:
            raise NotFoundError(reservation_id)
        return res, changed
