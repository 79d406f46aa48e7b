
import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Index, func, text
from .extensions import db

SLOT_INDEX = "uq_turnos_active_slot"


class ReservationStatus(str, enum.Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Reservation(db.Model):
    __tablename__ = "turnos"
    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    date = db.Column(db.Date, nullable=False)
    time = db.Column(db.Time, nullable=False)
    customer_name = db.Column(db.String(120), nullable=False)
    customer_email = db.Column(db.String(255), nullable=False)
    status = db.Column(
        db.Enum(
            ReservationStatus,
            name="turno_status",
            native_enum=False,
            create_constraint=True,
            length=16,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=ReservationStatus.ACTIVE,
        server_default=ReservationStatus.ACTIVE.value,
    )
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now())

    __table_args__ = (
        # At most one active reservation per slot; cancelled rows are history.
        Index(
            SLOT_INDEX,
            "date",
            "time",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
        Index("ix_turnos_date", "date"),
        Index("ix_turnos_status", "status"),
        Index("ix_turnos_date_time_status", "date", "time", "status"),
    )

    @property
    def is_active(self) -> bool:
        return self.status == ReservationStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<Reservation {self.id} {self.date} {self.time} {self.status.value}>"
