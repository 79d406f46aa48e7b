from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .utils.time import format_date, format_time


class CustomerDetails(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr


class CreateReservationRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    date: str
    time: str
    name: str
    email: str


class ReservationOut(BaseModel):
    id: str
    date: str
    time: str
    customer_name: str
    customer_email: str
    status: str
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, r) -> "ReservationOut":
        status = getattr(r.status, "value", r.status)
        return cls(
            id=str(r.id),
            date=format_date(r.date),
            time=format_time(r.time),
            customer_name=r.customer_name,
            customer_email=r.customer_email,
            status=status,
            created_at=r.created_at,
        )


class OperationResult(BaseModel):
    success: bool
    message: str
    code: str | None = None


class AvailabilityResult(OperationResult):
    available: bool = False
    date: str | None = None
    time: str | None = None


class ReserveResult(OperationResult):
    reservation: ReservationOut | None = None
    notified: bool = False
    warnings: list[str] = Field(default_factory=list)


class ListResult(OperationResult):
    date_from: str | None = None
    date_to: str | None = None
    count: int = 0
    items: list[ReservationOut] = Field(default_factory=list)


class ReservationResult(OperationResult):
    reservation: ReservationOut | None = None
