import threading
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone

import pytest

from turnos.app import create_app
from turnos.config import TestConfig
from turnos.errors import DuplicateError, NotFoundError
from turnos.extensions import db
from turnos.models import ReservationStatus
from turnos.service import SchedulingService
from turnos.store import ReservationStore

# Every test runs at 2030-05-10 08:00 UTC.
FIXED_NOW = datetime(2030, 5, 10, 8, 0, tzinfo=timezone.utc)


def fixed_clock():
    return FIXED_NOW


@dataclass
class FakeReservation:
    date: date
    time: time
    customer_name: str
    customer_email: str
    status: ReservationStatus = ReservationStatus.ACTIVE
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InMemoryReservationStore:
    """Same contract as ReservationStore; the lock plays the role of the unique index."""

    def __init__(self):
        self.rows: list[FakeReservation] = []
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def insert(self, *, date, time, customer_name, customer_email):
        self.calls.append("insert")
        with self._lock:
            if any(r.date == date and r.time == time and r.status == ReservationStatus.ACTIVE for r in self.rows):
                raise DuplicateError(f"Slot {date} {time} is already taken.")
            res = FakeReservation(date=date, time=time, customer_name=customer_name, customer_email=customer_email)
            self.rows.append(res)
            return res

    def list(self, date_from, date_to, active_only=True):
        self.calls.append("list")
        rows = [
            r for r in self.rows
            if date_from <= r.date <= date_to and (not active_only or r.status == ReservationStatus.ACTIVE)
        ]
        return sorted(rows, key=lambda r: (r.date, r.time, r.created_at))

    def exists_active(self, date, time):
        self.calls.append("exists_active")
        return any(r.date == date and r.time == time and r.status == ReservationStatus.ACTIVE for r in self.rows)

    def get(self, reservation_id):
        self.calls.append("get")
        return next((r for r in self.rows if str(r.id) == str(reservation_id)), None)

    def set_status(self, reservation_id, status):
        self.calls.append("set_status")
        res = next((r for r in self.rows if str(r.id) == str(reservation_id)), None)
        if res is None:
            raise NotFoundError(reservation_id)
        changed = res.status != status
        res.status = status
        return res, changed

    def active_at(self, d, t):
        return [r for r in self.rows if r.date == d and r.time == t and r.status == ReservationStatus.ACTIVE]


class RecordingNotifier:
    def __init__(self, result: bool = True):
        self.result = result
        self.calls = []

    def notify_confirmation(self, email, name, date, time, reservation_id):
        self.calls.append((email, name, date, time, reservation_id))
        return self.result


class ExplodingNotifier:
    def notify_confirmation(self, email, name, date, time, reservation_id):
        raise ConnectionError("smtp host unreachable")


@pytest.fixture
def fake_store():
    return InMemoryReservationStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def service(fake_store, notifier):
    return SchedulingService(fake_store, notifier, clock=fixed_clock)


@pytest.fixture
def app(tmp_path):
    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'turnos.db'}"

    app = create_app(_Config)
    app.extensions["turnos.clock"] = fixed_clock
    app.extensions["turnos.notifier"] = RecordingNotifier()
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    with app.app_context():
        yield ReservationStore(db.session)
