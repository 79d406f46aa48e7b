import threading
from datetime import date, time

from turnos.blueprints.turnos import scheduling_service
from turnos.extensions import db
from turnos.models import Reservation, ReservationStatus


def _race(app, workers: int):
    barrier = threading.Barrier(workers)
    results = [None] * workers

    def worker(i):
        with app.app_context():
            service = scheduling_service()
            barrier.wait()
            results[i] = service.reserve("2099-06-01", "14:00", f"Customer {i}", f"customer{i}@example.com")
            db.session.remove()

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results


def test_two_concurrent_reserves_one_wins(app):
    results = _race(app, 2)

    assert sorted(r.success for r in results) == [False, True]
    loser = next(r for r in results if not r.success)
    assert loser.code == "SLOT_TAKEN"

    with app.app_context():
        active = db.session.query(Reservation).filter_by(
            date=date(2099, 6, 1), time=time(14, 0), status=ReservationStatus.ACTIVE
        ).count()
    assert active == 1


def test_many_concurrent_reserves_one_wins(app):
    results = _race(app, 6)
    assert sum(r.success for r in results) == 1
    assert {r.code for r in results if not r.success} == {"SLOT_TAKEN"}
