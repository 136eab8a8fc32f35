import pytest
from datetime import timedelta

from app.models import Guard, GeofenceEvent
from app.schemas.geofence import PositionRequest
from app.services.geofence_service import GeofenceService
from atams.exceptions import NotFoundException
from tests.conftest import T0, SITE_LAT, SITE_LON, meters_north


def position(meters):
    return PositionRequest(latitude=SITE_LAT + meters_north(meters), longitude=SITE_LON)


@pytest.fixture
def service():
    return GeofenceService()


def test_events_only_on_state_change(db, service, seed_guard):
    # Site patrol radius is 200 m
    steps = [50, 120, 260, 300, 150]
    results = [
        service.record_position(db, seed_guard, position(m), now=T0 + timedelta(minutes=i))
        for i, m in enumerate(steps)
    ]

    assert [r.is_inside for r in results] == [True, True, False, False, True]
    assert [r.event.ge_event_type if r.event else None for r in results] == ["enter", None, "exit", None, "enter"]
    assert db.query(GeofenceEvent).count() == 3


def test_first_report_outside_logs_exit(db, service, seed_guard):
    result = service.record_position(db, seed_guard, position(500), now=T0)

    assert result.is_inside is False
    assert result.event.ge_event_type == "exit"
    assert result.radius_m == 200


def test_site_without_coordinates_is_not_tracked(db, service, seed_site_without_coords):
    guard = Guard(gu_user_id=5005, gu_site_id=seed_site_without_coords.si_id)
    db.add(guard)
    db.commit()

    result = service.record_position(db, guard, position(0), now=T0)

    assert result.tracked is False
    assert result.event is None
    assert db.query(GeofenceEvent).count() == 0


def test_guard_without_site(db, service):
    guard = Guard(gu_user_id=6006)
    db.add(guard)
    db.commit()

    with pytest.raises(NotFoundException):
        service.record_position(db, guard, position(0), now=T0)
