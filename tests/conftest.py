import os

TEST_DB_URL = "sqlite:///./test_patrol.db"
TEST_SCHEMA_DB = "./test_patrol_schema.db"

os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ.setdefault("ATLAS_APP_CODE", "PATROL")
os.environ.setdefault("SCHEDULER_API_KEY", "test-scheduler-key")
os.environ.setdefault("CHECKPOINT_QR_SECRET", "test-checkpoint-secret")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ENCRYPTION_ENABLED", "false")

import math
import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from atams.db import Base
from app.db.session import get_db
from app.api.deps import get_current_user
from app.main import app
from app.models import Site, Guard, Shift, Checkpoint, SystemSetting
from app.utils.geo import EARTH_RADIUS_M

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})


@event.listens_for(engine, "connect")
def attach_patrol_schema(dbapi_connection, connection_record):
    dbapi_connection.execute(f"ATTACH DATABASE '{TEST_SCHEMA_DB}' AS patrol")


TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

SITE_LAT = -6.2
SITE_LON = 106.816666

# Fixed evaluation time for service-level tests (naive UTC)
T0 = datetime(2026, 3, 2, 8, 0, 0)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


def meters_north(meters: float) -> float:
    """Latitude offset (degrees) for a distance along a meridian"""
    return meters / (EARTH_RADIUS_M * math.pi / 180)


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def guard_user():
    user = {"user_id": 1001, "username": "guard1", "role_level": 1, "roles": []}
    app.dependency_overrides[get_current_user] = lambda: user
    yield user
    app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture
def supervisor_user():
    user = {"user_id": 9001, "username": "supervisor1", "role_level": 50, "roles": []}
    app.dependency_overrides[get_current_user] = lambda: user
    yield user
    app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture
def seed_site(db):
    site = Site(
        si_id="SITE-A",
        si_name="Warehouse A",
        si_latitude=SITE_LAT,
        si_longitude=SITE_LON,
        si_geofence_radius_m=200
    )
    db.add(site)
    db.commit()
    db.refresh(site)
    return site


@pytest.fixture
def seed_site_without_coords(db):
    site = Site(si_id="SITE-B", si_name="Office B")
    db.add(site)
    db.commit()
    db.refresh(site)
    return site


@pytest.fixture
def seed_guard(db, seed_site):
    guard = Guard(gu_user_id=1001, gu_site_id=seed_site.si_id, gu_status="active")
    db.add(guard)
    db.commit()
    db.refresh(guard)
    return guard


@pytest.fixture
def seed_checkpoints(db, seed_site):
    checkpoints = [
        Checkpoint(cp_site_id=seed_site.si_id, cp_name="Main Gate", cp_scan_interval_min=15, cp_sequence_order=1),
        Checkpoint(cp_site_id=seed_site.si_id, cp_name="Loading Dock", cp_scan_interval_min=60, cp_sequence_order=2),
        Checkpoint(cp_site_id=seed_site.si_id, cp_name="Roof", cp_scan_interval_min=15, cp_sequence_order=3,
                   cp_is_required=False),
    ]
    for c in checkpoints:
        db.add(c)
    db.commit()
    for c in checkpoints:
        db.refresh(c)
    return checkpoints


@pytest.fixture
def make_shift(db):
    def _make_shift(guard, site_id=None, start=T0, hours=8, status="active", attendance_marked=True):
        shift = Shift(
            sh_guard_id=guard.gu_id,
            sh_site_id=site_id or guard.gu_site_id,
            sh_start_time=start,
            sh_end_time=start + timedelta(hours=hours),
            sh_status=status,
            sh_attendance_marked=attendance_marked,
            sh_checked_in_at=start if attendance_marked else None
        )
        db.add(shift)
        db.commit()
        db.refresh(shift)
        return shift
    return _make_shift


@pytest.fixture
def grace_period(db):
    def _set(value: str):
        db.add(SystemSetting(ss_key="grace_period", ss_value=value, ss_description="Grace period in minutes"))
        db.commit()
    return _set
