from datetime import datetime, timedelta

from app.models import Alert, Shift
from app.services.qr_token_service import QrTokenService
from tests.conftest import SITE_LAT, SITE_LON, meters_north

SCHEDULER_HEADERS = {"X-Scheduler-Key": "test-scheduler-key"}


def current_shift(make_shift, guard, attendance_marked=True, started_minutes_ago=5):
    start = datetime.utcnow().replace(microsecond=0) - timedelta(minutes=started_minutes_ago)
    return make_shift(guard, start=start, attendance_marked=attendance_marked)


def test_root_and_health(client):
    assert client.get("/").json()["name"] == "patrol-compliance"
    assert client.get("/health").json()["status"] == "ok"


def test_compliance_trigger_requires_scheduler_key(client):
    resp = client.post("/api/v1/compliance/check-missed-checkpoints", headers={"X-Scheduler-Key": "wrong"})
    assert resp.status_code == 403
    assert resp.json()["success"] is False

    resp = client.post("/api/v1/compliance/check-missed-checkpoints")
    assert resp.status_code == 422


def test_compliance_trigger_creates_alerts(client, db, seed_guard, seed_checkpoints, make_shift, grace_period):
    grace_period("5")
    current_shift(make_shift, seed_guard, started_minutes_ago=22)

    resp = client.post("/api/v1/compliance/check-missed-checkpoints", headers=SCHEDULER_HEADERS)

    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["shifts_checked"] == 1
    assert data["alerts_created"] == 1
    assert data["grace_period_minutes"] == 5
    assert db.query(Alert).count() == 1

    again = client.post("/api/v1/compliance/check-missed-checkpoints", headers=SCHEDULER_HEADERS)
    assert again.json()["data"]["alerts_created"] == 0


def test_shift_report_requires_supervisor(client, guard_user, seed_guard, make_shift):
    shift = current_shift(make_shift, seed_guard)

    resp = client.get(f"/api/v1/compliance/shifts/{shift.sh_id}")

    assert resp.status_code == 403


def test_shift_report(client, supervisor_user, seed_guard, seed_checkpoints, make_shift):
    shift = current_shift(make_shift, seed_guard)

    resp = client.get(f"/api/v1/compliance/shifts/{shift.sh_id}")

    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["sh_id"] == shift.sh_id
    assert {c["cp_name"] for c in data["checkpoints"]} == {"Main Gate", "Loading Dock"}


def test_unauthenticated_request_is_rejected(client):
    resp = client.post("/api/v1/attendance/check-in", json={})
    assert resp.status_code == 401


def test_check_in_and_out_flow(client, db, guard_user, seed_guard, make_shift):
    shift = current_shift(make_shift, seed_guard, attendance_marked=False)
    near = {"latitude": SITE_LAT + meters_north(100), "longitude": SITE_LON}

    resp = client.post("/api/v1/attendance/check-in", json=near)
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["attendance_status"] == "checked_in"

    resp = client.get("/api/v1/attendance/me")
    assert resp.json()["data"]["attendance_status"] == "checked_in"

    resp = client.post("/api/v1/attendance/check-in", json=near)
    assert resp.status_code == 409
    assert resp.json()["details"]["error"] == "no_active_shift"

    resp = client.post("/api/v1/attendance/check-out", json=near)
    assert resp.status_code == 200, resp.text

    db.expire_all()
    assert db.get(Shift, shift.sh_id).sh_status == "completed"


def test_check_in_out_of_range(client, guard_user, seed_guard, make_shift):
    current_shift(make_shift, seed_guard, attendance_marked=False)

    resp = client.post(
        "/api/v1/attendance/check-in",
        json={"latitude": SITE_LAT + meters_north(600), "longitude": SITE_LON}
    )

    assert resp.status_code == 403
    body = resp.json()
    assert body["details"]["error"] == "out_of_range"
    assert abs(body["details"]["distance_m"] - 600) < 1


def test_check_in_missing_location(client, guard_user, seed_guard, make_shift):
    current_shift(make_shift, seed_guard, attendance_marked=False)

    resp = client.post("/api/v1/attendance/check-in", json={})

    assert resp.status_code == 400
    assert resp.json()["details"]["error"] == "location_unavailable"


def test_user_without_guard_profile(client, supervisor_user):
    resp = client.post("/api/v1/attendance/check-in", json={})
    assert resp.status_code == 404


def test_patrol_scan(client, guard_user, seed_guard, seed_checkpoints, make_shift):
    current_shift(make_shift, seed_guard)
    checkpoint = seed_checkpoints[0]
    token = QrTokenService().generate_checkpoint_token(checkpoint.cp_id, checkpoint.cp_site_id)

    resp = client.post("/api/v1/patrol/scan", json={"token": token})

    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    assert data["cp_id"] == checkpoint.cp_id
    assert data["is_on_time"] is True


def test_patrol_scan_invalid_token(client, guard_user, seed_guard, make_shift):
    current_shift(make_shift, seed_guard)

    resp = client.post("/api/v1/patrol/scan", json={"token": "not-a-jwt"})

    assert resp.status_code == 400


def test_checkpoint_qr_token(client, supervisor_user, seed_checkpoints):
    checkpoint = seed_checkpoints[1]

    resp = client.get(f"/api/v1/patrol/checkpoints/{checkpoint.cp_id}/qr-token")

    assert resp.status_code == 200, resp.text
    token = resp.json()["data"]["token"]
    assert QrTokenService().verify_checkpoint_token(token)["cp_id"] == checkpoint.cp_id


def test_geofence_position(client, guard_user, seed_guard):
    inside = client.post(
        "/api/v1/geofence/position",
        json={"latitude": SITE_LAT + meters_north(20), "longitude": SITE_LON}
    )
    outside = client.post(
        "/api/v1/geofence/position",
        json={"latitude": SITE_LAT + meters_north(400), "longitude": SITE_LON}
    )

    assert inside.json()["data"]["event"]["ge_event_type"] == "enter"
    assert outside.json()["data"]["event"]["ge_event_type"] == "exit"


def test_geofence_position_validates_coordinates(client, guard_user, seed_guard):
    resp = client.post("/api/v1/geofence/position", json={"latitude": 123, "longitude": SITE_LON})
    assert resp.status_code == 422


def test_alert_list_and_acknowledge(client, db, seed_guard, seed_checkpoints, make_shift, supervisor_user):
    current_shift(make_shift, seed_guard, started_minutes_ago=80)
    client.post("/api/v1/compliance/check-missed-checkpoints", headers=SCHEDULER_HEADERS)

    resp = client.get("/api/v1/alerts", params={"acknowledged": False})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["total"] == 1
    al_id = body["data"][0]["al_id"]

    resp = client.post(f"/api/v1/alerts/{al_id}/acknowledge")
    assert resp.status_code == 200
    assert resp.json()["data"]["al_acknowledged_by"] == supervisor_user["user_id"]

    resp = client.post(f"/api/v1/alerts/{al_id}/acknowledge")
    assert resp.status_code == 409


def test_alert_list_requires_supervisor(client, guard_user):
    resp = client.get("/api/v1/alerts")
    assert resp.status_code == 403


def test_panic_button(client, db, guard_user, seed_guard, make_shift):
    shift = current_shift(make_shift, seed_guard)

    resp = client.post(
        "/api/v1/alerts/panic",
        json={"latitude": SITE_LAT, "longitude": SITE_LON, "message": "Need backup at gate"}
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    assert data["al_type"] == "panic_button"
    assert data["al_severity"] == "critical"
    assert data["al_status"] == "active"
    assert data["al_shift_id"] == shift.sh_id
    assert data["al_latitude"] == SITE_LAT

    stored = db.query(Alert).filter(Alert.al_id == data["al_id"]).one()
    assert stored.al_message == "Need backup at gate"


def test_panic_button_validates_coordinates(client, guard_user, seed_guard):
    resp = client.post("/api/v1/alerts/panic", json={"latitude": 91})
    assert resp.status_code == 422


def test_resolve_alert(client, db, seed_guard, supervisor_user):
    alert = Alert(
        al_type="panic_button",
        al_severity="critical",
        al_message="Panic button triggered",
        al_site_id="SITE-A",
        al_guard_id=seed_guard.gu_id,
        al_acknowledged=False,
        al_created_at=datetime.utcnow()
    )
    db.add(alert)
    db.commit()

    resp = client.post(f"/api/v1/alerts/{alert.al_id}/resolve")
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["al_status"] == "resolved"
    assert data["al_resolved_by"] == supervisor_user["user_id"]
    assert data["al_acknowledged_by"] == supervisor_user["user_id"]

    resp = client.post(f"/api/v1/alerts/{alert.al_id}/resolve")
    assert resp.status_code == 409


def test_resolve_requires_supervisor(client, guard_user):
    resp = client.post("/api/v1/alerts/1/resolve")
    assert resp.status_code == 403
