import jwt
import pytest
from datetime import timedelta

from app.models import Checkpoint, Site
from app.schemas.patrol import ScanRequest
from app.services.patrol_service import PatrolService
from app.services.qr_token_service import QrTokenService
from app.core.exceptions import NoActiveShiftException
from atams.exceptions import BadRequestException, NotFoundException
from tests.conftest import T0


def minutes(n):
    return timedelta(minutes=n)


@pytest.fixture
def service():
    return PatrolService()


def token_for(checkpoint):
    return QrTokenService().generate_checkpoint_token(checkpoint.cp_id, checkpoint.cp_site_id)


def test_qr_token_round_trip(seed_checkpoints):
    checkpoint = seed_checkpoints[0]
    payload = QrTokenService().verify_checkpoint_token(token_for(checkpoint))

    assert payload["cp_id"] == checkpoint.cp_id
    assert payload["si_id"] == "SITE-A"
    assert payload["aud"] == f"checkpoint:{checkpoint.cp_id}"


def test_qr_token_with_wrong_secret_is_rejected(seed_checkpoints):
    forged = jwt.encode(
        {"iss": "patrol-compliance", "aud": "checkpoint:1", "cp_id": 1, "si_id": "SITE-A"},
        "not-the-secret",
        algorithm="HS256"
    )
    with pytest.raises(BadRequestException):
        QrTokenService().verify_checkpoint_token(forged)


def test_qr_token_with_mismatched_audience_is_rejected():
    service = QrTokenService()
    tampered = jwt.encode(
        {"iss": "patrol-compliance", "aud": "checkpoint:2", "cp_id": 1, "si_id": "SITE-A"},
        service.secret,
        algorithm=service.algorithm
    )
    with pytest.raises(BadRequestException):
        service.verify_checkpoint_token(tampered)


def test_scan_inside_grace_is_on_time(db, service, seed_guard, seed_checkpoints, make_shift, grace_period):
    grace_period("5")
    shift = make_shift(seed_guard)
    checkpoint = seed_checkpoints[0]

    result = service.submit_scan(
        db, seed_guard.gu_id, ScanRequest(token=token_for(checkpoint), notes="All clear"), now=T0 + minutes(18)
    )

    assert result.is_on_time is True
    assert result.sh_id == shift.sh_id
    assert result.cp_name == "Main Gate"


def test_scan_after_missed_deadline_is_late(db, service, seed_guard, seed_checkpoints, make_shift, grace_period):
    grace_period("5")
    make_shift(seed_guard)

    result = service.submit_scan(
        db, seed_guard.gu_id, ScanRequest(token=token_for(seed_checkpoints[0])), now=T0 + minutes(25)
    )

    assert result.is_on_time is False


def test_scan_after_earlier_scan_in_cycle_is_on_time(db, service, seed_guard, seed_checkpoints, make_shift,
                                                     grace_period):
    grace_period("5")
    make_shift(seed_guard)
    token = token_for(seed_checkpoints[0])

    service.submit_scan(db, seed_guard.gu_id, ScanRequest(token=token), now=T0 + minutes(16))
    second = service.submit_scan(db, seed_guard.gu_id, ScanRequest(token=token), now=T0 + minutes(27))

    assert second.is_on_time is True


def test_scan_requires_checked_in_shift(db, service, seed_guard, seed_checkpoints, make_shift):
    make_shift(seed_guard, attendance_marked=False)

    with pytest.raises(NoActiveShiftException):
        service.submit_scan(db, seed_guard.gu_id, ScanRequest(token=token_for(seed_checkpoints[0])), now=T0)


def test_scan_of_other_site_checkpoint_is_rejected(db, service, seed_guard, make_shift):
    db.add(Site(si_id="SITE-Z", si_name="Elsewhere"))
    db.commit()
    foreign = Checkpoint(cp_site_id="SITE-Z", cp_name="Side Door", cp_scan_interval_min=30)
    db.add(foreign)
    db.commit()
    db.refresh(foreign)
    make_shift(seed_guard)

    with pytest.raises(BadRequestException):
        service.submit_scan(db, seed_guard.gu_id, ScanRequest(token=token_for(foreign)), now=T0)


def test_qr_token_for_unknown_checkpoint(db, service):
    with pytest.raises(NotFoundException):
        service.get_checkpoint_qr_token(db, 999)
