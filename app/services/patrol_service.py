"""
Patrol Service - Checkpoint scan submission and QR issuance
"""
from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Session

from app.repositories.checkpoint_repository import CheckpointRepository
from app.repositories.shift_repository import ShiftRepository
from app.repositories.patrol_log_repository import PatrolLogRepository
from app.services.qr_token_service import QrTokenService
from app.services.settings_service import SettingsService
from app.schemas.patrol import ScanRequest, ScanResponse, CheckpointQrToken
from app.utils.schedule import is_scan_on_time, to_naive_utc
from app.core.exceptions import NoActiveShiftException
from atams.exceptions import NotFoundException, BadRequestException
from atams.logging import get_logger

logger = get_logger(__name__)


class PatrolService:
    def __init__(self) -> None:
        self.checkpoint_repo = CheckpointRepository()
        self.shift_repo = ShiftRepository()
        self.patrol_log_repo = PatrolLogRepository()
        self.qr_service = QrTokenService()
        self.settings_service = SettingsService()

    def get_checkpoint_qr_token(self, db: Session, checkpoint_id: int) -> CheckpointQrToken:
        """
        Issue the QR payload for a checkpoint

        Raises:
            NotFoundException: If checkpoint not found
        """
        checkpoint = self.checkpoint_repo.get_by_id(db, checkpoint_id)
        if not checkpoint:
            raise NotFoundException("Checkpoint not found")

        token = self.qr_service.generate_checkpoint_token(checkpoint.cp_id, checkpoint.cp_site_id)
        return CheckpointQrToken(cp_id=checkpoint.cp_id, si_id=checkpoint.cp_site_id, token=token)

    def submit_scan(
        self,
        db: Session,
        guard_id: int,
        request: ScanRequest,
        now: Optional[datetime] = None
    ) -> ScanResponse:
        """
        Record a checkpoint scan against the guard's checked-in shift

        Args:
            db: Database session
            guard_id: Guard ID resolved from the authenticated user
            request: Scanned token and optional coordinates
            now: Scan time (naive UTC); defaults to the current time

        Returns:
            ScanResponse: Scan result with on-time flag

        Raises:
            BadRequestException: Invalid token, or checkpoint of another site
            NotFoundException: Checkpoint not found
            NoActiveShiftException: Guard is not checked in
        """
        now = to_naive_utc(now) if now else datetime.utcnow()
        payload = self.qr_service.verify_checkpoint_token(request.token)

        checkpoint = self.checkpoint_repo.get_by_id(db, payload["cp_id"])
        if not checkpoint:
            raise NotFoundException("Checkpoint not found")

        shift = self.shift_repo.get_active_shift_for_guard(db, guard_id)
        if shift is None or not shift.sh_attendance_marked:
            raise NoActiveShiftException("Check in to your shift before scanning checkpoints.")

        if checkpoint.cp_site_id != shift.sh_site_id:
            raise BadRequestException("Checkpoint does not belong to the site of your shift")

        config = self.settings_service.load_compliance_config(db)
        previous_scans = self.patrol_log_repo.get_scan_times(db, checkpoint.cp_id, shift.sh_id, guard_id)
        on_time = is_scan_on_time(
            to_naive_utc(shift.sh_start_time),
            now,
            checkpoint.cp_scan_interval_min,
            config.grace_period_minutes,
            previous_scans
        )

        log = self.patrol_log_repo.create(db, {
            "pl_checkpoint_id": checkpoint.cp_id,
            "pl_shift_id": shift.sh_id,
            "pl_guard_id": guard_id,
            "pl_scanned_at": now,
            "pl_is_on_time": on_time,
            "pl_lat": request.latitude,
            "pl_lon": request.longitude,
            "pl_notes": request.notes
        })
        logger.info(f"Guard {guard_id} scanned checkpoint {checkpoint.cp_id} (on_time={on_time})")

        return ScanResponse(
            pl_id=log.pl_id,
            cp_id=checkpoint.cp_id,
            cp_name=checkpoint.cp_name,
            sh_id=log.pl_shift_id,
            scanned_at=now,
            is_on_time=on_time,
            message=f"{checkpoint.cp_name} scanned at {now.strftime('%H:%M')}"
        )
