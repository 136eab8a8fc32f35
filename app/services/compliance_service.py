"""
Compliance Service - Periodic missed-checkpoint detection over active shifts
"""
from typing import Iterator, List, NamedTuple, Optional
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.repositories.shift_repository import ShiftRepository
from app.repositories.checkpoint_repository import CheckpointRepository
from app.repositories.patrol_log_repository import PatrolLogRepository
from app.services.alert_service import AlertService
from app.models.alert import Alert as AlertModel
from app.services.settings_service import SettingsService, ComplianceConfig
from app.schemas.compliance import ComplianceSummary, CheckpointCompliance, ShiftComplianceReport
from app.utils.schedule import evaluate_schedule, is_cycle_missed, to_naive_utc
from app.core.exceptions import DataFetchFailure
from atams.exceptions import NotFoundException
from atams.logging import get_logger

logger = get_logger(__name__)


class ShiftRef(NamedTuple):
    """Plain copy of the shift fields a pass needs; survives session rollbacks"""
    shift_id: int
    guard_id: int
    site_id: str
    start_time: datetime


class CheckpointRef(NamedTuple):
    checkpoint_id: int
    name: str
    scan_interval_min: int


class ComplianceService:
    def __init__(self) -> None:
        self.shift_repo = ShiftRepository()
        self.checkpoint_repo = CheckpointRepository()
        self.patrol_log_repo = PatrolLogRepository()
        self.alert_service = AlertService()
        self.settings_service = SettingsService()

    def _load_config(self, db: Session) -> ComplianceConfig:
        try:
            return self.settings_service.load_compliance_config(db)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read system settings: {e}")
            raise DataFetchFailure("Failed to read system settings", scope="settings") from e

    def _fetch_active_shifts(self, db: Session) -> List[ShiftRef]:
        try:
            shifts = self.shift_repo.get_active_shifts(db)
            return [
                ShiftRef(s.sh_id, s.sh_guard_id, s.sh_site_id, to_naive_utc(s.sh_start_time))
                for s in shifts
            ]
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch active shifts: {e}")
            raise DataFetchFailure("Failed to fetch active shifts", scope="shifts") from e

    def _fetch_required_checkpoints(self, db: Session, shift: ShiftRef) -> List[CheckpointRef]:
        try:
            checkpoints = self.checkpoint_repo.get_required_for_site(db, shift.site_id)
            return [CheckpointRef(c.cp_id, c.cp_name, c.cp_scan_interval_min) for c in checkpoints]
        except SQLAlchemyError as e:
            raise DataFetchFailure(
                f"Failed to fetch checkpoints for site {shift.site_id}",
                scope=f"shift:{shift.shift_id}"
            ) from e

    def _fetch_scan_times(self, db: Session, shift: ShiftRef, checkpoint_id: int) -> List[datetime]:
        try:
            return self.patrol_log_repo.get_scan_times(db, checkpoint_id, shift.shift_id, shift.guard_id)
        except SQLAlchemyError as e:
            raise DataFetchFailure(
                f"Failed to fetch patrol logs for checkpoint {checkpoint_id}",
                scope=f"shift:{shift.shift_id}"
            ) from e

    def check_missed_checkpoints(self, db: Session, now: Optional[datetime] = None) -> ComplianceSummary:
        """
        Run one compliance pass over every active shift

        For each required checkpoint of the shift's site, the most recently due
        scan cycle is evaluated. A cycle whose grace deadline has passed without
        a scan at or after its due time raises a missed-checkpoint alert, unless
        an unacknowledged alert for the same site, guard and checkpoint already
        exists within the dedup window.

        A fetch failure for one shift is logged and counted in `shifts_failed`;
        the remaining shifts are still evaluated.

        Args:
            db: Database session
            now: Evaluation time (naive UTC); defaults to the current time

        Returns:
            ComplianceSummary: Counts for this pass

        Raises:
            DataFetchFailure: If settings or the active shift list cannot be read
        """
        now = to_naive_utc(now) if now else datetime.utcnow()
        config = self._load_config(db)
        shifts = self._fetch_active_shifts(db)

        alerts_created = 0
        shifts_failed = 0
        for shift in shifts:
            try:
                for _ in self._check_shift(db, shift, config, now):
                    alerts_created += 1
            except DataFetchFailure as e:
                db.rollback()
                shifts_failed += 1
                logger.error(f"Compliance check skipped shift {shift.shift_id}: {e.message} ({e.__cause__})")

        logger.info(
            f"Compliance pass complete: shifts_checked={len(shifts)} "
            f"alerts_created={alerts_created} shifts_failed={shifts_failed}"
        )

        return ComplianceSummary(
            shifts_checked=len(shifts),
            alerts_created=alerts_created,
            shifts_failed=shifts_failed,
            grace_period_minutes=config.grace_period_minutes,
            checked_at=now
        )

    def _check_shift(
        self, db: Session, shift: ShiftRef, config: ComplianceConfig, now: datetime
    ) -> Iterator[AlertModel]:
        """Evaluate one shift, yielding each alert as soon as it is saved"""
        for checkpoint in self._fetch_required_checkpoints(db, shift):
            try:
                cycle = evaluate_schedule(
                    shift.start_time, now, checkpoint.scan_interval_min, config.grace_period_minutes
                )
            except ValueError as e:
                logger.warning(f"Skipping checkpoint {checkpoint.checkpoint_id}: {e}")
                continue

            if cycle is None or now <= cycle.deadline:
                continue

            scan_times = self._fetch_scan_times(db, shift, checkpoint.checkpoint_id)
            if not is_cycle_missed(cycle, now, scan_times):
                continue

            try:
                duplicate = self.alert_service.find_recent_missed_checkpoint_alert(
                    db, shift.site_id, shift.guard_id, checkpoint.checkpoint_id,
                    checkpoint.name, now, config.dedup_window_minutes
                )
            except SQLAlchemyError as e:
                raise DataFetchFailure(
                    f"Failed to fetch recent alerts for checkpoint {checkpoint.checkpoint_id}",
                    scope=f"shift:{shift.shift_id}"
                ) from e

            if duplicate is not None:
                logger.debug(
                    f"Alert for checkpoint {checkpoint.checkpoint_id} suppressed by open alert {duplicate.al_id}"
                )
                continue

            try:
                alert = self.alert_service.create_missed_checkpoint_alert(
                    db, shift.site_id, shift.guard_id, shift.shift_id,
                    checkpoint.checkpoint_id, checkpoint.name, now
                )
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to create alert for checkpoint {checkpoint.checkpoint_id}: {e}")
                continue
            yield alert

    def evaluate_shift(self, db: Session, shift_id: int, now: Optional[datetime] = None) -> ShiftComplianceReport:
        """
        Report the schedule state of every required checkpoint of a shift

        Read-only; never creates alerts.

        Raises:
            NotFoundException: If shift not found
        """
        now = to_naive_utc(now) if now else datetime.utcnow()
        shift_model = self.shift_repo.get(db, shift_id)
        if not shift_model:
            raise NotFoundException("Shift not found")

        shift = ShiftRef(
            shift_model.sh_id, shift_model.sh_guard_id,
            shift_model.sh_site_id, to_naive_utc(shift_model.sh_start_time)
        )
        config = self._load_config(db)

        results = []
        for checkpoint in self._fetch_required_checkpoints(db, shift):
            scan_times = [to_naive_utc(t) for t in self._fetch_scan_times(db, shift, checkpoint.checkpoint_id)]
            last_scanned_at = max(scan_times) if scan_times else None
            try:
                cycle = evaluate_schedule(
                    shift.start_time, now, checkpoint.scan_interval_min, config.grace_period_minutes
                )
            except ValueError as e:
                logger.warning(f"Skipping checkpoint {checkpoint.checkpoint_id}: {e}")
                continue

            if cycle is None:
                status = "not_due"
            elif any(t >= cycle.last_due_at for t in scan_times):
                status = "scanned"
            elif now <= cycle.deadline:
                status = "pending"
            else:
                status = "missed"

            results.append(CheckpointCompliance(
                cp_id=checkpoint.checkpoint_id,
                cp_name=checkpoint.name,
                cp_scan_interval_min=checkpoint.scan_interval_min,
                expected_cycles=cycle.expected_cycles if cycle else 0,
                last_due_at=cycle.last_due_at if cycle else None,
                deadline=cycle.deadline if cycle else None,
                last_scanned_at=last_scanned_at,
                status=status
            ))

        return ShiftComplianceReport(
            sh_id=shift.shift_id,
            sh_guard_id=shift.guard_id,
            sh_site_id=shift.site_id,
            sh_status=shift_model.sh_status,
            grace_period_minutes=config.grace_period_minutes,
            evaluated_at=now,
            checkpoints=results
        )
