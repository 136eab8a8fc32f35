"""
Alert Service - Alert creation, deduplication and the acknowledge/resolve lifecycle
"""
from typing import List, Optional
from datetime import datetime, timedelta
from sqlalchemy.orm import Session

from app.repositories.alert_repository import AlertRepository
from app.models.alert import Alert as AlertModel
from app.schemas.alert import Alert
from atams.exceptions import NotFoundException, ConflictException
from atams.logging import get_logger

logger = get_logger(__name__)

MISSED_CHECKPOINT = "missed_checkpoint"
PANIC_BUTTON = "panic_button"
DEFAULT_PANIC_MESSAGE = "Panic button triggered"


def missed_checkpoint_message(checkpoint_name: str) -> str:
    return f'Checkpoint "{checkpoint_name}" was not scanned during the expected interval'


class AlertService:
    def __init__(self) -> None:
        self.alert_repo = AlertRepository()

    def find_recent_missed_checkpoint_alert(
        self,
        db: Session,
        site_id: str,
        guard_id: int,
        checkpoint_id: int,
        checkpoint_name: str,
        now: datetime,
        window_minutes: int
    ) -> Optional[AlertModel]:
        """
        Find an unacknowledged missed-checkpoint alert for the same site, guard and
        checkpoint created within the last `window_minutes`.

        Acknowledged alerts never suppress a new one.
        """
        since = now - timedelta(minutes=window_minutes)
        return self.alert_repo.find_unacknowledged_since(
            db, MISSED_CHECKPOINT, site_id, guard_id, checkpoint_id, checkpoint_name, since
        )

    def create_missed_checkpoint_alert(
        self,
        db: Session,
        site_id: str,
        guard_id: int,
        shift_id: int,
        checkpoint_id: int,
        checkpoint_name: str,
        now: datetime
    ) -> AlertModel:
        """Insert a high-severity missed-checkpoint alert"""
        alert = self.alert_repo.create(db, {
            "al_type": MISSED_CHECKPOINT,
            "al_severity": "high",
            "al_message": missed_checkpoint_message(checkpoint_name),
            "al_site_id": site_id,
            "al_guard_id": guard_id,
            "al_shift_id": shift_id,
            "al_checkpoint_id": checkpoint_id,
            "al_acknowledged": False,
            "al_created_at": now
        })
        logger.info(
            f"Missed checkpoint alert {alert.al_id} created: checkpoint={checkpoint_id} "
            f"guard={guard_id} shift={shift_id}"
        )
        return alert

    def create_panic_alert(
        self,
        db: Session,
        site_id: str,
        guard_id: int,
        shift_id: Optional[int],
        latitude: Optional[float],
        longitude: Optional[float],
        message: Optional[str],
        now: datetime
    ) -> AlertModel:
        """Insert a critical panic alert; never deduplicated"""
        alert = self.alert_repo.create(db, {
            "al_type": PANIC_BUTTON,
            "al_severity": "critical",
            "al_message": (message or "").strip() or DEFAULT_PANIC_MESSAGE,
            "al_site_id": site_id,
            "al_guard_id": guard_id,
            "al_shift_id": shift_id,
            "al_latitude": latitude,
            "al_longitude": longitude,
            "al_acknowledged": False,
            "al_created_at": now
        })
        logger.warning(
            f"Panic alert {alert.al_id} raised: guard={guard_id} site={site_id} "
            f"position=({latitude}, {longitude})"
        )
        return alert

    def get_alerts(
        self,
        db: Session,
        site_id: str = None,
        guard_id: int = None,
        alert_type: str = None,
        acknowledged: bool = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Alert]:
        """Get alerts for supervisors (with filters)"""
        alerts = self.alert_repo.get_alerts_with_filters(
            db, site_id, guard_id, alert_type, acknowledged, skip, limit
        )
        return [Alert.model_validate(a) for a in alerts]

    def count_alerts(
        self,
        db: Session,
        site_id: str = None,
        guard_id: int = None,
        alert_type: str = None,
        acknowledged: bool = None
    ) -> int:
        """Count alerts (with filters)"""
        return self.alert_repo.count_alerts_with_filters(db, site_id, guard_id, alert_type, acknowledged)

    def acknowledge_alert(self, db: Session, alert_id: int, user_id: int, now: datetime = None) -> Alert:
        """
        Acknowledge an alert

        Args:
            db: Database session
            alert_id: Alert ID
            user_id: Acknowledging supervisor (SSO user id)

        Returns:
            Alert: Updated alert

        Raises:
            NotFoundException: If alert not found
            ConflictException: If alert already acknowledged
        """
        alert = self.alert_repo.get(db, alert_id)
        if not alert:
            raise NotFoundException("Alert not found")
        if alert.al_acknowledged:
            raise ConflictException("Alert already acknowledged")

        alert = self.alert_repo.update(db, alert, {
            "al_acknowledged": True,
            "al_acknowledged_at": now or datetime.utcnow(),
            "al_acknowledged_by": user_id
        })
        return Alert.model_validate(alert)

    def resolve_alert(self, db: Session, alert_id: int, user_id: int, now: datetime = None) -> Alert:
        """
        Resolve an alert

        An alert still active is acknowledged by the same user in the same step.

        Raises:
            NotFoundException: If alert not found
            ConflictException: If alert already resolved
        """
        alert = self.alert_repo.get(db, alert_id)
        if not alert:
            raise NotFoundException("Alert not found")
        if alert.al_resolved_at is not None:
            raise ConflictException("Alert already resolved")

        now = now or datetime.utcnow()
        data = {"al_resolved_at": now, "al_resolved_by": user_id}
        if not alert.al_acknowledged:
            data.update({
                "al_acknowledged": True,
                "al_acknowledged_at": now,
                "al_acknowledged_by": user_id
            })

        alert = self.alert_repo.update(db, alert, data)
        logger.info(f"Alert {alert_id} resolved by user {user_id}")
        return Alert.model_validate(alert)
