"""
Panic Service - Guard-raised emergency alerts
"""
from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Session

from app.repositories.shift_repository import ShiftRepository
from app.services.alert_service import AlertService
from app.models.guard import Guard
from app.schemas.alert import Alert, PanicRequest
from app.utils.schedule import to_naive_utc
from atams.exceptions import BadRequestException


class PanicService:
    def __init__(self) -> None:
        self.shift_repo = ShiftRepository()
        self.alert_service = AlertService()

    def trigger(
        self,
        db: Session,
        guard: Guard,
        request: PanicRequest,
        now: Optional[datetime] = None
    ) -> Alert:
        """
        Raise a critical panic_button alert for the guard's assigned site

        Works with or without a shift in progress; the active shift, when there
        is one, is attached to the alert. Coordinates and message are optional.

        Args:
            db: Database session
            guard: Guard resolved from the authenticated user
            request: Optional position and free-text message
            now: Alert time (naive UTC); defaults to the current time

        Returns:
            Alert: The new alert, status "active"

        Raises:
            BadRequestException: If the guard has no assigned site
        """
        if not guard.gu_site_id:
            raise BadRequestException("No site assigned")

        now = to_naive_utc(now) if now else datetime.utcnow()
        shift = self.shift_repo.get_active_shift_for_guard(db, guard.gu_id)

        alert = self.alert_service.create_panic_alert(
            db,
            guard.gu_site_id,
            guard.gu_id,
            shift.sh_id if shift else None,
            request.latitude,
            request.longitude,
            request.message,
            now
        )
        return Alert.model_validate(alert)
