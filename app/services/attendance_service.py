"""
Attendance Service - Shift check-in / check-out with geofence validation
"""
from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.repositories.site_repository import SiteRepository
from app.repositories.guard_repository import GuardRepository
from app.repositories.shift_repository import ShiftRepository
from app.models.shift import Shift
from app.schemas.attendance import (
    AttendanceRequest,
    AttendanceResponse,
    AttendanceStatusResponse
)
from app.utils.geo import check_geofence
from app.utils.schedule import to_naive_utc
from app.core.config import settings
from app.core.exceptions import (
    NoActiveShiftException,
    OutOfRangeException,
    LocationUnavailableException
)
from atams.exceptions import NotFoundException
from atams.logging import get_logger

logger = get_logger(__name__)


class AttendanceService:
    def __init__(self) -> None:
        self.site_repo = SiteRepository()
        self.guard_repo = GuardRepository()
        self.shift_repo = ShiftRepository()

    def _validate_geofence(
        self,
        db: Session,
        site_id: str,
        lat: Optional[float],
        lon: Optional[float],
        action: str
    ) -> Optional[float]:
        """
        Validate guard location against the site's attendance radius

        Args:
            db: Database session
            site_id: Site ID of the shift
            lat: Device latitude
            lon: Device longitude
            action: "check in" or "check out" (used in the rejection message)

        Returns:
            float: Distance in meters, or None if the site has no coordinates

        Raises:
            NotFoundException: If site not found
            LocationUnavailableException: If the site has coordinates but the device sent none
            OutOfRangeException: If the guard is beyond the attendance radius
        """
        site = self.site_repo.get_by_id(db, site_id)
        if not site:
            raise NotFoundException("Site not found")

        if site.si_latitude is None or site.si_longitude is None:
            return None

        if lat is None or lon is None:
            raise LocationUnavailableException()

        radius = settings.ATTENDANCE_GEOFENCE_RADIUS_M
        result = check_geofence(lat, lon, site.si_latitude, site.si_longitude, radius)
        if not result.within:
            raise OutOfRangeException(result.distance_m, radius, action)
        return result.distance_m

    def _find_checkin_shift(self, db: Session, guard_id: int, now: datetime) -> Shift:
        """
        Find the shift a check-in applies to

        An active shift without attendance takes precedence. A scheduled shift is
        only eligible while the guard has no active shift at all.
        """
        active = self.shift_repo.get_active_shift_for_guard(db, guard_id)
        if active is not None:
            if active.sh_attendance_marked:
                raise NoActiveShiftException("You are already checked in.")
            return active

        scheduled = self.shift_repo.get_startable_scheduled_shift(
            db, guard_id, now, settings.CHECKIN_EARLY_MINUTES
        )
        if scheduled is None:
            raise NoActiveShiftException()
        return scheduled

    def check_in(
        self,
        db: Session,
        guard_id: int,
        request: AttendanceRequest,
        now: Optional[datetime] = None
    ) -> AttendanceResponse:
        """
        Mark attendance on the guard's current shift

        Args:
            db: Database session
            guard_id: Guard ID resolved from the authenticated user
            request: Device coordinates
            now: Check-in time (naive UTC); defaults to the current time

        Returns:
            AttendanceResponse: Check-in result

        Raises:
            NoActiveShiftException: No eligible shift, or already checked in
            LocationUnavailableException: Coordinates required but missing
            OutOfRangeException: Outside the attendance radius
        """
        now = to_naive_utc(now) if now else datetime.utcnow()
        shift = self._find_checkin_shift(db, guard_id, now)
        shift_id = shift.sh_id
        site_id = shift.sh_site_id
        expected_status = shift.sh_status

        distance = self._validate_geofence(db, site_id, request.latitude, request.longitude, "check in")

        # Shift transition and guard status commit together
        try:
            checked_in = self.shift_repo.mark_checked_in(
                db, shift_id, expected_status, now, request.latitude, request.longitude, commit=False
            )
            if checked_in:
                self.guard_repo.set_status(db, guard_id, "on_patrol", commit=False)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise

        if not checked_in:
            # Lost a race with a concurrent check-in
            raise NoActiveShiftException("You are already checked in.")

        logger.info(f"Guard {guard_id} checked in to shift {shift_id} at site {site_id}")

        return AttendanceResponse(
            attendance_status="checked_in",
            sh_id=shift_id,
            si_id=site_id,
            timestamp=now,
            distance_m=round(distance, 1) if distance is not None else None,
            message=f"Checked in at {now.strftime('%H:%M')}"
        )

    def check_out(
        self,
        db: Session,
        guard_id: int,
        request: AttendanceRequest,
        now: Optional[datetime] = None
    ) -> AttendanceResponse:
        """
        Complete the guard's active, checked-in shift

        Raises:
            NoActiveShiftException: No checked-in active shift
            LocationUnavailableException: Coordinates required but missing
            OutOfRangeException: Outside the attendance radius
        """
        now = to_naive_utc(now) if now else datetime.utcnow()
        shift = self.shift_repo.get_active_shift_for_guard(db, guard_id)
        if shift is None or not shift.sh_attendance_marked:
            raise NoActiveShiftException("No checked-in shift found to check out from.")
        shift_id = shift.sh_id
        site_id = shift.sh_site_id

        distance = self._validate_geofence(db, site_id, request.latitude, request.longitude, "check out")

        try:
            checked_out = self.shift_repo.mark_checked_out(
                db, shift_id, now, request.latitude, request.longitude, commit=False
            )
            if checked_out:
                self.guard_repo.set_status(db, guard_id, "active", commit=False)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise

        if not checked_out:
            raise NoActiveShiftException("No checked-in shift found to check out from.")

        logger.info(f"Guard {guard_id} checked out of shift {shift_id} at site {site_id}")

        return AttendanceResponse(
            attendance_status="checked_out",
            sh_id=shift_id,
            si_id=site_id,
            timestamp=now,
            distance_m=round(distance, 1) if distance is not None else None,
            message=f"Checked out at {now.strftime('%H:%M')}"
        )

    def get_attendance_status(
        self,
        db: Session,
        guard_id: int,
        now: Optional[datetime] = None
    ) -> AttendanceStatusResponse:
        """
        Get the guard's derived attendance record

        Looks at the active or check-in-eligible shift first; otherwise reports
        today's most recently checked-out shift. An empty record means neither exists.
        """
        now = to_naive_utc(now) if now else datetime.utcnow()

        shift = self.shift_repo.get_active_shift_for_guard(db, guard_id)
        if shift is None:
            shift = self.shift_repo.get_startable_scheduled_shift(
                db, guard_id, now, settings.CHECKIN_EARLY_MINUTES
            )

        if shift is not None:
            state = "checked_in" if shift.sh_attendance_marked else "pending"
        else:
            start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
            shift = self.shift_repo.get_last_checked_out_shift(db, guard_id, start_of_day)
            if shift is None:
                return AttendanceStatusResponse()
            state = "checked_out"

        return AttendanceStatusResponse(
            attendance_status=state,
            sh_id=shift.sh_id,
            si_id=shift.sh_site_id,
            sh_start_time=shift.sh_start_time,
            sh_end_time=shift.sh_end_time,
            sh_checked_in_at=shift.sh_checked_in_at,
            sh_checked_out_at=shift.sh_checked_out_at
        )
