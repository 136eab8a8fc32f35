"""
Shift Repository - Data access layer for shifts
"""
from typing import Optional, List
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from sqlalchemy import and_

from atams.db import BaseRepository
from app.models.shift import Shift


class ShiftRepository(BaseRepository[Shift]):
    def __init__(self):
        super().__init__(Shift)

    def get_active_shifts(self, db: Session) -> List[Shift]:
        """Get all shifts currently in 'active' status using ORM"""
        return db.query(Shift).filter(Shift.sh_status == "active").order_by(Shift.sh_id.asc()).all()

    def get_active_shift_for_guard(self, db: Session, guard_id: int) -> Optional[Shift]:
        """Get the guard's active shift (at most one by invariant) using ORM"""
        return db.query(Shift).filter(
            and_(
                Shift.sh_guard_id == guard_id,
                Shift.sh_status == "active"
            )
        ).order_by(Shift.sh_start_time.desc()).first()

    def get_startable_scheduled_shift(
        self,
        db: Session,
        guard_id: int,
        now: datetime,
        early_minutes: int = 0
    ) -> Optional[Shift]:
        """Get the earliest scheduled shift whose window (plus early allowance) contains now"""
        return db.query(Shift).filter(
            and_(
                Shift.sh_guard_id == guard_id,
                Shift.sh_status == "scheduled",
                Shift.sh_start_time <= now + timedelta(minutes=early_minutes),
                Shift.sh_end_time >= now
            )
        ).order_by(Shift.sh_start_time.asc()).first()

    def get_last_checked_out_shift(self, db: Session, guard_id: int, since: datetime) -> Optional[Shift]:
        """Get the guard's most recent completed shift checked out after `since`"""
        return db.query(Shift).filter(
            and_(
                Shift.sh_guard_id == guard_id,
                Shift.sh_status == "completed",
                Shift.sh_attendance_marked.is_(True),
                Shift.sh_checked_out_at >= since
            )
        ).order_by(Shift.sh_checked_out_at.desc()).first()

    def mark_checked_in(
        self,
        db: Session,
        shift_id: int,
        expected_status: str,
        checked_in_at: datetime,
        lat: Optional[float],
        lon: Optional[float],
        commit: bool = True
    ) -> bool:
        """
        Compare-and-swap check-in.
        Succeeds only if the shift is still in `expected_status` with attendance unmarked.
        Returns True if this call performed the transition.
        With commit=False the update is left uncommitted in the caller's transaction.
        """
        updated = db.query(Shift).filter(
            and_(
                Shift.sh_id == shift_id,
                Shift.sh_status == expected_status,
                Shift.sh_attendance_marked.is_(False)
            )
        ).update(
            {
                "sh_status": "active",
                "sh_attendance_marked": True,
                "sh_checked_in_at": checked_in_at,
                "sh_checkin_lat": lat,
                "sh_checkin_lon": lon
            },
            synchronize_session=False
        )
        if commit:
            db.commit()
        return updated == 1

    def mark_checked_out(
        self,
        db: Session,
        shift_id: int,
        checked_out_at: datetime,
        lat: Optional[float],
        lon: Optional[float],
        commit: bool = True
    ) -> bool:
        """
        Compare-and-swap check-out.
        Succeeds only if the shift is still active and checked in.
        """
        updated = db.query(Shift).filter(
            and_(
                Shift.sh_id == shift_id,
                Shift.sh_status == "active",
                Shift.sh_attendance_marked.is_(True)
            )
        ).update(
            {
                "sh_status": "completed",
                "sh_checked_out_at": checked_out_at,
                "sh_checkout_lat": lat,
                "sh_checkout_lon": lon
            },
            synchronize_session=False
        )
        if commit:
            db.commit()
        return updated == 1
