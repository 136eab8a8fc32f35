"""
Patrol Log Repository - Data access layer for checkpoint scans
"""
from typing import List
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import and_

from atams.db import BaseRepository
from app.models.patrol_log import PatrolLog


class PatrolLogRepository(BaseRepository[PatrolLog]):
    def __init__(self):
        super().__init__(PatrolLog)

    def get_scan_times(
        self,
        db: Session,
        checkpoint_id: int,
        shift_id: int,
        guard_id: int
    ) -> List[datetime]:
        """Get scan timestamps of a checkpoint within a guard's shift using ORM"""
        rows = db.query(PatrolLog.pl_scanned_at).filter(
            and_(
                PatrolLog.pl_checkpoint_id == checkpoint_id,
                PatrolLog.pl_shift_id == shift_id,
                PatrolLog.pl_guard_id == guard_id
            )
        ).order_by(PatrolLog.pl_scanned_at.asc()).all()
        return [row[0] for row in rows]
