"""
Guard Repository - Data access layer for guards
"""
from typing import Optional
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.guard import Guard


class GuardRepository(BaseRepository[Guard]):
    def __init__(self):
        super().__init__(Guard)

    def get_by_user_id(self, db: Session, user_id: int) -> Optional[Guard]:
        """Get guard profile linked to an SSO user using ORM"""
        return db.query(Guard).filter(Guard.gu_user_id == user_id).first()

    def set_status(self, db: Session, guard_id: int, status: str, commit: bool = True) -> bool:
        """Update guard duty status; returns False if the guard does not exist"""
        updated = db.query(Guard).filter(Guard.gu_id == guard_id).update(
            {"gu_status": status},
            synchronize_session=False
        )
        if commit:
            db.commit()
        return updated == 1
