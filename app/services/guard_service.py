"""
Guard Service - Resolve the guard profile of an authenticated user
"""
from sqlalchemy.orm import Session

from app.repositories.guard_repository import GuardRepository
from app.models.guard import Guard
from atams.exceptions import NotFoundException, ForbiddenException


class GuardService:
    def __init__(self) -> None:
        self.guard_repo = GuardRepository()

    def get_guard_for_user(self, db: Session, user_id: int) -> Guard:
        """
        Get guard profile linked to an SSO user

        Raises:
            NotFoundException: If the user has no guard profile
            ForbiddenException: If the guard is suspended
        """
        guard = self.guard_repo.get_by_user_id(db, user_id)
        if not guard:
            raise NotFoundException("Guard profile not found for this user")
        if guard.gu_status == "suspended":
            raise ForbiddenException("Guard account is suspended")
        return guard
