"""
Checkpoint Repository - Data access layer for checkpoints
"""
from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import and_

from atams.db import BaseRepository
from app.models.checkpoint import Checkpoint


class CheckpointRepository(BaseRepository[Checkpoint]):
    def __init__(self):
        super().__init__(Checkpoint)

    def get_by_id(self, db: Session, checkpoint_id: int) -> Optional[Checkpoint]:
        """Get checkpoint by ID using ORM"""
        return db.query(Checkpoint).filter(Checkpoint.cp_id == checkpoint_id).first()

    def get_required_for_site(self, db: Session, site_id: str) -> List[Checkpoint]:
        """Get required checkpoints of a site in patrol order using ORM"""
        return db.query(Checkpoint).filter(
            and_(
                Checkpoint.cp_site_id == site_id,
                Checkpoint.cp_is_required.is_(True)
            )
        ).order_by(Checkpoint.cp_sequence_order.asc(), Checkpoint.cp_id.asc()).all()
