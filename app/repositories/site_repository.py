"""
Site Repository - Data access layer for sites
"""
from typing import Optional
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.site import Site


class SiteRepository(BaseRepository[Site]):
    def __init__(self):
        super().__init__(Site)

    def get_by_id(self, db: Session, site_id: str) -> Optional[Site]:
        """Get site by ID using ORM"""
        return db.query(Site).filter(Site.si_id == site_id).first()
