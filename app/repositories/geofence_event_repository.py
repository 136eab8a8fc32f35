"""
Geofence Event Repository - Data access layer for site entry/exit events
"""
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_

from atams.db import BaseRepository
from app.models.geofence_event import GeofenceEvent


class GeofenceEventRepository(BaseRepository[GeofenceEvent]):
    def __init__(self):
        super().__init__(GeofenceEvent)

    def get_last_event(self, db: Session, guard_id: int, site_id: str) -> Optional[GeofenceEvent]:
        """Get the latest event of a guard at a site using ORM"""
        return db.query(GeofenceEvent).filter(
            and_(
                GeofenceEvent.ge_guard_id == guard_id,
                GeofenceEvent.ge_site_id == site_id
            )
        ).order_by(GeofenceEvent.ge_created_at.desc(), GeofenceEvent.ge_id.desc()).first()
