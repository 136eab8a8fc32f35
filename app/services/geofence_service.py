"""
Geofence Service - Track guard position against the site patrol geofence
"""
from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Session

from app.repositories.site_repository import SiteRepository
from app.repositories.geofence_event_repository import GeofenceEventRepository
from app.models.guard import Guard
from app.schemas.geofence import PositionRequest, GeofenceStatus, GeofenceEvent
from app.utils.geo import check_geofence
from app.utils.schedule import to_naive_utc
from app.core.config import settings
from atams.exceptions import NotFoundException
from atams.logging import get_logger

logger = get_logger(__name__)


class GeofenceService:
    def __init__(self) -> None:
        self.site_repo = SiteRepository()
        self.event_repo = GeofenceEventRepository()

    def record_position(
        self,
        db: Session,
        guard: Guard,
        request: PositionRequest,
        now: Optional[datetime] = None
    ) -> GeofenceStatus:
        """
        Evaluate a position report and log an enter/exit event on state change

        The first report for a guard at a site always logs an event.
        Sites without coordinates are not tracked.

        Raises:
            NotFoundException: If the guard has no assigned site or it does not exist
        """
        now = to_naive_utc(now) if now else datetime.utcnow()
        if not guard.gu_site_id:
            raise NotFoundException("No site assigned to this guard")

        site = self.site_repo.get_by_id(db, guard.gu_site_id)
        if not site:
            raise NotFoundException("Site not found")

        radius = site.si_geofence_radius_m or settings.DEFAULT_PATROL_GEOFENCE_RADIUS_M
        result = check_geofence(request.latitude, request.longitude, site.si_latitude, site.si_longitude, radius)
        if not result.checked:
            return GeofenceStatus(si_id=site.si_id, tracked=False, radius_m=radius)

        event_type = "enter" if result.within else "exit"
        last_event = self.event_repo.get_last_event(db, guard.gu_id, site.si_id)

        event = None
        if last_event is None or last_event.ge_event_type != event_type:
            created = self.event_repo.create(db, {
                "ge_guard_id": guard.gu_id,
                "ge_site_id": site.si_id,
                "ge_event_type": event_type,
                "ge_lat": request.latitude,
                "ge_lon": request.longitude,
                "ge_distance_m": result.distance_m,
                "ge_created_at": now
            })
            event = GeofenceEvent.model_validate(created)
            logger.info(f"Guard {guard.gu_id} {event_type} geofence of site {site.si_id}")

        return GeofenceStatus(
            si_id=site.si_id,
            tracked=True,
            is_inside=result.within,
            distance_m=round(result.distance_m, 1),
            radius_m=radius,
            event=event
        )
