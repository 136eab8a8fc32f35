"""
Geofence Schemas for position tracking
"""
from typing import Optional, Literal
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class PositionRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class GeofenceEvent(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ge_id: int
    ge_guard_id: int
    ge_site_id: str
    ge_event_type: Literal["enter", "exit"]
    ge_lat: float
    ge_lon: float
    ge_distance_m: float
    ge_created_at: datetime


class GeofenceStatus(BaseModel):
    """Result of one position report; event is set only on a transition"""
    si_id: str
    tracked: bool
    is_inside: Optional[bool] = None
    distance_m: Optional[float] = None
    radius_m: float
    event: Optional[GeofenceEvent] = None
