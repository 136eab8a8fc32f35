"""
Alert Schemas
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AlertBase(BaseModel):
    al_type: str
    al_severity: str
    al_message: str
    al_site_id: str
    al_guard_id: Optional[int] = None
    al_shift_id: Optional[int] = None
    al_checkpoint_id: Optional[int] = None
    al_latitude: Optional[float] = None
    al_longitude: Optional[float] = None


class AlertInDB(AlertBase):
    model_config = ConfigDict(from_attributes=True)

    al_id: int
    al_status: str  # 'active', 'acknowledged', 'resolved'
    al_acknowledged: bool
    al_acknowledged_at: Optional[datetime] = None
    al_acknowledged_by: Optional[int] = None
    al_resolved_at: Optional[datetime] = None
    al_resolved_by: Optional[int] = None
    al_created_at: datetime

    @field_validator('al_acknowledged_at', 'al_resolved_at', 'al_created_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        """Fix datetime timezone format from PostgreSQL"""
        if v == '' or v is None:
            return None

        if isinstance(v, str):
            import re
            pattern = r'([+-]\d{2})$'
            match = re.search(pattern, v)
            if match:
                v = v + ':00'

        return v


class Alert(AlertInDB):
    pass


# Request schemas for API endpoints
class PanicRequest(BaseModel):
    """Request schema for the guard panic button"""
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    message: Optional[str] = Field(None, max_length=500)
