"""
Patrol Schemas for checkpoint scans and QR tokens
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PatrolLogInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    pl_id: int
    pl_checkpoint_id: int
    pl_shift_id: Optional[int] = None
    pl_guard_id: int
    pl_scanned_at: datetime
    pl_is_on_time: bool
    pl_lat: Optional[float] = None
    pl_lon: Optional[float] = None
    pl_notes: Optional[str] = None

    @field_validator('pl_scanned_at', mode='before')
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


class PatrolLog(PatrolLogInDB):
    pass


# Request/Response schemas for API endpoints
class ScanRequest(BaseModel):
    """Request schema for checkpoint scan endpoint"""
    token: str  # JWT from the checkpoint QR code
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    notes: Optional[str] = Field(None, max_length=500)


class ScanResponse(BaseModel):
    """Response schema for checkpoint scan endpoint"""
    pl_id: int
    cp_id: int
    cp_name: str
    sh_id: int
    scanned_at: datetime
    is_on_time: bool
    message: str


class CheckpointQrToken(BaseModel):
    """Signed payload printed on a checkpoint QR code"""
    cp_id: int
    si_id: str
    token: str
