"""
Attendance Schemas for check-in / check-out
"""
from typing import Optional, Literal
from datetime import datetime
from pydantic import BaseModel, Field


class AttendanceRequest(BaseModel):
    """Request schema for check-in and check-out; coordinates come from the device"""
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class AttendanceResponse(BaseModel):
    """Response schema for a successful attendance transition"""
    attendance_status: Literal["checked_in", "checked_out"]
    sh_id: int
    si_id: str
    timestamp: datetime
    distance_m: Optional[float] = None
    message: str


class AttendanceStatusResponse(BaseModel):
    """Response schema for the guard's current attendance state"""
    attendance_status: Optional[Literal["pending", "checked_in", "checked_out"]] = None
    sh_id: Optional[int] = None
    si_id: Optional[str] = None
    sh_start_time: Optional[datetime] = None
    sh_end_time: Optional[datetime] = None
    sh_checked_in_at: Optional[datetime] = None
    sh_checked_out_at: Optional[datetime] = None
