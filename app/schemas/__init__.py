from .attendance import (
    AttendanceRequest,
    AttendanceResponse,
    AttendanceStatusResponse
)
from .compliance import ComplianceSummary, CheckpointCompliance, ShiftComplianceReport
from .alert import Alert, PanicRequest
from .patrol import PatrolLog, ScanRequest, ScanResponse, CheckpointQrToken
from .geofence import PositionRequest, GeofenceEvent, GeofenceStatus
from .common import DataResponse, PaginationResponse

__all__ = [
    # Attendance schemas
    "AttendanceRequest",
    "AttendanceResponse",
    "AttendanceStatusResponse",
    # Compliance schemas
    "ComplianceSummary",
    "CheckpointCompliance",
    "ShiftComplianceReport",
    # Alert schemas
    "Alert",
    "PanicRequest",
    # Patrol schemas
    "PatrolLog",
    "ScanRequest",
    "ScanResponse",
    "CheckpointQrToken",
    # Geofence schemas
    "PositionRequest",
    "GeofenceEvent",
    "GeofenceStatus",
    # Common schemas
    "DataResponse",
    "PaginationResponse"
]
