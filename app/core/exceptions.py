"""
Domain Exceptions - Attendance and compliance error kinds

Rendered by the atams exception handlers as
{"success": false, "message": ..., "details": {...}}.
"""
from typing import Optional

from fastapi import status
from atams.exceptions import (
    AppException,
    BadRequestException,
    ConflictException,
    ForbiddenException,
    ServiceUnavailableException,
)


class NoActiveShiftException(ConflictException):
    """No shift in the state required by check-in, check-out or scan"""

    def __init__(self, message: str = "No active shift found. Please contact your supervisor."):
        super().__init__(message, {"error": "no_active_shift"})


class OutOfRangeException(ForbiddenException):
    """Attendance rejected by the geofence; carries the measured distance"""

    def __init__(self, distance_m: float, allowed_m: float, action: str = "check in"):
        self.distance_m = distance_m
        self.allowed_m = allowed_m
        super().__init__(
            f"You are {round(distance_m)}m away from the site. "
            f"Please {action} within {allowed_m:.0f}m of the site.",
            {"error": "out_of_range", "distance_m": round(distance_m, 1), "allowed_m": allowed_m}
        )


class LocationUnavailableException(BadRequestException):
    """Device could not provide a coordinate"""

    def __init__(self, message: str = "Location coordinates are required for geofence validation"):
        super().__init__(message, {"error": "location_unavailable"})


class DataFetchFailure(ServiceUnavailableException):
    """A read against the database failed during a compliance pass"""

    def __init__(self, message: str, scope: Optional[str] = None):
        super().__init__(message, {"error": "data_fetch_failure", "scope": scope})


class ConfigMissing(AppException):
    """A runtime setting is absent or malformed; recovered with its default"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Setting '{key}' is missing or invalid", status.HTTP_500_INTERNAL_SERVER_ERROR)
