from .settings_service import SettingsService, ComplianceConfig
from .alert_service import AlertService
from .compliance_service import ComplianceService
from .guard_service import GuardService
from .attendance_service import AttendanceService
from .qr_token_service import QrTokenService
from .patrol_service import PatrolService
from .geofence_service import GeofenceService
from .panic_service import PanicService

__all__ = [
    "SettingsService",
    "ComplianceConfig",
    "AlertService",
    "ComplianceService",
    "GuardService",
    "AttendanceService",
    "QrTokenService",
    "PatrolService",
    "GeofenceService",
    "PanicService"
]
