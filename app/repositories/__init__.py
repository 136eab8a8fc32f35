from .site_repository import SiteRepository
from .guard_repository import GuardRepository
from .shift_repository import ShiftRepository
from .checkpoint_repository import CheckpointRepository
from .patrol_log_repository import PatrolLogRepository
from .alert_repository import AlertRepository
from .system_setting_repository import SystemSettingRepository
from .geofence_event_repository import GeofenceEventRepository

__all__ = [
    "SiteRepository",
    "GuardRepository",
    "ShiftRepository",
    "CheckpointRepository",
    "PatrolLogRepository",
    "AlertRepository",
    "SystemSettingRepository",
    "GeofenceEventRepository"
]
