from .site import Site
from .guard import Guard
from .shift import Shift
from .checkpoint import Checkpoint
from .patrol_log import PatrolLog
from .alert import Alert
from .system_setting import SystemSetting
from .geofence_event import GeofenceEvent

__all__ = [
    "Site",
    "Guard",
    "Shift",
    "Checkpoint",
    "PatrolLog",
    "Alert",
    "SystemSetting",
    "GeofenceEvent"
]
