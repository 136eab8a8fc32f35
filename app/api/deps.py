"""
API Dependencies
Provides authentication and authorization dependencies using ATAMS factory pattern
"""
from fastapi import Header

from atams.sso import create_atlas_client, create_auth_dependencies
from atams.exceptions import ForbiddenException
from app.core.config import settings

# Initialize Atlas SSO client using factory
atlas_client = create_atlas_client(settings)

# Create auth dependencies using factory
get_current_user, require_auth, require_min_role_level, require_role_level = create_auth_dependencies(atlas_client)


async def require_scheduler_key(x_scheduler_key: str = Header(..., alias="X-Scheduler-Key")) -> None:
    """Authenticate machine callers (cron) of the compliance trigger"""
    if x_scheduler_key != settings.SCHEDULER_API_KEY:
        raise ForbiddenException("Invalid scheduler API key")


# Export for use in endpoints
__all__ = [
    "atlas_client",
    "get_current_user",
    "require_auth",
    "require_min_role_level",
    "require_role_level",
    "require_scheduler_key",
]
