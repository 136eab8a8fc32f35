"""
Geofence Endpoints - Guard position reports
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.geofence_service import GeofenceService
from app.services.guard_service import GuardService
from app.schemas import PositionRequest, GeofenceStatus, DataResponse
from app.api.deps import require_auth, require_min_role_level

router = APIRouter()
geofence_service = GeofenceService()
guard_service = GuardService()


@router.post(
    "/position",
    response_model=DataResponse[GeofenceStatus],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def report_position(
    request: PositionRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Report the guard's position against the assigned site's patrol geofence

    An enter/exit event is logged only when the inside/outside state changes.
    """
    guard = guard_service.get_guard_for_user(db, current_user["user_id"])

    result = geofence_service.record_position(db, guard, request)

    return DataResponse(
        success=True,
        message="Position recorded",
        data=result
    )
