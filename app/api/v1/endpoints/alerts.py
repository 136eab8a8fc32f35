"""
Alert Endpoints - Panic button, supervisor alert listing, acknowledgement and resolution
"""
import math
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.db.session import get_db
from app.services.alert_service import AlertService
from app.services.panic_service import PanicService
from app.services.guard_service import GuardService
from app.schemas import Alert, PanicRequest, DataResponse, PaginationResponse
from app.api.deps import require_auth, require_min_role_level
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
alert_service = AlertService()
panic_service = PanicService()
guard_service = GuardService()


@router.get(
    "",
    response_model=PaginationResponse[Alert],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_alerts(
    site_id: Optional[str] = Query(None, description="Filter by site ID"),
    guard_id: Optional[int] = Query(None, description="Filter by guard ID"),
    alert_type: Optional[str] = Query(None, description="Filter by alert type"),
    acknowledged: Optional[bool] = Query(None, description="Filter by acknowledgement"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get alerts (Supervisor only)

    **Authentication:**
    - Requires role level >= 50
    """
    alerts = alert_service.get_alerts(db, site_id, guard_id, alert_type, acknowledged, offset, limit)
    total = alert_service.count_alerts(db, site_id, guard_id, alert_type, acknowledged)

    response = PaginationResponse(
        success=True,
        message="Alerts retrieved successfully",
        data=alerts,
        total=total,
        page=offset // limit + 1,
        size=limit,
        pages=math.ceil(total / limit) if total else 0
    )

    return encrypt_response_data(response, settings)


@router.post(
    "/{al_id}/acknowledge",
    response_model=DataResponse[Alert],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def acknowledge_alert(
    al_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Acknowledge an alert (Supervisor only)

    **Errors:**
    - 404: Alert not found
    - 409: Alert already acknowledged
    """
    alert = alert_service.acknowledge_alert(db, al_id, current_user["user_id"])

    return DataResponse(
        success=True,
        message="Alert acknowledged successfully",
        data=alert
    )


@router.post(
    "/{al_id}/resolve",
    response_model=DataResponse[Alert],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def resolve_alert(
    al_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Resolve an alert (Supervisor only)

    An active alert is acknowledged by the resolving supervisor as well.

    **Errors:**
    - 404: Alert not found
    - 409: Alert already resolved
    """
    alert = alert_service.resolve_alert(db, al_id, current_user["user_id"])

    return DataResponse(
        success=True,
        message="Alert resolved successfully",
        data=alert
    )


@router.post(
    "/panic",
    response_model=DataResponse[Alert],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(1))]
)
async def trigger_panic(
    request: PanicRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Raise an emergency alert for the guard's site

    **Authentication:**
    - Requires valid user authentication (role level >= 1)

    **Errors:**
    - 400: Guard has no assigned site
    - 404: Guard profile not found
    """
    guard = guard_service.get_guard_for_user(db, current_user["user_id"])

    alert = panic_service.trigger(db, guard, request)

    return DataResponse(
        success=True,
        message="Emergency alert sent",
        data=alert
    )
