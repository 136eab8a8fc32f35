"""
Attendance Endpoints - Shift check-in, check-out and status
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.attendance_service import AttendanceService
from app.services.guard_service import GuardService
from app.schemas import (
    AttendanceRequest,
    AttendanceResponse,
    AttendanceStatusResponse,
    DataResponse
)
from app.api.deps import require_auth, require_min_role_level
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
attendance_service = AttendanceService()
guard_service = GuardService()


@router.post(
    "/check-in",
    response_model=DataResponse[AttendanceResponse],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def check_in(
    request: AttendanceRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Check in to the current shift

    **Authentication:**
    - Requires valid user authentication (role level >= 1)

    **Process:**
    1. Find the active shift, or a scheduled shift whose window has opened
    2. Geofence validation against the site (attendance radius)
    3. Mark attendance and set guard on patrol

    **Errors:**
    - 400: Location missing for a site with coordinates
    - 403: Outside the attendance radius (details carry distance_m)
    - 409: No eligible shift, or already checked in
    """
    guard = guard_service.get_guard_for_user(db, current_user["user_id"])

    result = attendance_service.check_in(db, guard.gu_id, request)

    return DataResponse(
        success=True,
        message="Checked in successfully",
        data=result
    )


@router.post(
    "/check-out",
    response_model=DataResponse[AttendanceResponse],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def check_out(
    request: AttendanceRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Check out of the active shift

    **Errors:**
    - 400: Location missing for a site with coordinates
    - 403: Outside the attendance radius
    - 409: No checked-in shift
    """
    guard = guard_service.get_guard_for_user(db, current_user["user_id"])

    result = attendance_service.check_out(db, guard.gu_id, request)

    return DataResponse(
        success=True,
        message="Checked out successfully",
        data=result
    )


@router.get(
    "/me",
    response_model=DataResponse[AttendanceStatusResponse],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_my_attendance(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get current user's attendance state
    """
    guard = guard_service.get_guard_for_user(db, current_user["user_id"])

    status_data = attendance_service.get_attendance_status(db, guard.gu_id)

    response = DataResponse(
        success=True,
        message="Attendance status retrieved successfully",
        data=status_data
    )

    return encrypt_response_data(response, settings)
