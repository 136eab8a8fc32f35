"""
Patrol Endpoints - Checkpoint scans and QR tokens
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.patrol_service import PatrolService
from app.services.guard_service import GuardService
from app.schemas import ScanRequest, ScanResponse, CheckpointQrToken, DataResponse
from app.api.deps import require_auth, require_min_role_level
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
patrol_service = PatrolService()
guard_service = GuardService()


@router.post(
    "/scan",
    response_model=DataResponse[ScanResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(1))]
)
async def scan_checkpoint(
    request: ScanRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Record a checkpoint scan

    **Authentication:**
    - Requires valid user authentication (role level >= 1)

    **Errors:**
    - 400: Invalid QR token or checkpoint of another site
    - 404: Checkpoint not found
    - 409: Guard is not checked in
    """
    guard = guard_service.get_guard_for_user(db, current_user["user_id"])

    result = patrol_service.submit_scan(db, guard.gu_id, request)

    return DataResponse(
        success=True,
        message="Checkpoint scanned successfully",
        data=result
    )


@router.get(
    "/checkpoints/{cp_id}/qr-token",
    response_model=DataResponse[CheckpointQrToken],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_checkpoint_qr_token(
    cp_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Issue the QR payload to print for a checkpoint (Supervisor only)
    """
    token = patrol_service.get_checkpoint_qr_token(db, cp_id)

    response = DataResponse(
        success=True,
        message="Checkpoint QR token generated successfully",
        data=token
    )

    return encrypt_response_data(response, settings)
