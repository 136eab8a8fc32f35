"""
Compliance Endpoints - Missed-checkpoint pass trigger and shift reports
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.compliance_service import ComplianceService
from app.schemas import ComplianceSummary, ShiftComplianceReport, DataResponse
from app.api.deps import require_auth, require_min_role_level, require_scheduler_key
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
compliance_service = ComplianceService()


@router.post(
    "/check-missed-checkpoints",
    response_model=DataResponse[ComplianceSummary],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_scheduler_key)]
)
async def check_missed_checkpoints(db: Session = Depends(get_db)):
    """
    Run one compliance pass over all active shifts

    **Authentication:**
    - Requires X-Scheduler-Key header matching SCHEDULER_API_KEY

    **Usage:**
    - Call from an external cron every few minutes
    - Safe to call repeatedly; open alerts are not duplicated within the dedup window

    **Errors:**
    - 503: Active shifts or settings could not be read
    """
    summary = compliance_service.check_missed_checkpoints(db)

    return DataResponse(
        success=True,
        message=f"Checked {summary.shifts_checked} shifts, created {summary.alerts_created} alerts",
        data=summary
    )


@router.get(
    "/shifts/{sh_id}",
    response_model=DataResponse[ShiftComplianceReport],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_shift_compliance(
    sh_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get per-checkpoint compliance of a shift (Supervisor only)

    **Authentication:**
    - Requires role level >= 50
    """
    report = compliance_service.evaluate_shift(db, sh_id)

    response = DataResponse(
        success=True,
        message="Shift compliance retrieved successfully",
        data=report
    )

    return encrypt_response_data(response, settings)
