"""
Compliance Schemas for missed-checkpoint passes and shift reports
"""
from typing import Optional, List, Literal
from datetime import datetime
from pydantic import BaseModel


class ComplianceSummary(BaseModel):
    """Outcome of one compliance pass"""
    shifts_checked: int
    alerts_created: int
    shifts_failed: int = 0
    grace_period_minutes: int
    checked_at: datetime


class CheckpointCompliance(BaseModel):
    """Schedule state of one required checkpoint within a shift"""
    cp_id: int
    cp_name: str
    cp_scan_interval_min: int
    expected_cycles: int
    last_due_at: Optional[datetime] = None
    deadline: Optional[datetime] = None
    last_scanned_at: Optional[datetime] = None
    status: Literal["not_due", "pending", "scanned", "missed"]


class ShiftComplianceReport(BaseModel):
    """Per-checkpoint compliance of a single shift"""
    sh_id: int
    sh_guard_id: int
    sh_site_id: str
    sh_status: str
    grace_period_minutes: int
    evaluated_at: datetime
    checkpoints: List[CheckpointCompliance]
