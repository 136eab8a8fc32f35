"""
Alert Model - Compliance and safety alerts raised for supervisors
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Boolean, Float, ForeignKey
from atams.db import Base


class Alert(Base):
    """Alert model for patrol schema - Table: patrol.alerts"""
    __tablename__ = "alerts"
    __table_args__ = {"schema": "patrol"}

    al_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True, autoincrement=True)
    al_type = Column(String(30), nullable=False, index=True)  # 'missed_checkpoint', 'late_attendance', 'panic_button', ...
    al_severity = Column(String(10), nullable=False)  # 'low', 'medium', 'high', 'critical'
    al_message = Column(String(500), nullable=False)
    al_site_id = Column(String(50), ForeignKey("patrol.sites.si_id"), nullable=False, index=True)
    al_guard_id = Column(BigInteger, ForeignKey("patrol.guards.gu_id"), nullable=True, index=True)
    al_shift_id = Column(BigInteger, ForeignKey("patrol.shifts.sh_id"), nullable=True)
    al_checkpoint_id = Column(BigInteger, ForeignKey("patrol.checkpoints.cp_id"), nullable=True, index=True)
    al_latitude = Column(Float, nullable=True)  # Reported device position (panic alerts)
    al_longitude = Column(Float, nullable=True)
    al_acknowledged = Column(Boolean, nullable=False, default=False)
    al_acknowledged_at = Column(DateTime(timezone=True), nullable=True)
    al_acknowledged_by = Column(BigInteger, nullable=True)  # References Atlas SSO user id
    al_resolved_at = Column(DateTime(timezone=True), nullable=True)
    al_resolved_by = Column(BigInteger, nullable=True)  # References Atlas SSO user id
    al_created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    @property
    def al_status(self) -> str:
        """Lifecycle: active -> acknowledged -> resolved"""
        if self.al_resolved_at is not None:
            return "resolved"
        if self.al_acknowledged:
            return "acknowledged"
        return "active"
