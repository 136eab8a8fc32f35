"""
Patrol Log Model - Append-only checkpoint scan events
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Boolean, Float, ForeignKey
from sqlalchemy.sql import func
from atams.db import Base


class PatrolLog(Base):
    """Patrol Log model for patrol schema - Table: patrol.patrol_logs"""
    __tablename__ = "patrol_logs"
    __table_args__ = {"schema": "patrol"}

    pl_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True, autoincrement=True)
    pl_checkpoint_id = Column(BigInteger, ForeignKey("patrol.checkpoints.cp_id"), nullable=False, index=True)
    pl_shift_id = Column(BigInteger, ForeignKey("patrol.shifts.sh_id"), nullable=True, index=True)
    pl_guard_id = Column(BigInteger, ForeignKey("patrol.guards.gu_id"), nullable=False, index=True)
    pl_scanned_at = Column(DateTime(timezone=True), nullable=False)
    pl_is_on_time = Column(Boolean, nullable=False, default=True)
    pl_lat = Column(Float, nullable=True)
    pl_lon = Column(Float, nullable=True)
    pl_notes = Column(String(500), nullable=True)
    pl_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
