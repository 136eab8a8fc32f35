"""
Shift Model - Scheduled work periods assigning a guard to a site
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Boolean, Float, ForeignKey
from sqlalchemy.sql import func
from atams.db import Base


class Shift(Base):
    """Shift model for patrol schema - Table: patrol.shifts"""
    __tablename__ = "shifts"
    __table_args__ = {"schema": "patrol"}

    sh_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True, autoincrement=True)
    sh_guard_id = Column(BigInteger, ForeignKey("patrol.guards.gu_id"), nullable=False, index=True)
    sh_site_id = Column(String(50), ForeignKey("patrol.sites.si_id"), nullable=False, index=True)
    sh_start_time = Column(DateTime(timezone=True), nullable=False)
    sh_end_time = Column(DateTime(timezone=True), nullable=False)
    sh_status = Column(String(10), nullable=False, default="scheduled", index=True)  # 'scheduled', 'active', 'completed', 'missed'
    sh_attendance_marked = Column(Boolean, nullable=False, default=False)
    sh_checked_in_at = Column(DateTime(timezone=True), nullable=True)
    sh_checked_out_at = Column(DateTime(timezone=True), nullable=True)
    sh_checkin_lat = Column(Float, nullable=True)
    sh_checkin_lon = Column(Float, nullable=True)
    sh_checkout_lat = Column(Float, nullable=True)
    sh_checkout_lon = Column(Float, nullable=True)
    sh_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    sh_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
