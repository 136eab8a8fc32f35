"""
Checkpoint Model - Physical points at a site that must be scanned periodically
"""
from sqlalchemy import Column, BigInteger, String, DateTime, Boolean, Float, Integer, ForeignKey
from sqlalchemy.sql import func
from atams.db import Base


class Checkpoint(Base):
    """Checkpoint model for patrol schema - Table: patrol.checkpoints"""
    __tablename__ = "checkpoints"
    __table_args__ = {"schema": "patrol"}

    cp_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True, autoincrement=True)
    cp_site_id = Column(String(50), ForeignKey("patrol.sites.si_id"), nullable=False, index=True)
    cp_name = Column(String(255), nullable=False)
    cp_scan_interval_min = Column(Integer, nullable=False, default=60)  # Required scan cadence
    cp_is_required = Column(Boolean, nullable=False, default=True)
    cp_sequence_order = Column(Integer, nullable=False, default=0)
    cp_latitude = Column(Float, nullable=True)
    cp_longitude = Column(Float, nullable=True)
    cp_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    cp_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
