"""
Site Model - Patrolled locations
"""
from sqlalchemy import Column, String, DateTime, Float, Integer
from sqlalchemy.sql import func
from atams.db import Base


class Site(Base):
    """Site model for patrol schema - Table: patrol.sites"""
    __tablename__ = "sites"
    __table_args__ = {"schema": "patrol"}

    si_id = Column(String(50), primary_key=True, index=True)
    si_name = Column(String(255), nullable=False)
    si_latitude = Column(Float, nullable=True)
    si_longitude = Column(Float, nullable=True)
    si_geofence_radius_m = Column(Integer, nullable=False, default=500)  # Patrol geofence, not the attendance radius
    si_status = Column(String(10), nullable=False, default="active")  # 'active' or 'inactive'
    si_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    si_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
