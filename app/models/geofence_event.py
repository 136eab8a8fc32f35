"""
Geofence Event Model - Site entry/exit transitions of a guard
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Float, ForeignKey
from atams.db import Base


class GeofenceEvent(Base):
    """Geofence Event model for patrol schema - Table: patrol.geofence_events"""
    __tablename__ = "geofence_events"
    __table_args__ = {"schema": "patrol"}

    ge_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True, autoincrement=True)
    ge_guard_id = Column(BigInteger, ForeignKey("patrol.guards.gu_id"), nullable=False, index=True)
    ge_site_id = Column(String(50), ForeignKey("patrol.sites.si_id"), nullable=False, index=True)
    ge_event_type = Column(String(10), nullable=False)  # 'enter' or 'exit'
    ge_lat = Column(Float, nullable=False)
    ge_lon = Column(Float, nullable=False)
    ge_distance_m = Column(Float, nullable=False)
    ge_created_at = Column(DateTime(timezone=True), nullable=False)
