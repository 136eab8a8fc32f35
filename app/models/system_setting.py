"""
System Setting Model - Runtime key/value configuration
"""
from sqlalchemy import Column, BigInteger, String, DateTime
from sqlalchemy.sql import func
from atams.db import Base


class SystemSetting(Base):
    """System Setting model for patrol schema - Table: patrol.system_settings"""
    __tablename__ = "system_settings"
    __table_args__ = {"schema": "patrol"}

    ss_key = Column(String(100), primary_key=True, index=True)
    ss_value = Column(String(500), nullable=True)
    ss_description = Column(String(255), nullable=True)
    ss_updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    ss_updated_by = Column(BigInteger, nullable=True)
