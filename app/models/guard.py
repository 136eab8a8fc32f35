"""
Guard Model - Field personnel performing patrols
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from atams.db import Base


class Guard(Base):
    """Guard model for patrol schema - Table: patrol.guards"""
    __tablename__ = "guards"
    __table_args__ = {"schema": "patrol"}

    gu_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True, autoincrement=True)
    gu_user_id = Column(BigInteger, nullable=False, unique=True, index=True)  # Atlas SSO user id
    gu_site_id = Column(String(50), ForeignKey("patrol.sites.si_id"), nullable=True, index=True)  # Assigned site
    gu_status = Column(String(20), nullable=False, default="active")  # 'active', 'on_patrol', 'off_duty', 'suspended'
    gu_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    gu_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
