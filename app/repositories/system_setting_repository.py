"""
System Setting Repository - Data access layer for runtime settings
"""
from typing import Optional
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.system_setting import SystemSetting


class SystemSettingRepository(BaseRepository[SystemSetting]):
    def __init__(self):
        super().__init__(SystemSetting)

    def get_value(self, db: Session, key: str) -> Optional[str]:
        """Get raw setting value by key, None if the row does not exist"""
        row = db.query(SystemSetting.ss_value).filter(SystemSetting.ss_key == key).first()
        return row[0] if row else None
