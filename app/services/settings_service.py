"""
Settings Service - Runtime configuration read from patrol.system_settings
"""
from dataclasses import dataclass
from sqlalchemy.orm import Session

from app.repositories.system_setting_repository import SystemSettingRepository
from app.core.config import settings
from app.core.exceptions import ConfigMissing
from atams.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ComplianceConfig:
    """Configuration snapshot taken once per compliance pass"""
    grace_period_minutes: int
    dedup_window_minutes: int


class SettingsService:
    GRACE_PERIOD_KEY = "grace_period"

    def __init__(self) -> None:
        self.setting_repo = SystemSettingRepository()

    def get_grace_period_minutes(self, db: Session) -> int:
        """
        Read the grace period (minutes) from system settings

        Raises:
            ConfigMissing: If the row is absent, empty, non-numeric or negative
        """
        raw = self.setting_repo.get_value(db, self.GRACE_PERIOD_KEY)
        if raw is None or not str(raw).strip():
            raise ConfigMissing(self.GRACE_PERIOD_KEY)

        try:
            value = int(str(raw).strip())
        except ValueError:
            raise ConfigMissing(self.GRACE_PERIOD_KEY)

        if value < 0:
            raise ConfigMissing(self.GRACE_PERIOD_KEY)
        return value

    def load_compliance_config(self, db: Session) -> ComplianceConfig:
        """Build the per-pass config, falling back to defaults for missing settings"""
        try:
            grace_period = self.get_grace_period_minutes(db)
        except ConfigMissing as e:
            grace_period = settings.DEFAULT_GRACE_PERIOD_MINUTES
            logger.warning(f"{e.message}; using default grace period of {grace_period} minutes")

        return ComplianceConfig(
            grace_period_minutes=grace_period,
            dedup_window_minutes=settings.ALERT_DEDUP_WINDOW_MINUTES
        )
