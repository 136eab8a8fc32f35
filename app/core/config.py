from atams import AtamsBaseSettings


class Settings(AtamsBaseSettings):
    """
    Application Settings

    Inherits from AtamsBaseSettings which includes:
    - DATABASE_URL (required), DB_POOL_SIZE, DB_MAX_OVERFLOW, DB_POOL_TIMEOUT, ...
    - ATLAS_SSO_URL, ATLAS_APP_CODE, ATLAS_ENCRYPTION_KEY, ATLAS_ENCRYPTION_IV
    - ENCRYPTION_ENABLED, ENCRYPTION_KEY, ENCRYPTION_IV (response encryption)
    - LOGGING_ENABLED, LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH
    - CORS_ORIGINS, CORS_ALLOW_CREDENTIALS, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS
    - RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW
    - DEBUG

    All settings can be overridden via .env file or by redefining them here.
    """
    APP_NAME: str = "patrol-compliance"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Upper bound for a single statement (PostgreSQL only)
    DB_STATEMENT_TIMEOUT_MS: int = 10000

    # Scheduler authentication for the compliance pass trigger
    SCHEDULER_API_KEY: str

    # Checkpoint QR token signing
    CHECKPOINT_QR_SECRET: str
    CHECKPOINT_QR_ALG: str = "HS256"

    # Compliance settings
    DEFAULT_GRACE_PERIOD_MINUTES: int = 15
    ALERT_DEDUP_WINDOW_MINUTES: int = 60

    # Geofence settings
    ATTENDANCE_GEOFENCE_RADIUS_M: int = 500
    DEFAULT_PATROL_GEOFENCE_RADIUS_M: int = 500

    # Scheduled shifts may be checked into this many minutes before start
    CHECKIN_EARLY_MINUTES: int = 30


settings = Settings()
