"""
Database Session Management
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from atams.db.session import normalize_database_url
from app.core.config import settings


def _connect_args(database_url: str) -> dict:
    """Server-side statement timeout so no fetch blocks indefinitely"""
    if database_url.startswith("postgresql"):
        return {"options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"}
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


database_url = normalize_database_url(settings.DATABASE_URL)

engine_options = {
    "pool_pre_ping": settings.DB_POOL_PRE_PING,
    "connect_args": _connect_args(database_url),
    "echo": settings.DEBUG,
}
if not database_url.startswith("sqlite"):
    engine_options.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_timeout=settings.DB_POOL_TIMEOUT,
    )

# Create engine
engine = create_engine(database_url, **engine_options)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency

    Usage:
        @router.get("/")
        async def endpoint(db: Session = Depends(get_db)):
            # Use db here
            pass
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
