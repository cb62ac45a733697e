"""
Database session management. SQLAlchemy 2.x style.
"""

from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from notespace.config import get_settings


def _engine_options(database_url: str, debug: bool, connect_timeout: int) -> dict:
    """Return create_engine kwargs for the configured backend."""
    if database_url.startswith("sqlite"):
        options: dict = {
            "echo": debug,
            "connect_args": {"check_same_thread": False},
        }
        # In-memory databases live on a single connection
        if ":memory:" in database_url or database_url.rstrip("/").endswith("sqlite:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "echo": debug,
        "connect_args": {
            "connect_timeout": connect_timeout,
            "options": "-c timezone=UTC",
        },
    }


settings = get_settings()
engine = create_engine(
    settings.database_url,
    **_engine_options(settings.database_url, settings.debug, settings.db_connect_timeout),
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""


def check_db_connection() -> None:
    """
    Verify database connectivity. Raises if unreachable.
    Call during application startup.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
