"""
SQLAlchemy engine, session factory and declarative ``Base``.

``get_db`` is the FastAPI dependency used by every router; tests override it
with a session bound to an in-memory SQLite engine.
"""

from __future__ import annotations

from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.config import get_settings

settings = get_settings()

# Some PaaS hand out 'postgres://' but SQLAlchemy 2.x requires 'postgresql://'
DATABASE_URL = settings.DATABASE_URL.replace("postgres://", "postgresql://", 1)


def _engine_options(url: str) -> dict[str, Any]:
    """Pool settings for PostgreSQL; SQLite (dev/test) keeps its default pool."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
    }


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Iterator[Session]:
    """Yield a session and always close it when the request ends."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
