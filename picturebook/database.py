"""Database configuration and session management."""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from picturebook.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def build_engine(url: str) -> Engine:
    """Create an engine, with pooling tuned for server databases."""
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Provide a database session, closing it when the caller is done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from picturebook import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def reset_db(bind: Engine | None = None) -> None:
    """Drop and recreate every table. Destroys all data."""
    from picturebook import models  # noqa: F401

    bind = bind or engine
    logger.warning(f"Resetting database at {bind.url!r}")
    Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)
