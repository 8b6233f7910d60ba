"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from collabhunts.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)

_POSTGRES_SCHEMES = ("postgres://", "postgresql://")


def _build_sqlalchemy_database_url(settings: Settings) -> str:
    """Return the SQLAlchemy URL for the configured database.

    Hosted Postgres providers hand out ``postgres://`` URLs which SQLAlchemy no
    longer accepts, so they are rewritten to the psycopg2 dialect.
    """

    url = settings.database_url.strip()
    for scheme in _POSTGRES_SCHEMES:
        if url.startswith(scheme):
            return "postgresql+psycopg2://" + url[len(scheme) :]
    return url


def _create_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        logger.info("Using SQLite database at %s", url)
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


database_url = _build_sqlalchemy_database_url(settings)
engine = _create_engine(database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from collabhunts.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
