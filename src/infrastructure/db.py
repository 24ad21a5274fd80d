"""Database infrastructure for the expense tracker.

This module exposes helpers to create and reuse the SQLAlchemy engine
connected to the expenses database. It belongs to the infrastructure layer
because it deals with external systems (SQLite or PostgreSQL).
"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort
from src.infrastructure.settings import TrackerSettings


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    SQLite files are shared across the UI and background threads, so thread
    checks are disabled for them; server databases get a small pool with
    health checks.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: Configured SQLAlchemy engine.
    """
    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            future=True,
        )
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_expenses_engine: Optional[Engine] = None


def get_expenses_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the expenses database.

    Returns:
        Engine: Lazily initialized engine.
    """
    global _expenses_engine
    if _expenses_engine is None:
        settings = TrackerSettings.from_env()
        _expenses_engine = _create_engine(settings.database_url)
    return _expenses_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by SQLAlchemy engines."""

    def get_expenses_engine(self) -> Engine:
        """Get the engine for the expenses database.

        Returns:
            Engine: SQLAlchemy engine connected to the expenses database.
        """
        return get_expenses_engine()


__all__ = [
    "get_expenses_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
