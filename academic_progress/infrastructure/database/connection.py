# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Progress store connection management using SQLAlchemy async.

The engine and sessionmaker are process-scoped: created once at
application startup, shared by every request, disposed at shutdown.

Uses SQLAlchemy 2.0 async API with asyncpg driver.

Example:
    from academic_progress.infrastructure.database.connection import (
        init_database,
        get_sessionmaker,
    )

    # Initialize at application startup
    await init_database(settings)

    # Hand the sessionmaker to the store
    store = ProgressStore(get_sessionmaker())
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from academic_progress.infrastructure.database.models import Base

if TYPE_CHECKING:
    from academic_progress.core.config.settings import Settings

# Module-level state for the progress store connection
_engine: Optional[AsyncEngine] = None
_sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None


class DatabaseError(Exception):
    """Base exception for database operations.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy or database error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


async def init_database(settings: "Settings") -> None:
    """Initialize the connection pool and make sure the table exists.

    Args:
        settings: Application settings containing database configuration.

    Raises:
        DatabaseError: If connection pool creation or table creation fails.
    """
    global _engine, _sessionmaker

    try:
        _engine = create_async_engine(
            settings.database.url,
            pool_size=settings.database.pool_size,
            max_overflow=settings.database.max_overflow,
            pool_pre_ping=True,
            pool_recycle=1800,
            echo=settings.debug,
        )

        _sessionmaker = async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        async with _engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        raise DatabaseError("Failed to initialize progress database", e) from e


async def close_database() -> None:
    """Close the connection pool at application shutdown."""
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _sessionmaker = None


def get_engine() -> AsyncEngine:
    """Get the progress store async engine.

    Raises:
        DatabaseError: If the database has not been initialized.
    """
    if _engine is None:
        raise DatabaseError("Progress database not initialized. Call init_database() first.")
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the progress store sessionmaker.

    Raises:
        DatabaseError: If the database has not been initialized.
    """
    if _sessionmaker is None:
        raise DatabaseError("Progress database not initialized. Call init_database() first.")
    return _sessionmaker


async def check_database_connection() -> bool:
    """Check if the progress database is reachable.

    Returns:
        True if the database is reachable, False otherwise.
    """
    if _engine is None:
        return False

    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError):
        return False
