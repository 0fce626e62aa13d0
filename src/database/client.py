"""Database client and connection management with SQLAlchemy."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from src.config.settings import settings
from src.database.base import Base

logger = logging.getLogger(__name__)

# Global SQLAlchemy engine
_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the SQLAlchemy async session factory."""
    if _async_session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _async_session_factory


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession]:
    """Open a session as one unit of work.

    Commits on clean exit and rolls back when the block raises. A cancelled
    request never reaches the commit; closing the session discards its work.

    Usage:
        async with get_session() as session:
            result = await session.execute(select(User))
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def _engine_options() -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.database_echo}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
            pool_recycle=settings.database_pool_recycle,
            pool_pre_ping=True,  # Verify connections before using
        )
    return options


async def init_db() -> None:
    """Create the engine and session factory, then verify the connection.

    With DATABASE_AUTO_CREATE enabled the schema is created from the models,
    which is meant for local development against SQLite.
    """
    global _engine, _async_session_factory

    try:
        logger.info(f"Connecting to database at {settings.database_url.split('@')[-1]}")

        _engine = create_async_engine(settings.database_url, **_engine_options())
        _async_session_factory = async_sessionmaker(
            _engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        async with _engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if settings.database_auto_create:
                await conn.run_sync(Base.metadata.create_all)
                logger.info("Database schema created")

        logger.info("Database initialization complete")

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


async def close_db() -> None:
    """Close database connections gracefully."""
    global _engine, _async_session_factory

    if _engine is not None:
        logger.info("Closing database connection")
        await _engine.dispose()
        _engine = None
        _async_session_factory = None
        logger.info("Database connection closed")
