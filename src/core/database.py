"""
Database engine, sessions and the per-request session dependency.

The lifespan creates one AsyncEngine (asyncpg, pooled) and puts its session
factory on app.state.sessionmaker. Every request gets its own session from
get_db; there is no module-level engine.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.config import settings

logger = logging.getLogger(__name__)


def create_database_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Create the pooled async engine.

    Pool sizing and recycling come from the DB_POOL_* settings.

    Args:
        database_url: Overrides DATABASE_URL (used by tooling)
    """
    engine = create_async_engine(
        database_url or settings.database_url_str,
        echo=settings.debug,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=settings.db_pool_pre_ping,
        connect_args={
            "server_settings": {"application_name": f"stock-tracker-{settings.environment}"},
        },
    )

    logger.info(
        f"Database engine ready (pool_size={settings.db_pool_size}, "
        f"max_overflow={settings.db_max_overflow})"
    )
    return engine


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory; objects stay usable after commit."""
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    One session, and one transaction, per request.

    Committed if the handler returns, rolled back if anything raises, so a
    rejected operation never leaves a partial write behind.
    """
    sessionmaker: async_sessionmaker[AsyncSession] = request.app.state.sessionmaker
    async with sessionmaker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        else:
            await session.commit()


async def check_database_connection(
    sessionmaker: async_sessionmaker[AsyncSession] | None,
) -> bool:
    """
    Run SELECT 1.

    Returns:
        False if there is no session factory (app not started or shutting
        down) or the query fails
    """
    if sessionmaker is None:
        return False

    try:
        async with sessionmaker() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database check failed: {e}")
        return False
    return True


async def close_database_connection(engine: AsyncEngine) -> None:
    """Dispose of the pool at shutdown; errors are logged, not raised."""
    try:
        await engine.dispose()
    except Exception as e:
        logger.error(f"Error disposing database engine: {e}")
    else:
        logger.info("Database engine disposed")
