"""
Application lifespan: owns the database engine.

The engine is created at startup and its session factory stored on
app.state.sessionmaker, where get_db and the readiness check find it.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config import settings
from src.core.database import (
    close_database_connection,
    create_database_engine,
    create_sessionmaker,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        f"Starting {settings.app_name} {settings.version} ({settings.environment})"
    )
    engine = create_database_engine()
    app.state.sessionmaker = create_sessionmaker(engine)

    try:
        yield
    finally:
        app.state.sessionmaker = None
        await close_database_connection(engine)
        logger.info(f"{settings.app_name} stopped")
