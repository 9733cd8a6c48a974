"""
Liveness and readiness probes.

- GET /health - the process answers
- GET /health/ready - the database answers too (503 when it does not)

Neither needs authentication.
"""

import logging
from datetime import UTC, datetime
from typing import Literal

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

from src.core import check_database_connection
from src.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    app: str
    version: str
    environment: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    status: Literal["ready", "degraded"]
    checks: dict[str, Literal["ok", "ko"]]


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        app=settings.app_name,
        version=settings.version,
        environment=settings.environment,
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check(request: Request, response: Response) -> ReadinessResponse:
    """Ping the database through the application's session factory."""
    database_ok = await check_database_connection(
        getattr(request.app.state, "sessionmaker", None)
    )

    if not database_ok:
        logger.warning("Readiness check failed: database unreachable")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status="ready" if database_ok else "degraded",
        checks={"database": "ok" if database_ok else "ko"},
    )
