"""
Exception handlers registered on the FastAPI app.

All error responses share one envelope:

    {"error": {"code": ..., "message": ..., "details": ...},
     "meta": {"request_id": ...}}
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from src.core.config import settings
from src.exceptions import AppException

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render the error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details if details is not None else {},
            },
            "meta": {"request_id": _request_id(request)},
        },
        headers=headers,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Render an AppException.

    5xx are logged at ERROR, everything else at WARNING. A 401 carries
    WWW-Authenticate so API clients know to send a Bearer token.
    """
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.error_code} on {request.method} {request.url.path}: {exc.message} "
        f"(request_id={_request_id(request)})",
    )

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    body = exc.to_dict()["error"]
    return error_response(
        request,
        exc.status_code,
        body["code"],
        body["message"],
        body["details"],
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as 400 VALIDATION_ERROR."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    logger.warning(
        f"Rejected {request.method} {request.url.path}: {len(errors)} invalid field(s) "
        f"(request_id={_request_id(request)})"
    )

    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Request validation failed",
        errors,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler.

    The traceback goes to the logs; the client only sees the exception text
    when debug is on.
    """
    logger.exception(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path} "
        f"(request_id={_request_id(request)})"
    )

    message = str(exc) if settings.debug else "An unexpected error occurred."
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        message,
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render a slowapi limit hit as 429."""
    logger.warning(
        f"Rate limit hit by {_client_host(request)} on {request.url.path} "
        f"(request_id={_request_id(request)})"
    )

    return error_response(
        request,
        status.HTTP_429_TOO_MANY_REQUESTS,
        "RATE_LIMIT_EXCEEDED",
        "Rate limit exceeded. Please try again later.",
        {"limit": str(exc.detail)},
    )
