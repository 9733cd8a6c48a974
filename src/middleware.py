"""
HTTP middleware.

- RequestIDMiddleware: one ID per request, echoed in X-Request-ID and used
  as the logging correlation ID
- RequestLoggingMiddleware: one log line per request, X-Response-Time
- SecurityHeadersMiddleware: fixed browser hardening headers
"""

import logging
import re
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from src.core.logging import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
# IDs forwarded by a proxy are reused only if they look like IDs
_FORWARDED_ID = re.compile(r"^[A-Za-z0-9._-]{8,128}$")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assign the request ID.

    A well-formed X-Request-ID sent by the client or a proxy is kept,
    otherwise a UUID4 is generated. The ID is available as
    request.state.request_id and through request_id_var while the request
    is served.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        request_id = incoming if _FORWARDED_ID.match(incoming) else str(uuid.uuid4())

        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration; 4xx at WARNING, 5xx at ERROR."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        client = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                f"{request.method} {request.url.path} crashed after "
                f"{time.perf_counter() - started:.3f}s (client={client})"
            )
            raise

        elapsed = time.perf_counter() - started
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        logger.log(
            level,
            f"{request.method} {request.url.path} {response.status_code} "
            f"{elapsed:.3f}s (client={client})",
        )

        response.headers["X-Response-Time"] = f"{elapsed:.3f}s"
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add hardening headers; HSTS only when enable_hsts is set (production)."""

    HEADERS = {
        "Referrer-Policy": "no-referrer",
        "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
        "X-Frame-Options": "DENY",
        "X-Content-Type-Options": "nosniff",
    }
    HSTS = "max-age=31536000; includeSubDomains"

    def __init__(self, app: ASGIApp, enable_hsts: bool = False):
        super().__init__(app)
        self.headers = dict(self.HEADERS)
        if enable_hsts:
            self.headers["Strict-Transport-Security"] = self.HSTS

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers.update(self.headers)
        return response
