"""
FastAPI application.

`app` is what uvicorn serves (`uvicorn src.main:app`); `run()` is the
`stock-tracker` console script.
"""

import logging

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from src.api.routes import account_shares, auth, health, items, root
from src.core import settings
from src.core.handlers import (
    app_exception_handler,
    general_exception_handler,
    rate_limit_handler,
    validation_exception_handler,
)
from src.core.lifespan import lifespan
from src.core.logging import setup_logging
from src.core.rate_limit import limiter
from src.exceptions import AppException
from src.middleware import (
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)

setup_logging()
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the application: handlers, middleware and routers."""
    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description=settings.description,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    application.state.limiter = limiter

    application.add_exception_handler(AppException, app_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    application.add_exception_handler(Exception, general_exception_handler)

    # Starlette wraps in reverse order: the last one added sees the request first.
    # Resulting order, outermost first: CORS, request ID, logging, security headers.
    application.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.is_production)
    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api = APIRouter(prefix="/api")
    api.include_router(auth.router)
    api.include_router(account_shares.router)
    api.include_router(items.router)

    application.include_router(root.router)
    application.include_router(health.router)
    application.include_router(api)

    return application


app = create_app()


def run() -> None:
    """Serve the app with uvicorn using HOST, PORT and RELOAD from settings."""
    logger.info(f"Serving {settings.app_name} on {settings.host}:{settings.port}")
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=None,
    )
