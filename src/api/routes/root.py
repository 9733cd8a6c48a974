"""
Root Endpoint
"""

from fastapi import APIRouter

from src.core.config import settings

router = APIRouter(tags=["Root"])


@router.get("/")
async def root() -> dict[str, object]:
    """Service banner with the main entry points."""
    return {
        "app": settings.app_name,
        "version": settings.version,
        "endpoints": {
            "health": "/health",
            "me": "/api/auth/me",
            "account_share": "/api/account-share/status",
            "items": "/api/items",
        },
    }
