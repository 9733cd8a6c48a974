"""
Auth API routes.

This module provides endpoints for:
- GET /api/auth/me - Identity verified from the auth token
"""

from fastapi import APIRouter

from src.api.dependencies import CurrentAuthUser
from src.schemas.auth import AuthUser

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get(
    "/me",
    response_model=AuthUser,
    summary="Get the authenticated identity",
    description="Returns the identity carried by the auth token. No stock user is created.",
)
async def me(auth_user: CurrentAuthUser) -> AuthUser:
    return auth_user
