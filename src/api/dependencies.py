"""
FastAPI dependencies for authentication and identity resolution.

This module provides:
- Auth identity extraction from the auth cookie or Bearer token
- Stock context resolution (actor and effective owner)
- Service instances bound to the request session

Handlers receive identities as explicit parameters; nothing is attached to
the request object.
"""

import logging
from typing import Annotated

from fastapi import Cookie, Depends, Header
from jose import JWTError
from pydantic import ValidationError as ClaimsValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.database import get_db
from src.core.security import decode_token, extract_token, get_login_url
from src.exceptions import AuthenticationError, InternalError, InvalidTokenError
from src.repositories.account_share_repository import AccountShareRepository
from src.repositories.item_repository import StockItemRepository
from src.schemas.auth import AuthUser
from src.services.account_share_service import AccountShareService
from src.services.identity_service import IdentityService, StockContext

logger = logging.getLogger(__name__)


async def get_auth_user(
    auth_token: Annotated[str | None, Cookie(alias=settings.auth_cookie_name)] = None,
    authorization: Annotated[str | None, Header()] = None,
) -> AuthUser:
    """
    Dependency to extract and verify the auth identity of the request.

    The auth cookie is checked first, then the Authorization: Bearer header.

    Returns:
        AuthUser from the token claims

    Raises:
        AuthenticationError: If no token is present
        InvalidTokenError: If the token does not verify or its claims are malformed
    """
    token = extract_token(auth_token, authorization)
    if not token:
        logger.warning("Authentication failed: missing token")
        raise AuthenticationError(details={"login_url": get_login_url()})

    try:
        payload = decode_token(token)
    except JWTError as e:
        logger.warning(f"Authentication failed: invalid token - {e}")
        raise InvalidTokenError(details={"login_url": get_login_url()}) from e

    try:
        return AuthUser(
            id=str(payload["userId"]),
            email=str(payload["email"]),
            role=payload.get("role", "user"),
        )
    except ClaimsValidationError as e:
        logger.warning(f"Authentication failed: unexpected token claims - {e}")
        raise InvalidTokenError(details={"login_url": get_login_url()}) from e


def get_account_share_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AccountShareService:
    """
    Dependency to get an AccountShareService bound to the request session.

    Returns:
        AccountShareService instance
    """
    return AccountShareService(AccountShareRepository(db))


async def get_stock_context(
    auth_user: Annotated[AuthUser, Depends(get_auth_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    share_service: Annotated[AccountShareService, Depends(get_account_share_service)],
) -> StockContext:
    """
    Dependency resolving the actor and the effective owner of the request.

    Any failure while resolving is reported as a generic internal error and
    no handler runs with a partially resolved identity.

    Returns:
        StockContext for the request

    Raises:
        InternalError: If the stock user or share status cannot be resolved
    """
    try:
        return await IdentityService(db, share_service=share_service).resolve(auth_user)
    except Exception as e:
        logger.error(
            f"Failed to resolve stock user for auth user {auth_user.id}: {e}",
            exc_info=True,
        )
        raise InternalError("Failed to resolve stock user") from e


def get_item_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StockItemRepository:
    """Dependency to get a StockItemRepository bound to the request session."""
    return StockItemRepository(db)


# Convenience type aliases for common dependencies
CurrentAuthUser = Annotated[AuthUser, Depends(get_auth_user)]
CurrentStockContext = Annotated[StockContext, Depends(get_stock_context)]
AccountShareServiceDep = Annotated[AccountShareService, Depends(get_account_share_service)]
StockItemRepositoryDep = Annotated[StockItemRepository, Depends(get_item_repository)]
