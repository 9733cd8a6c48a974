"""
Security utilities for verifying identities issued by the auth service.

Tokens are issued by the external auth service and carry the claims
userId, email and role. This module only verifies them; it never stores
credentials.

This module provides:
- JWT verification (signature, expiry, required claims)
- Token extraction from the auth cookie or the Authorization header
- Token creation for local development and tests
- Login URL construction for unauthenticated clients
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any
from urllib.parse import quote

from jose import JWTError, jwt

from src.core.config import settings

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("userId", "email")
BEARER_PREFIX = "Bearer "


def create_access_token(
    user_id: str,
    email: str,
    role: str = "user",
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a token shaped like the ones issued by the auth service.

    Args:
        user_id: Auth service user id (userId claim)
        email: Email address (email claim)
        role: "user" or "admin"
        expires_delta: Token lifetime (default: 1 hour)

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token("auth-123", "me@example.com")
    """
    now = datetime.now(UTC)
    claims = {
        "userId": user_id,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + (expires_delta or timedelta(hours=1)),
    }
    return jwt.encode(claims, settings.jwt_secret_value, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate an auth token.

    Verifies:
    - Token signature
    - Token expiration
    - Presence of the userId and email claims

    Args:
        token: JWT token string to decode

    Returns:
        Dictionary of token claims

    Raises:
        JWTError: If token is invalid, expired, malformed or missing claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_value,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise

    missing = [claim for claim in REQUIRED_CLAIMS if not payload.get(claim)]
    if missing:
        logger.warning(f"JWT missing claims: {', '.join(missing)}")
        raise JWTError(f"Token is missing claims: {', '.join(missing)}")

    return payload


def extract_token(cookie_value: str | None, authorization: str | None) -> str | None:
    """
    Pick the token from the auth cookie, falling back to a Bearer header.

    The cookie is what browsers send; the header is used in development and
    by API clients.
    """
    if cookie_value:
        return cookie_value

    if authorization and authorization.startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
        return token or None

    return None


def get_login_url(redirect_url: str | None = None) -> str:
    """Build the auth service login URL, optionally with a redirect target."""
    base = f"{settings.auth_service_url.rstrip('/')}/login"
    if redirect_url:
        return f"{base}?redirect={quote(redirect_url, safe='')}"
    return base
