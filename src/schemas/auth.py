"""
Auth Pydantic schemas.

This module provides:
- AuthUser: identity verified from an auth service token
"""

from typing import Literal

from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """
    Identity carried by a verified auth token.

    Attributes:
        id: User id in the auth service
        email: Email address from the token
        role: Auth service role
    """

    id: str = Field(description="User id in the auth service")
    email: str = Field(description="Email address from the token")
    role: Literal["user", "admin"] = Field(default="user", description="Auth service role")
