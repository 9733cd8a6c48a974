"""
Pydantic schemas for API request/response validation.

This package provides all Pydantic models used for:
- Request validation
- Response serialization
- API documentation
"""

from src.schemas.account_share import (
    AccountShareResponse,
    AccountShareStatusResponse,
    ShareRequestCreate,
    ShareDecisionRequest,
)
from src.schemas.auth import AuthUser
from src.schemas.item import StockItemCreate, StockItemResponse
from src.schemas.user import StockUserRead

__all__ = [
    # Account shares
    "AccountShareResponse",
    "AccountShareStatusResponse",
    "ShareRequestCreate",
    "ShareDecisionRequest",
    # Auth
    "AuthUser",
    # Items
    "StockItemCreate",
    "StockItemResponse",
    # Users
    "StockUserRead",
]
