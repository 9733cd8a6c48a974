"""
Database models for the Stock Tracker backend.

This module exports all SQLAlchemy models and the declarative base.
Import models from this module to ensure proper initialization.
"""

from src.models.account_share import AccountShare
from src.models.base import Base
from src.models.enums import ShareDecision, ShareRole, ShareStatus
from src.models.item import StockItem
from src.models.mixins import TimestampMixin
from src.models.user import StockUser

__all__ = [
    # Base
    "Base",
    # Mixins
    "TimestampMixin",
    # Models
    "AccountShare",
    "StockItem",
    "StockUser",
    # Enums
    "ShareDecision",
    "ShareRole",
    "ShareStatus",
]
