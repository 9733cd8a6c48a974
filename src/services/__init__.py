"""
Service layer for business logic.

This package provides service classes that implement business logic and
coordinate between repositories.
"""

from src.services.account_share_service import AccountShareService, ShareStatusView
from src.services.identity_service import IdentityService, StockContext

__all__ = [
    "AccountShareService",
    "IdentityService",
    "ShareStatusView",
    "StockContext",
]
