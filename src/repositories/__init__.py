"""
Database repositories for the Stock Tracker backend.

This module exports all repository classes for database operations.
"""

from src.repositories.account_share_port import (
    AccountShareChanges,
    AccountShareRepositoryPort,
    NewAccountShare,
)
from src.repositories.account_share_repository import AccountShareRepository
from src.repositories.base import BaseRepository
from src.repositories.item_repository import StockItemRepository
from src.repositories.user_repository import StockUserRepository

__all__ = [
    "BaseRepository",
    "AccountShareChanges",
    "AccountShareRepository",
    "AccountShareRepositoryPort",
    "NewAccountShare",
    "StockItemRepository",
    "StockUserRepository",
]
