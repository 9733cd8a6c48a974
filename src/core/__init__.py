"""
Core module for the Stock Tracker backend.

Exports the main configuration and database health helpers.
"""

from src.core.config import settings
from src.core.database import check_database_connection

__all__ = [
    # Config
    "settings",
    # Database
    "check_database_connection",
]
