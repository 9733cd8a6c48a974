"""
API routes for the Stock Tracker backend.

This package contains all API endpoint definitions organized by feature.
"""

from src.api.routes import account_shares, auth, health, items, root

__all__ = ["account_shares", "auth", "health", "items", "root"]
