"""
slowapi limiter shared by the app and the route decorators.

Limits are declared per route with limiter.limit(...). Counters live in
RATE_LIMIT_STORAGE_URI (memory:// is per process).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from src.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.rate_limit_storage_uri,
    enabled=settings.rate_limit_enabled,
)
