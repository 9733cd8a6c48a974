"""
Reusable mixins for database models.

This module provides:
- TimestampMixin: created_at and updated_at timestamps
"""

from datetime import UTC, datetime

from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import UTCDateTime


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class TimestampMixin:
    """
    Mixin to add timestamp columns to models.

    Adds:
    - created_at: Timestamp when record was created (auto-set)
    - updated_at: Timestamp when record was last updated (auto-updated)

    Both timestamps use UTC timezone. Code that performs a state transition
    may set updated_at explicitly so it matches other transition timestamps.

    Usage:
        class StockUser(Base, TimestampMixin):
            __tablename__ = "stock_users"
            auth_user_id: Mapped[str]
    """

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
