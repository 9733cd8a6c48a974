"""
StockUser model.

Local projection of an identity managed by the external auth service.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base
from src.models.mixins import TimestampMixin


class StockUser(Base, TimestampMixin):
    """
    Stock tracker user, created on the first authenticated request.

    Attributes:
        id: UUID primary key; partition key for items unless the user is the
            accepted target of a share
        auth_user_id: Id of the identity in the auth service (unique)
        email: Last email seen in the auth token (refreshed when it changes)
        created_at: When the user was first seen
        updated_at: When the record last changed
    """

    __tablename__ = "stock_users"

    auth_user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(320),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"StockUser(id={self.id}, auth_user_id={self.auth_user_id})"
