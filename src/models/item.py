"""
StockItem model.
"""

import uuid

from sqlalchemy import Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base
from src.models.mixins import TimestampMixin


class StockItem(Base, TimestampMixin):
    """
    Inventory item with a target and a current quantity.

    Attributes:
        id: UUID primary key
        user_id: Partition key. Always the effective owner id of the request
            that created the item, so a share target writes into the
            owner's inventory.
        name: Display name
        target_quantity: Quantity the household wants to keep in stock
        current_quantity: Quantity currently in stock
        unit: Free-text unit ("pcs", "kg", ...)
    """

    __tablename__ = "stock_items"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    target_quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    current_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    unit: Mapped[str] = mapped_column(String(50), nullable=False, default="")

    def __repr__(self) -> str:
        return f"StockItem(id={self.id}, user_id={self.user_id}, name={self.name})"
