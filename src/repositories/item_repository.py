"""
StockItem repository.

Every query is keyed by the owning user id; callers pass the effective
owner id resolved for the request.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.item import StockItem
from src.repositories.base import BaseRepository


class StockItemRepository(BaseRepository[StockItem]):
    """Repository for StockItem model operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(StockItem, session)

    async def list_by_user(self, user_id: uuid.UUID) -> list[StockItem]:
        """
        Get all items of one inventory, alphabetically.

        Args:
            user_id: Owner of the inventory

        Returns:
            List of StockItem instances
        """
        query = (
            select(StockItem)
            .where(StockItem.user_id == user_id)
            .order_by(StockItem.name)
        )

        result = await self.session.execute(query)
        return list(result.scalars().all())
