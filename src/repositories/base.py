"""
Generic repository shared by the model repositories.

Repositories flush so that ids, defaults and constraint errors surface
immediately, but they never commit or roll back: get_db owns the transaction
of the request. An insert that may hit a unique index runs in a savepoint
(session.begin_nested), so its failure leaves earlier writes in place.
"""

import uuid
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    add / get_by_id / update for one model class.

    Usage:
        class StockItemRepository(BaseRepository[StockItem]):
            def __init__(self, session: AsyncSession):
                super().__init__(StockItem, session)
    """

    def __init__(self, model: type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def add(self, instance: ModelType) -> ModelType:
        """
        Insert a new row and reload it.

        Raises:
            IntegrityError: If a unique index or other constraint rejects the row
        """
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get_by_id(self, id: uuid.UUID) -> ModelType | None:
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def update(self, instance: ModelType) -> ModelType:
        """Write attribute changes already made on instance, then reload it."""
        await self.session.flush()
        await self.session.refresh(instance)
        return instance
