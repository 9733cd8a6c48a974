"""
StockUser repository.

This module provides database operations for the StockUser model,
the local projection of auth service identities.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.user import StockUser
from src.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class StockUserRepository(BaseRepository[StockUser]):
    """
    Repository for StockUser model operations.

    Extends BaseRepository with lookups by auth service id.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize StockUserRepository.

        Args:
            session: Async database session
        """
        super().__init__(StockUser, session)

    async def get_by_auth_user_id(self, auth_user_id: str) -> StockUser | None:
        """
        Get the stock user linked to an auth identity.

        Args:
            auth_user_id: Id of the identity in the auth service

        Returns:
            StockUser instance or None if never seen
        """
        query = (
            select(StockUser)
            .where(StockUser.auth_user_id == auth_user_id)
            .order_by(StockUser.created_at.desc())
            .limit(1)
        )

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_or_create(self, auth_user_id: str, email: str | None) -> StockUser:
        """
        Get the stock user for an auth identity, creating it on first sight.

        The stored email follows the email carried by the auth token.

        Args:
            auth_user_id: Id of the identity in the auth service
            email: Email from the auth token

        Returns:
            Existing or newly created StockUser
        """
        user = await self.get_by_auth_user_id(auth_user_id)

        if user is None:
            try:
                async with self.session.begin_nested():
                    user = await self.add(StockUser(auth_user_id=auth_user_id, email=email))
                logger.info(f"Created stock user {user.id} for auth user {auth_user_id}")
                return user
            except IntegrityError:
                # A concurrent first request created it
                user = await self.get_by_auth_user_id(auth_user_id)
                if user is None:
                    raise

        if email and user.email != email:
            logger.info(f"Updating email of stock user {user.id}")
            user.email = email
            user = await self.update(user)

        return user
