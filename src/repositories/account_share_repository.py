"""
AccountShare repository for database operations.

This module provides database operations for the AccountShare model:
- List every share (the service derives all views from the full set)
- Create a pending share, mapping the active-share unique index to ConflictError
- Conditional update (compare-and-set on the current status)
- Lookup by id
"""

import logging
import uuid

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.exceptions import ConflictError, NotFoundError
from src.models.account_share import AccountShare
from src.models.enums import ShareStatus
from src.repositories.account_share_port import AccountShareChanges, NewAccountShare
from src.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class AccountShareRepository(BaseRepository[AccountShare]):
    """
    Repository for AccountShare model database operations.

    Implements AccountShareRepositoryPort.

    Usage:
        share_repo = AccountShareRepository(session)
        shares = await share_repo.list_all_shares()
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize AccountShare repository.

        Args:
            session: Async database session
        """
        super().__init__(AccountShare, session)

    async def list_all_shares(self) -> list[AccountShare]:
        """
        Get all shares, oldest first.

        Returns:
            List of AccountShare instances
        """
        query = select(AccountShare).order_by(AccountShare.created_at)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create_share(self, fields: NewAccountShare) -> AccountShare:
        """
        Create a pending share.

        Args:
            fields: Owner and target of the request

        Returns:
            Created AccountShare instance

        Raises:
            ConflictError: If the owner already has an active share (another
                request won the race past the service check)
        """
        share = AccountShare(
            owner_user_id=fields.owner_user_id,
            owner_auth_user_id=fields.owner_auth_user_id,
            owner_email=fields.owner_email,
            target_email=fields.target_email,
            status=ShareStatus.pending,
        )

        try:
            async with self.session.begin_nested():
                return await self.add(share)
        except IntegrityError as e:
            logger.warning(
                f"Active share insert rejected for owner {fields.owner_user_id}: {e.orig}"
            )
            raise ConflictError("An active share already exists for this account") from e

    async def update_share(
        self,
        share_id: uuid.UUID,
        changes: AccountShareChanges,
        expected_status: ShareStatus | None = None,
    ) -> AccountShare:
        """
        Apply changes to one share.

        The UPDATE carries the expected status in its WHERE clause, so two
        concurrent transitions of the same share cannot both succeed.

        Args:
            share_id: Share to update
            changes: Fields to write
            expected_status: Status the share must still have

        Returns:
            Updated AccountShare instance

        Raises:
            NotFoundError: If the share does not exist
            ConflictError: If the share changed status since it was read
        """
        values = changes.as_values()
        if not values:
            share = await self.get_by_id(share_id)
            if share is None:
                raise NotFoundError("Account share")
            return share

        stmt = update(AccountShare).where(AccountShare.id == share_id).values(**values)
        if expected_status is not None:
            stmt = stmt.where(AccountShare.status == expected_status)

        result = await self.session.execute(stmt)

        if result.rowcount == 0:
            if await self.get_by_id(share_id) is None:
                raise NotFoundError("Account share")
            raise ConflictError(
                "Account share was modified by another request",
                details={"share_id": str(share_id)},
            )

        query = (
            select(AccountShare)
            .where(AccountShare.id == share_id)
            .execution_options(populate_existing=True)
        )
        refreshed = await self.session.execute(query)
        return refreshed.scalar_one()
