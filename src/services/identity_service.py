"""
Identity resolution service.

This module turns a verified auth identity into the request context used by
every stock handler:
- Get or create the local stock user (refreshing its email)
- Compute the actor's share status
- Substitute the effective owner id into the stock user seen by handlers
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.repositories.account_share_repository import AccountShareRepository
from src.repositories.user_repository import StockUserRepository
from src.schemas.auth import AuthUser
from src.schemas.user import StockUserRead
from src.services.account_share_service import AccountShareService, ShareStatusView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockContext:
    """
    Identities available to a stock request handler.

    Attributes:
        auth_user: Identity verified from the auth token
        actor_stock_user: The actor's own stock user
        stock_user: Stock user whose id is the effective owner id; storage
            queries for items and sessions key on stock_user.id
        share_status: Share situation the substitution was derived from
    """

    auth_user: AuthUser
    actor_stock_user: StockUserRead
    stock_user: StockUserRead
    share_status: ShareStatusView


class IdentityService:
    """
    Service resolving the effective identity of an authenticated request.

    Usage:
        context = await IdentityService(session).resolve(auth_user)
        items = await item_repo.list_by_user(context.stock_user.id)
    """

    def __init__(
        self,
        session: AsyncSession,
        share_service: AccountShareService | None = None,
    ):
        """
        Initialize IdentityService.

        Args:
            session: Async database session
            share_service: Share service to use (defaults to one bound to session)
        """
        self.session = session
        self.user_repo = StockUserRepository(session)
        self.share_service = share_service or AccountShareService(
            AccountShareRepository(session)
        )

    async def resolve(self, auth_user: AuthUser) -> StockContext:
        """
        Build the stock context for a verified identity.

        Args:
            auth_user: Identity from the auth token

        Returns:
            StockContext with both the actor's record and the substituted one
        """
        user = await self.user_repo.get_or_create(auth_user.id, auth_user.email)
        actor = StockUserRead.model_validate(user)

        share_status = await self.share_service.get_share_status(
            actor_user_id=actor.id,
            actor_auth_user_id=auth_user.id,
            actor_email=auth_user.email,
        )

        stock_user = actor
        if share_status.effective_owner_user_id != actor.id:
            logger.debug(
                f"Stock user {actor.id} acting on inventory of "
                f"{share_status.effective_owner_user_id}"
            )
            stock_user = actor.model_copy(update={"id": share_status.effective_owner_user_id})

        return StockContext(
            auth_user=auth_user,
            actor_stock_user=actor,
            stock_user=stock_user,
            share_status=share_status,
        )
