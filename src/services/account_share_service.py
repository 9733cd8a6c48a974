"""
Account sharing service.

This module provides the account share lifecycle:
- Request a share with a target email (owner)
- Cancel a pending request (owner)
- Accept or refuse an incoming request (target)
- Stop an accepted share (either participant)
- Compute the per-actor share status view

Every operation reads the full share list once, validates all preconditions
against that snapshot and performs at most one write.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from src.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.models.account_share import AccountShare
from src.models.enums import ShareDecision, ShareRole, ShareStatus
from src.models.mixins import utcnow
from src.repositories.account_share_port import (
    AccountShareChanges,
    AccountShareRepositoryPort,
    NewAccountShare,
)
from src.services.account_share_domain import (
    find_accepted_share_for_target_auth,
    find_owner_active_share,
    get_incoming_pending_shares,
    normalize_share_email,
    resolve_effective_user_id,
)

logger = logging.getLogger(__name__)


@dataclass
class ShareStatusView:
    """
    Share situation of one actor, computed fresh for every request.

    Attributes:
        role: owner if the actor has an active outgoing share, target if the
            actor is bound to someone else's accepted share, none otherwise
        effective_owner_user_id: Whose data the actor reads and writes
        partner_email: Normalized email of the other participant
        outgoing_request: The share that gives the actor its role
        incoming_requests: Pending requests addressed to the actor's email
    """

    role: ShareRole
    effective_owner_user_id: uuid.UUID
    partner_email: str | None = None
    outgoing_request: AccountShare | None = None
    incoming_requests: list[AccountShare] = field(default_factory=list)


class AccountShareService:
    """
    Service class for the account share lifecycle.

    The repository is injected at construction time, so the same service
    runs against the database or an in-memory fake.

    Usage:
        service = AccountShareService(AccountShareRepository(session))
        share = await service.request_share(...)
    """

    def __init__(
        self,
        repository: AccountShareRepositoryPort,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Initialize AccountShareService.

        Args:
            repository: Share storage
            clock: Source of transition timestamps (UTC)
        """
        self.repository = repository
        self.clock = clock

    async def request_share(
        self,
        owner_user_id: uuid.UUID,
        owner_auth_user_id: str,
        owner_email: str,
        target_email: str,
    ) -> AccountShare:
        """
        Ask another account to join the owner's data.

        The target does not need an account yet; the request is matched by
        email on the target's first authenticated request.

        Args:
            owner_user_id: Stock user id of the owner
            owner_auth_user_id: Auth service id of the owner
            owner_email: Owner email
            target_email: Email of the account to invite

        Returns:
            Created pending AccountShare

        Raises:
            ValidationError: If target_email is blank
            ConflictError: If the owner already has a pending or accepted share
        """
        normalized_target = normalize_share_email(target_email)
        if not normalized_target:
            raise ValidationError("Target email is required")

        shares = await self.repository.list_all_shares()
        if find_owner_active_share(shares, owner_user_id) is not None:
            logger.warning(f"Owner {owner_user_id} already has an active share")
            raise ConflictError("An active share already exists for this account")

        share = await self.repository.create_share(
            NewAccountShare(
                owner_user_id=owner_user_id,
                owner_auth_user_id=owner_auth_user_id,
                owner_email=normalize_share_email(owner_email),
                target_email=normalized_target,
            )
        )

        logger.info(f"Owner {owner_user_id} requested share {share.id}")
        return share

    async def cancel_share_request(self, owner_user_id: uuid.UUID) -> AccountShare:
        """
        Withdraw the owner's pending request.

        An accepted share cannot be cancelled; use stop_sharing.

        Args:
            owner_user_id: Stock user id of the owner

        Returns:
            The cancelled AccountShare

        Raises:
            NotFoundError: If the owner has no pending request
        """
        shares = await self.repository.list_all_shares()
        active = find_owner_active_share(shares, owner_user_id)

        if active is None or active.status != ShareStatus.pending:
            raise NotFoundError(message="No pending share request found")

        share = await self.repository.update_share(
            active.id,
            AccountShareChanges(status=ShareStatus.cancelled, updated_at=self.clock()),
            expected_status=ShareStatus.pending,
        )

        logger.info(f"Owner {owner_user_id} cancelled share {share.id}")
        return share

    async def respond_to_incoming_share(
        self,
        share_id: uuid.UUID,
        target_email: str,
        target_auth_user_id: str,
        target_user_id: uuid.UUID,
        decision: ShareDecision,
    ) -> AccountShare:
        """
        Accept or refuse a pending request addressed to the caller.

        Args:
            share_id: Request to answer
            target_email: Email of the caller
            target_auth_user_id: Auth service id of the caller
            target_user_id: Stock user id of the caller
            decision: accept or refuse

        Returns:
            The accepted or refused AccountShare

        Raises:
            NotFoundError: If the share does not exist or is not pending
            AuthorizationError: If the share targets another email
        """
        share = await self.repository.get_by_id(share_id)
        if share is None or share.status != ShareStatus.pending:
            raise NotFoundError(message="Pending share request not found")

        if normalize_share_email(share.target_email) != normalize_share_email(target_email):
            logger.warning(
                f"Auth user {target_auth_user_id} answered share {share_id} "
                "addressed to another email"
            )
            raise AuthorizationError("Share request does not target this user")

        now = self.clock()
        if decision == ShareDecision.refuse:
            changes = AccountShareChanges(
                status=ShareStatus.refused,
                updated_at=now,
                responded_at=now,
            )
        else:
            changes = AccountShareChanges(
                status=ShareStatus.accepted,
                target_auth_user_id=target_auth_user_id,
                target_user_id=target_user_id,
                updated_at=now,
                responded_at=now,
            )

        share = await self.repository.update_share(
            share_id, changes, expected_status=ShareStatus.pending
        )

        logger.info(f"Share {share_id} {share.status.value} by auth user {target_auth_user_id}")
        return share

    async def get_share_status(
        self,
        actor_user_id: uuid.UUID,
        actor_auth_user_id: str,
        actor_email: str,
    ) -> ShareStatusView:
        """
        Compute the actor's share situation.

        Being an owner takes precedence over being a target. Incoming
        requests are listed whatever the role.

        Args:
            actor_user_id: Stock user id of the actor
            actor_auth_user_id: Auth service id of the actor
            actor_email: Email of the actor

        Returns:
            ShareStatusView for the actor
        """
        shares = await self.repository.list_all_shares()
        owner_active = find_owner_active_share(shares, actor_user_id)
        accepted_for_target = find_accepted_share_for_target_auth(shares, actor_auth_user_id)
        incoming = get_incoming_pending_shares(shares, actor_email)

        if owner_active is not None:
            return ShareStatusView(
                role=ShareRole.owner,
                effective_owner_user_id=actor_user_id,
                partner_email=normalize_share_email(owner_active.target_email),
                outgoing_request=owner_active,
                incoming_requests=incoming,
            )

        if accepted_for_target is not None:
            return ShareStatusView(
                role=ShareRole.target,
                effective_owner_user_id=resolve_effective_user_id(
                    actor_user_id=actor_user_id,
                    actor_auth_user_id=actor_auth_user_id,
                    accepted_share_for_target=accepted_for_target,
                ),
                partner_email=normalize_share_email(accepted_for_target.owner_email),
                outgoing_request=accepted_for_target,
                incoming_requests=incoming,
            )

        return ShareStatusView(
            role=ShareRole.none,
            effective_owner_user_id=actor_user_id,
            incoming_requests=incoming,
        )

    async def stop_sharing(
        self,
        actor_user_id: uuid.UUID,
        actor_auth_user_id: str,
    ) -> AccountShare:
        """
        End the accepted share the actor takes part in, as owner or target.

        Args:
            actor_user_id: Stock user id of the actor
            actor_auth_user_id: Auth service id of the actor

        Returns:
            The stopped AccountShare

        Raises:
            NotFoundError: If the actor has no accepted share
        """
        shares = await self.repository.list_all_shares()
        linked = [
            share
            for share in shares
            if share.status == ShareStatus.accepted
            and (
                share.owner_user_id == actor_user_id
                or share.target_auth_user_id == actor_auth_user_id
            )
        ]

        if not linked:
            raise NotFoundError(message="No active accepted share found")

        accepted = max(linked, key=lambda share: share.updated_at)
        now = self.clock()
        share = await self.repository.update_share(
            accepted.id,
            AccountShareChanges(status=ShareStatus.stopped, updated_at=now, stopped_at=now),
            expected_status=ShareStatus.accepted,
        )

        logger.info(f"User {actor_user_id} stopped share {share.id}")
        return share
