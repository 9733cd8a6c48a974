"""
Pure functions deriving account share views from the full set of shares.

Nothing here performs I/O; every function takes the share list loaded once
by AccountShareService.

The storage layer allows at most one active share per owner, but these
functions still pick deterministically when given duplicates: the most
recently updated record wins.
"""

import uuid
from collections.abc import Iterable

from src.models.account_share import AccountShare
from src.models.enums import ShareStatus


def normalize_share_email(value: str) -> str:
    """
    Normalize an email for matching: trim surrounding whitespace and lower-case.

    No syntax validation is done; two emails match when their normalized
    forms are identical.

    Example:
        >>> normalize_share_email("  A@B.COM ")
        'a@b.com'
    """
    return value.strip().lower()


def _most_recently_updated(shares: list[AccountShare]) -> AccountShare | None:
    if not shares:
        return None
    return max(shares, key=lambda share: share.updated_at)


def find_owner_active_share(
    shares: Iterable[AccountShare],
    owner_user_id: uuid.UUID,
) -> AccountShare | None:
    """
    Find the active (pending or accepted) share requested by an owner.

    An accepted share always wins over a pending one, whatever their
    timestamps.

    Args:
        shares: Every share record
        owner_user_id: Stock user id of the owner

    Returns:
        The owner's active share, or None
    """
    active = [
        share
        for share in shares
        if share.owner_user_id == owner_user_id and share.status.is_active
    ]

    accepted = [share for share in active if share.status == ShareStatus.accepted]
    if accepted:
        return _most_recently_updated(accepted)

    return _most_recently_updated(active)


def get_incoming_pending_shares(
    shares: Iterable[AccountShare],
    actor_email: str,
) -> list[AccountShare]:
    """
    List pending requests addressed to an email, newest request first.

    Args:
        shares: Every share record
        actor_email: Email of the current actor (any casing/spacing)

    Returns:
        Pending shares targeting that email, sorted by created_at descending
    """
    email = normalize_share_email(actor_email)
    incoming = [
        share
        for share in shares
        if share.status == ShareStatus.pending
        and normalize_share_email(share.target_email) == email
    ]
    return sorted(incoming, key=lambda share: share.created_at, reverse=True)


def find_accepted_share_for_target_auth(
    shares: Iterable[AccountShare],
    actor_auth_user_id: str,
) -> AccountShare | None:
    """
    Find the accepted share bound to an auth identity as target.

    Args:
        shares: Every share record
        actor_auth_user_id: Auth service id of the current actor

    Returns:
        The accepted share, or None
    """
    accepted = [
        share
        for share in shares
        if share.status == ShareStatus.accepted
        and share.target_auth_user_id == actor_auth_user_id
    ]
    return _most_recently_updated(accepted)


def resolve_effective_user_id(
    actor_user_id: uuid.UUID,
    actor_auth_user_id: str,
    accepted_share_for_target: AccountShare | None,
) -> uuid.UUID:
    """
    Decide whose data partition the actor works on.

    The actor works on the owner's data only when the given share is
    accepted and bound to the actor's auth identity; otherwise the actor
    works on their own data.

    Args:
        actor_user_id: Stock user id of the actor
        actor_auth_user_id: Auth service id of the actor
        accepted_share_for_target: Result of find_accepted_share_for_target_auth

    Returns:
        The effective owner user id
    """
    if accepted_share_for_target is None:
        return actor_user_id

    if (
        accepted_share_for_target.status == ShareStatus.accepted
        and accepted_share_for_target.target_auth_user_id == actor_auth_user_id
    ):
        return accepted_share_for_target.owner_user_id

    return actor_user_id
