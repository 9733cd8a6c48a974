"""
Storage interface used by AccountShareService.

The service only ever talks to this protocol, so it can run against the
SQLAlchemy repository in production and an in-memory fake in tests.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from src.models.account_share import AccountShare
from src.models.enums import ShareStatus


@dataclass(frozen=True)
class NewAccountShare:
    """Fields of a share request at creation time (status is always pending)."""

    owner_user_id: uuid.UUID
    owner_auth_user_id: str
    owner_email: str
    target_email: str


@dataclass(frozen=True)
class AccountShareChanges:
    """
    Closed set of fields a transition may change.

    None means "leave unchanged"; no transition ever clears a field.
    """

    status: ShareStatus | None = None
    target_auth_user_id: str | None = None
    target_user_id: uuid.UUID | None = None
    updated_at: datetime | None = None
    responded_at: datetime | None = None
    stopped_at: datetime | None = None

    def as_values(self) -> dict[str, object]:
        """Column values to write, skipping unset fields."""
        values: dict[str, object] = {}
        if self.status is not None:
            values["status"] = self.status
        if self.target_auth_user_id is not None:
            values["target_auth_user_id"] = self.target_auth_user_id
        if self.target_user_id is not None:
            values["target_user_id"] = self.target_user_id
        if self.updated_at is not None:
            values["updated_at"] = self.updated_at
        if self.responded_at is not None:
            values["responded_at"] = self.responded_at
        if self.stopped_at is not None:
            values["stopped_at"] = self.stopped_at
        return values


class AccountShareRepositoryPort(Protocol):
    """Repository interface for AccountShare records."""

    async def list_all_shares(self) -> list[AccountShare]:
        """
        Return every share record, whatever its status.

        Returns:
            List of AccountShare records
        """
        ...

    async def create_share(self, fields: NewAccountShare) -> AccountShare:
        """
        Create a pending share.

        Args:
            fields: Owner and target of the request

        Returns:
            The created record

        Raises:
            ConflictError: If the owner already has an active share
        """
        ...

    async def update_share(
        self,
        share_id: uuid.UUID,
        changes: AccountShareChanges,
        expected_status: ShareStatus | None = None,
    ) -> AccountShare:
        """
        Apply changes to one share.

        Args:
            share_id: Share to update
            changes: Fields to write
            expected_status: If given, the write only happens while the share
                still has this status

        Returns:
            The updated record

        Raises:
            NotFoundError: If no share has this id
            ConflictError: If the share no longer has expected_status
        """
        ...

    async def get_by_id(self, share_id: uuid.UUID) -> AccountShare | None:
        """
        Get one share.

        Returns:
            The record, or None if not found
        """
        ...
