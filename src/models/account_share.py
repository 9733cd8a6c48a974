"""
AccountShare model.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Enum, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, UTCDateTime
from src.models.enums import ShareStatus
from src.models.mixins import TimestampMixin

ACTIVE_STATUS_CLAUSE = text("status IN ('pending', 'accepted')")


class AccountShare(Base, TimestampMixin):
    """
    Request (and later link) to share one owner's stock data with a target.

    Attributes:
        id: UUID primary key
        owner_user_id: Stock user id of the owner; the shared data partition
        owner_auth_user_id: Auth service id of the owner
        owner_email: Owner email, normalized (trimmed, lower-cased)
        target_email: Invited email, normalized (trimmed, lower-cased)
        status: Lifecycle state (see ShareStatus)
        target_auth_user_id: Auth id of the identity that accepted (None until accepted)
        target_user_id: Stock user id of the identity that accepted (None until accepted)
        responded_at: When the target accepted or refused
        stopped_at: When an accepted share was stopped
        created_at: When the request was made
        updated_at: Refreshed on every transition

    History:
        Records are never deleted. A finished share stays in its terminal
        state and the owner may start a new one.

    Uniqueness:
        At most one active (pending or accepted) share per owner, enforced
        by the partial unique index uq_account_shares_owner_active.
    """

    __tablename__ = "account_shares"
    __table_args__ = (
        Index(
            "uq_account_shares_owner_active",
            "owner_user_id",
            unique=True,
            postgresql_where=ACTIVE_STATUS_CLAUSE,
            sqlite_where=ACTIVE_STATUS_CLAUSE,
        ),
    )

    owner_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
    )

    owner_auth_user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    owner_email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
    )

    target_email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        index=True,
    )

    status: Mapped[ShareStatus] = mapped_column(
        Enum(
            ShareStatus,
            name="share_status",
            native_enum=False,
            length=16,
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        nullable=False,
        default=ShareStatus.pending,
        index=True,
    )

    target_auth_user_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        index=True,
    )

    target_user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        nullable=True,
    )

    responded_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime,
        nullable=True,
    )

    stopped_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime,
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"AccountShare(id={self.id}, owner_user_id={self.owner_user_id}, "
            f"target_email={self.target_email}, status={self.status.value})"
        )
