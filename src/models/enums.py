"""
Enums for the account sharing model.

This module defines:
- ShareStatus: Lifecycle states of an AccountShare
- ShareRole: Role an actor plays in the share status view
- ShareDecision: Answer a target gives to a pending request

Lifecycle:
    pending ──► cancelled   (owner withdraws before a response)
    pending ──► accepted    (target accepts)
    pending ──► refused     (target declines)
    accepted ─► stopped     (either participant ends the link)

Every other transition is illegal.
"""

import enum


class ShareStatus(str, enum.Enum):
    """
    Status of an account share.

    Attributes:
        pending: Owner requested a share; target has not answered yet
        accepted: Target accepted; the target now works on the owner's data
        refused: Target declined
        cancelled: Owner withdrew the request before an answer
        stopped: A previously accepted share was ended by either participant
    """

    pending = "pending"
    accepted = "accepted"
    refused = "refused"
    cancelled = "cancelled"
    stopped = "stopped"

    @classmethod
    def active(cls) -> frozenset["ShareStatus"]:
        """Statuses that still bind the owner (not terminal)."""
        return frozenset({cls.pending, cls.accepted})

    @property
    def is_active(self) -> bool:
        return self in ShareStatus.active()


class ShareRole(str, enum.Enum):
    """Role of the current actor in an account share."""

    none = "none"
    owner = "owner"
    target = "target"


class ShareDecision(str, enum.Enum):
    """Answer to an incoming share request."""

    accept = "accept"
    refuse = "refuse"
