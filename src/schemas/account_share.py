"""
AccountShare Pydantic schemas for API request/response handling.

This module provides:
- Share request and response schemas
- Share status view schema
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from src.models.enums import ShareDecision, ShareRole, ShareStatus


class ShareRequestCreate(BaseModel):
    """
    Schema for requesting a share.

    Attributes:
        target_email: Email of the account to invite
    """

    target_email: str = Field(
        max_length=320,
        description="Email of the account to share with",
        examples=["partner@example.com"],
    )


class ShareDecisionRequest(BaseModel):
    """
    Schema for answering an incoming share request.

    Attributes:
        request_id: Id of the pending share
        decision: accept or refuse
    """

    request_id: uuid.UUID = Field(
        description="Id of the pending share request",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )
    decision: ShareDecision = Field(
        description="accept or refuse",
        examples=[ShareDecision.accept],
    )


class AccountShareResponse(BaseModel):
    """
    Schema for account share response.

    Attributes:
        id: Share UUID
        owner_user_id: Owner stock user id
        owner_auth_user_id: Owner id in the auth service
        owner_email: Normalized owner email
        target_email: Normalized target email
        status: Lifecycle state
        target_auth_user_id: Target id in the auth service (once accepted)
        target_user_id: Target stock user id (once accepted)
        created_at: When the request was made
        updated_at: Last transition
        responded_at: When the target answered
        stopped_at: When the share was stopped
    """

    id: uuid.UUID = Field(description="Share unique identifier")
    owner_user_id: uuid.UUID = Field(description="Owner stock user id")
    owner_auth_user_id: str = Field(description="Owner id in the auth service")
    owner_email: str = Field(description="Owner email")
    target_email: str = Field(description="Target email")
    status: ShareStatus = Field(description="Share status")
    target_auth_user_id: str | None = Field(
        default=None, description="Target id in the auth service"
    )
    target_user_id: uuid.UUID | None = Field(default=None, description="Target stock user id")
    created_at: datetime = Field(description="When the share was requested")
    updated_at: datetime = Field(description="When the share last changed")
    responded_at: datetime | None = Field(default=None, description="When the target answered")
    stopped_at: datetime | None = Field(default=None, description="When the share was stopped")

    model_config = {"from_attributes": True}


class AccountShareStatusResponse(BaseModel):
    """
    Share situation of the current actor.

    Attributes:
        role: none, owner or target
        effective_owner_user_id: Whose inventory the actor works on
        partner_email: Email of the other participant
        outgoing_request: Share giving the actor its role
        incoming_requests: Pending requests addressed to the actor
    """

    role: ShareRole
    effective_owner_user_id: uuid.UUID
    partner_email: str | None = None
    outgoing_request: AccountShareResponse | None = None
    incoming_requests: list[AccountShareResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}
