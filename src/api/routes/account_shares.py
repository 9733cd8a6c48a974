"""
Account sharing API routes.

This module provides endpoints for:
- GET /api/account-share/status - Share situation of the current user
- POST /api/account-share/request - Ask another account to share this one
- POST /api/account-share/request/cancel - Withdraw the pending request
- POST /api/account-share/respond - Accept or refuse an incoming request
- POST /api/account-share/stop - End an accepted share
"""

from fastapi import APIRouter, Request, status

from src.api.dependencies import AccountShareServiceDep, CurrentStockContext
from src.core.config import settings
from src.core.rate_limit import limiter
from src.schemas.account_share import (
    AccountShareResponse,
    AccountShareStatusResponse,
    ShareDecisionRequest,
    ShareRequestCreate,
)

router = APIRouter(prefix="/account-share", tags=["Account Share"])


@router.get(
    "/status",
    response_model=AccountShareStatusResponse,
    summary="Get account share status",
    description="""
    Share situation of the current user.

    **Roles:**
    - `owner`: the user has a pending or accepted outgoing share
    - `target`: the user accepted someone else's share and works on their inventory
    - `none`: no active share

    Pending requests addressed to the user's email are always listed.
    """,
)
async def get_status(context: CurrentStockContext) -> AccountShareStatusResponse:
    """
    Return the share status computed while resolving the request identity.

    Args:
        context: Resolved stock context

    Returns:
        Share status view
    """
    return AccountShareStatusResponse.model_validate(context.share_status)


@router.post(
    "/request",
    response_model=AccountShareResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request an account share",
    description="""
    Invite another account, by email, to work on this account's inventory.

    **Validation:**
    - Email is required (trimmed and lower-cased before storage)
    - Only one pending or accepted share per account

    The invited account does not need to exist yet.
    """,
)
@limiter.limit(settings.rate_limit_share_request)
async def request_share(
    request: Request,
    share_data: ShareRequestCreate,
    context: CurrentStockContext,
    share_service: AccountShareServiceDep,
) -> AccountShareResponse:
    """
    Create a pending share request.

    Args:
        request: HTTP request object (for rate limiting)
        share_data: Target email
        context: Resolved stock context
        share_service: Account share service dependency

    Returns:
        Created share

    Raises:
        400: Blank email or an active share already exists
    """
    share = await share_service.request_share(
        owner_user_id=context.actor_stock_user.id,
        owner_auth_user_id=context.auth_user.id,
        owner_email=context.auth_user.email,
        target_email=share_data.target_email,
    )

    return AccountShareResponse.model_validate(share)


@router.post(
    "/request/cancel",
    response_model=AccountShareResponse,
    summary="Cancel the pending share request",
)
async def cancel_request(
    context: CurrentStockContext,
    share_service: AccountShareServiceDep,
) -> AccountShareResponse:
    """
    Withdraw the current user's pending request.

    Raises:
        400: No pending request
    """
    share = await share_service.cancel_share_request(
        owner_user_id=context.actor_stock_user.id,
    )

    return AccountShareResponse.model_validate(share)


@router.post(
    "/respond",
    response_model=AccountShareResponse,
    summary="Answer an incoming share request",
    description="""
    Accept or refuse a pending request addressed to the current user's email.

    Accepting binds the current user to the owner's inventory: from the next
    request on, items are read and written in the owner's inventory.
    """,
)
async def respond(
    decision_data: ShareDecisionRequest,
    context: CurrentStockContext,
    share_service: AccountShareServiceDep,
) -> AccountShareResponse:
    """
    Accept or refuse an incoming request.

    Raises:
        400: Invalid request id or decision, no matching pending request,
            or the request targets another email
    """
    share = await share_service.respond_to_incoming_share(
        share_id=decision_data.request_id,
        target_email=context.auth_user.email,
        target_auth_user_id=context.auth_user.id,
        target_user_id=context.actor_stock_user.id,
        decision=decision_data.decision,
    )

    return AccountShareResponse.model_validate(share)


@router.post(
    "/stop",
    response_model=AccountShareResponse,
    summary="Stop sharing",
    description="Either participant may end an accepted share.",
)
async def stop(
    context: CurrentStockContext,
    share_service: AccountShareServiceDep,
) -> AccountShareResponse:
    """
    End the accepted share the current user takes part in.

    Raises:
        400: No accepted share
    """
    share = await share_service.stop_sharing(
        actor_user_id=context.actor_stock_user.id,
        actor_auth_user_id=context.auth_user.id,
    )

    return AccountShareResponse.model_validate(share)
