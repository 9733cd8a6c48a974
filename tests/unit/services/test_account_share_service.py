"""
Unit tests for AccountShareService.

The service runs against InMemoryAccountShareRepository (see conftest.py).

Tests cover:
- Requesting, cancelling, answering and stopping shares
- Status view precedence (owner over target)
- Error kinds for every rejected transition
"""

import uuid

import pytest

from src.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.models.account_share import AccountShare
from src.models.enums import ShareDecision, ShareRole, ShareStatus
from src.services.account_share_service import AccountShareService

OWNER_ID = uuid.uuid4()
TARGET_ID = uuid.uuid4()


async def request_from_owner(
    service: AccountShareService,
    target_email: str = "t@x.test",
    owner_user_id: uuid.UUID = OWNER_ID,
    owner_auth_user_id: str = "aO",
    owner_email: str = "o@x.test",
):
    return await service.request_share(
        owner_user_id=owner_user_id,
        owner_auth_user_id=owner_auth_user_id,
        owner_email=owner_email,
        target_email=target_email,
    )


async def answer_as_target(
    service: AccountShareService,
    share_id: uuid.UUID,
    decision: ShareDecision = ShareDecision.accept,
    target_email: str = "t@x.test",
    target_auth_user_id: str = "aT",
    target_user_id: uuid.UUID = TARGET_ID,
):
    return await service.respond_to_incoming_share(
        share_id=share_id,
        target_email=target_email,
        target_auth_user_id=target_auth_user_id,
        target_user_id=target_user_id,
        decision=decision,
    )


class TestRequestShare:
    """Tests for AccountShareService.request_share."""

    @pytest.mark.asyncio
    async def test_creates_pending_share_with_normalized_emails(self, share_service):
        share = await request_from_owner(
            share_service,
            target_email="  T@X.Test ",
            owner_email="O@X.TEST",
        )

        assert share.status == ShareStatus.pending
        assert share.target_email == "t@x.test"
        assert share.owner_email == "o@x.test"
        assert share.owner_user_id == OWNER_ID
        assert share.owner_auth_user_id == "aO"
        assert share.target_auth_user_id is None
        assert share.target_user_id is None

    @pytest.mark.asyncio
    async def test_blank_target_email_rejected(self, share_service, share_repository):
        with pytest.raises(ValidationError) as exc_info:
            await request_from_owner(share_service, target_email="   ")

        assert exc_info.value.message == "Target email is required"
        assert share_repository.shares == []

    @pytest.mark.asyncio
    async def test_second_request_conflicts_whatever_the_target(self, share_service):
        await request_from_owner(share_service, target_email="t@x.test")

        with pytest.raises(ConflictError):
            await request_from_owner(share_service, target_email="other@x.test")

    @pytest.mark.asyncio
    async def test_request_conflicts_while_accepted(self, share_service):
        share = await request_from_owner(share_service)
        await answer_as_target(share_service, share.id)

        with pytest.raises(ConflictError):
            await request_from_owner(share_service, target_email="other@x.test")

    @pytest.mark.asyncio
    async def test_target_without_account_is_allowed(self, share_service):
        """Nothing checks that the invited email belongs to a user."""
        share = await request_from_owner(share_service, target_email="nobody-yet@x.test")

        assert share.status == ShareStatus.pending

    @pytest.mark.asyncio
    async def test_other_owners_are_independent(self, share_service):
        await request_from_owner(share_service)

        share = await request_from_owner(
            share_service,
            owner_user_id=uuid.uuid4(),
            owner_auth_user_id="aP",
            owner_email="p@x.test",
        )

        assert share.status == ShareStatus.pending

    @pytest.mark.asyncio
    async def test_new_request_allowed_after_refusal(self, share_service):
        share = await request_from_owner(share_service)
        await answer_as_target(share_service, share.id, decision=ShareDecision.refuse)

        again = await request_from_owner(share_service)

        assert again.status == ShareStatus.pending
        assert again.id != share.id


class TestCancelShareRequest:
    """Tests for AccountShareService.cancel_share_request."""

    @pytest.mark.asyncio
    async def test_conflict_then_cancel_then_request_again(self, share_service):
        first = await request_from_owner(share_service)

        with pytest.raises(ConflictError):
            await request_from_owner(share_service)

        cancelled = await share_service.cancel_share_request(owner_user_id=OWNER_ID)
        assert cancelled.id == first.id
        assert cancelled.status == ShareStatus.cancelled
        assert cancelled.updated_at > cancelled.created_at

        second = await request_from_owner(share_service)
        assert second.status == ShareStatus.pending

    @pytest.mark.asyncio
    async def test_nothing_to_cancel(self, share_service):
        with pytest.raises(NotFoundError):
            await share_service.cancel_share_request(owner_user_id=OWNER_ID)

    @pytest.mark.asyncio
    async def test_accepted_share_cannot_be_cancelled(self, share_service):
        share = await request_from_owner(share_service)
        await answer_as_target(share_service, share.id)

        with pytest.raises(NotFoundError) as exc_info:
            await share_service.cancel_share_request(owner_user_id=OWNER_ID)

        assert exc_info.value.message == "No pending share request found"


class TestRespondToIncomingShare:
    """Tests for AccountShareService.respond_to_incoming_share."""

    @pytest.mark.asyncio
    async def test_accept_binds_target(self, share_service):
        share = await request_from_owner(share_service)

        accepted = await answer_as_target(share_service, share.id)

        assert accepted.status == ShareStatus.accepted
        assert accepted.target_auth_user_id == "aT"
        assert accepted.target_user_id == TARGET_ID
        assert accepted.responded_at is not None
        assert accepted.updated_at == accepted.responded_at
        assert accepted.stopped_at is None

    @pytest.mark.asyncio
    async def test_refuse_leaves_target_unbound(self, share_service):
        share = await request_from_owner(share_service)

        refused = await answer_as_target(share_service, share.id, decision=ShareDecision.refuse)

        assert refused.status == ShareStatus.refused
        assert refused.target_auth_user_id is None
        assert refused.target_user_id is None
        assert refused.responded_at is not None

    @pytest.mark.asyncio
    async def test_target_email_compared_normalized(self, share_service):
        share = await request_from_owner(share_service, target_email="t@x.test")

        accepted = await answer_as_target(share_service, share.id, target_email=" T@X.TEST ")

        assert accepted.status == ShareStatus.accepted

    @pytest.mark.asyncio
    async def test_unknown_share(self, share_service):
        with pytest.raises(NotFoundError):
            await answer_as_target(share_service, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_answered_share_cannot_be_answered_again(self, share_service):
        share = await request_from_owner(share_service)
        await answer_as_target(share_service, share.id, decision=ShareDecision.refuse)

        with pytest.raises(NotFoundError):
            await answer_as_target(share_service, share.id)

    @pytest.mark.asyncio
    async def test_cancelled_share_cannot_be_answered(self, share_service):
        share = await request_from_owner(share_service)
        await share_service.cancel_share_request(owner_user_id=OWNER_ID)

        with pytest.raises(NotFoundError):
            await answer_as_target(share_service, share.id)

    @pytest.mark.asyncio
    async def test_other_email_not_authorized(self, share_service, share_repository):
        share = await request_from_owner(share_service, target_email="t@x.test")

        with pytest.raises(AuthorizationError):
            await answer_as_target(
                share_service,
                share.id,
                target_email="intruder@x.test",
                target_auth_user_id="aI",
            )

        stored = await share_repository.get_by_id(share.id)
        assert stored.status == ShareStatus.pending
        assert stored.target_auth_user_id is None


class TestGetShareStatus:
    """Tests for AccountShareService.get_share_status."""

    @pytest.mark.asyncio
    async def test_no_shares(self, share_service):
        view = await share_service.get_share_status(
            actor_user_id=OWNER_ID,
            actor_auth_user_id="aO",
            actor_email="o@x.test",
        )

        assert view.role == ShareRole.none
        assert view.effective_owner_user_id == OWNER_ID
        assert view.partner_email is None
        assert view.outgoing_request is None
        assert view.incoming_requests == []

    @pytest.mark.asyncio
    async def test_pending_owner_and_incoming_target(self, share_service):
        share = await request_from_owner(share_service)

        owner_view = await share_service.get_share_status(
            actor_user_id=OWNER_ID, actor_auth_user_id="aO", actor_email="o@x.test"
        )
        target_view = await share_service.get_share_status(
            actor_user_id=TARGET_ID, actor_auth_user_id="aT", actor_email="T@x.test"
        )

        assert owner_view.role == ShareRole.owner
        assert owner_view.effective_owner_user_id == OWNER_ID
        assert owner_view.partner_email == "t@x.test"
        assert owner_view.outgoing_request is share

        assert target_view.role == ShareRole.none
        assert target_view.effective_owner_user_id == TARGET_ID
        assert target_view.incoming_requests == [share]

    @pytest.mark.asyncio
    async def test_accepted_target_works_on_owner_data(self, share_service):
        share = await request_from_owner(share_service)
        await answer_as_target(share_service, share.id)

        view = await share_service.get_share_status(
            actor_user_id=TARGET_ID, actor_auth_user_id="aT", actor_email="t@x.test"
        )

        assert view.role == ShareRole.target
        assert view.effective_owner_user_id == OWNER_ID
        assert view.partner_email == "o@x.test"
        assert view.outgoing_request is share
        assert view.incoming_requests == []

    @pytest.mark.asyncio
    async def test_target_binding_follows_auth_id_not_email(self, share_service):
        """Another identity with the target's email is not bound."""
        share = await request_from_owner(share_service)
        await answer_as_target(share_service, share.id)

        view = await share_service.get_share_status(
            actor_user_id=uuid.uuid4(), actor_auth_user_id="aT2", actor_email="t@x.test"
        )

        assert view.role == ShareRole.none

    @pytest.mark.asyncio
    async def test_owner_role_wins_over_target_role(self, share_service):
        # T accepts O's share...
        share = await request_from_owner(share_service)
        await answer_as_target(share_service, share.id)

        # ...then T invites someone else as owner
        await request_from_owner(
            share_service,
            target_email="third@x.test",
            owner_user_id=TARGET_ID,
            owner_auth_user_id="aT",
            owner_email="t@x.test",
        )

        view = await share_service.get_share_status(
            actor_user_id=TARGET_ID, actor_auth_user_id="aT", actor_email="t@x.test"
        )

        assert view.role == ShareRole.owner
        assert view.effective_owner_user_id == TARGET_ID
        assert view.partner_email == "third@x.test"

    @pytest.mark.asyncio
    async def test_incoming_listed_whatever_the_role(self, share_service):
        await request_from_owner(share_service)
        incoming = await request_from_owner(
            share_service,
            target_email="o@x.test",
            owner_user_id=uuid.uuid4(),
            owner_auth_user_id="aP",
            owner_email="p@x.test",
        )

        view = await share_service.get_share_status(
            actor_user_id=OWNER_ID, actor_auth_user_id="aO", actor_email="o@x.test"
        )

        assert view.role == ShareRole.owner
        assert view.incoming_requests == [incoming]

    @pytest.mark.asyncio
    async def test_status_is_read_only(self, share_service, share_repository):
        await request_from_owner(share_service)
        writes = share_repository.writes

        await share_service.get_share_status(
            actor_user_id=OWNER_ID, actor_auth_user_id="aO", actor_email="o@x.test"
        )

        assert share_repository.writes == writes


class TestStopSharing:
    """Tests for AccountShareService.stop_sharing."""

    @pytest.mark.asyncio
    async def test_target_stops_and_both_return_to_none(self, share_service):
        share = await request_from_owner(share_service)
        await answer_as_target(share_service, share.id)

        stopped = await share_service.stop_sharing(
            actor_user_id=TARGET_ID, actor_auth_user_id="aT"
        )

        assert stopped.id == share.id
        assert stopped.status == ShareStatus.stopped
        assert stopped.stopped_at is not None

        owner_view = await share_service.get_share_status(
            actor_user_id=OWNER_ID, actor_auth_user_id="aO", actor_email="o@x.test"
        )
        target_view = await share_service.get_share_status(
            actor_user_id=TARGET_ID, actor_auth_user_id="aT", actor_email="t@x.test"
        )

        assert owner_view.role == ShareRole.none
        assert owner_view.effective_owner_user_id == OWNER_ID
        assert target_view.role == ShareRole.none
        assert target_view.effective_owner_user_id == TARGET_ID

    @pytest.mark.asyncio
    async def test_owner_may_stop(self, share_service):
        share = await request_from_owner(share_service)
        await answer_as_target(share_service, share.id)

        stopped = await share_service.stop_sharing(
            actor_user_id=OWNER_ID, actor_auth_user_id="aO"
        )

        assert stopped.status == ShareStatus.stopped

    @pytest.mark.asyncio
    async def test_pending_share_cannot_be_stopped(self, share_service):
        await request_from_owner(share_service)

        with pytest.raises(NotFoundError) as exc_info:
            await share_service.stop_sharing(actor_user_id=OWNER_ID, actor_auth_user_id="aO")

        assert exc_info.value.message == "No active accepted share found"

    @pytest.mark.asyncio
    async def test_unrelated_actor_cannot_stop(self, share_service):
        share = await request_from_owner(share_service)
        await answer_as_target(share_service, share.id)

        with pytest.raises(NotFoundError):
            await share_service.stop_sharing(
                actor_user_id=uuid.uuid4(), actor_auth_user_id="aX"
            )

    @pytest.mark.asyncio
    async def test_owner_may_request_again_after_stop(self, share_service):
        share = await request_from_owner(share_service)
        await answer_as_target(share_service, share.id)
        await share_service.stop_sharing(actor_user_id=OWNER_ID, actor_auth_user_id="aO")

        again = await request_from_owner(share_service)

        assert again.status == ShareStatus.pending


class TestConcurrentTransitions:
    """A transition read from a stale snapshot loses to the one that wrote first."""

    @pytest.mark.asyncio
    async def test_stale_cancel_after_accept_conflicts(self, share_service, share_repository):
        share = await request_from_owner(share_service)

        # The accept lands between the cancel's read and its write
        stale_copy = AccountShare(
            id=share.id,
            owner_user_id=share.owner_user_id,
            owner_auth_user_id=share.owner_auth_user_id,
            owner_email=share.owner_email,
            target_email=share.target_email,
            status=ShareStatus.pending,
            created_at=share.created_at,
            updated_at=share.updated_at,
        )
        original_list = share_repository.list_all_shares

        async def list_then_accept():
            share_repository.list_all_shares = original_list
            await answer_as_target(share_service, share.id)
            return [stale_copy]

        share_repository.list_all_shares = list_then_accept

        with pytest.raises(ConflictError):
            await share_service.cancel_share_request(owner_user_id=OWNER_ID)

        assert (await share_repository.get_by_id(share.id)).status == ShareStatus.accepted
