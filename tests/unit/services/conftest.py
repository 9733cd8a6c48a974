"""
Fixtures for service tests.

InMemoryAccountShareRepository implements AccountShareRepositoryPort over a
plain list, with the same uniqueness and compare-and-set rules as the
database repository.
"""

import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from src.exceptions import ConflictError, NotFoundError
from src.models.account_share import AccountShare
from src.models.enums import ShareStatus
from src.repositories.account_share_port import AccountShareChanges, NewAccountShare
from src.services.account_share_service import AccountShareService


class StepClock:
    """Clock that advances one second on every call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2025, 1, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


class InMemoryAccountShareRepository:
    """List-backed share storage."""

    def __init__(self, clock: Callable[[], datetime]):
        self.clock = clock
        self.shares: list[AccountShare] = []
        self.writes = 0

    async def list_all_shares(self) -> list[AccountShare]:
        return list(self.shares)

    async def create_share(self, fields: NewAccountShare) -> AccountShare:
        for share in self.shares:
            if share.owner_user_id == fields.owner_user_id and share.status.is_active:
                raise ConflictError("An active share already exists for this account")

        now = self.clock()
        share = AccountShare(
            id=uuid.uuid4(),
            owner_user_id=fields.owner_user_id,
            owner_auth_user_id=fields.owner_auth_user_id,
            owner_email=fields.owner_email,
            target_email=fields.target_email,
            status=ShareStatus.pending,
            created_at=now,
            updated_at=now,
        )
        self.shares.append(share)
        self.writes += 1
        return share

    async def update_share(
        self,
        share_id: uuid.UUID,
        changes: AccountShareChanges,
        expected_status: ShareStatus | None = None,
    ) -> AccountShare:
        share = await self.get_by_id(share_id)
        if share is None:
            raise NotFoundError("Account share")
        if expected_status is not None and share.status != expected_status:
            raise ConflictError("Account share was modified by another request")

        for name, value in changes.as_values().items():
            setattr(share, name, value)
        self.writes += 1
        return share

    async def get_by_id(self, share_id: uuid.UUID) -> AccountShare | None:
        for share in self.shares:
            if share.id == share_id:
                return share
        return None


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def share_repository(clock: StepClock) -> InMemoryAccountShareRepository:
    return InMemoryAccountShareRepository(clock)


@pytest.fixture
def share_service(
    share_repository: InMemoryAccountShareRepository,
    clock: StepClock,
) -> AccountShareService:
    return AccountShareService(share_repository, clock=clock)
