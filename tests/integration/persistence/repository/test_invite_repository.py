"""Integration tests for PostgresInviteRepository.

These tests verify that the repository correctly handles value objects
when interacting with the database.
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from agora.domain.model import Invite
from agora.domain.repository import InviteRepository, UserRepository
from agora.domain.value import InviteId, InviteToken
from tests.factories import BASE_TIME, make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

integration_env = create_env_fixture(unmock={"persistence"})


def _unique(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:8]}"


class TestInviteRepositoryIntegration:
    """Integration tests for PostgresInviteRepository."""

    @pytest.mark.asyncio
    async def test_find_by_token_round_trips_token(self, integration_env):
        """find_by_token must query with the token's string value."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        invite_repo = await integration_env.get(InviteRepository)
        inviter = await make_user(user_repo, _unique("inviter"))
        token = InviteToken(_unique("token"))
        invite = Invite(
            id=InviteId(uuid4()),
            user_id=inviter.id,
            email="friend@example.org",
            token=token,
            expires_at=BASE_TIME + timedelta(days=14),
            created_at=BASE_TIME,
        )
        await invite_repo.save(invite)

        # Act
        found = await invite_repo.find_by_token(token)

        # Assert
        assert found is not None
        assert found.id == invite.id
        assert found.token.root == token.root
        assert found.email == "friend@example.org"

    @pytest.mark.asyncio
    async def test_find_by_token_returns_none_for_nonexistent_token(
        self, integration_env
    ):
        invite_repo = await integration_env.get(InviteRepository)

        assert await invite_repo.find_by_token(InviteToken(_unique("missing"))) is None

    @pytest.mark.asyncio
    async def test_delete_by_user(self, integration_env):
        user_repo = await integration_env.get(UserRepository)
        invite_repo = await integration_env.get(InviteRepository)
        inviter = await make_user(user_repo, _unique("inviter"))
        for _ in range(2):
            await invite_repo.save(
                Invite(
                    id=InviteId(uuid4()),
                    user_id=inviter.id,
                    email="friend@example.org",
                    token=InviteToken(_unique("token")),
                    expires_at=BASE_TIME + timedelta(days=14),
                )
            )

        deleted = await invite_repo.delete_by_user(inviter.id)

        assert deleted == 2
        assert await invite_repo.count_by_user(inviter.id) == 0
