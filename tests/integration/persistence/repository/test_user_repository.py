"""Integration tests for PostgresUserRepository atomic updates."""

from uuid import uuid4

import pytest

from agora.domain.repository import UserRepository
from tests.factories import make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

integration_env = create_env_fixture(unmock={"persistence"})


def _unique(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:8]}"


class TestUserRepositoryIntegration:
    """Integration tests for the invite ledger and counter columns."""

    @pytest.mark.asyncio
    async def test_adjust_clamps_at_zero(self, integration_env):
        user_repo = await integration_env.get(UserRepository)
        user = await make_user(user_repo, _unique("user"), available_invites=3)

        assert await user_repo.adjust_available_invites(user.id, -5) == 0
        assert await user_repo.adjust_available_invites(user.id, 2) == 2

    @pytest.mark.asyncio
    async def test_take_available_invite(self, integration_env):
        user_repo = await integration_env.get(UserRepository)
        user = await make_user(user_repo, _unique("user"), available_invites=1)

        assert await user_repo.take_available_invite(user.id)
        assert not await user_repo.take_available_invite(user.id)
        assert (await user_repo.find_by_id(user.id)).available_invites == 0

    @pytest.mark.asyncio
    async def test_save_does_not_overwrite_atomic_columns(self, integration_env):
        """A stale copy saved after an increment keeps the incremented values."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        stale = await make_user(
            user_repo, _unique("user"), posts_count=5, available_invites=1
        )
        await user_repo.update_counters(stale.id, posts_count=1)
        await user_repo.adjust_available_invites(stale.id, 1)

        # Act
        saved = await user_repo.save(stale.model_copy(update={"realname": "Alice"}))

        # Assert
        assert saved.realname == "Alice"
        assert saved.posts_count == 6
        assert saved.available_invites == 2

    @pytest.mark.asyncio
    async def test_update_counters_applies_signed_deltas(self, integration_env):
        user_repo = await integration_env.get(UserRepository)
        user = await make_user(
            user_repo, _unique("user"), posts_count=5, discussions_count=2
        )

        await user_repo.update_counters(user.id, posts_count=2, discussions_count=-1)

        stored = await user_repo.find_by_id(user.id)
        assert (stored.posts_count, stored.discussions_count) == (7, 1)
