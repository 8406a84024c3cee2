"""Integration tests for PostgresMessageRepository partner aggregation."""

from uuid import uuid4

import pytest

from agora.domain.repository import MessageRepository, UserRepository
from tests.factories import at, make_message, make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

integration_env = create_env_fixture(unmock={"persistence"})


def _unique(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:8]}"


class TestMessageRepositoryIntegration:
    """Integration tests for find_partners and unread counts."""

    @pytest.mark.asyncio
    async def test_partners_ordered_by_latest_message(self, integration_env):
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        message_repo = await integration_env.get(MessageRepository)
        u = await make_user(user_repo, _unique("u"))
        a = await make_user(user_repo, _unique("a"))
        b = await make_user(user_repo, _unique("b"))
        await make_message(message_repo, u, a, at(1))
        await make_message(message_repo, a, u, at(5))
        await make_message(message_repo, b, u, at(2))
        await make_message(message_repo, u, u, at(9))

        # Act
        partners = await message_repo.find_partners(u.id)

        # Assert
        assert partners == [(a.id, at(5)), (b.id, at(2))]
        assert await message_repo.count_partners(u.id) == 2
        assert await message_repo.find_partners(u.id, limit=1, offset=1) == [
            (b.id, at(2))
        ]

    @pytest.mark.asyncio
    async def test_unread_counts(self, integration_env):
        user_repo = await integration_env.get(UserRepository)
        message_repo = await integration_env.get(MessageRepository)
        u = await make_user(user_repo, _unique("u"))
        v = await make_user(user_repo, _unique("v"))
        await make_message(message_repo, v, u, at(1))
        await make_message(message_repo, v, u, at(2), deleted=True)

        assert await message_repo.count_unread_from(u.id, v.id) == 2
        assert await message_repo.count_unread(u.id) == 1
        assert await message_repo.mark_read(u.id, v.id) == 2
        assert await message_repo.count_unread_from(u.id, v.id) == 0

    @pytest.mark.asyncio
    async def test_mark_deleted_for_writes_only_the_viewers_flag(
        self, integration_env
    ):
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        message_repo = await integration_env.get(MessageRepository)
        u = await make_user(user_repo, _unique("u"))
        v = await make_user(user_repo, _unique("v"))
        message = await make_message(message_repo, u, v, at(1))
        await message_repo.mark_read(v.id, u.id)

        # Act
        after_recipient = await message_repo.mark_deleted_for(message.id, v.id)
        after_sender = await message_repo.mark_deleted_for(message.id, u.id)

        # Assert
        assert after_recipient.deleted and not after_recipient.deleted_by_sender
        assert after_sender.deleted and after_sender.deleted_by_sender
        assert after_sender.read
