"""Unit tests for GetConversationsUseCase."""

import pytest

from agora.application.usecase.message import (
    GetConversationsRequest,
    GetConversationsUseCase,
)
from agora.domain.repository import MessageRepository, UserRepository
from tests.factories import at, make_message, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetConversationsUseCase:
    """Tests for GetConversationsUseCase."""

    @pytest.mark.asyncio
    async def test_conversations_with_unread_counts(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetConversationsUseCase)
        user_repo = await unit_env.get(UserRepository)
        message_repo = await unit_env.get(MessageRepository)
        me = await make_user(user_repo, "me")
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        await make_message(message_repo, alice, me, at(1))
        await make_message(message_repo, alice, me, at(2), deleted=True)
        await make_message(message_repo, me, bob, at(3))
        await make_message(message_repo, bob, me, at(4), read=True)

        # Act
        response = await use_case.execute(GetConversationsRequest(user_id=str(me.id)))

        # Assert
        assert [c.partner_username for c in response.conversations] == ["bob", "alice"]
        assert [c.unread_count for c in response.conversations] == [0, 2]
        assert response.conversations[0].last_messaged_at == at(4)
        assert response.unread_total == 1
        assert response.pagination.total_count == 2

    @pytest.mark.asyncio
    async def test_paging(self, unit_env):
        use_case = await unit_env.get(GetConversationsUseCase)
        user_repo = await unit_env.get(UserRepository)
        message_repo = await unit_env.get(MessageRepository)
        me = await make_user(user_repo, "me")
        for minute in range(3):
            other = await make_user(user_repo, f"user{minute}")
            await make_message(message_repo, other, me, at(minute))

        response = await use_case.execute(
            GetConversationsRequest(user_id=str(me.id), page=2, per_page=2)
        )

        assert [c.partner_username for c in response.conversations] == ["user0"]
        assert response.pagination.pages == 2
