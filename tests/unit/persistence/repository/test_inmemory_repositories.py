"""Tests for in-memory repository behaviour the unit tests rely on."""

from uuid import uuid4

import pytest

from agora.domain.repository import (
    DiscussionRepository,
    MessageRepository,
    UserRepository,
)
from agora.domain.value import MessageId, UserId
from agora.persistence.repository.inmemory.discussion import sort_discussions
from tests.factories import at, make_discussion, make_message, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestInMemoryUserRepository:
    """The in-memory user store mirrors the Postgres save semantics."""

    @pytest.mark.asyncio
    async def test_save_keeps_atomic_columns(self, unit_env):
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        stale = await make_user(user_repo, posts_count=5, available_invites=1)
        await user_repo.update_counters(stale.id, posts_count=1)
        await user_repo.adjust_available_invites(stale.id, 1)

        # Act
        saved = await user_repo.save(
            stale.model_copy(update={"realname": "Alice", "posts_count": 0})
        )

        # Assert
        assert saved.realname == "Alice"
        assert saved.posts_count == 6
        assert saved.available_invites == 2

    @pytest.mark.asyncio
    async def test_adjust_unknown_user(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo)
        await user_repo.delete(user.id)

        assert await user_repo.adjust_available_invites(user.id, 3) == 0
        assert not await user_repo.take_available_invite(user.id)


class TestDiscussionOrdering:
    """Sticky discussions lead, the rest follow by latest post."""

    @pytest.mark.asyncio
    async def test_sort_discussions(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        discussion_repo = await unit_env.get(DiscussionRepository)
        user = await make_user(user_repo)
        quiet = await make_discussion(discussion_repo, user, last_post_at=at(0))
        busy = await make_discussion(discussion_repo, user, last_post_at=at(30))
        pinned = await make_discussion(
            discussion_repo, user, sticky=True, last_post_at=at(-30)
        )

        ordered = sort_discussions([quiet, pinned, busy])

        assert [d.id for d in ordered] == [pinned.id, busy.id, quiet.id]


class TestInMemoryMessageRepository:
    """Tests for the targeted message flag updates."""

    @pytest.mark.asyncio
    async def test_mark_deleted_for_self_message_sets_both_flags(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        message_repo = await unit_env.get(MessageRepository)
        u = await make_user(user_repo, "u")
        message = await make_message(message_repo, u, u, at(1))

        stored = await message_repo.mark_deleted_for(message.id, u.id)

        assert stored.deleted
        assert stored.deleted_by_sender

    @pytest.mark.asyncio
    async def test_mark_deleted_for_unknown_message(self, unit_env):
        message_repo = await unit_env.get(MessageRepository)

        message_id, viewer_id = MessageId(uuid4()), UserId(uuid4())

        stored = await message_repo.mark_deleted_for(message_id, viewer_id)

        assert stored is None
