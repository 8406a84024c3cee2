"""Unit tests for CounterCacheService."""

import pytest

from agora.domain.repository import (
    DiscussionRepository,
    PostRepository,
    UserRepository,
)
from agora.domain.service import CounterCacheService
from agora.domain.value import UserId
from tests.factories import make_discussion, make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class ConcurrentPostRepository(PostRepository):
    """Post repository that bumps the author's counter right after counting.

    Stands in for a post created by another request between the count
    query and the correction.
    """

    def __init__(self, inner: PostRepository, user_repository: UserRepository):
        self.inner = inner
        self.user_repository = user_repository

    async def save(self, post):
        return await self.inner.save(post)

    async def count_by_user(self, user_id: UserId, include_trusted: bool = True) -> int:
        count = await self.inner.count_by_user(user_id, include_trusted)
        await self.user_repository.update_counters(user_id, posts_count=1)
        return count

    async def find_by_user(self, user_id, include_trusted=True, limit=50, offset=0):
        return await self.inner.find_by_user(user_id, include_trusted, limit, offset)


async def _user_with_posts(env, cached: int, actual: int, **fields):
    user_repo = await env.get(UserRepository)
    post_repo = await env.get(PostRepository)
    discussion_repo = await env.get(DiscussionRepository)
    user = await make_user(user_repo, posts_count=cached, **fields)
    discussion = await make_discussion(discussion_repo, user)
    for _ in range(actual):
        await make_post(post_repo, user, discussion)
    return user


class TestReconcile:
    """Tests for reconcile."""

    @pytest.mark.asyncio
    async def test_drift_is_corrected_with_a_delta(self, unit_env):
        # Arrange
        service = await unit_env.get(CounterCacheService)
        user_repo = await unit_env.get(UserRepository)
        user = await _user_with_posts(
            unit_env, cached=5, actual=7, discussions_count=1
        )

        # Act
        deltas = await service.reconcile(user)

        # Assert
        assert deltas == {"posts_count": 2}
        assert (await user_repo.find_by_id(user.id)).posts_count == 7

    @pytest.mark.asyncio
    async def test_concurrent_increment_is_not_overwritten(self, unit_env):
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        user = await _user_with_posts(
            unit_env, cached=5, actual=7, discussions_count=1
        )
        service = CounterCacheService(
            user_repo,
            ConcurrentPostRepository(await unit_env.get(PostRepository), user_repo),
            await unit_env.get(DiscussionRepository),
        )

        # Act
        deltas = await service.reconcile(user)

        # Assert - the +1 landing mid-reconcile survives the +2 correction
        assert deltas == {"posts_count": 2}
        assert (await user_repo.find_by_id(user.id)).posts_count == 8

    @pytest.mark.asyncio
    async def test_discussions_count_is_reconciled(self, unit_env):
        service = await unit_env.get(CounterCacheService)
        user_repo = await unit_env.get(UserRepository)
        user = await _user_with_posts(
            unit_env, cached=0, actual=0, discussions_count=4
        )

        deltas = await service.reconcile(user)

        assert deltas == {"discussions_count": -3}
        assert (await user_repo.find_by_id(user.id)).discussions_count == 1

    @pytest.mark.asyncio
    async def test_rerun_without_drift_is_noop(self, unit_env):
        service = await unit_env.get(CounterCacheService)
        user_repo = await unit_env.get(UserRepository)
        user = await _user_with_posts(
            unit_env, cached=5, actual=7, discussions_count=1
        )

        await service.reconcile(user)
        deltas = await service.reconcile(await user_repo.find_by_id(user.id))

        assert deltas == {}
        assert (await user_repo.find_by_id(user.id)).posts_count == 7

    @pytest.mark.asyncio
    async def test_trusted_posts_are_counted(self, unit_env):
        service = await unit_env.get(CounterCacheService)
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)
        discussion_repo = await unit_env.get(DiscussionRepository)
        user = await make_user(user_repo, trusted=True, discussions_count=1)
        discussion = await make_discussion(discussion_repo, user, trusted=True)
        await make_post(post_repo, user, discussion)

        assert await service.reconcile(user) == {"posts_count": 1}


class TestReconcileAll:
    """Tests for reconcile_all."""

    @pytest.mark.asyncio
    async def test_counts_only_corrected_users(self, unit_env):
        service = await unit_env.get(CounterCacheService)
        user_repo = await unit_env.get(UserRepository)
        discussion_repo = await unit_env.get(DiscussionRepository)
        post_repo = await unit_env.get(PostRepository)
        drifted = await make_user(user_repo, "drifted", posts_count=3)
        accurate = await make_user(
            user_repo, "accurate", posts_count=1, discussions_count=1
        )
        discussion = await make_discussion(discussion_repo, accurate)
        await make_post(post_repo, accurate, discussion)

        corrected = await service.reconcile_all()

        assert corrected == 1
        assert (await user_repo.find_by_id(drifted.id)).posts_count == 0
        assert (await user_repo.find_by_id(accurate.id)).posts_count == 1
        assert await service.reconcile_all() == 0
