"""Counter cache maintenance service."""

import logfire

from agora.domain.model import User
from agora.domain.repository import (
    DiscussionRepository,
    PostRepository,
    UserRepository,
)

from .base import Service


class CounterCacheService(Service):
    """Repairs drift in the cached ``posts_count`` and ``discussions_count``.

    Corrections are written as signed deltas through the store's atomic
    counter update, never as absolute values, so posts created while a
    reconciliation runs are not lost. Drift is logged, never raised.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        post_repository: PostRepository,
        discussion_repository: DiscussionRepository,
    ) -> None:
        """Initialize counter cache service.

        Args:
            user_repository: User repository
            post_repository: Post repository
            discussion_repository: Discussion repository
        """
        self.user_repository = user_repository
        self.post_repository = post_repository
        self.discussion_repository = discussion_repository

    async def reconcile(self, user: User) -> dict[str, int]:
        """Compare a user's cached counters with the true counts and fix drift.

        Args:
            user: User as last loaded; its counter values are the cached ones

        Returns:
            Mapping of corrected field name to the delta applied. Empty when
            the caches were already correct.
        """
        with logfire.span("counter_cache_service.reconcile", user_id=str(user.id)):
            posts = await self.post_repository.count_by_user(user.id)
            discussions = await self.discussion_repository.count_by_poster(user.id)

            deltas: dict[str, int] = {}
            if posts != user.posts_count:
                deltas["posts_count"] = posts - user.posts_count
            if discussions != user.discussions_count:
                deltas["discussions_count"] = discussions - user.discussions_count

            if not deltas:
                return deltas

            for field, delta in deltas.items():
                logfire.warn(
                    "Counter cache drift detected",
                    user_id=str(user.id),
                    field=field,
                    delta=delta,
                )
            await self.user_repository.update_counters(user.id, **deltas)
            return deltas

    async def reconcile_all(self) -> int:
        """Reconcile every user.

        Returns:
            Number of users whose counters needed correcting
        """
        with logfire.span("counter_cache_service.reconcile_all"):
            users = await self.user_repository.find_all()
            corrected = 0
            for user in users:
                if await self.reconcile(user):
                    corrected += 1
            logfire.info(
                "Counter cache sweep finished",
                users=len(users),
                corrected=corrected,
            )
            return corrected
