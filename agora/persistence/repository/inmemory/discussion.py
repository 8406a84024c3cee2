"""In-memory discussion repository for testing."""

from typing import Optional

from agora.domain.model.discussion import Discussion
from agora.domain.repository.discussion import DiscussionRepository
from agora.domain.value import DiscussionId, UserId


def sort_discussions(discussions: list[Discussion]) -> list[Discussion]:
    """Sticky discussions first, then by last post time descending."""
    by_last_post = sorted(discussions, key=lambda d: d.last_post_at, reverse=True)
    return sorted(by_last_post, key=lambda d: not d.sticky)


class InMemoryDiscussionRepository(DiscussionRepository):
    """In-memory implementation of DiscussionRepository for testing."""

    def __init__(self) -> None:
        self._discussions: dict[DiscussionId, Discussion] = {}

    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        return self._discussions.get(discussion_id)

    async def save(self, discussion: Discussion) -> Discussion:
        self._discussions[discussion.id] = discussion
        return discussion

    def _by_poster(self, poster_id: UserId, include_trusted: bool) -> list[Discussion]:
        return [
            d
            for d in self._discussions.values()
            if d.poster_id == poster_id and (include_trusted or not d.trusted)
        ]

    async def count_by_poster(
        self, poster_id: UserId, include_trusted: bool = True
    ) -> int:
        return len(self._by_poster(poster_id, include_trusted))

    async def find_by_poster(
        self,
        poster_id: UserId,
        include_trusted: bool = True,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Discussion]:
        discussions = sort_discussions(self._by_poster(poster_id, include_trusted))
        return discussions[offset : offset + limit]
