"""In-memory post repository for testing."""

from agora.domain.model.post import Post
from agora.domain.repository.post import PostRepository
from agora.domain.value import PostId, UserId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def save(self, post: Post) -> Post:
        self._posts[post.id] = post
        return post

    def _by_user(self, user_id: UserId, include_trusted: bool) -> list[Post]:
        return [
            p
            for p in self._posts.values()
            if p.user_id == user_id and (include_trusted or not p.trusted)
        ]

    async def count_by_user(self, user_id: UserId, include_trusted: bool = True) -> int:
        return len(self._by_user(user_id, include_trusted))

    async def find_by_user(
        self,
        user_id: UserId,
        include_trusted: bool = True,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Post]:
        posts = sorted(
            self._by_user(user_id, include_trusted),
            key=lambda p: p.created_at,
            reverse=True,
        )
        return posts[offset : offset + limit]
