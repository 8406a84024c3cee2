"""Post repository interface."""

from abc import ABC, abstractmethod

from agora.domain.model.post import Post
from agora.domain.value import UserId


class PostRepository(ABC):
    """Repository for posts."""

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        pass

    @abstractmethod
    async def count_by_user(self, user_id: UserId, include_trusted: bool = True) -> int:
        """Count posts written by a user.

        Args:
            user_id: Author ID
            include_trusted: Whether posts in trusted categories are counted

        Returns:
            Number of posts
        """
        pass

    @abstractmethod
    async def find_by_user(
        self,
        user_id: UserId,
        include_trusted: bool = True,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts written by a user, newest first."""
        pass
