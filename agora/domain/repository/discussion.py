"""Discussion repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from agora.domain.model.discussion import Discussion
from agora.domain.value import DiscussionId, UserId


class DiscussionRepository(ABC):
    """Repository for discussions."""

    @abstractmethod
    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Find a discussion by ID."""
        pass

    @abstractmethod
    async def save(self, discussion: Discussion) -> Discussion:
        """Save a discussion (create or update)."""
        pass

    @abstractmethod
    async def count_by_poster(
        self, poster_id: UserId, include_trusted: bool = True
    ) -> int:
        """Count discussions started by a user.

        Args:
            poster_id: ID of the user who started the discussions
            include_trusted: Whether discussions in trusted categories are counted

        Returns:
            Number of discussions
        """
        pass

    @abstractmethod
    async def find_by_poster(
        self,
        poster_id: UserId,
        include_trusted: bool = True,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Discussion]:
        """Find discussions started by a user, sticky first then by last post."""
        pass
