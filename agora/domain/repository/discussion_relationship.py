"""Discussion relationship repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from agora.domain.model.discussion import Discussion
from agora.domain.model.discussion_relationship import DiscussionRelationship
from agora.domain.value import DiscussionId, RelationshipKind, UserId


class DiscussionRelationshipRepository(ABC):
    """Repository for per-user discussion relationships."""

    @abstractmethod
    async def find(
        self, user_id: UserId, discussion_id: DiscussionId
    ) -> Optional[DiscussionRelationship]:
        """Find the relationship row for a user and discussion, if any."""
        pass

    @abstractmethod
    async def save(self, relationship: DiscussionRelationship) -> DiscussionRelationship:
        """Save a relationship (create or update)."""
        pass

    @abstractmethod
    async def count_discussions(
        self, user_id: UserId, kind: RelationshipKind, include_trusted: bool = True
    ) -> int:
        """Count discussions the user has a relationship of ``kind`` with."""
        pass

    @abstractmethod
    async def find_discussions(
        self,
        user_id: UserId,
        kind: RelationshipKind,
        include_trusted: bool = True,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Discussion]:
        """Find discussions the user has a relationship of ``kind`` with.

        Ordered sticky first, then by last post time descending.
        """
        pass

    @abstractmethod
    async def delete_by_user(self, user_id: UserId) -> int:
        """Delete all relationships of a user. Returns the number deleted."""
        pass
