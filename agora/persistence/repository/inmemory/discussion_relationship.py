"""In-memory discussion relationship repository for testing."""

from typing import Optional

from agora.domain.model.discussion import Discussion
from agora.domain.model.discussion_relationship import DiscussionRelationship
from agora.domain.repository.discussion import DiscussionRepository
from agora.domain.repository.discussion_relationship import (
    DiscussionRelationshipRepository,
)
from agora.domain.value import DiscussionId, RelationshipKind, UserId

from .discussion import sort_discussions


class InMemoryDiscussionRelationshipRepository(DiscussionRelationshipRepository):
    """In-memory implementation of DiscussionRelationshipRepository.

    Joins against the discussion repository it is given.
    """

    def __init__(self, discussion_repository: DiscussionRepository) -> None:
        self._relationships: dict[
            tuple[UserId, DiscussionId], DiscussionRelationship
        ] = {}
        self.discussion_repository = discussion_repository

    async def find(
        self, user_id: UserId, discussion_id: DiscussionId
    ) -> Optional[DiscussionRelationship]:
        return self._relationships.get((user_id, discussion_id))

    async def save(self, relationship: DiscussionRelationship) -> DiscussionRelationship:
        key = (relationship.user_id, relationship.discussion_id)
        existing = self._relationships.get(key)
        if existing:
            relationship = relationship.model_copy(update={"id": existing.id})
        self._relationships[key] = relationship
        return relationship

    async def _related(
        self, user_id: UserId, kind: RelationshipKind, include_trusted: bool
    ) -> list[Discussion]:
        discussions = []
        for (owner_id, discussion_id), relationship in self._relationships.items():
            if owner_id != user_id or not relationship.has(kind):
                continue
            discussion = await self.discussion_repository.find_by_id(discussion_id)
            if discussion and (include_trusted or not discussion.trusted):
                discussions.append(discussion)
        return discussions

    async def count_discussions(
        self, user_id: UserId, kind: RelationshipKind, include_trusted: bool = True
    ) -> int:
        return len(await self._related(user_id, kind, include_trusted))

    async def find_discussions(
        self,
        user_id: UserId,
        kind: RelationshipKind,
        include_trusted: bool = True,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Discussion]:
        discussions = sort_discussions(
            await self._related(user_id, kind, include_trusted)
        )
        return discussions[offset : offset + limit]

    async def delete_by_user(self, user_id: UserId) -> int:
        doomed = [key for key in self._relationships if key[0] == user_id]
        for key in doomed:
            del self._relationships[key]
        return len(doomed)
