"""Per-user discussion relationship."""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import (
    DiscussionId,
    DiscussionRelationshipId,
    RelationshipKind,
    UserId,
)


class DiscussionRelationship(DomainModel):
    """Following/favorite/participated flags for one user and one discussion."""

    id: DiscussionRelationshipId
    user_id: UserId
    discussion_id: DiscussionId
    following: bool = False
    favorite: bool = False
    participated: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    def has(self, kind: RelationshipKind) -> bool:
        return bool(getattr(self, kind.value))
