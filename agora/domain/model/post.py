"""Post entity."""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import DiscussionId, PostId, UserId


class Post(DomainModel):
    """Post in a discussion. ``trusted`` mirrors the discussion's category."""

    id: PostId
    user_id: UserId
    discussion_id: DiscussionId
    body: str
    trusted: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
