"""Discussion view bookmark."""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import DiscussionId, DiscussionViewId, UserId


class DiscussionView(DomainModel):
    """How far a user has read into a discussion."""

    id: DiscussionViewId
    user_id: UserId
    discussion_id: DiscussionId
    post_index: int = Field(default=0, ge=0)
    updated_at: datetime = Field(default_factory=datetime.now)
