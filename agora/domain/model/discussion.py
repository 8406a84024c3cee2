"""Discussion entity."""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import DiscussionId, UserId


class Discussion(DomainModel):
    """Discussion thread started by a user.

    Discussions in trusted categories are flagged ``trusted`` and only
    visible to trusted users.
    """

    id: DiscussionId
    poster_id: UserId
    title: str
    trusted: bool = False
    sticky: bool = False
    last_post_at: datetime = Field(default_factory=datetime.now)
    created_at: datetime = Field(default_factory=datetime.now)
