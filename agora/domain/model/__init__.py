"""Domain model entities for the forum."""

from agora.domain.model.discussion import Discussion
from agora.domain.model.discussion_relationship import DiscussionRelationship
from agora.domain.model.discussion_view import DiscussionView
from agora.domain.model.invite import Invite
from agora.domain.model.message import Message
from agora.domain.model.post import Post
from agora.domain.model.user import UNSAFE_ATTRIBUTES, User

__all__ = [
    "User",
    "UNSAFE_ATTRIBUTES",
    "Invite",
    "Message",
    "Discussion",
    "Post",
    "DiscussionRelationship",
    "DiscussionView",
]
