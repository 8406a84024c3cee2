"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from agora.domain.repository.discussion import DiscussionRepository
from agora.domain.repository.discussion_relationship import (
    DiscussionRelationshipRepository,
)
from agora.domain.repository.discussion_view import DiscussionViewRepository
from agora.domain.repository.invite import InviteRepository
from agora.domain.repository.message import MessageRepository
from agora.domain.repository.post import PostRepository
from agora.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "InviteRepository",
    "MessageRepository",
    "PostRepository",
    "DiscussionRepository",
    "DiscussionRelationshipRepository",
    "DiscussionViewRepository",
]
