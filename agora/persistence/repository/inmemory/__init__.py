"""In-memory repository implementations for testing."""

from .discussion import InMemoryDiscussionRepository
from .discussion_relationship import InMemoryDiscussionRelationshipRepository
from .discussion_view import InMemoryDiscussionViewRepository
from .invite import InMemoryInviteRepository
from .message import InMemoryMessageRepository
from .post import InMemoryPostRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryDiscussionRepository",
    "InMemoryDiscussionRelationshipRepository",
    "InMemoryDiscussionViewRepository",
    "InMemoryInviteRepository",
    "InMemoryMessageRepository",
    "InMemoryPostRepository",
    "InMemoryUserRepository",
]
