"""PostgreSQL repository implementations."""

from agora.persistence.repository.discussion import PostgresDiscussionRepository
from agora.persistence.repository.discussion_relationship import (
    PostgresDiscussionRelationshipRepository,
)
from agora.persistence.repository.discussion_view import (
    PostgresDiscussionViewRepository,
)
from agora.persistence.repository.invite import PostgresInviteRepository
from agora.persistence.repository.message import PostgresMessageRepository
from agora.persistence.repository.post import PostgresPostRepository
from agora.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresInviteRepository",
    "PostgresMessageRepository",
    "PostgresDiscussionRepository",
    "PostgresPostRepository",
    "PostgresDiscussionRelationshipRepository",
    "PostgresDiscussionViewRepository",
]
