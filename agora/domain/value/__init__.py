"""Domain value objects for the forum."""

from agora.domain.value.identifiers import (
    DiscussionId,
    DiscussionRelationshipId,
    DiscussionViewId,
    InviteId,
    MessageId,
    PostId,
    UserId,
)
from agora.domain.value.pagination import Page, Pagination, paginate
from agora.domain.value.types import (
    USERNAME_PATTERN,
    InviteAmount,
    InviteToken,
    RelationshipKind,
)

__all__ = [
    # Identifiers
    "UserId",
    "InviteId",
    "MessageId",
    "DiscussionId",
    "PostId",
    "DiscussionRelationshipId",
    "DiscussionViewId",
    # Types
    "USERNAME_PATTERN",
    "InviteAmount",
    "InviteToken",
    "RelationshipKind",
    # Pagination
    "Page",
    "Pagination",
    "paginate",
]
