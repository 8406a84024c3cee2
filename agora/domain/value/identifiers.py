"""Strongly typed identifiers for forum entities.

Using NewType keeps user, message and discussion IDs from being mixed up
while still being plain UUIDs at runtime.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
InviteId = NewType("InviteId", UUID)
MessageId = NewType("MessageId", UUID)
DiscussionId = NewType("DiscussionId", UUID)
PostId = NewType("PostId", UUID)
DiscussionRelationshipId = NewType("DiscussionRelationshipId", UUID)
DiscussionViewId = NewType("DiscussionViewId", UUID)
