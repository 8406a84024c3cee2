"""Helpers for building test data."""

from datetime import datetime, timedelta
from uuid import uuid4

from agora.domain.model import Discussion, Message, Post, User
from agora.domain.repository import (
    DiscussionRepository,
    MessageRepository,
    PostRepository,
    UserRepository,
)
from agora.domain.value import DiscussionId, MessageId, PostId, UserId

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def at(minutes: int) -> datetime:
    """A fixed point in time, ``minutes`` after ``BASE_TIME``."""
    return BASE_TIME + timedelta(minutes=minutes)


async def make_user(
    user_repo: UserRepository, username: str = "alice", **fields
) -> User:
    """Create and store an activated test user.

    Args:
        user_repo: Repository to save into
        username: Username, also used for the email address
        **fields: Any other User field

    Returns:
        The stored user
    """
    values = {
        "id": UserId(uuid4()),
        "username": username,
        "email": f"{username}@example.org",
        "activated": True,
        "created_at": BASE_TIME,
        "updated_at": BASE_TIME,
    }
    values.update(fields)
    return await user_repo.save(User(**values))


async def make_message(
    message_repo: MessageRepository,
    sender: User,
    recipient: User,
    created_at: datetime,
    **fields,
) -> Message:
    """Create and store a message between two users."""
    message = Message(
        id=MessageId(uuid4()),
        sender_id=sender.id,
        recipient_id=recipient.id,
        body=fields.pop("body", "Hello"),
        created_at=created_at,
        **fields,
    )
    return await message_repo.save(message)


async def make_discussion(
    discussion_repo: DiscussionRepository, poster: User, **fields
) -> Discussion:
    """Create and store a discussion."""
    values = {
        "id": DiscussionId(uuid4()),
        "poster_id": poster.id,
        "title": "A discussion",
        "last_post_at": BASE_TIME,
        "created_at": BASE_TIME,
    }
    values.update(fields)
    return await discussion_repo.save(Discussion(**values))


async def make_post(
    post_repo: PostRepository, author: User, discussion: Discussion, **fields
) -> Post:
    """Create and store a post."""
    values = {
        "id": PostId(uuid4()),
        "user_id": author.id,
        "discussion_id": discussion.id,
        "body": "A post",
        "trusted": discussion.trusted,
        "created_at": BASE_TIME,
    }
    values.update(fields)
    return await post_repo.save(Post(**values))
