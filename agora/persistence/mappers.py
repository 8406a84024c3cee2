"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from agora.domain.model import (
    Discussion,
    DiscussionRelationship,
    DiscussionView,
    Invite,
    Message,
    Post,
    User,
)
from agora.domain.value import (
    DiscussionId,
    DiscussionRelationshipId,
    DiscussionViewId,
    InviteId,
    InviteToken,
    MessageId,
    PostId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return None if value is None else _uuid(value)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    inviter_id = _optional_uuid(row.get("inviter_id"))
    return User(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        email=row["email"],
        realname=row.get("realname"),
        application=row.get("application"),
        hashed_password=row.get("hashed_password"),
        openid_url=row.get("openid_url"),
        admin=row["admin"],
        trusted=row["trusted"],
        moderator=row["moderator"],
        user_admin=row["user_admin"],
        banned=row["banned"],
        activated=row["activated"],
        available_invites=row["available_invites"],
        inviter_id=UserId(inviter_id) if inviter_id else None,
        posts_count=row["posts_count"],
        discussions_count=row["discussions_count"],
        last_active=row.get("last_active"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    The counter caches and the invite allowance are left out: they are
    only ever changed through atomic column updates.
    """
    return user.model_dump(
        exclude={"posts_count", "discussions_count", "available_invites"}
    )


def user_to_insert_dict(user: User) -> Dict[str, Any]:
    """Convert a new User domain model to a full insert dict."""
    return user.model_dump()


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model."""
    return Invite(
        id=InviteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        email=row["email"],
        token=InviteToken(row["token"]),
        message=row.get("message"),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict."""
    data = invite.model_dump()
    data["token"] = invite.token.root
    return data


def row_to_message(row: Dict[str, Any]) -> Message:
    """Convert database row to Message domain model."""
    return Message(
        id=MessageId(_uuid(row["id"])),
        sender_id=UserId(_uuid(row["sender_id"])),
        recipient_id=UserId(_uuid(row["recipient_id"])),
        subject=row.get("subject"),
        body=row["body"],
        read=row["read"],
        deleted=row["deleted"],
        deleted_by_sender=row["deleted_by_sender"],
        created_at=row["created_at"],
    )


def row_to_discussion(row: Dict[str, Any]) -> Discussion:
    """Convert database row to Discussion domain model."""
    return Discussion(
        id=DiscussionId(_uuid(row["id"])),
        poster_id=UserId(_uuid(row["poster_id"])),
        title=row["title"],
        trusted=row["trusted"],
        sticky=row["sticky"],
        last_post_at=row["last_post_at"],
        created_at=row["created_at"],
    )


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        discussion_id=DiscussionId(_uuid(row["discussion_id"])),
        body=row["body"],
        trusted=row["trusted"],
        created_at=row["created_at"],
    )


def row_to_discussion_relationship(row: Dict[str, Any]) -> DiscussionRelationship:
    """Convert database row to DiscussionRelationship domain model."""
    return DiscussionRelationship(
        id=DiscussionRelationshipId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        discussion_id=DiscussionId(_uuid(row["discussion_id"])),
        following=row["following"],
        favorite=row["favorite"],
        participated=row["participated"],
        created_at=row["created_at"],
    )


def row_to_discussion_view(row: Dict[str, Any]) -> DiscussionView:
    """Convert database row to DiscussionView domain model."""
    return DiscussionView(
        id=DiscussionViewId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        discussion_id=DiscussionId(_uuid(row["discussion_id"])),
        post_index=row["post_index"],
        updated_at=row["updated_at"],
    )
