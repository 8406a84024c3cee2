"""User aggregate root.

Users sign up with a local password or an OpenID identity, are activated
(automatically or by an admin), and carry the role flags, invite allowance
and cached activity counters of the forum.
"""

import math
from datetime import datetime, timedelta
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import UserId

# Attributes a user may never change on their own account
UNSAFE_ATTRIBUTES = frozenset(
    {
        "id",
        "username",
        "hashed_password",
        "admin",
        "activated",
        "banned",
        "trusted",
        "user_admin",
        "moderator",
        "last_active",
        "created_at",
        "updated_at",
        "posts_count",
        "discussions_count",
        "inviter_id",
        "available_invites",
    }
)


class User(DomainModel):
    """User aggregate root.

    Role flags are stored independently; effective capabilities (admin
    overriding trusted and user_admin) are derived in
    ``agora.domain.service.trust``.
    """

    id: UserId
    username: str
    email: str
    realname: Optional[str] = None
    application: Optional[str] = None  # Signup justification

    # Credentials
    hashed_password: Optional[str] = None
    openid_url: Optional[str] = None

    # Authorization flags
    admin: bool = False
    trusted: bool = False
    moderator: bool = False
    user_admin: bool = False
    banned: bool = False
    activated: bool = False

    # Invite ledger
    available_invites: int = Field(default=0, ge=0)
    inviter_id: Optional[UserId] = None

    # Counter caches, may drift from the true counts
    posts_count: int = 0
    discussions_count: int = 0

    last_active: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def full_email(self) -> str:
        """Email address with the real name, when one is known."""
        if self.realname:
            return f"{self.realname} <{self.email}>"
        return self.email

    @property
    def realname_or_username(self) -> str:
        return self.realname or self.username

    def is_online(self, now: datetime, window: timedelta) -> bool:
        """Whether the user was active within ``window`` of ``now``."""
        return self.last_active is not None and self.last_active > now - window

    def posts_per_day(self, now: datetime, precision: int = 2) -> float:
        """Average posts per day since signup, truncated to ``precision`` decimals."""
        days = (now - self.created_at).total_seconds() / 86400
        if days <= 0:
            return float(self.posts_count)
        scale = 10**precision
        return math.floor(self.posts_count / days * scale) / scale
