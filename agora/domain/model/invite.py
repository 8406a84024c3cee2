"""Invite entity.

Users with available invites can invite new members by email. Each invite
carries a URL-safe token and expires after a configured number of days.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import InviteId, InviteToken, UserId


class Invite(DomainModel):
    """Invite entity.

    Business rules:
    - Owned by exactly one inviting user and destroyed with them
    - Active while not expired
    - Destroyed once accepted; the invitee records the inviter instead
    """

    id: InviteId
    user_id: UserId  # Inviter
    email: str
    token: InviteToken
    message: Optional[str] = None
    expires_at: datetime
    created_at: datetime = Field(default_factory=datetime.now)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
