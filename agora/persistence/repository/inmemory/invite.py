"""In-memory invite repository for testing."""

from typing import Optional

from agora.domain.model.invite import Invite
from agora.domain.repository.invite import InviteRepository
from agora.domain.value import InviteId, InviteToken, UserId


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing."""

    def __init__(self) -> None:
        self._invites: dict[InviteId, Invite] = {}

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        return self._invites.get(invite_id)

    async def find_by_token(self, token: InviteToken) -> Optional[Invite]:
        """Find an invite by its token."""
        for invite in self._invites.values():
            if invite.token == token:
                return invite
        return None

    async def find_by_user(self, user_id: UserId) -> list[Invite]:
        invites = [i for i in self._invites.values() if i.user_id == user_id]
        return sorted(invites, key=lambda i: i.created_at, reverse=True)

    async def count_by_user(self, user_id: UserId) -> int:
        return sum(1 for i in self._invites.values() if i.user_id == user_id)

    async def save(self, invite: Invite) -> Invite:
        """Save or update an invite."""
        self._invites[invite.id] = invite
        return invite

    async def delete(self, invite_id: InviteId) -> None:
        self._invites.pop(invite_id, None)

    async def delete_by_user(self, user_id: UserId) -> int:
        doomed = [i.id for i in self._invites.values() if i.user_id == user_id]
        for invite_id in doomed:
            del self._invites[invite_id]
        return len(doomed)
