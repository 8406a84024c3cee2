"""In-memory user repository for testing."""

from datetime import datetime
from typing import Optional

from agora.domain.model.user import User
from agora.domain.repository.user import UserRepository
from agora.domain.value import UserId

# Columns that only change through the atomic helpers
_ATOMIC_FIELDS = ("posts_count", "discussions_count", "available_invites")


def _listed(user: User) -> bool:
    return user.activated and not user.banned


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    def _sorted(self, users) -> list[User]:
        return sorted(users, key=lambda u: u.username)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username."""
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def find_by_openid_url(self, openid_url: str) -> Optional[User]:
        for user in self._users.values():
            if user.openid_url == openid_url:
                return user
        return None

    async def find_all(self) -> list[User]:
        return self._sorted(self._users.values())

    async def find_active(self) -> list[User]:
        return self._sorted(u for u in self._users.values() if _listed(u))

    async def find_online(self, since: datetime) -> list[User]:
        return self._sorted(
            u
            for u in self._users.values()
            if u.activated and u.last_active is not None and u.last_active > since
        )

    async def find_admins(self) -> list[User]:
        return self._sorted(
            u
            for u in self._users.values()
            if _listed(u) and (u.admin or u.user_admin or u.moderator)
        )

    async def find_newest(self, limit: int) -> list[User]:
        users = [u for u in self._users.values() if _listed(u)]
        return sorted(users, key=lambda u: u.created_at, reverse=True)[:limit]

    async def find_top_posters(self, limit: int) -> list[User]:
        users = [u for u in self._users.values() if _listed(u)]
        return sorted(users, key=lambda u: (-u.posts_count, u.username))[:limit]

    async def find_invitees(self, inviter_id: UserId) -> list[User]:
        return self._sorted(
            u for u in self._users.values() if u.inviter_id == inviter_id
        )

    async def count_invitees(self, inviter_id: UserId) -> int:
        return len(await self.find_invitees(inviter_id))

    async def save(self, user: User) -> User:
        """Save or update a user.

        Like the Postgres repository, updates keep the stored counters and
        invite allowance.
        """
        existing = self._users.get(user.id)
        if existing:
            user = user.model_copy(
                update={field: getattr(existing, field) for field in _ATOMIC_FIELDS}
            )
        self._users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> None:
        self._users.pop(user_id, None)

    def _update(self, user_id: UserId, **values) -> Optional[User]:
        user = self._users.get(user_id)
        if user:
            user = user.model_copy(update=values)
            self._users[user_id] = user
        return user

    async def adjust_available_invites(self, user_id: UserId, delta: int) -> int:
        user = self._users.get(user_id)
        if not user:
            return 0
        return self._update(
            user_id, available_invites=max(0, user.available_invites + delta)
        ).available_invites

    async def take_available_invite(self, user_id: UserId) -> bool:
        user = self._users.get(user_id)
        if not user or user.available_invites <= 0:
            return False
        self._update(user_id, available_invites=user.available_invites - 1)
        return True

    async def clear_available_invites(self, user_id: UserId) -> int:
        self._update(user_id, available_invites=0)
        return 0

    async def update_counters(
        self, user_id: UserId, posts_count: int = 0, discussions_count: int = 0
    ) -> None:
        user = self._users.get(user_id)
        if user:
            self._update(
                user_id,
                posts_count=user.posts_count + posts_count,
                discussions_count=user.discussions_count + discussions_count,
            )

    async def update_last_active(self, user_id: UserId, last_active: datetime) -> None:
        self._update(user_id, last_active=last_active)
