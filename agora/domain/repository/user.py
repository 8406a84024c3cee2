"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from agora.domain.model.user import User
from agora.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users at once. Unknown IDs are skipped.

        Args:
            user_ids: User identifiers to load

        Returns:
            The users found, in no particular order
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username.

        Args:
            username: The username

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_openid_url(self, openid_url: str) -> Optional[User]:
        """Find a user by their normalized OpenID URL.

        Args:
            openid_url: Normalized OpenID URL

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[User]:
        """Find every user, ordered by username."""
        pass

    @abstractmethod
    async def find_active(self) -> list[User]:
        """Find activated, non-banned users ordered by username."""
        pass

    @abstractmethod
    async def find_online(self, since: datetime) -> list[User]:
        """Find activated users active after ``since``, ordered by username."""
        pass

    @abstractmethod
    async def find_admins(self) -> list[User]:
        """Find listed users holding admin, user admin or moderator flags."""
        pass

    @abstractmethod
    async def find_newest(self, limit: int) -> list[User]:
        """Find the most recently created listed users."""
        pass

    @abstractmethod
    async def find_top_posters(self, limit: int) -> list[User]:
        """Find listed users with the highest cached post counts."""
        pass

    @abstractmethod
    async def find_invitees(self, inviter_id: UserId) -> list[User]:
        """Find users invited by ``inviter_id``, ordered by username."""
        pass

    @abstractmethod
    async def count_invitees(self, inviter_id: UserId) -> int:
        """Count users invited by ``inviter_id``."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        """Delete a user row. Dependent records are handled by the caller."""
        pass

    @abstractmethod
    async def adjust_available_invites(self, user_id: UserId, delta: int) -> int:
        """Atomically add ``delta`` to a user's available invites.

        The stored value never drops below zero.

        Args:
            user_id: The user's unique identifier
            delta: Signed amount to add

        Returns:
            The stored value after the update
        """
        pass

    @abstractmethod
    async def take_available_invite(self, user_id: UserId) -> bool:
        """Atomically consume one available invite if the user has any.

        Returns:
            True if an invite was consumed, False if none were left
        """
        pass

    @abstractmethod
    async def clear_available_invites(self, user_id: UserId) -> int:
        """Atomically set a user's available invites to zero.

        Returns:
            The stored value after the update
        """
        pass

    @abstractmethod
    async def update_counters(
        self, user_id: UserId, posts_count: int = 0, discussions_count: int = 0
    ) -> None:
        """Atomically apply signed deltas to the cached activity counters.

        Args:
            user_id: The user's unique identifier
            posts_count: Delta for posts_count
            discussions_count: Delta for discussions_count
        """
        pass

    @abstractmethod
    async def update_last_active(self, user_id: UserId, last_active: datetime) -> None:
        """Set the user's last activity timestamp."""
        pass
