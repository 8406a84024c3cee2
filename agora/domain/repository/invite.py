"""Invite repository interface."""

from abc import ABC, abstractmethod

from agora.domain.model.invite import Invite
from agora.domain.value import InviteId, InviteToken, UserId


class InviteRepository(ABC):
    """Repository for Invite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InviteToken) -> Invite | None:
        """Find an invite by token.

        Used when someone opens an invite link.

        Args:
            token: The invite token

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[Invite]:
        """Find invites issued by a user, newest first.

        Args:
            user_id: The inviter's ID

        Returns:
            List of invites
        """
        pass

    @abstractmethod
    async def count_by_user(self, user_id: UserId) -> int:
        """Count invites issued by a user.

        Args:
            user_id: The inviter's ID

        Returns:
            Number of invites
        """
        pass

    @abstractmethod
    async def save(self, invite: Invite) -> Invite:
        """Save an invite (create or update).

        Args:
            invite: The invite to save

        Returns:
            The saved invite
        """
        pass

    @abstractmethod
    async def delete(self, invite_id: InviteId) -> None:
        """Delete an invite."""
        pass

    @abstractmethod
    async def delete_by_user(self, user_id: UserId) -> int:
        """Delete every invite issued by a user.

        Returns:
            Number of invites deleted
        """
        pass
