"""Message repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from agora.domain.model.message import Message
from agora.domain.value import MessageId, UserId


class MessageRepository(ABC):
    """Repository for private messages.

    "Between" queries are undirected: they match rows in either direction
    for the given pair of users.
    """

    @abstractmethod
    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID."""
        pass

    @abstractmethod
    async def save(self, message: Message) -> Message:
        """Save a message (create or update)."""
        pass

    @abstractmethod
    async def find_partners(
        self, user_id: UserId, limit: int | None = None, offset: int = 0
    ) -> list[tuple[UserId, datetime]]:
        """Find conversation partners with their latest exchange time.

        Rows are grouped by partner ID and ordered by the latest message
        time descending, partner ID ascending as tie-break. Messages a
        user sent to themselves are ignored.

        Args:
            user_id: The user whose partners to list
            limit: Maximum number of partners, None for all
            offset: Number of partners to skip

        Returns:
            List of (partner_id, last_messaged_at) tuples
        """
        pass

    @abstractmethod
    async def count_partners(self, user_id: UserId) -> int:
        """Count distinct conversation partners of a user."""
        pass

    @abstractmethod
    async def find_first_between(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[Message]:
        """Find the oldest message exchanged between two users."""
        pass

    @abstractmethod
    async def find_last_between(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[Message]:
        """Find the newest message exchanged between two users."""
        pass

    @abstractmethod
    async def count_between(self, user_id: UserId, other_id: UserId) -> int:
        """Count all messages exchanged between two users, deleted ones included."""
        pass

    @abstractmethod
    async def count_unread_from(self, recipient_id: UserId, sender_id: UserId) -> int:
        """Count unread messages from ``sender_id`` to ``recipient_id``.

        Soft-deleted rows are included, unlike ``count_unread``.
        """
        pass

    @abstractmethod
    async def count_unread(self, recipient_id: UserId) -> int:
        """Count unread messages the recipient has not deleted."""
        pass

    @abstractmethod
    async def count_inbox(self, recipient_id: UserId) -> int:
        """Count received messages the recipient has not deleted."""
        pass

    @abstractmethod
    async def find_inbox(
        self, recipient_id: UserId, limit: int, offset: int = 0
    ) -> list[Message]:
        """Find received messages not deleted by the recipient, newest first."""
        pass

    @abstractmethod
    async def count_sent(self, sender_id: UserId) -> int:
        """Count sent messages the sender has not deleted."""
        pass

    @abstractmethod
    async def find_sent(
        self, sender_id: UserId, limit: int, offset: int = 0
    ) -> list[Message]:
        """Find sent messages not deleted by the sender, newest first."""
        pass

    @abstractmethod
    async def count_thread(self, viewer_id: UserId, other_id: UserId) -> int:
        """Count messages between two users that are visible to ``viewer_id``."""
        pass

    @abstractmethod
    async def find_thread(
        self, viewer_id: UserId, other_id: UserId, limit: int, offset: int = 0
    ) -> list[Message]:
        """Find messages between two users visible to ``viewer_id``, oldest first.

        A message is visible to the viewer unless the viewer deleted it on
        their own side; the other party's deletion does not hide it.
        """
        pass

    @abstractmethod
    async def mark_deleted_for(
        self, message_id: MessageId, viewer_id: UserId
    ) -> Optional[Message]:
        """Set the viewer's own deletion flag on a message.

        Only ``deleted_by_sender`` (viewer is the sender) and ``deleted``
        (viewer is the recipient) are written; every other column keeps its
        stored value.

        Returns:
            The stored message after the update, None if it does not exist
        """
        pass

    @abstractmethod
    async def mark_read(self, recipient_id: UserId, sender_id: UserId) -> int:
        """Mark all unread messages from ``sender_id`` to ``recipient_id`` read.

        Returns:
            Number of messages updated
        """
        pass
