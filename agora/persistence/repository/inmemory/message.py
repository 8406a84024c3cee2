"""In-memory message repository for testing."""

from datetime import datetime
from typing import Optional

from agora.domain.model.message import Message
from agora.domain.repository.message import MessageRepository
from agora.domain.value import MessageId, UserId


def _between(message: Message, user_id: UserId, other_id: UserId) -> bool:
    return {message.sender_id, message.recipient_id} == {user_id, other_id}


def _visible_to(message: Message, viewer_id: UserId) -> bool:
    if message.sender_id == viewer_id and not message.deleted_by_sender:
        return True
    return message.recipient_id == viewer_id and not message.deleted


class InMemoryMessageRepository(MessageRepository):
    """In-memory implementation of MessageRepository for testing."""

    def __init__(self) -> None:
        self._messages: dict[MessageId, Message] = {}

    def _where(self, predicate) -> list[Message]:
        return [m for m in self._messages.values() if predicate(m)]

    def _newest_first(self, messages: list[Message]) -> list[Message]:
        return sorted(messages, key=lambda m: m.created_at, reverse=True)

    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        return self._messages.get(message_id)

    async def save(self, message: Message) -> Message:
        self._messages[message.id] = message
        return message

    def _partners(self, user_id: UserId) -> list[tuple[UserId, datetime]]:
        latest: dict[UserId, datetime] = {}
        for m in self._messages.values():
            if m.sender_id == m.recipient_id:
                continue
            if m.sender_id == user_id:
                partner_id = m.recipient_id
            elif m.recipient_id == user_id:
                partner_id = m.sender_id
            else:
                continue
            if partner_id not in latest or m.created_at > latest[partner_id]:
                latest[partner_id] = m.created_at
        # Latest first, partner ID breaks ties
        by_partner = sorted(latest.items(), key=lambda item: str(item[0]))
        return sorted(by_partner, key=lambda item: item[1], reverse=True)

    async def find_partners(
        self, user_id: UserId, limit: int | None = None, offset: int = 0
    ) -> list[tuple[UserId, datetime]]:
        partners = self._partners(user_id)[offset:]
        return partners if limit is None else partners[:limit]

    async def count_partners(self, user_id: UserId) -> int:
        return len(self._partners(user_id))

    async def find_first_between(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[Message]:
        messages = self._where(lambda m: _between(m, user_id, other_id))
        return min(messages, key=lambda m: m.created_at, default=None)

    async def find_last_between(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[Message]:
        messages = self._where(lambda m: _between(m, user_id, other_id))
        return max(messages, key=lambda m: m.created_at, default=None)

    async def count_between(self, user_id: UserId, other_id: UserId) -> int:
        return len(self._where(lambda m: _between(m, user_id, other_id)))

    async def count_unread_from(self, recipient_id: UserId, sender_id: UserId) -> int:
        return len(
            self._where(
                lambda m: m.recipient_id == recipient_id
                and m.sender_id == sender_id
                and not m.read
            )
        )

    async def count_unread(self, recipient_id: UserId) -> int:
        return len(
            self._where(
                lambda m: m.recipient_id == recipient_id and not m.read and not m.deleted
            )
        )

    def _inbox(self, recipient_id: UserId) -> list[Message]:
        return self._where(lambda m: m.recipient_id == recipient_id and not m.deleted)

    def _sent(self, sender_id: UserId) -> list[Message]:
        return self._where(
            lambda m: m.sender_id == sender_id and not m.deleted_by_sender
        )

    def _thread(self, viewer_id: UserId, other_id: UserId) -> list[Message]:
        messages = self._where(
            lambda m: _between(m, viewer_id, other_id) and _visible_to(m, viewer_id)
        )
        return sorted(messages, key=lambda m: m.created_at)

    async def count_inbox(self, recipient_id: UserId) -> int:
        return len(self._inbox(recipient_id))

    async def find_inbox(
        self, recipient_id: UserId, limit: int, offset: int = 0
    ) -> list[Message]:
        return self._newest_first(self._inbox(recipient_id))[offset : offset + limit]

    async def count_sent(self, sender_id: UserId) -> int:
        return len(self._sent(sender_id))

    async def find_sent(
        self, sender_id: UserId, limit: int, offset: int = 0
    ) -> list[Message]:
        return self._newest_first(self._sent(sender_id))[offset : offset + limit]

    async def count_thread(self, viewer_id: UserId, other_id: UserId) -> int:
        return len(self._thread(viewer_id, other_id))

    async def find_thread(
        self, viewer_id: UserId, other_id: UserId, limit: int, offset: int = 0
    ) -> list[Message]:
        return self._thread(viewer_id, other_id)[offset : offset + limit]

    async def mark_deleted_for(
        self, message_id: MessageId, viewer_id: UserId
    ) -> Optional[Message]:
        stored = self._messages.get(message_id)
        if stored is None:
            return None
        update: dict[str, bool] = {}
        if stored.sender_id == viewer_id:
            update["deleted_by_sender"] = True
        if stored.recipient_id == viewer_id:
            update["deleted"] = True
        self._messages[message_id] = stored.model_copy(update=update)
        return self._messages[message_id]

    async def mark_read(self, recipient_id: UserId, sender_id: UserId) -> int:
        unread = self._where(
            lambda m: m.recipient_id == recipient_id
            and m.sender_id == sender_id
            and not m.read
        )
        for message in unread:
            self._messages[message.id] = message.model_copy(update={"read": True})
        return len(unread)
