"""Conversation domain service."""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import logfire

from agora.config import PaginationSettings
from agora.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from agora.domain.model import Message, User
from agora.domain.repository import MessageRepository, UserRepository
from agora.domain.value import MessageId, Page, UserId, paginate

from .base import Service


@dataclass
class ConversationPartner:
    """Another user the subject has exchanged messages with."""

    user: User
    last_messaged_at: datetime


class UnreadCountCache:
    """Memo for unread message totals within one logical operation.

    One instance lives per request scope and is discarded with it, so a
    cached total never outlives the user action that computed it.
    """

    def __init__(self) -> None:
        self._totals: dict[UserId, int] = {}

    def get(self, user_id: UserId) -> int | None:
        return self._totals.get(user_id)

    def set(self, user_id: UserId, total: int) -> None:
        self._totals[user_id] = total

    def invalidate(self, user_id: UserId) -> None:
        self._totals.pop(user_id, None)


class ConversationService(Service):
    """Domain service for private message aggregation.

    Answers who a user has exchanged messages with and the state of each
    thread. Read paths report a missing conversation as None rather than
    raising.
    """

    def __init__(
        self,
        message_repository: MessageRepository,
        user_repository: UserRepository,
        unread_cache: UnreadCountCache,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize conversation service.

        Args:
            message_repository: Message repository
            user_repository: User repository
            unread_cache: Request-scoped memo for unread totals
            pagination_settings: Default page sizes
        """
        self.message_repository = message_repository
        self.user_repository = user_repository
        self.unread_cache = unread_cache
        self.pagination_settings = pagination_settings

    async def partners(self, user: User) -> list[ConversationPartner]:
        """List conversation partners, most recently active conversation first.

        Args:
            user: User whose partners to list

        Returns:
            Partners ordered by their latest exchange with ``user``
        """
        with logfire.span("conversation_service.partners", user_id=str(user.id)):
            rows = await self.message_repository.find_partners(user.id)
            partners = await self._load_partners(rows)
            logfire.info(
                "Conversation partners listed",
                user_id=str(user.id),
                count=len(partners),
            )
            return partners

    async def paginated_partners(
        self, user: User, page: int = 1, per_page: int | None = None
    ) -> Page[ConversationPartner]:
        """Fetch one page of conversation partners.

        The partner count and the page fetch are separate store reads; if
        they disagree the page simply holds fewer rows.
        """
        # Partner listings page like discussion listings, not like messages
        per_page = per_page or self.pagination_settings.discussions_per_page
        with logfire.span(
            "conversation_service.paginated_partners",
            user_id=str(user.id),
            page=page,
            per_page=per_page,
        ):
            total = await self.message_repository.count_partners(user.id)
            pagination = paginate(total, per_page, page)
            rows = await self.message_repository.find_partners(
                user.id, limit=pagination.limit, offset=pagination.offset
            )
            items = await self._load_partners(rows)
            return Page(items=items, pagination=pagination)

    async def _load_partners(
        self, rows: list[tuple[UserId, datetime]]
    ) -> list[ConversationPartner]:
        users = await self.user_repository.find_by_ids([pid for pid, _ in rows])
        by_id = {u.id: u for u in users}
        # Partners whose account no longer exists are dropped
        return [
            ConversationPartner(user=by_id[partner_id], last_messaged_at=last)
            for partner_id, last in rows
            if partner_id in by_id
        ]

    async def first_message_with(self, user: User, other: User) -> Message | None:
        """Oldest message exchanged with ``other``, None if they never talked."""
        return await self.message_repository.find_first_between(user.id, other.id)

    async def last_message_with(self, user: User, other: User) -> Message | None:
        """Newest message exchanged with ``other``, None if they never talked."""
        return await self.message_repository.find_last_between(user.id, other.id)

    async def message_count(self, user: User, other: User) -> int:
        """Count messages exchanged in either direction, deleted ones included."""
        return await self.message_repository.count_between(user.id, other.id)

    async def unread_count_from(self, user: User, sender: User) -> int:
        return await self.message_repository.count_unread_from(user.id, sender.id)

    async def has_unread_from(self, user: User, sender: User) -> bool:
        return await self.unread_count_from(user, sender) > 0

    async def unread_total(self, user: User) -> int:
        """Count the user's unread, non-deleted messages.

        Memoized for the current request only.
        """
        cached = self.unread_cache.get(user.id)
        if cached is not None:
            return cached
        with logfire.span("conversation_service.unread_total", user_id=str(user.id)):
            total = await self.message_repository.count_unread(user.id)
            self.unread_cache.set(user.id, total)
            return total

    async def has_unread(self, user: User) -> bool:
        return await self.unread_total(user) > 0

    async def paginated_inbox(
        self, user: User, page: int = 1, per_page: int | None = None
    ) -> Page[Message]:
        """Received messages the user has not deleted, newest first."""
        per_page = per_page or self.pagination_settings.messages_per_page
        with logfire.span(
            "conversation_service.paginated_inbox", user_id=str(user.id), page=page
        ):
            total = await self.message_repository.count_inbox(user.id)
            pagination = paginate(total, per_page, page)
            items = await self.message_repository.find_inbox(
                user.id, limit=pagination.limit, offset=pagination.offset
            )
            return Page(items=items, pagination=pagination)

    async def paginated_sentbox(
        self, user: User, page: int = 1, per_page: int | None = None
    ) -> Page[Message]:
        """Sent messages the user has not deleted, newest first."""
        per_page = per_page or self.pagination_settings.messages_per_page
        with logfire.span(
            "conversation_service.paginated_sentbox", user_id=str(user.id), page=page
        ):
            total = await self.message_repository.count_sent(user.id)
            pagination = paginate(total, per_page, page)
            items = await self.message_repository.find_sent(
                user.id, limit=pagination.limit, offset=pagination.offset
            )
            return Page(items=items, pagination=pagination)

    async def paginated_thread(
        self, user: User, other: User, page: int = 1, per_page: int | None = None
    ) -> Page[Message]:
        """Messages exchanged with ``other`` as seen by ``user``, oldest first.

        Each side's deletions only hide messages from that side.
        """
        per_page = per_page or self.pagination_settings.messages_per_page
        with logfire.span(
            "conversation_service.paginated_thread",
            user_id=str(user.id),
            other_id=str(other.id),
            page=page,
        ):
            total = await self.message_repository.count_thread(user.id, other.id)
            pagination = paginate(total, per_page, page)
            items = await self.message_repository.find_thread(
                user.id, other.id, limit=pagination.limit, offset=pagination.offset
            )
            return Page(items=items, pagination=pagination)

    async def send_message(
        self,
        sender: User,
        recipient: User,
        body: str,
        subject: str | None = None,
        now: datetime | None = None,
    ) -> Message:
        """Send a private message.

        Raises:
            ValidationError: If the body is blank
        """
        with logfire.span(
            "conversation_service.send_message",
            sender_id=str(sender.id),
            recipient_id=str(recipient.id),
        ):
            if not body or not body.strip():
                raise ValidationError({"body": ["can't be blank"]})
            message = Message(
                id=MessageId(uuid4()),
                sender_id=sender.id,
                recipient_id=recipient.id,
                subject=subject,
                body=body,
                created_at=now or datetime.now(),
            )
            saved = await self.message_repository.save(message)
            self.unread_cache.invalidate(recipient.id)
            logfire.info("Message sent", message_id=str(saved.id))
            return saved

    async def mark_thread_read(self, user: User, sender: User) -> int:
        """Mark every unread message from ``sender`` to ``user`` as read.

        Returns:
            Number of messages marked read
        """
        with logfire.span(
            "conversation_service.mark_thread_read",
            user_id=str(user.id),
            sender_id=str(sender.id),
        ):
            updated = await self.message_repository.mark_read(user.id, sender.id)
            self.unread_cache.invalidate(user.id)
            logfire.info("Messages marked read", user_id=str(user.id), count=updated)
            return updated

    async def delete_message_for(self, user: User, message: Message) -> Message:
        """Hide a message from one side of the conversation.

        Only the user's own flag is written to the store, so flags set by
        the other party or a read marker since ``message`` was loaded are
        kept.

        Raises:
            NotAuthorizedError: If the user is neither sender nor recipient
            NotFoundError: If the message no longer exists
        """
        with logfire.span(
            "conversation_service.delete_message_for",
            user_id=str(user.id),
            message_id=str(message.id),
        ):
            if not message.involves(user.id):
                logfire.warn(
                    "Delete attempt on foreign message",
                    user_id=str(user.id),
                    message_id=str(message.id),
                )
                raise NotAuthorizedError("message", str(message.id), str(user.id))

            saved = await self.message_repository.mark_deleted_for(message.id, user.id)
            if saved is None:
                raise NotFoundError("message", str(message.id))
            self.unread_cache.invalidate(user.id)
            return saved
