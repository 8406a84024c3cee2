"""PostgreSQL implementation of Message repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Message
from agora.domain.repository import MessageRepository
from agora.domain.value import MessageId, UserId
from agora.persistence.mappers import row_to_message
from agora.persistence.tables import messages_table

m = messages_table.c


def _between(user_id: UserId, other_id: UserId):
    return or_(
        and_(m.sender_id == user_id, m.recipient_id == other_id),
        and_(m.sender_id == other_id, m.recipient_id == user_id),
    )


def _visible_to(viewer_id: UserId):
    """Rows the viewer has not deleted on their own side."""
    return or_(
        and_(m.sender_id == viewer_id, m.deleted_by_sender.is_(False)),
        and_(m.recipient_id == viewer_id, m.deleted.is_(False)),
    )


class PostgresMessageRepository(MessageRepository):
    """PostgreSQL implementation of MessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _count(self, *criteria) -> int:
        stmt = select(func.count()).select_from(messages_table).where(*criteria)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def _find_many(self, stmt) -> list[Message]:
        result = await self.session.execute(stmt)
        return [row_to_message(dict(row)) for row in result.mappings().all()]

    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        stmt = select(messages_table).where(m.id == message_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_message(dict(row)) if row else None

    async def save(self, message: Message) -> Message:
        """Save a message (create or update)."""
        existing = await self.find_by_id(message.id)
        message_dict = message.model_dump()

        if existing:
            stmt = (
                messages_table.update()
                .where(m.id == message.id)
                .values(**message_dict)
            )
        else:
            stmt = messages_table.insert().values(**message_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return message

    def _partners_query(self, user_id: UserId):
        # Each message is attributed to whichever party is not the user
        partner_id = case(
            (m.sender_id == user_id, m.recipient_id), else_=m.sender_id
        ).label("partner_id")
        return (
            select(partner_id, func.max(m.created_at).label("last_messaged_at"))
            .where(or_(m.sender_id == user_id, m.recipient_id == user_id))
            .where(m.sender_id != m.recipient_id)
            .group_by(partner_id)
        )

    async def find_partners(
        self, user_id: UserId, limit: int | None = None, offset: int = 0
    ) -> list[tuple[UserId, datetime]]:
        """Find conversation partners with their latest exchange time.

        Grouping by the derived partner column yields exactly one row per
        partner regardless of message direction.
        """
        partners = self._partners_query(user_id).subquery()
        stmt = (
            select(partners.c.partner_id, partners.c.last_messaged_at)
            .order_by(partners.c.last_messaged_at.desc(), partners.c.partner_id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [(UserId(row.partner_id), row.last_messaged_at) for row in result.all()]

    async def count_partners(self, user_id: UserId) -> int:
        partners = self._partners_query(user_id).subquery()
        result = await self.session.execute(
            select(func.count()).select_from(partners)
        )
        return result.scalar_one()

    async def find_first_between(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[Message]:
        stmt = (
            select(messages_table)
            .where(_between(user_id, other_id))
            .order_by(m.created_at.asc(), m.id)
            .limit(1)
        )
        messages = await self._find_many(stmt)
        return messages[0] if messages else None

    async def find_last_between(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[Message]:
        stmt = (
            select(messages_table)
            .where(_between(user_id, other_id))
            .order_by(m.created_at.desc(), m.id)
            .limit(1)
        )
        messages = await self._find_many(stmt)
        return messages[0] if messages else None

    async def count_between(self, user_id: UserId, other_id: UserId) -> int:
        return await self._count(_between(user_id, other_id))

    async def count_unread_from(self, recipient_id: UserId, sender_id: UserId) -> int:
        return await self._count(
            m.recipient_id == recipient_id,
            m.sender_id == sender_id,
            m.read.is_(False),
        )

    async def count_unread(self, recipient_id: UserId) -> int:
        return await self._count(
            m.recipient_id == recipient_id,
            m.read.is_(False),
            m.deleted.is_(False),
        )

    async def count_inbox(self, recipient_id: UserId) -> int:
        return await self._count(
            m.recipient_id == recipient_id, m.deleted.is_(False)
        )

    async def find_inbox(
        self, recipient_id: UserId, limit: int, offset: int = 0
    ) -> list[Message]:
        stmt = (
            select(messages_table)
            .where(m.recipient_id == recipient_id, m.deleted.is_(False))
            .order_by(m.created_at.desc(), m.id)
            .limit(limit)
            .offset(offset)
        )
        return await self._find_many(stmt)

    async def count_sent(self, sender_id: UserId) -> int:
        return await self._count(
            m.sender_id == sender_id, m.deleted_by_sender.is_(False)
        )

    async def find_sent(
        self, sender_id: UserId, limit: int, offset: int = 0
    ) -> list[Message]:
        stmt = (
            select(messages_table)
            .where(m.sender_id == sender_id, m.deleted_by_sender.is_(False))
            .order_by(m.created_at.desc(), m.id)
            .limit(limit)
            .offset(offset)
        )
        return await self._find_many(stmt)

    async def count_thread(self, viewer_id: UserId, other_id: UserId) -> int:
        return await self._count(_between(viewer_id, other_id), _visible_to(viewer_id))

    async def find_thread(
        self, viewer_id: UserId, other_id: UserId, limit: int, offset: int = 0
    ) -> list[Message]:
        stmt = (
            select(messages_table)
            .where(_between(viewer_id, other_id), _visible_to(viewer_id))
            .order_by(m.created_at.asc(), m.id)
            .limit(limit)
            .offset(offset)
        )
        return await self._find_many(stmt)

    async def mark_deleted_for(
        self, message_id: MessageId, viewer_id: UserId
    ) -> Optional[Message]:
        """Set the viewer's deletion flag in a single UPDATE."""
        stmt = (
            messages_table.update()
            .where(m.id == message_id)
            .values(
                deleted_by_sender=case(
                    (m.sender_id == viewer_id, True), else_=m.deleted_by_sender
                ),
                deleted=case((m.recipient_id == viewer_id, True), else_=m.deleted),
            )
            .returning(messages_table)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        row = result.mappings().first()
        return row_to_message(dict(row)) if row else None

    async def mark_read(self, recipient_id: UserId, sender_id: UserId) -> int:
        stmt = (
            messages_table.update()
            .where(
                m.recipient_id == recipient_id,
                m.sender_id == sender_id,
                m.read.is_(False),
            )
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
