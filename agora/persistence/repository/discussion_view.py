"""PostgreSQL implementation of DiscussionView repository."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import DiscussionView
from agora.domain.repository import DiscussionViewRepository
from agora.domain.value import DiscussionId, UserId
from agora.persistence.mappers import row_to_discussion_view
from agora.persistence.tables import discussion_views_table


class PostgresDiscussionViewRepository(DiscussionViewRepository):
    """PostgreSQL implementation of DiscussionViewRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(
        self, user_id: UserId, discussion_id: DiscussionId
    ) -> Optional[DiscussionView]:
        stmt = select(discussion_views_table).where(
            discussion_views_table.c.user_id == user_id,
            discussion_views_table.c.discussion_id == discussion_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_discussion_view(dict(row)) if row else None

    async def save(self, view: DiscussionView) -> DiscussionView:
        existing = await self.find(view.user_id, view.discussion_id)
        values = view.model_dump()

        if existing:
            values.pop("id")
            stmt = (
                discussion_views_table.update()
                .where(discussion_views_table.c.id == existing.id)
                .values(**values)
            )
            view = view.model_copy(update={"id": existing.id})
        else:
            stmt = discussion_views_table.insert().values(**values)

        await self.session.execute(stmt)
        await self.session.flush()
        return view

    async def delete_by_user(self, user_id: UserId) -> int:
        result = await self.session.execute(
            delete(discussion_views_table).where(
                discussion_views_table.c.user_id == user_id
            )
        )
        await self.session.flush()
        return result.rowcount
