"""PostgreSQL implementation of Discussion repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Discussion
from agora.domain.repository import DiscussionRepository
from agora.domain.value import DiscussionId, UserId
from agora.persistence.mappers import row_to_discussion
from agora.persistence.tables import discussions_table


class PostgresDiscussionRepository(DiscussionRepository):
    """PostgreSQL implementation of DiscussionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        stmt = select(discussions_table).where(discussions_table.c.id == discussion_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_discussion(dict(row)) if row else None

    async def save(self, discussion: Discussion) -> Discussion:
        """Save a discussion (create or update)."""
        existing = await self.find_by_id(discussion.id)
        discussion_dict = discussion.model_dump()

        if existing:
            stmt = (
                discussions_table.update()
                .where(discussions_table.c.id == discussion.id)
                .values(**discussion_dict)
            )
        else:
            stmt = discussions_table.insert().values(**discussion_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return discussion

    def _by_poster(self, stmt, poster_id: UserId, include_trusted: bool):
        stmt = stmt.where(discussions_table.c.poster_id == poster_id)
        if not include_trusted:
            stmt = stmt.where(discussions_table.c.trusted.is_(False))
        return stmt

    async def count_by_poster(
        self, poster_id: UserId, include_trusted: bool = True
    ) -> int:
        stmt = self._by_poster(
            select(func.count()).select_from(discussions_table),
            poster_id,
            include_trusted,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_by_poster(
        self,
        poster_id: UserId,
        include_trusted: bool = True,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Discussion]:
        stmt = (
            self._by_poster(select(discussions_table), poster_id, include_trusted)
            .order_by(
                discussions_table.c.sticky.desc(),
                discussions_table.c.last_post_at.desc(),
            )
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_discussion(dict(row)) for row in result.mappings().all()]
