"""PostgreSQL implementation of DiscussionRelationship repository."""

from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Discussion, DiscussionRelationship
from agora.domain.repository import DiscussionRelationshipRepository
from agora.domain.value import DiscussionId, RelationshipKind, UserId
from agora.persistence.mappers import row_to_discussion, row_to_discussion_relationship
from agora.persistence.tables import discussion_relationships_table, discussions_table

r = discussion_relationships_table.c
d = discussions_table.c


class PostgresDiscussionRelationshipRepository(DiscussionRelationshipRepository):
    """PostgreSQL implementation of DiscussionRelationshipRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(
        self, user_id: UserId, discussion_id: DiscussionId
    ) -> Optional[DiscussionRelationship]:
        stmt = select(discussion_relationships_table).where(
            r.user_id == user_id, r.discussion_id == discussion_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_discussion_relationship(dict(row)) if row else None

    async def save(self, relationship: DiscussionRelationship) -> DiscussionRelationship:
        """Save a relationship (create or update)."""
        existing = await self.find(relationship.user_id, relationship.discussion_id)
        values = relationship.model_dump()

        if existing:
            values.pop("id")
            stmt = (
                discussion_relationships_table.update()
                .where(r.id == existing.id)
                .values(**values)
            )
            relationship = relationship.model_copy(update={"id": existing.id})
        else:
            stmt = discussion_relationships_table.insert().values(**values)

        await self.session.execute(stmt)
        await self.session.flush()
        return relationship

    def _related(
        self, stmt, user_id: UserId, kind: RelationshipKind, include_trusted: bool
    ):
        stmt = (
            stmt.select_from(
                discussions_table.join(
                    discussion_relationships_table, r.discussion_id == d.id
                )
            )
            .where(r.user_id == user_id)
            .where(r[kind.value].is_(True))
        )
        if not include_trusted:
            stmt = stmt.where(d.trusted.is_(False))
        return stmt

    async def count_discussions(
        self, user_id: UserId, kind: RelationshipKind, include_trusted: bool = True
    ) -> int:
        stmt = self._related(select(func.count()), user_id, kind, include_trusted)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_discussions(
        self,
        user_id: UserId,
        kind: RelationshipKind,
        include_trusted: bool = True,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Discussion]:
        stmt = (
            self._related(select(discussions_table), user_id, kind, include_trusted)
            .order_by(d.sticky.desc(), d.last_post_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_discussion(dict(row)) for row in result.mappings().all()]

    async def delete_by_user(self, user_id: UserId) -> int:
        result = await self.session.execute(
            delete(discussion_relationships_table).where(r.user_id == user_id)
        )
        await self.session.flush()
        return result.rowcount
