"""PostgreSQL implementation of Post repository."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Post
from agora.domain.repository import PostRepository
from agora.domain.value import UserId
from agora.persistence.mappers import row_to_post
from agora.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        stmt = select(posts_table.c.id).where(posts_table.c.id == post.id)
        exists = (await self.session.execute(stmt)).first() is not None
        post_dict = post.model_dump()

        if exists:
            stmt = (
                posts_table.update()
                .where(posts_table.c.id == post.id)
                .values(**post_dict)
            )
        else:
            stmt = posts_table.insert().values(**post_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return post

    def _by_user(self, stmt, user_id: UserId, include_trusted: bool):
        stmt = stmt.where(posts_table.c.user_id == user_id)
        if not include_trusted:
            stmt = stmt.where(posts_table.c.trusted.is_(False))
        return stmt

    async def count_by_user(self, user_id: UserId, include_trusted: bool = True) -> int:
        stmt = self._by_user(
            select(func.count()).select_from(posts_table), user_id, include_trusted
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_by_user(
        self,
        user_id: UserId,
        include_trusted: bool = True,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Post]:
        stmt = (
            self._by_user(select(posts_table), user_id, include_trusted)
            .order_by(posts_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_post(dict(row)) for row in result.mappings().all()]
