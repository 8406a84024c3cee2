"""PostgreSQL implementation of User repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, case, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import User
from agora.domain.repository import UserRepository
from agora.domain.value import UserId
from agora.persistence.mappers import row_to_user, user_to_dict, user_to_insert_dict
from agora.persistence.tables import users_table

# Activated, non-banned accounts appear in public listings
_listed = and_(users_table.c.activated.is_(True), users_table.c.banned.is_(False))


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _find_one(self, stmt) -> Optional[User]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def _find_many(self, stmt) -> list[User]:
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        return await self._find_one(
            select(users_table).where(users_table.c.id == user_id)
        )

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users at once."""
        if not user_ids:
            return []
        return await self._find_many(
            select(users_table).where(users_table.c.id.in_(user_ids))
        )

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username."""
        return await self._find_one(
            select(users_table).where(users_table.c.username == username)
        )

    async def find_by_openid_url(self, openid_url: str) -> Optional[User]:
        """Find a user by normalized OpenID URL."""
        return await self._find_one(
            select(users_table).where(users_table.c.openid_url == openid_url)
        )

    async def find_all(self) -> list[User]:
        return await self._find_many(
            select(users_table).order_by(users_table.c.username)
        )

    async def find_active(self) -> list[User]:
        return await self._find_many(
            select(users_table).where(_listed).order_by(users_table.c.username)
        )

    async def find_online(self, since: datetime) -> list[User]:
        stmt = (
            select(users_table)
            .where(users_table.c.activated.is_(True))
            .where(users_table.c.last_active > since)
            .order_by(users_table.c.username)
        )
        return await self._find_many(stmt)

    async def find_admins(self) -> list[User]:
        stmt = (
            select(users_table)
            .where(_listed)
            .where(
                or_(
                    users_table.c.admin.is_(True),
                    users_table.c.user_admin.is_(True),
                    users_table.c.moderator.is_(True),
                )
            )
            .order_by(users_table.c.username)
        )
        return await self._find_many(stmt)

    async def find_newest(self, limit: int) -> list[User]:
        stmt = (
            select(users_table)
            .where(_listed)
            .order_by(users_table.c.created_at.desc())
            .limit(limit)
        )
        return await self._find_many(stmt)

    async def find_top_posters(self, limit: int) -> list[User]:
        stmt = (
            select(users_table)
            .where(_listed)
            .order_by(users_table.c.posts_count.desc(), users_table.c.username)
            .limit(limit)
        )
        return await self._find_many(stmt)

    async def find_invitees(self, inviter_id: UserId) -> list[User]:
        stmt = (
            select(users_table)
            .where(users_table.c.inviter_id == inviter_id)
            .order_by(users_table.c.username)
        )
        return await self._find_many(stmt)

    async def count_invitees(self, inviter_id: UserId) -> int:
        stmt = (
            select(func.count())
            .select_from(users_table)
            .where(users_table.c.inviter_id == inviter_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Updates never touch the counter caches or the invite allowance;
        those columns change only through the atomic helpers below.

        Args:
            user: User to save

        Returns:
            User as stored
        """
        existing = await self.find_by_id(user.id)

        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_to_dict(user))
                .returning(users_table)
            )
        else:
            stmt = (
                users_table.insert()
                .values(**user_to_insert_dict(user))
                .returning(users_table)
            )

        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_user(dict(row))

    async def delete(self, user_id: UserId) -> None:
        await self.session.execute(delete(users_table).where(users_table.c.id == user_id))
        await self.session.flush()

    async def adjust_available_invites(self, user_id: UserId, delta: int) -> int:
        """Atomically add ``delta`` to available invites, flooring at zero."""
        column = users_table.c.available_invites
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(available_invites=case((column + delta < 0, 0), else_=column + delta))
            .returning(column)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar_one_or_none() or 0

    async def take_available_invite(self, user_id: UserId) -> bool:
        """Decrement available invites only where one is left."""
        column = users_table.c.available_invites
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .where(column > 0)
            .values(available_invites=column - 1)
            .returning(users_table.c.id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.first() is not None

    async def clear_available_invites(self, user_id: UserId) -> int:
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(available_invites=0)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return 0

    async def update_counters(
        self, user_id: UserId, posts_count: int = 0, discussions_count: int = 0
    ) -> None:
        """Apply signed deltas in a single UPDATE.

        The increment is evaluated by the database against the current row,
        so concurrent increments are never overwritten.
        """
        if not posts_count and not discussions_count:
            return
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(
                posts_count=users_table.c.posts_count + posts_count,
                discussions_count=users_table.c.discussions_count + discussions_count,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def update_last_active(self, user_id: UserId, last_active: datetime) -> None:
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(last_active=last_active)
        )
        await self.session.execute(stmt)
        await self.session.flush()
