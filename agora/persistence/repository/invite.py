"""PostgreSQL implementation of Invite repository."""

from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Invite
from agora.domain.repository import InviteRepository
from agora.domain.value import InviteId, InviteToken, UserId
from agora.persistence.mappers import invite_to_dict, row_to_invite
from agora.persistence.tables import invites_table


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID.

        Args:
            invite_id: Invite ID to look up

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(invites_table).where(invites_table.c.id == invite_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_token(self, token: InviteToken) -> Optional[Invite]:
        """Find an invite by its token.

        Args:
            token: Invite token to look up

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(invites_table).where(invites_table.c.token == token.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_user(self, user_id: UserId) -> list[Invite]:
        """Find all invites issued by a user, newest first."""
        stmt = (
            select(invites_table)
            .where(invites_table.c.user_id == user_id)
            .order_by(invites_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_invite(dict(row)) for row in result.mappings().all()]

    async def count_by_user(self, user_id: UserId) -> int:
        stmt = (
            select(func.count())
            .select_from(invites_table)
            .where(invites_table.c.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def save(self, invite: Invite) -> Invite:
        """Save an invite (create or update).

        Args:
            invite: Invite to save

        Returns:
            Saved invite
        """
        existing = await self.find_by_id(invite.id)
        invite_dict = invite_to_dict(invite)

        if existing:
            stmt = (
                invites_table.update()
                .where(invites_table.c.id == invite.id)
                .values(**invite_dict)
            )
        else:
            stmt = invites_table.insert().values(**invite_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return invite

    async def delete(self, invite_id: InviteId) -> None:
        await self.session.execute(
            delete(invites_table).where(invites_table.c.id == invite_id)
        )
        await self.session.flush()

    async def delete_by_user(self, user_id: UserId) -> int:
        result = await self.session.execute(
            delete(invites_table).where(invites_table.c.user_id == user_id)
        )
        await self.session.flush()
        return result.rowcount
