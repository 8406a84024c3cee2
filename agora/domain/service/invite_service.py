"""Invite domain service."""

import secrets
from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from agora.config import InvitationSettings
from agora.domain.error import BusinessRuleViolationError, ValidationError
from agora.domain.model import Invite, User
from agora.domain.repository import InviteRepository, UserRepository
from agora.domain.value import InviteAmount, InviteId, InviteToken

from .base import Service
from .trust import effective_available_invites, is_user_admin


class InviteService(Service):
    """Domain service for the invite ledger.

    Each non-privileged user holds a number of available invites. Grants
    and revocations are applied as single atomic updates in the store, and
    revocations clamp at zero instead of failing. User admins are exempt:
    ledger operations leave them untouched.
    """

    def __init__(
        self,
        invite_repository: InviteRepository,
        user_repository: UserRepository,
        invitation_settings: InvitationSettings,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            user_repository: User repository
            invitation_settings: Invitation configuration
        """
        self.invite_repository = invite_repository
        self.user_repository = user_repository
        self.invitation_settings = invitation_settings

    async def revoke_invites(
        self, user: User, number: int | InviteAmount = 1
    ) -> int:
        """Revoke available invites from a user.

        Args:
            user: User losing invites
            number: How many to revoke, or ``InviteAmount.ALL``

        Returns:
            Available invites after the revocation, never negative

        Raises:
            ValueError: If number is negative
        """
        with logfire.span(
            "invite_service.revoke_invites", user_id=str(user.id), number=str(number)
        ):
            if is_user_admin(user):
                logfire.info("Revoke skipped for user admin", user_id=str(user.id))
                return effective_available_invites(user)

            if number == InviteAmount.ALL:
                remaining = await self.user_repository.clear_available_invites(user.id)
            else:
                if number < 0:
                    raise ValueError("Cannot revoke a negative number of invites")
                remaining = await self.user_repository.adjust_available_invites(
                    user.id, -number
                )

            logfire.info(
                "Invites revoked", user_id=str(user.id), available_invites=remaining
            )
            return remaining

    async def grant_invites(
        self, user: User, number: int = 1
    ) -> int | list[Invite]:
        """Grant invites to a user.

        Args:
            user: User receiving invites
            number: How many to grant

        Returns:
            The effective allowance for user admins, whose grant is a no-op.
            Otherwise the user's invites, newest first.

        Raises:
            ValueError: If number is negative
        """
        with logfire.span(
            "invite_service.grant_invites", user_id=str(user.id), number=number
        ):
            if is_user_admin(user):
                logfire.info("Grant skipped for user admin", user_id=str(user.id))
                return effective_available_invites(user)

            if number < 0:
                raise ValueError("Cannot grant a negative number of invites")
            available = await self.user_repository.adjust_available_invites(
                user.id, number
            )
            logfire.info(
                "Invites granted", user_id=str(user.id), available_invites=available
            )
            return await self.invite_repository.find_by_user(user.id)

    def has_available_invites(self, user: User) -> bool:
        """Whether the user may send an invite right now."""
        return is_user_admin(user) or user.available_invites > 0

    async def has_invited_anyone(self, user: User) -> bool:
        return await self.invite_repository.count_by_user(user.id) > 0

    async def has_invitees(self, user: User) -> bool:
        return await self.user_repository.count_invitees(user.id) > 0

    async def has_invite_activity(self, user: User) -> bool:
        """Whether the user has issued invites or has invited members."""
        return await self.has_invited_anyone(user) or await self.has_invitees(user)

    async def create_invite(
        self,
        user: User,
        email: str,
        message: str | None = None,
        now: datetime | None = None,
    ) -> Invite:
        """Issue an invite, consuming one of the user's available invites.

        Args:
            user: Inviting user
            email: Address the invite is sent to
            message: Optional personal message
            now: Creation time, defaults to the current time

        Returns:
            Created invite

        Raises:
            ValidationError: If email is blank
            BusinessRuleViolationError: If the user has no invites left
        """
        with logfire.span("invite_service.create_invite", user_id=str(user.id)):
            if not email or not email.strip():
                raise ValidationError({"email": ["can't be blank"]})

            if not is_user_admin(user):
                consumed = await self.user_repository.take_available_invite(user.id)
                if not consumed:
                    logfire.warn("No invites available", user_id=str(user.id))
                    raise BusinessRuleViolationError(
                        f"User {user.id} has no available invites"
                    )

            now = now or datetime.now()
            invite = Invite(
                id=InviteId(uuid4()),
                user_id=user.id,
                email=email.strip(),
                token=InviteToken(secrets.token_urlsafe(32)),
                message=message,
                expires_at=now + timedelta(days=self.invitation_settings.expiry_days),
                created_at=now,
            )
            saved = await self.invite_repository.save(invite)
            logfire.info("Invite created", invite_id=str(saved.id), user_id=str(user.id))
            return saved

    async def find_active_by_token(
        self, token: InviteToken, now: datetime | None = None
    ) -> Invite | None:
        """Find an invite by token, ignoring expired ones.

        Returns:
            The invite if it exists and has not expired, None otherwise
        """
        with logfire.span(
            "invite_service.find_active_by_token", token=token.root[:8] + "..."
        ):
            invite = await self.invite_repository.find_by_token(token)
            if invite is None:
                logfire.warn("Invite not found", token=token.root[:8] + "...")
                return None
            if invite.is_expired(now or datetime.now()):
                logfire.info("Invite expired", invite_id=str(invite.id))
                return None
            return invite

    async def list_invites(
        self, user: User, active_only: bool = False, now: datetime | None = None
    ) -> list[Invite]:
        """List invites issued by a user, newest first."""
        invites = await self.invite_repository.find_by_user(user.id)
        if active_only:
            now = now or datetime.now()
            invites = [invite for invite in invites if not invite.is_expired(now)]
        return invites

    async def accept_invite(self, invite: Invite, invitee: User) -> User:
        """Record the inviter on the new member and retire the invite.

        Args:
            invite: Invite being redeemed
            invitee: Newly registered user

        Returns:
            The invitee with ``inviter_id`` set
        """
        with logfire.span(
            "invite_service.accept_invite",
            invite_id=str(invite.id),
            invitee_id=str(invitee.id),
        ):
            updated = invitee.model_copy(update={"inviter_id": invite.user_id})
            saved = await self.user_repository.save(updated)
            await self.invite_repository.delete(invite.id)
            logfire.info(
                "Invite accepted",
                invite_id=str(invite.id),
                inviter_id=str(invite.user_id),
                invitee_id=str(invitee.id),
            )
            return saved
