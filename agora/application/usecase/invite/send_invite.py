"""Send invite use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import AccountService, InviteService
from agora.domain.service.trust import effective_available_invites
from agora.domain.value import UserId


class SendInviteRequest(BaseModel):
    """Request to invite someone by email."""

    inviter_id: str
    email: str
    message: str | None = None


class SendInviteResponse(BaseModel):
    """Issued invite."""

    invite_id: str
    token: str
    email: str
    expires_at: datetime
    available_invites: int


class SendInviteUseCase(BaseUseCase):
    """Use case for issuing an invite and consuming the inviter's allowance."""

    def __init__(
        self, account_service: AccountService, invite_service: InviteService
    ) -> None:
        """Initialize use case.

        Args:
            account_service: Account domain service
            invite_service: Invite domain service
        """
        self.account_service = account_service
        self.invite_service = invite_service

    async def execute(self, request: SendInviteRequest) -> SendInviteResponse:
        """Issue an invite.

        Raises:
            NotFoundError: If the inviter does not exist
            ValidationError: If the email is blank
            BusinessRuleViolationError: If the inviter has no invites left
        """
        inviter_id = UserId(UUID(request.inviter_id))

        with logfire.span("send_invite", inviter_id=str(inviter_id)):
            inviter = await self.account_service.get_by_id(inviter_id)
            invite = await self.invite_service.create_invite(
                inviter, request.email, request.message
            )
            # Reload for the allowance left after the atomic decrement
            inviter = await self.account_service.get_by_id(inviter_id)

            return SendInviteResponse(
                invite_id=str(invite.id),
                token=invite.token.root,
                email=invite.email,
                expires_at=invite.expires_at,
                available_invites=effective_available_invites(inviter),
            )
