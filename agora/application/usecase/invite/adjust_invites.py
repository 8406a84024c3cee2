"""Grant or revoke invites use case."""

from typing import Literal
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase
from agora.domain.error import NotAuthorizedError
from agora.domain.service import AccountService, InviteService
from agora.domain.service.trust import can_manage_invites, effective_available_invites
from agora.domain.value import InviteAmount, UserId


class AdjustInvitesRequest(BaseModel):
    """Request from a user admin to change someone's invite allowance."""

    actor_id: str
    user_id: str
    action: Literal["grant", "revoke"]
    number: int | Literal["all"] = Field(default=1)


class AdjustInvitesResponse(BaseModel):
    """Allowance after the change."""

    user_id: str
    available_invites: int


class AdjustInvitesUseCase(BaseUseCase):
    """Use case for granting and revoking available invites."""

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

    async def execute(self, request: AdjustInvitesRequest) -> AdjustInvitesResponse:
        """Grant or revoke invites.

        Raises:
            NotAuthorizedError: If the actor may not manage invites
            ValueError: If granting "all" or a negative number
        """
        actor = await self.account_service.get_by_id(UserId(UUID(request.actor_id)))
        user = await self.account_service.get_by_id(UserId(UUID(request.user_id)))

        with logfire.span(
            "adjust_invites",
            actor_id=str(actor.id),
            user_id=str(user.id),
            action=request.action,
            number=str(request.number),
        ):
            if not can_manage_invites(actor):
                raise NotAuthorizedError("invites", str(user.id), str(actor.id))

            if request.action == "grant":
                if request.number == "all":
                    raise ValueError("Cannot grant all invites")
                await self.invite_service.grant_invites(user, request.number)
            else:
                number = InviteAmount.ALL if request.number == "all" else request.number
                await self.invite_service.revoke_invites(user, number)

            user = await self.account_service.get_by_id(user.id)
            return AdjustInvitesResponse(
                user_id=str(user.id),
                available_invites=effective_available_invites(user),
            )
