"""Register user use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.error import ValidationError
from agora.domain.service import AccountService, InviteService
from agora.domain.value import InviteToken


class RegisterUserRequest(BaseModel):
    """Signup form data."""

    username: str
    email: str
    password: str | None = None
    confirm_password: str | None = None
    openid_url: str | None = None
    realname: str | None = None
    application: str | None = None
    invite_token: str | None = None


class RegisterUserResponse(BaseModel):
    """Newly registered account."""

    user_id: str
    username: str
    activated: bool
    inviter_id: str | None = None
    created_at: datetime


class RegisterUserUseCase(BaseUseCase):
    """Use case for signing up, optionally redeeming an invite."""

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

    async def execute(self, request: RegisterUserRequest) -> RegisterUserResponse:
        """Register a new account.

        Args:
            request: Signup data

        Returns:
            The created account

        Raises:
            ValidationError: If the signup data or the invite token is invalid
        """
        with logfire.span("register_user", username=request.username):
            invite = None
            if request.invite_token:
                invite = await self.invite_service.find_active_by_token(
                    InviteToken(request.invite_token)
                )
                if invite is None:
                    raise ValidationError({"invite_token": ["is invalid or expired"]})

            user = await self.account_service.register(
                username=request.username,
                email=request.email,
                password=request.password,
                confirm_password=request.confirm_password,
                openid_url=request.openid_url,
                realname=request.realname,
                application=request.application,
            )

            if invite is not None:
                user = await self.invite_service.accept_invite(invite, user)

            return RegisterUserResponse(
                user_id=str(user.id),
                username=user.username,
                activated=user.activated,
                inviter_id=str(user.inviter_id) if user.inviter_id else None,
                created_at=user.created_at,
            )
