"""Authenticate user use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import AccountService


class AuthenticateUserRequest(BaseModel):
    """Login form data."""

    username: str
    password: str


class AuthenticateUserResponse(BaseModel):
    """Authenticated account."""

    user_id: str
    username: str
    admin: bool
    trusted: bool


class AuthenticateUserUseCase(BaseUseCase):
    """Use case for logging in with a username and password."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(
        self, request: AuthenticateUserRequest
    ) -> AuthenticateUserResponse:
        """Authenticate and record the login as activity.

        Raises:
            AuthenticationError: If the credentials are wrong or the account
                may not log in
        """
        user = await self.account_service.authenticate(
            request.username, request.password
        )
        user = await self.account_service.touch_last_active(user)
        return AuthenticateUserResponse(
            user_id=str(user.id),
            username=user.username,
            admin=user.admin,
            trusted=user.trusted,
        )
