"""Account use cases."""

from agora.application.usecase.account.authenticate import (
    AuthenticateUserRequest,
    AuthenticateUserResponse,
    AuthenticateUserUseCase,
)
from agora.application.usecase.account.register_user import (
    RegisterUserRequest,
    RegisterUserResponse,
    RegisterUserUseCase,
)

__all__ = [
    "AuthenticateUserRequest",
    "AuthenticateUserResponse",
    "AuthenticateUserUseCase",
    "RegisterUserRequest",
    "RegisterUserResponse",
    "RegisterUserUseCase",
]
