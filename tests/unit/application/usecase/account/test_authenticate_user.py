"""Unit tests for AuthenticateUserUseCase."""

import pytest

from agora.application.usecase.account import (
    AuthenticateUserRequest,
    AuthenticateUserUseCase,
)
from agora.domain.error import AuthenticationError
from agora.domain.repository import UserRepository
from agora.domain.service import CredentialService
from tests.factories import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestAuthenticateUserUseCase:
    """Tests for AuthenticateUserUseCase."""

    @pytest.mark.asyncio
    async def test_login_records_activity(self, unit_env):
        # Arrange
        use_case = await unit_env.get(AuthenticateUserUseCase)
        user_repo = await unit_env.get(UserRepository)
        credentials = await unit_env.get(CredentialService)
        user = await make_user(
            user_repo,
            "alice",
            trusted=True,
            hashed_password=credentials.hash_password("secret"),
        )

        # Act
        response = await use_case.execute(
            AuthenticateUserRequest(username="alice", password="secret")
        )

        # Assert
        assert response.user_id == str(user.id)
        assert response.trusted
        assert not response.admin
        assert (await user_repo.find_by_id(user.id)).last_active is not None

    @pytest.mark.asyncio
    async def test_wrong_password(self, unit_env):
        use_case = await unit_env.get(AuthenticateUserUseCase)
        user_repo = await unit_env.get(UserRepository)
        credentials = await unit_env.get(CredentialService)
        user = await make_user(
            user_repo, "alice", hashed_password=credentials.hash_password("secret")
        )

        with pytest.raises(AuthenticationError):
            await use_case.execute(
                AuthenticateUserRequest(username="alice", password="wrong")
            )

        assert (await user_repo.find_by_id(user.id)).last_active is None

    @pytest.mark.asyncio
    async def test_unactivated_account(self, unit_env):
        use_case = await unit_env.get(AuthenticateUserUseCase)
        user_repo = await unit_env.get(UserRepository)
        credentials = await unit_env.get(CredentialService)
        await make_user(
            user_repo,
            "alice",
            activated=False,
            hashed_password=credentials.hash_password("secret"),
        )

        with pytest.raises(AuthenticationError):
            await use_case.execute(
                AuthenticateUserRequest(username="alice", password="secret")
            )
