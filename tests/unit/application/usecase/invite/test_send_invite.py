"""Unit tests for SendInviteUseCase."""

from uuid import uuid4

import pytest

from agora.application.usecase.invite import SendInviteRequest, SendInviteUseCase
from agora.domain.error import BusinessRuleViolationError, NotFoundError
from agora.domain.repository import UserRepository
from agora.domain.service import InviteService
from agora.domain.service.trust import UNLIMITED_INVITES
from agora.domain.value import InviteToken
from tests.factories import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestSendInviteUseCase:
    """Tests for SendInviteUseCase."""

    @pytest.mark.asyncio
    async def test_send_invite_reports_remaining_allowance(self, unit_env):
        # Arrange
        use_case = await unit_env.get(SendInviteUseCase)
        invite_service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        inviter = await make_user(user_repo, "inviter", available_invites=2)

        # Act
        response = await use_case.execute(
            SendInviteRequest(
                inviter_id=str(inviter.id),
                email="friend@example.org",
                message="Come along",
            )
        )

        # Assert
        assert response.available_invites == 1
        assert response.email == "friend@example.org"
        invite = await invite_service.find_active_by_token(InviteToken(response.token))
        assert invite is not None
        assert str(invite.id) == response.invite_id

    @pytest.mark.asyncio
    async def test_no_invites_left(self, unit_env):
        use_case = await unit_env.get(SendInviteUseCase)
        user_repo = await unit_env.get(UserRepository)
        inviter = await make_user(user_repo, "inviter")

        with pytest.raises(BusinessRuleViolationError):
            await use_case.execute(
                SendInviteRequest(inviter_id=str(inviter.id), email="a@example.org")
            )

    @pytest.mark.asyncio
    async def test_user_admin_has_unlimited_invites(self, unit_env):
        use_case = await unit_env.get(SendInviteUseCase)
        user_repo = await unit_env.get(UserRepository)
        inviter = await make_user(user_repo, "inviter", user_admin=True)

        response = await use_case.execute(
            SendInviteRequest(inviter_id=str(inviter.id), email="a@example.org")
        )

        assert response.available_invites == UNLIMITED_INVITES

    @pytest.mark.asyncio
    async def test_unknown_inviter(self, unit_env):
        use_case = await unit_env.get(SendInviteUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                SendInviteRequest(inviter_id=str(uuid4()), email="a@example.org")
            )
