"""Unit tests for InviteService."""

from datetime import timedelta

import pytest

from agora.domain.error import BusinessRuleViolationError, ValidationError
from agora.domain.repository import InviteRepository, UserRepository
from agora.domain.service import InviteService
from agora.domain.service.trust import UNLIMITED_INVITES
from agora.domain.value import InviteAmount, InviteToken
from tests.factories import at, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestLedgerScenario:
    """The grant/revoke walkthrough with one regular user and one user admin."""

    @pytest.mark.asyncio
    async def test_revoke_clamps_then_grant_adds(self, unit_env):
        # Arrange
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        x = await make_user(user_repo, "x", available_invites=3)
        a = await make_user(user_repo, "a", user_admin=True, available_invites=0)

        # Assert starting state
        assert service.has_available_invites(a)
        assert service.has_available_invites(x)

        # Act & Assert - revoking more than available clamps at zero
        assert await service.revoke_invites(x, 5) == 0
        assert (await user_repo.find_by_id(x.id)).available_invites == 0

        # Act & Assert - granting adds to the stored value
        await service.grant_invites(x, 2)
        assert (await user_repo.find_by_id(x.id)).available_invites == 2


class TestRevokeInvites:
    """Tests for revoke_invites."""

    @pytest.mark.asyncio
    async def test_revoke_one_by_default(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo, available_invites=3)

        assert await service.revoke_invites(user) == 2

    @pytest.mark.asyncio
    async def test_revoke_all(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo, available_invites=7)

        assert await service.revoke_invites(user, InviteAmount.ALL) == 0
        assert (await user_repo.find_by_id(user.id)).available_invites == 0

    @pytest.mark.asyncio
    async def test_revoke_is_noop_for_user_admins(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        admin = await make_user(user_repo, user_admin=True, available_invites=4)

        remaining = await service.revoke_invites(admin, InviteAmount.ALL)

        assert remaining == UNLIMITED_INVITES
        assert (await user_repo.find_by_id(admin.id)).available_invites == 4

    @pytest.mark.asyncio
    async def test_revoke_uses_stored_value_not_stale_copy(self, unit_env):
        """Two revocations from the same loaded copy both apply."""
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo, available_invites=3)

        await service.revoke_invites(user, 1)
        remaining = await service.revoke_invites(user, 1)

        assert remaining == 1

    @pytest.mark.asyncio
    async def test_negative_revoke_is_rejected(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo, available_invites=3)

        with pytest.raises(ValueError):
            await service.revoke_invites(user, -1)

    @pytest.mark.asyncio
    async def test_revoke_from_zero_stays_at_zero(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo)

        assert await service.revoke_invites(user, 3) == 0
        assert (await user_repo.find_by_id(user.id)).available_invites == 0

class TestGrantInvites:
    """Tests for grant_invites."""

    @pytest.mark.asyncio
    async def test_grant_returns_invites_newest_first(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo, available_invites=2)
        older = await service.create_invite(user, "one@example.org", now=at(0))
        newer = await service.create_invite(user, "two@example.org", now=at(5))

        invites = await service.grant_invites(user, 3)

        assert [i.id for i in invites] == [newer.id, older.id]
        assert (await user_repo.find_by_id(user.id)).available_invites == 3

    @pytest.mark.asyncio
    async def test_grant_is_noop_for_user_admins(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        admin = await make_user(user_repo, admin=True)

        result = await service.grant_invites(admin, 10)

        assert result == UNLIMITED_INVITES == 1
        assert (await user_repo.find_by_id(admin.id)).available_invites == 0

    @pytest.mark.asyncio
    async def test_grant_for_user_admin_returns_allowance(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user_admin = await make_user(user_repo, user_admin=True)

        assert await service.grant_invites(user_admin, 3) == 1


class TestInviteActivity:
    """Tests for has_invited_anyone, has_invitees and has_invite_activity."""

    @pytest.mark.asyncio
    async def test_no_activity(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo)

        assert not await service.has_invited_anyone(user)
        assert not await service.has_invitees(user)
        assert not await service.has_invite_activity(user)

    @pytest.mark.asyncio
    async def test_issued_invite_counts_as_activity(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo, available_invites=1)

        await service.create_invite(user, "friend@example.org")

        assert await service.has_invited_anyone(user)
        assert await service.has_invite_activity(user)

    @pytest.mark.asyncio
    async def test_invitee_counts_as_activity(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        inviter = await make_user(user_repo, "inviter")
        await make_user(user_repo, "invitee", inviter_id=inviter.id)

        assert not await service.has_invited_anyone(inviter)
        assert await service.has_invitees(inviter)
        assert await service.has_invite_activity(inviter)


class TestCreateInvite:
    """Tests for create_invite and the invite lifecycle."""

    @pytest.mark.asyncio
    async def test_create_consumes_one_invite(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo, available_invites=2)

        invite = await service.create_invite(
            user, " friend@example.org ", "Join us", now=at(0)
        )

        assert invite.email == "friend@example.org"
        assert invite.message == "Join us"
        assert invite.expires_at == at(0) + timedelta(days=14)
        assert len(invite.token.root) > 20
        assert (await user_repo.find_by_id(user.id)).available_invites == 1

    @pytest.mark.asyncio
    async def test_create_without_invites_left_fails(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo, available_invites=0)

        with pytest.raises(BusinessRuleViolationError):
            await service.create_invite(user, "friend@example.org")

    @pytest.mark.asyncio
    async def test_user_admin_invites_without_quota(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        admin = await make_user(user_repo, user_admin=True)

        await service.create_invite(admin, "a@example.org")
        await service.create_invite(admin, "b@example.org")

        assert (await user_repo.find_by_id(admin.id)).available_invites == 0
        assert len(await service.list_invites(admin)) == 2

    @pytest.mark.asyncio
    async def test_blank_email_is_rejected(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo, available_invites=1)

        with pytest.raises(ValidationError):
            await service.create_invite(user, "   ")
        assert (await user_repo.find_by_id(user.id)).available_invites == 1

    @pytest.mark.asyncio
    async def test_expired_invites_are_not_active(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo, available_invites=1)
        invite = await service.create_invite(user, "friend@example.org", now=at(0))

        before_expiry = at(0) + timedelta(days=13)
        after_expiry = at(0) + timedelta(days=14)

        assert await service.find_active_by_token(invite.token, before_expiry)
        assert await service.find_active_by_token(invite.token, after_expiry) is None
        active = await service.list_invites(user, active_only=True, now=after_expiry)
        assert active == []
        assert await service.find_active_by_token(InviteToken("missing")) is None

    @pytest.mark.asyncio
    async def test_accept_links_invitee_and_retires_invite(self, unit_env):
        service = await unit_env.get(InviteService)
        user_repo = await unit_env.get(UserRepository)
        invite_repo = await unit_env.get(InviteRepository)
        inviter = await make_user(user_repo, "inviter", available_invites=1)
        invitee = await make_user(user_repo, "invitee")
        invite = await service.create_invite(inviter, "invitee@example.org")

        accepted = await service.accept_invite(invite, invitee)

        assert accepted.inviter_id == inviter.id
        assert await invite_repo.find_by_id(invite.id) is None
        assert [u.id for u in await user_repo.find_invitees(inviter.id)] == [invitee.id]
