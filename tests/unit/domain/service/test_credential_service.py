"""Unit tests for CredentialService."""

import hashlib
from uuid import uuid4

import pytest

from agora.domain.error import ValidationError
from agora.domain.model import User
from agora.domain.service import CredentialService
from agora.domain.value import UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _user(**fields) -> User:
    values = {"id": UserId(uuid4()), "username": "alice", "email": "a@example.org"}
    values.update(fields)
    return User(**values)


class TestHashing:
    """Tests for hash_password and verify_password."""

    @pytest.mark.asyncio
    async def test_hash_is_salted(self, unit_env):
        """The same password hashes to different digests."""
        service = await unit_env.get(CredentialService)

        first = service.hash_password("secret")
        second = service.hash_password("secret")

        assert first != second
        assert first.startswith("$pbkdf2-sha256$")
        assert service.verify_password("secret", first)
        assert service.verify_password("secret", second)

    @pytest.mark.asyncio
    async def test_wrong_password_does_not_verify(self, unit_env):
        service = await unit_env.get(CredentialService)
        digest = service.hash_password("secret")

        assert not service.verify_password("Secret", digest)

    @pytest.mark.asyncio
    async def test_missing_or_unknown_digest_does_not_verify(self, unit_env):
        service = await unit_env.get(CredentialService)

        assert not service.verify_password("secret", None)
        assert not service.verify_password("secret", "")
        assert not service.verify_password("secret", "not a digest at all")

    @pytest.mark.asyncio
    async def test_legacy_sha1_digest_verifies_and_is_upgraded(self, unit_env):
        """Digests from older installs keep working and get replaced."""
        service = await unit_env.get(CredentialService)
        legacy = hashlib.sha1(b"secret").hexdigest()

        assert service.verify_password("secret", legacy)

        valid, new_digest = service.verify_and_update("secret", legacy)

        assert valid
        assert new_digest is not None
        assert new_digest.startswith("$pbkdf2-sha256$")
        assert service.verify_password("secret", new_digest)

    @pytest.mark.asyncio
    async def test_current_digest_needs_no_upgrade(self, unit_env):
        service = await unit_env.get(CredentialService)
        digest = service.hash_password("secret")

        assert service.verify_and_update("secret", digest) == (True, None)
        assert service.verify_and_update("wrong", digest) == (False, None)


class TestSetPassword:
    """Tests for set_password."""

    @pytest.mark.asyncio
    async def test_new_password_is_hashed_and_flagged(self, unit_env):
        service = await unit_env.get(CredentialService)
        user = _user()

        change = service.set_password(user, "secret", "secret")

        assert change.password_changed
        assert change.user.hashed_password != "secret"
        assert service.verify_password("secret", change.user.hashed_password)
        assert user.hashed_password is None

    @pytest.mark.asyncio
    async def test_blank_password_changes_nothing(self, unit_env):
        service = await unit_env.get(CredentialService)
        user = _user(hashed_password=service.hash_password("old"))

        for blank in (None, ""):
            change = service.set_password(user, blank, blank)

            assert not change.password_changed
            assert change.user == user

    @pytest.mark.asyncio
    async def test_confirmation_mismatch_raises(self, unit_env):
        service = await unit_env.get(CredentialService)

        with pytest.raises(ValidationError) as exc_info:
            service.set_password(_user(), "secret", "secrte")

        assert exc_info.value.errors == {"password": ["must be confirmed"]}

    @pytest.mark.asyncio
    async def test_same_password_is_not_a_change(self, unit_env):
        """Re-submitting the current password keeps the stored digest."""
        service = await unit_env.get(CredentialService)
        digest = service.hash_password("secret")
        user = _user(hashed_password=digest)

        change = service.set_password(user, "secret", "secret")

        assert not change.password_changed
        assert change.user.hashed_password == digest


class TestGeneratedPasswords:
    """Tests for generate_password and ensure_credentials."""

    @pytest.mark.asyncio
    async def test_generated_password_is_alphanumeric_within_bounds(self, unit_env):
        service = await unit_env.get(CredentialService)

        for _ in range(50):
            password = service.generate_password()
            assert 7 <= len(password) <= 9
            assert password.isalnum()

    @pytest.mark.asyncio
    async def test_openid_user_without_password_gets_one(self, unit_env):
        service = await unit_env.get(CredentialService)
        user = _user(openid_url="http://alice.example.org/")

        change = service.ensure_credentials(user, None, None)

        assert change.password_changed
        assert change.user.hashed_password is not None

    @pytest.mark.asyncio
    async def test_openid_user_with_password_keeps_it(self, unit_env):
        service = await unit_env.get(CredentialService)
        user = _user(openid_url="http://alice.example.org/")

        change = service.ensure_credentials(user, "secret", "secret")

        assert service.verify_password("secret", change.user.hashed_password)

    @pytest.mark.asyncio
    async def test_local_user_without_password_stays_without(self, unit_env):
        service = await unit_env.get(CredentialService)

        change = service.ensure_credentials(_user(), None, None)

        assert not change.password_changed
        assert change.user.hashed_password is None
