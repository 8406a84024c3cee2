"""Credential domain service."""

import secrets
import string
from dataclasses import dataclass

import logfire
from passlib.context import CryptContext

from agora.config import AccountSettings, CredentialSettings
from agora.domain.error import ValidationError
from agora.domain.model import User

from .base import Service

GENERATED_PASSWORD_ALPHABET = string.digits + string.ascii_letters


@dataclass(frozen=True)
class PasswordChange:
    """Outcome of setting a password.

    ``password_changed`` is True exactly when a new digest was stored, so
    callers know to invalidate the user's other sessions.
    """

    user: User
    password_changed: bool


class CredentialService(Service):
    """Hashes, verifies and assigns user passwords.

    Digests carry their scheme identifier, so the configured scheme list is
    the pinned, versioned algorithm choice. Digests made with a deprecated
    scheme (plain SHA-1 hex from older installs) keep verifying and are
    re-hashed via ``verify_and_update``.
    """

    def __init__(
        self,
        credential_settings: CredentialSettings,
        account_settings: AccountSettings,
    ) -> None:
        """Initialize credential service.

        Args:
            credential_settings: Hash scheme configuration
            account_settings: Account configuration (generated password bounds)
        """
        options: dict[str, int] = {}
        if "pbkdf2_sha256" in credential_settings.schemes:
            options["pbkdf2_sha256__default_rounds"] = (
                credential_settings.pbkdf2_sha256_rounds
            )
        self._context = CryptContext(
            schemes=credential_settings.schemes,
            deprecated=credential_settings.deprecated,
            **options,
        )
        self.account_settings = account_settings

    def hash_password(self, password: str) -> str:
        """Hash a password with the active scheme."""
        return self._context.hash(password)

    def verify_password(self, password: str, hashed_password: str | None) -> bool:
        """Check a password against a stored digest.

        Args:
            password: Clear text password
            hashed_password: Stored digest, may be missing

        Returns:
            True if the password matches; False for a mismatch or for a
            missing or unrecognised digest
        """
        if not hashed_password or self._context.identify(hashed_password) is None:
            return False
        return self._context.verify(password, hashed_password)

    def verify_and_update(
        self, password: str, hashed_password: str | None
    ) -> tuple[bool, str | None]:
        """Verify a password and produce a replacement digest if needed.

        Returns:
            Tuple of (valid, new_digest). new_digest is set only when the
            password is valid and the stored digest uses a deprecated scheme.
        """
        if not hashed_password or self._context.identify(hashed_password) is None:
            return False, None
        return self._context.verify_and_update(password, hashed_password)

    def set_password(
        self, user: User, password: str | None, confirm_password: str | None
    ) -> PasswordChange:
        """Assign a new password to a user.

        A blank password leaves the user untouched, as does a password that
        already matches the stored digest.

        Args:
            user: User to update
            password: New clear text password
            confirm_password: Confirmation, must equal ``password``

        Returns:
            PasswordChange with the (possibly) updated user

        Raises:
            ValidationError: If the confirmation does not match
        """
        with logfire.span("credential_service.set_password", user_id=str(user.id)):
            if not password:
                return PasswordChange(user=user, password_changed=False)

            if password != confirm_password:
                logfire.info("Password confirmation mismatch", user_id=str(user.id))
                raise ValidationError({"password": ["must be confirmed"]})

            if self.verify_password(password, user.hashed_password):
                return PasswordChange(user=user, password_changed=False)

            updated = user.model_copy(
                update={"hashed_password": self.hash_password(password)}
            )
            logfire.info("Password changed", user_id=str(user.id))
            return PasswordChange(user=updated, password_changed=True)

    def generate_password(self) -> str:
        """Generate a random alphanumeric password."""
        length = secrets.choice(
            range(
                self.account_settings.generated_password_min_length,
                self.account_settings.generated_password_max_length + 1,
            )
        )
        return "".join(
            secrets.choice(GENERATED_PASSWORD_ALPHABET) for _ in range(length)
        )

    def ensure_credentials(
        self, user: User, password: str | None, confirm_password: str | None
    ) -> PasswordChange:
        """Apply submitted credentials, generating a password for OpenID signups.

        OpenID users without a stored digest or a submitted password get a
        generated one, used as both password and confirmation so the normal
        confirmation rules still run.
        """
        if user.openid_url and not user.hashed_password and not password:
            logfire.info("Generating password for OpenID user", user_id=str(user.id))
            password = confirm_password = self.generate_password()
        return self.set_password(user, password, confirm_password)
