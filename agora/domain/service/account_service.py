"""Account domain service."""

from datetime import datetime, timedelta
from typing import Any, Protocol
from uuid import uuid4

import logfire

from agora.config import AccountSettings
from agora.domain.error import (
    AuthenticationError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from agora.domain.model import UNSAFE_ATTRIBUTES, User
from agora.domain.repository import (
    DiscussionRelationshipRepository,
    DiscussionViewRepository,
    InviteRepository,
    UserRepository,
)
from agora.domain.value import USERNAME_PATTERN, UserId

from .base import Service
from .credential_service import CredentialService, PasswordChange
from .trust import can_log_in, is_user_admin


class OpenIDNormalizer(Protocol):
    """Normalizes a raw OpenID URL, raising ValueError for unusable input."""

    def __call__(self, identifier: str) -> str: ...


ROLE_FLAGS = ("admin", "trusted", "moderator", "user_admin", "banned", "activated")

# Only full admins may hand out or take away these
ADMIN_ONLY_FLAGS = ("admin", "user_admin")


def safe_attributes(attributes: dict[str, Any]) -> dict[str, Any]:
    """Drop attributes users may not set on their own account."""
    return {k: v for k, v in attributes.items() if k not in UNSAFE_ATTRIBUTES}


class AccountService(Service):
    """Domain service for account lifecycle operations.

    Covers signup validation, registration, self-service profile updates,
    role changes by user admins, activity tracking, directory listings and
    account removal.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        invite_repository: InviteRepository,
        discussion_view_repository: DiscussionViewRepository,
        discussion_relationship_repository: DiscussionRelationshipRepository,
        credential_service: CredentialService,
        openid_normalizer: OpenIDNormalizer,
        account_settings: AccountSettings,
    ) -> None:
        """Initialize account service.

        Args:
            user_repository: User repository
            invite_repository: Invite repository
            discussion_view_repository: Discussion view repository
            discussion_relationship_repository: Discussion relationship repository
            credential_service: Credential domain service
            openid_normalizer: OpenID URL normalizer
            account_settings: Account configuration (signup approval policy)
        """
        self.user_repository = user_repository
        self.invite_repository = invite_repository
        self.discussion_view_repository = discussion_view_repository
        self.discussion_relationship_repository = discussion_relationship_repository
        self.credential_service = credential_service
        self.openid_normalizer = openid_normalizer
        self.account_settings = account_settings

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("account_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_by_username(self, username: str) -> User | None:
        return await self.user_repository.find_by_username(username)

    async def validate(
        self, user: User, problems: dict[str, list[str]] | None = None
    ) -> User:
        """Validate a user before saving.

        Every problem is collected before raising. The OpenID URL is
        normalized as part of validation.

        Args:
            user: User to validate
            problems: Problems already found by the caller

        Returns:
            The user with a normalized OpenID URL

        Raises:
            ValidationError: If any problem was found
        """
        errors: dict[str, list[str]] = {k: list(v) for k, v in (problems or {}).items()}

        def add(field: str, message: str) -> None:
            errors.setdefault(field, []).append(message)

        with logfire.span("account_service.validate", username=user.username):
            if not user.username or not user.username.strip():
                add("username", "can't be blank")
            elif not USERNAME_PATTERN.match(user.username):
                add("username", "is invalid")
            else:
                existing = await self.user_repository.find_by_username(user.username)
                if existing and existing.id != user.id:
                    add("username", "is already registered.")

            if not user.email or not user.email.strip():
                add("email", "can't be blank")

            if user.openid_url and user.openid_url.strip():
                try:
                    normalized = self.openid_normalizer(user.openid_url.strip())
                except ValueError:
                    add("openid_url", "is invalid")
                else:
                    user = user.model_copy(update={"openid_url": normalized})
                    existing = await self.user_repository.find_by_openid_url(normalized)
                    if existing and existing.id != user.id:
                        add("openid_url", "is already registered.")
            elif user.openid_url is not None:
                user = user.model_copy(update={"openid_url": None})

            if not user.hashed_password and not user.openid_url:
                add("password", "can't be blank")

            if self.account_settings.signup_approval_required:
                if not user.realname:
                    add("realname", "can't be blank")
                if not user.application:
                    add("application", "can't be blank")

            if errors:
                logfire.info(
                    "User validation failed",
                    username=user.username,
                    fields=sorted(errors),
                )
                raise ValidationError(errors)
            return user

    async def register(
        self,
        username: str,
        email: str,
        password: str | None = None,
        confirm_password: str | None = None,
        openid_url: str | None = None,
        realname: str | None = None,
        application: str | None = None,
        inviter_id: UserId | None = None,
    ) -> User:
        """Create a new account.

        Accounts are activated immediately unless signup approval is
        required.

        Returns:
            The saved user

        Raises:
            ValidationError: With every problem found in the signup data
        """
        with logfire.span("account_service.register", username=username):
            user = User(
                id=UserId(uuid4()),
                username=username,
                email=email,
                realname=realname,
                application=application,
                openid_url=openid_url,
                inviter_id=inviter_id,
                activated=not self.account_settings.signup_approval_required,
                available_invites=self.account_settings.default_available_invites,
            )

            problems: dict[str, list[str]] = {}
            try:
                user = self.credential_service.ensure_credentials(
                    user, password, confirm_password
                ).user
            except ValidationError as e:
                problems = e.errors

            user = await self.validate(user, problems)
            saved = await self.user_repository.save(user)
            logfire.info(
                "User registered",
                user_id=str(saved.id),
                username=saved.username,
                activated=saved.activated,
            )
            return saved

    async def authenticate(self, username: str, password: str) -> User:
        """Check a username and password pair.

        Digests made with a deprecated scheme are replaced on success.

        Returns:
            The authenticated user

        Raises:
            AuthenticationError: For an unknown user, a wrong password, or an
                account that is not activated or is banned
        """
        with logfire.span("account_service.authenticate", username=username):
            user = await self.user_repository.find_by_username(username)
            if user is None:
                logfire.info("Login for unknown user", username=username)
                raise AuthenticationError("Invalid username or password")

            valid, new_digest = self.credential_service.verify_and_update(
                password, user.hashed_password
            )
            if not valid:
                logfire.info("Login with wrong password", user_id=str(user.id))
                raise AuthenticationError("Invalid username or password")

            if not can_log_in(user):
                logfire.warn(
                    "Login refused for inactive account",
                    user_id=str(user.id),
                    activated=user.activated,
                    banned=user.banned,
                )
                raise AuthenticationError("Account is not active")

            if new_digest:
                user = await self.user_repository.save(
                    user.model_copy(update={"hashed_password": new_digest})
                )
                logfire.info("Password digest upgraded", user_id=str(user.id))
            return user

    async def change_password(
        self, user: User, password: str, confirm_password: str
    ) -> PasswordChange:
        """Set a new password and persist it if it differs from the current one."""
        with logfire.span("account_service.change_password", user_id=str(user.id)):
            change = self.credential_service.set_password(
                user, password, confirm_password
            )
            if change.password_changed:
                saved = await self.user_repository.save(change.user)
                return PasswordChange(user=saved, password_changed=True)
            return change

    async def update_profile(
        self, user: User, attributes: dict[str, Any]
    ) -> PasswordChange:
        """Apply a self-service profile update.

        Protected attributes (roles, counters, invite allowance...) are
        silently dropped. ``password``/``confirm_password`` go through the
        credential rules.

        Returns:
            PasswordChange with the saved user; ``password_changed`` tells the
            caller whether to invalidate other sessions

        Raises:
            ValidationError: For unknown attributes or invalid values
        """
        with logfire.span("account_service.update_profile", user_id=str(user.id)):
            allowed = safe_attributes(attributes)
            dropped = sorted(set(attributes) - set(allowed))
            if dropped:
                logfire.warn(
                    "Protected attributes ignored",
                    user_id=str(user.id),
                    attributes=dropped,
                )

            password = allowed.pop("password", None)
            confirm_password = allowed.pop("confirm_password", None)

            unknown = sorted(k for k in allowed if k not in User.model_fields)
            if unknown:
                raise ValidationError({k: ["is not a known attribute"] for k in unknown})

            problems: dict[str, list[str]] = {}
            updated = user.model_copy(update={**allowed, "updated_at": datetime.now()})
            change = PasswordChange(user=updated, password_changed=False)
            try:
                change = self.credential_service.set_password(
                    updated, password, confirm_password
                )
            except ValidationError as e:
                problems = e.errors

            validated = await self.validate(change.user, problems)
            saved = await self.user_repository.save(validated)
            return PasswordChange(user=saved, password_changed=change.password_changed)

    async def update_roles(self, actor: User, user: User, **flags: bool) -> User:
        """Change role and status flags of another account.

        Args:
            actor: User performing the change, must be a user admin
            user: Account being changed
            **flags: Any of admin, trusted, moderator, user_admin, banned, activated

        Returns:
            The saved user

        Raises:
            NotAuthorizedError: If the actor may not make the change
            ValueError: For unknown flags
        """
        with logfire.span(
            "account_service.update_roles",
            actor_id=str(actor.id),
            user_id=str(user.id),
            flags=sorted(flags),
        ):
            unknown = set(flags) - set(ROLE_FLAGS)
            if unknown:
                raise ValueError(f"Unknown role flags: {sorted(unknown)}")
            if not is_user_admin(actor):
                raise NotAuthorizedError("user", str(user.id), str(actor.id))
            if not actor.admin and any(f in flags for f in ADMIN_ONLY_FLAGS):
                raise NotAuthorizedError("user", str(user.id), str(actor.id))

            saved = await self.user_repository.save(
                user.model_copy(update={**flags, "updated_at": datetime.now()})
            )
            logfire.info(
                "User roles updated",
                actor_id=str(actor.id),
                user_id=str(user.id),
                **flags,
            )
            return saved

    async def touch_last_active(self, user: User, now: datetime | None = None) -> User:
        """Record activity, at most once per configured granularity window."""
        now = now or datetime.now()
        granularity = timedelta(
            minutes=self.account_settings.activity_granularity_minutes
        )
        if user.last_active and user.last_active > now - granularity:
            return user
        await self.user_repository.update_last_active(user.id, now)
        return user.model_copy(update={"last_active": now})

    def is_online(self, user: User, now: datetime | None = None) -> bool:
        window = timedelta(minutes=self.account_settings.online_window_minutes)
        return user.is_online(now or datetime.now(), window)

    async def list_active(self) -> list[User]:
        return await self.user_repository.find_active()

    async def list_online(self, now: datetime | None = None) -> list[User]:
        """Users active within the online window.

        ``last_active`` is written at coarse granularity, so windows shorter
        than that granularity are not meaningful.
        """
        window = timedelta(minutes=self.account_settings.online_window_minutes)
        return await self.user_repository.find_online((now or datetime.now()) - window)

    async def list_admins(self) -> list[User]:
        return await self.user_repository.find_admins()

    async def list_newest(self, limit: int = 25) -> list[User]:
        return await self.user_repository.find_newest(limit)

    async def list_top_posters(self, limit: int = 50) -> list[User]:
        return await self.user_repository.find_top_posters(limit)

    async def list_invitees(self, user: User) -> list[User]:
        return await self.user_repository.find_invitees(user.id)

    async def destroy(self, user: User) -> None:
        """Delete an account with its invites, discussion views and relationships.

        Messages, posts and discussions are left in place.
        """
        with logfire.span("account_service.destroy", user_id=str(user.id)):
            invites = await self.invite_repository.delete_by_user(user.id)
            views = await self.discussion_view_repository.delete_by_user(user.id)
            relationships = (
                await self.discussion_relationship_repository.delete_by_user(user.id)
            )
            await self.user_repository.delete(user.id)
            logfire.info(
                "User destroyed",
                user_id=str(user.id),
                invites=invites,
                discussion_views=views,
                discussion_relationships=relationships,
            )
