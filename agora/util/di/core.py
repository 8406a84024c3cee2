"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from agora.config import (
    AccountSettings,
    CredentialSettings,
    InvitationSettings,
    PaginationSettings,
    Settings,
)
from agora.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_account_settings(self, settings: Settings) -> AccountSettings:
        return settings.accounts

    @provide(scope=Scope.APP)
    def provide_credential_settings(self, settings: Settings) -> CredentialSettings:
        return settings.credentials

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        return settings.invitations

    @provide(scope=Scope.APP)
    def provide_pagination_settings(self, settings: Settings) -> PaginationSettings:
        return settings.pagination
