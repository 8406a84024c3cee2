"""Application layer DI providers."""

from dishka import Scope, provide

from agora.application.usecase.account import (
    AuthenticateUserUseCase,
    RegisterUserUseCase,
)
from agora.application.usecase.invite import AdjustInvitesUseCase, SendInviteUseCase
from agora.application.usecase.maintenance import ReconcileCountersUseCase
from agora.application.usecase.message import GetConversationsUseCase
from agora.domain.service import (
    AccountService,
    ConversationService,
    CounterCacheService,
    InviteService,
)
from agora.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Account use cases
    @provide(scope=Scope.REQUEST)
    def get_register_user_use_case(
        self, account_service: AccountService, invite_service: InviteService
    ) -> RegisterUserUseCase:
        """Provide register user use case."""
        return RegisterUserUseCase(
            account_service=account_service, invite_service=invite_service
        )

    @provide(scope=Scope.REQUEST)
    def get_authenticate_user_use_case(
        self, account_service: AccountService
    ) -> AuthenticateUserUseCase:
        """Provide authenticate user use case."""
        return AuthenticateUserUseCase(account_service=account_service)

    # Invite use cases
    @provide(scope=Scope.REQUEST)
    def get_send_invite_use_case(
        self, account_service: AccountService, invite_service: InviteService
    ) -> SendInviteUseCase:
        """Provide send invite use case."""
        return SendInviteUseCase(
            account_service=account_service, invite_service=invite_service
        )

    @provide(scope=Scope.REQUEST)
    def get_adjust_invites_use_case(
        self, account_service: AccountService, invite_service: InviteService
    ) -> AdjustInvitesUseCase:
        """Provide adjust invites use case."""
        return AdjustInvitesUseCase(
            account_service=account_service, invite_service=invite_service
        )

    # Message use cases
    @provide(scope=Scope.REQUEST)
    def get_conversations_use_case(
        self,
        account_service: AccountService,
        conversation_service: ConversationService,
    ) -> GetConversationsUseCase:
        """Provide get conversations use case."""
        return GetConversationsUseCase(
            account_service=account_service,
            conversation_service=conversation_service,
        )

    # Maintenance use cases
    @provide(scope=Scope.REQUEST)
    def get_reconcile_counters_use_case(
        self,
        account_service: AccountService,
        counter_cache_service: CounterCacheService,
    ) -> ReconcileCountersUseCase:
        """Provide reconcile counters use case."""
        return ReconcileCountersUseCase(
            account_service=account_service,
            counter_cache_service=counter_cache_service,
        )
