"""Domain layer DI providers."""

from dishka import Scope, provide

from agora.adapter.openid import normalize_openid_url
from agora.config import (
    AccountSettings,
    CredentialSettings,
    InvitationSettings,
    PaginationSettings,
)
from agora.domain.repository import (
    DiscussionRelationshipRepository,
    DiscussionRepository,
    DiscussionViewRepository,
    InviteRepository,
    MessageRepository,
    PostRepository,
    UserRepository,
)
from agora.domain.service import (
    AccountService,
    ActivityService,
    ConversationService,
    CounterCacheService,
    CredentialService,
    InviteService,
    OpenIDNormalizer,
    UnreadCountCache,
)
from agora.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session
    lifecycle. The unread count memo is REQUEST-scoped too, so it is
    discarded together with the operation that filled it.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_credential_service(
        self,
        credential_settings: CredentialSettings,
        account_settings: AccountSettings,
    ) -> CredentialService:
        """Provide credential service. Stateless, shared by the whole app."""
        return CredentialService(
            credential_settings=credential_settings,
            account_settings=account_settings,
        )

    @provide(scope=Scope.APP)
    def get_openid_normalizer(self) -> OpenIDNormalizer:
        return normalize_openid_url

    @provide
    def get_unread_count_cache(self) -> UnreadCountCache:
        return UnreadCountCache()

    @provide
    def get_account_service(
        self,
        user_repository: UserRepository,
        invite_repository: InviteRepository,
        discussion_view_repository: DiscussionViewRepository,
        discussion_relationship_repository: DiscussionRelationshipRepository,
        credential_service: CredentialService,
        openid_normalizer: OpenIDNormalizer,
        account_settings: AccountSettings,
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(
            user_repository=user_repository,
            invite_repository=invite_repository,
            discussion_view_repository=discussion_view_repository,
            discussion_relationship_repository=discussion_relationship_repository,
            credential_service=credential_service,
            openid_normalizer=openid_normalizer,
            account_settings=account_settings,
        )

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        user_repository: UserRepository,
        invitation_settings: InvitationSettings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            user_repository=user_repository,
            invitation_settings=invitation_settings,
        )

    @provide
    def get_conversation_service(
        self,
        message_repository: MessageRepository,
        user_repository: UserRepository,
        unread_cache: UnreadCountCache,
        pagination_settings: PaginationSettings,
    ) -> ConversationService:
        """Provide conversation domain service."""
        return ConversationService(
            message_repository=message_repository,
            user_repository=user_repository,
            unread_cache=unread_cache,
            pagination_settings=pagination_settings,
        )

    @provide
    def get_counter_cache_service(
        self,
        user_repository: UserRepository,
        post_repository: PostRepository,
        discussion_repository: DiscussionRepository,
    ) -> CounterCacheService:
        """Provide counter cache domain service."""
        return CounterCacheService(
            user_repository=user_repository,
            post_repository=post_repository,
            discussion_repository=discussion_repository,
        )

    @provide
    def get_activity_service(
        self,
        user_repository: UserRepository,
        post_repository: PostRepository,
        discussion_repository: DiscussionRepository,
        discussion_relationship_repository: DiscussionRelationshipRepository,
        pagination_settings: PaginationSettings,
    ) -> ActivityService:
        """Provide activity domain service."""
        return ActivityService(
            user_repository=user_repository,
            post_repository=post_repository,
            discussion_repository=discussion_repository,
            discussion_relationship_repository=discussion_relationship_repository,
            pagination_settings=pagination_settings,
        )
