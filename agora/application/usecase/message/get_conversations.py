"""Get conversations use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import AccountService, ConversationService
from agora.domain.value import Pagination, UserId


class GetConversationsRequest(BaseModel):
    """Request for one page of a user's conversations."""

    user_id: str
    page: int = Field(default=1, ge=1)
    per_page: int | None = Field(default=None, ge=1)


class ConversationItem(BaseModel):
    """One conversation partner with thread state."""

    partner_id: str
    partner_username: str
    last_messaged_at: datetime
    unread_count: int


class GetConversationsResponse(BaseModel):
    """Conversation page plus the user's unread total."""

    conversations: list[ConversationItem]
    pagination: Pagination
    unread_total: int


class GetConversationsUseCase(BaseUseCase):
    """Use case for the conversation overview."""

    def __init__(
        self,
        account_service: AccountService,
        conversation_service: ConversationService,
    ) -> None:
        """Initialize use case.

        Args:
            account_service: Account domain service
            conversation_service: Conversation domain service
        """
        self.account_service = account_service
        self.conversation_service = conversation_service

    async def execute(
        self, request: GetConversationsRequest
    ) -> GetConversationsResponse:
        """List conversations, most recently active first.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.account_service.get_by_id(UserId(UUID(request.user_id)))

        with logfire.span("get_conversations", user_id=str(user.id), page=request.page):
            page = await self.conversation_service.paginated_partners(
                user, request.page, request.per_page
            )
            items = [
                ConversationItem(
                    partner_id=str(partner.user.id),
                    partner_username=partner.user.username,
                    last_messaged_at=partner.last_messaged_at,
                    unread_count=await self.conversation_service.unread_count_from(
                        user, partner.user
                    ),
                )
                for partner in page.items
            ]
            return GetConversationsResponse(
                conversations=items,
                pagination=page.pagination,
                unread_total=await self.conversation_service.unread_total(user),
            )
