"""Message use cases."""

from agora.application.usecase.message.get_conversations import (
    ConversationItem,
    GetConversationsRequest,
    GetConversationsResponse,
    GetConversationsUseCase,
)

__all__ = [
    "ConversationItem",
    "GetConversationsRequest",
    "GetConversationsResponse",
    "GetConversationsUseCase",
]
