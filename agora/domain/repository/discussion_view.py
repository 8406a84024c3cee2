"""Discussion view repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from agora.domain.model.discussion_view import DiscussionView
from agora.domain.value import DiscussionId, UserId


class DiscussionViewRepository(ABC):
    """Repository for discussion read bookmarks."""

    @abstractmethod
    async def find(
        self, user_id: UserId, discussion_id: DiscussionId
    ) -> Optional[DiscussionView]:
        pass

    @abstractmethod
    async def save(self, view: DiscussionView) -> DiscussionView:
        pass

    @abstractmethod
    async def delete_by_user(self, user_id: UserId) -> int:
        """Delete all views of a user. Returns the number deleted."""
        pass
