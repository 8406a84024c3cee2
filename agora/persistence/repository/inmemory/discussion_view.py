"""In-memory discussion view repository for testing."""

from typing import Optional

from agora.domain.model.discussion_view import DiscussionView
from agora.domain.repository.discussion_view import DiscussionViewRepository
from agora.domain.value import DiscussionId, UserId


class InMemoryDiscussionViewRepository(DiscussionViewRepository):
    """In-memory implementation of DiscussionViewRepository for testing."""

    def __init__(self) -> None:
        self._views: dict[tuple[UserId, DiscussionId], DiscussionView] = {}

    async def find(
        self, user_id: UserId, discussion_id: DiscussionId
    ) -> Optional[DiscussionView]:
        return self._views.get((user_id, discussion_id))

    async def save(self, view: DiscussionView) -> DiscussionView:
        key = (view.user_id, view.discussion_id)
        existing = self._views.get(key)
        if existing:
            view = view.model_copy(update={"id": existing.id})
        self._views[key] = view
        return view

    async def delete_by_user(self, user_id: UserId) -> int:
        doomed = [key for key in self._views if key[0] == user_id]
        for key in doomed:
            del self._views[key]
        return len(doomed)
