"""User activity domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from agora.config import PaginationSettings
from agora.domain.model import Discussion, DiscussionRelationship, Post, User
from agora.domain.repository import (
    DiscussionRelationshipRepository,
    DiscussionRepository,
    PostRepository,
    UserRepository,
)
from agora.domain.value import (
    DiscussionId,
    DiscussionRelationshipId,
    Page,
    PostId,
    RelationshipKind,
    paginate,
)

from .base import Service
from .trust import is_trusted


def _shows_trusted(viewer: User | None) -> bool:
    return viewer is not None and is_trusted(viewer)


class ActivityService(Service):
    """Discussions and posts as they relate to one user.

    Listings hide content from trusted categories unless the viewer is
    trusted. Creating posts and discussions bumps the author's counter
    caches with atomic increments.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        post_repository: PostRepository,
        discussion_repository: DiscussionRepository,
        discussion_relationship_repository: DiscussionRelationshipRepository,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize activity service.

        Args:
            user_repository: User repository
            post_repository: Post repository
            discussion_repository: Discussion repository
            discussion_relationship_repository: Discussion relationship repository
            pagination_settings: Default page sizes
        """
        self.user_repository = user_repository
        self.post_repository = post_repository
        self.discussion_repository = discussion_repository
        self.discussion_relationship_repository = discussion_relationship_repository
        self.pagination_settings = pagination_settings

    async def start_discussion(
        self, user: User, title: str, trusted: bool = False
    ) -> Discussion:
        """Create a discussion and count it for its poster."""
        with logfire.span("activity_service.start_discussion", user_id=str(user.id)):
            discussion = await self.discussion_repository.save(
                Discussion(
                    id=DiscussionId(uuid4()),
                    poster_id=user.id,
                    title=title,
                    trusted=trusted,
                )
            )
            await self.user_repository.update_counters(user.id, discussions_count=1)
            await self.set_relationship(user, discussion, participated=True)
            logfire.info(
                "Discussion started",
                discussion_id=str(discussion.id),
                user_id=str(user.id),
            )
            return discussion

    async def add_post(self, user: User, discussion: Discussion, body: str) -> Post:
        """Create a post in a discussion and count it for its author."""
        with logfire.span(
            "activity_service.add_post",
            user_id=str(user.id),
            discussion_id=str(discussion.id),
        ):
            now = datetime.now()
            post = await self.post_repository.save(
                Post(
                    id=PostId(uuid4()),
                    user_id=user.id,
                    discussion_id=discussion.id,
                    body=body,
                    trusted=discussion.trusted,
                    created_at=now,
                )
            )
            await self.discussion_repository.save(
                discussion.model_copy(update={"last_post_at": now})
            )
            await self.user_repository.update_counters(user.id, posts_count=1)
            await self.set_relationship(user, discussion, participated=True)
            return post

    async def paginated_discussions(
        self,
        user: User,
        viewer: User | None = None,
        page: int = 1,
        per_page: int | None = None,
    ) -> Page[Discussion]:
        """Discussions started by ``user``, sticky first then by last post."""
        per_page = per_page or self.pagination_settings.discussions_per_page
        include_trusted = _shows_trusted(viewer)
        with logfire.span(
            "activity_service.paginated_discussions",
            user_id=str(user.id),
            include_trusted=include_trusted,
            page=page,
        ):
            total = await self.discussion_repository.count_by_poster(
                user.id, include_trusted
            )
            pagination = paginate(total, per_page, page)
            items = await self.discussion_repository.find_by_poster(
                user.id, include_trusted, pagination.limit, pagination.offset
            )
            return Page(items=items, pagination=pagination)

    async def paginated_posts(
        self,
        user: User,
        viewer: User | None = None,
        page: int = 1,
        per_page: int | None = None,
    ) -> Page[Post]:
        """Posts written by ``user``, newest first."""
        per_page = per_page or self.pagination_settings.posts_per_page
        include_trusted = _shows_trusted(viewer)
        with logfire.span(
            "activity_service.paginated_posts",
            user_id=str(user.id),
            include_trusted=include_trusted,
            page=page,
        ):
            total = await self.post_repository.count_by_user(user.id, include_trusted)
            pagination = paginate(total, per_page, page)
            items = await self.post_repository.find_by_user(
                user.id, include_trusted, pagination.limit, pagination.offset
            )
            return Page(items=items, pagination=pagination)

    async def paginated_related_discussions(
        self,
        user: User,
        kind: RelationshipKind,
        viewer: User | None = None,
        page: int = 1,
        per_page: int | None = None,
    ) -> Page[Discussion]:
        """Discussions the user follows, favorited or participated in."""
        per_page = per_page or self.pagination_settings.discussions_per_page
        include_trusted = _shows_trusted(viewer)
        repository = self.discussion_relationship_repository
        total = await repository.count_discussions(user.id, kind, include_trusted)
        pagination = paginate(total, per_page, page)
        items = await repository.find_discussions(
            user.id, kind, include_trusted, pagination.limit, pagination.offset
        )
        return Page(items=items, pagination=pagination)

    async def participated_count(self, user: User) -> int:
        return await self.discussion_relationship_repository.count_discussions(
            user.id, RelationshipKind.PARTICIPATED
        )

    async def is_following(self, user: User, discussion: Discussion) -> bool:
        return await self._has_relationship(user, discussion, RelationshipKind.FOLLOWING)

    async def is_favorite(self, user: User, discussion: Discussion) -> bool:
        return await self._has_relationship(user, discussion, RelationshipKind.FAVORITE)

    async def _has_relationship(
        self, user: User, discussion: Discussion, kind: RelationshipKind
    ) -> bool:
        relationship = await self.discussion_relationship_repository.find(
            user.id, discussion.id
        )
        return relationship is not None and relationship.has(kind)

    async def set_relationship(
        self, user: User, discussion: Discussion, **flags: bool
    ) -> DiscussionRelationship:
        """Create or update the user's relationship flags for a discussion.

        Args:
            user: The user
            discussion: The discussion
            **flags: Any of following, favorite, participated

        Raises:
            ValueError: For unknown flags
        """
        valid = {kind.value for kind in RelationshipKind}
        unknown = set(flags) - valid
        if unknown:
            raise ValueError(f"Unknown relationship flags: {sorted(unknown)}")

        repository = self.discussion_relationship_repository
        relationship = await repository.find(user.id, discussion.id)
        if relationship is None:
            relationship = DiscussionRelationship(
                id=DiscussionRelationshipId(uuid4()),
                user_id=user.id,
                discussion_id=discussion.id,
            )
        return await repository.save(relationship.model_copy(update=flags))
