"""Pagination value objects.

The forum treats pagination as an external collaborator: callers hand over
``(total_count, per_page, page)`` and receive a window to fetch. The rest
of the domain only supplies counts and consumes offsets.
"""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

from agora.domain.value.common import ValueObject

T = TypeVar("T")


class Pagination(ValueObject):
    """Resolved page window for a listing."""

    total_count: int = Field(ge=0)
    per_page: int = Field(ge=1)
    page: int = Field(ge=1)

    @computed_field
    @property
    def pages(self) -> int:
        """Number of pages, never less than one."""
        return max(1, math.ceil(self.total_count / self.per_page))

    @computed_field
    @property
    def limit(self) -> int:
        """Maximum number of rows on this page."""
        return self.per_page

    @computed_field
    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return (self.page - 1) * self.per_page

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


class Page(BaseModel, Generic[T]):
    """A fetched page of items together with its pagination metadata."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    items: list[T]
    pagination: Pagination


def paginate(total_count: int, per_page: int, page: int = 1) -> Pagination:
    """Resolve a page window.

    Out-of-range pages are clamped to the first or last page.

    Args:
        total_count: Total number of rows in the listing
        per_page: Rows per page (must be positive)
        page: Requested page, 1-based

    Returns:
        Pagination with limit and offset for the store query

    Raises:
        ValueError: If per_page is not positive
    """
    if per_page < 1:
        raise ValueError("per_page must be positive")
    total_count = max(0, total_count)
    pages = max(1, math.ceil(total_count / per_page))
    page = min(max(1, page), pages)
    return Pagination(total_count=total_count, per_page=per_page, page=page)
