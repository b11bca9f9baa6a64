"""Pagination value objects shared by listing operations."""

from math import ceil
from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel, Field

from forum.domain.value.common import ValueObject

T = TypeVar("T")


class PageRequest(ValueObject):
    """Requested page of a listing (1-based)."""

    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=15, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page

    def capped(self, max_per_page: int) -> "PageRequest":
        """Return a request whose per_page does not exceed ``max_per_page``."""
        if self.per_page <= max_per_page:
            return self
        return PageRequest(page=self.page, per_page=max_per_page)


class PageInfo(ValueObject):
    """Pagination metadata returned alongside a page of data."""

    page: int
    per_page: int
    total: int
    pages: int
    previous: int | None
    next: int | None


class Page(BaseModel, Generic[T]):
    """A page of listing results: ``{data, pagination}``."""

    data: list[T]
    pagination: PageInfo

    @classmethod
    def build(cls, data: Sequence[T], total: int, request: PageRequest) -> "Page[T]":
        """Assemble a page from already-sliced data and the total row count.

        Args:
            data: Items on the requested page
            total: Total number of items across all pages
            request: The page request that produced ``data``

        Returns:
            Page with computed previous/next page numbers
        """
        pages = ceil(total / request.per_page) if total else 0
        return cls(
            data=list(data),
            pagination=PageInfo(
                page=request.page,
                per_page=request.per_page,
                total=total,
                pages=pages,
                previous=request.page - 1 if request.page > 1 else None,
                next=request.page + 1 if request.page < pages else None,
            ),
        )
