"""Pagination primitives shared across bounded contexts.

Page metadata is always derived from a total count, a page number and a
page size. Nothing here stores counts of its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50

T = TypeVar("T")


def clamp_page_size(page_size: int) -> int:
    """Clamp a requested page size into [1, MAX_PAGE_SIZE].

    Non-positive sizes fall back to DEFAULT_PAGE_SIZE.
    """
    if page_size <= 0:
        return DEFAULT_PAGE_SIZE
    return min(page_size, MAX_PAGE_SIZE)


def clamp_page_number(page_number: int) -> int:
    """Clamp a requested page number to be at least 1."""
    return max(1, page_number)


@dataclass(frozen=True)
class PageRequest:
    """A normalized request for one page of results.

    Values are clamped on construction, so an instance is always valid.

    Attributes:
        page_number: 1-based page number
        page_size: Number of items per page
    """

    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "page_number", clamp_page_number(self.page_number))
        object.__setattr__(self, "page_size", clamp_page_size(self.page_size))

    @property
    def offset(self) -> int:
        """Number of items preceding this page."""
        return (self.page_number - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Maximum number of items on this page."""
        return self.page_size


@dataclass(frozen=True)
class PageMetadata:
    """Derived pagination metadata."""

    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


def calculate_page_metadata(
    total_count: int,
    page_number: int,
    page_size: int,
) -> PageMetadata:
    """Derive page metadata from a total count and a page request.

    Args:
        total_count: Total number of items across all pages
        page_number: Requested 1-based page number (clamped to >= 1)
        page_size: Requested page size (defaulted/clamped, see clamp_page_size)

    Returns:
        PageMetadata where total_pages = ceil(total_count / page_size)

    Example:
        >>> meta = calculate_page_metadata(total_count=25, page_number=2, page_size=10)
        >>> (meta.total_pages, meta.has_next_page, meta.has_previous_page)
        (3, True, True)
    """
    total_count = max(0, total_count)
    page_number = clamp_page_number(page_number)
    page_size = clamp_page_size(page_size)

    total_pages = (total_count + page_size - 1) // page_size

    return PageMetadata(
        total_count=total_count,
        page_number=page_number,
        page_size=page_size,
        total_pages=total_pages,
        has_next_page=page_number < total_pages,
        has_previous_page=page_number > 1,
    )


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of items together with its derived metadata."""

    items: list[T] = field(default_factory=list)
    metadata: PageMetadata = field(
        default_factory=lambda: calculate_page_metadata(0, 1, DEFAULT_PAGE_SIZE)
    )

    @classmethod
    def from_sequence(cls, items: Sequence[T], request: PageRequest) -> Page[T]:
        """Slice an already loaded sequence into the requested page.

        Args:
            items: All items, in display order
            request: The page to extract

        Returns:
            The requested page; empty when past the last page
        """
        window = list(items[request.offset : request.offset + request.limit])
        metadata = calculate_page_metadata(
            total_count=len(items),
            page_number=request.page_number,
            page_size=request.page_size,
        )
        return cls(items=window, metadata=metadata)
