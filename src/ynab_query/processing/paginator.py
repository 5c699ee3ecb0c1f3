"""Slicing of ordered result lists and pagination metadata."""

import math
from typing import Sequence, TypeVar

from ynab_query.models.results import OffsetPagination, PagePagination

T = TypeVar("T")


def paginate_offset(
    items: Sequence[T],
    offset: int = 0,
    limit: int | None = None,
    default_limit: int = 100,
    max_limit: int = 500,
) -> tuple[list[T], OffsetPagination]:
    """Slice an already sorted list by offset and limit.

    Offsets past the end yield an empty slice.

    Args:
        items: Full, filtered and sorted candidate list.
        offset: Number of items to skip.
        limit: Requested page size (falsy means default_limit).
        default_limit: Page size used when none is requested.
        max_limit: Requested page sizes are clamped to this.

    Returns:
        Tuple of (page items, pagination metadata).
    """
    offset = max(offset or 0, 0)
    limit = min(limit or default_limit, max_limit)
    total = len(items)

    end = offset + limit
    has_more = end < total

    return list(items[offset:end]), OffsetPagination(
        offset=offset,
        limit=limit,
        total=total,
        has_more=has_more,
        next_offset=end if has_more else None,
    )


def paginate_page(
    items: Sequence[T],
    page: int = 1,
    page_size: int | None = None,
    default_page_size: int = 50,
    max_page_size: int = 100,
) -> tuple[list[T], PagePagination]:
    """Slice an already sorted list by 1-indexed page number.

    Args:
        items: Full, filtered and sorted candidate list.
        page: 1-indexed page number (falsy means 1).
        page_size: Requested page size (falsy means default_page_size).
        default_page_size: Page size used when none is requested.
        max_page_size: Requested page sizes are clamped to this.

    Returns:
        Tuple of (page items, pagination metadata).
    """
    page = max(page or 1, 1)
    page_size = min(page_size or default_page_size, max_page_size)
    total = len(items)
    total_pages = math.ceil(total / page_size)

    start = (page - 1) * page_size
    return list(items[start:start + page_size]), PagePagination(
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
        next_page=page + 1 if page < total_pages else None,
    )
