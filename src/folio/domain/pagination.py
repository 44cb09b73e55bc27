"""Pagination math for the blog listing.

Pages are 1-based. The repository and these helpers share the same
page-size semantics: page *n* covers rows ``[offset(n), offset(n) + size)``.
"""

from __future__ import annotations

DEFAULT_PAGE_SIZE = 3


def last_page(total: int, page_size: int) -> int:
    """Number of the last non-empty page, or 0 when there are no rows.

    Examples:
        >>> last_page(0, 3)
        0
        >>> last_page(7, 3)
        3
        >>> last_page(9, 3)
        3
    """
    if page_size < 1:
        msg = f"page_size must be >= 1, got {page_size}"
        raise ValueError(msg)
    if total <= 0:
        return 0
    return (total + page_size - 1) // page_size


def offset(page: int, page_size: int) -> int:
    """Row offset of the first item on *page*."""
    if page_size < 1:
        msg = f"page_size must be >= 1, got {page_size}"
        raise ValueError(msg)
    if page < 1:
        msg = f"page must be >= 1, got {page}"
        raise ValueError(msg)
    return (page - 1) * page_size


def clamp_page(raw: int | str | None) -> int:
    """Parse a raw ``page`` query value; missing or invalid values become 1."""
    if raw is None:
        return 1
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return max(page, 1)
