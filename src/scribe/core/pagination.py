"""Page-number pagination arithmetic for post listings.

Pages are 1-indexed. Invalid page numbers are normalized rather than
rejected, so `?page=abc`, `?page=-3` and a page whose offset does not fit in
a 64-bit database integer all read the first page.
"""

from __future__ import annotations

import math
from typing import Any

DEFAULT_PAGE = 1

# Largest OFFSET/LIMIT value PostgreSQL and SQLite accept (signed BIGINT)
MAX_OFFSET = 2**63 - 1


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def normalize_page(page: Any, page_size: int = 1) -> int:
    """Coerce a raw page value to a positive integer, defaulting to 1.

    Pages whose offset `(page - 1) * page_size` exceeds MAX_OFFSET are out of
    range and also read page 1.
    """
    value = _to_int(page)
    if value is None or value < 1 or page_offset(value, page_size) > MAX_OFFSET:
        return DEFAULT_PAGE
    return value


def normalize_page_size(page_size: Any, default: int) -> int:
    """Coerce a raw page size to a positive integer, falling back to `default`."""
    value = _to_int(page_size)
    if value is None or value < 1 or value > MAX_OFFSET:
        return default
    return value


def page_offset(page: int, page_size: int) -> int:
    """Number of documents to skip to reach `page`."""
    return (page - 1) * page_size


def total_pages(total_count: int, page_size: int) -> int:
    """ceil(total_count / page_size); zero documents means zero pages."""
    return math.ceil(total_count / page_size)
