"""
Pagination window and summary.

``page`` and ``limit`` arrive as raw query strings and are read like
``parseInt``: leading whitespace and sign are allowed and parsing stops at
the first non-digit, so ``"5.5"`` is 5 and ``"12abc"`` is 12.  Anything
without a leading integer, or below 1, falls back to the default.  ``limit``
is clamped to a maximum so a single request cannot pull the whole table,
and ``page`` is clamped so the offset stays within a signed 64-bit integer.
"""

from __future__ import annotations

import re
from typing import Optional, Union

from pydantic import BaseModel, Field

from app.schemas.pagination import Pagination

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# Largest OFFSET the database drivers accept
MAX_OFFSET = 2 ** 63 - 1

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class PageWindow(BaseModel):
    """The (skip, limit) slice of an ordered result set."""

    model_config = {"frozen": True}

    page: int = Field(DEFAULT_PAGE, ge=1)
    limit: int = Field(DEFAULT_LIMIT, ge=1)

    @property
    def skip(self) -> int:
        """Records to bypass before collecting the page."""
        return (self.page - 1) * self.limit


def parse_positive_int(raw: Union[str, int, None], default: int) -> int:
    """Parse the leading integer of ``raw``, returning ``default`` when absent, malformed or < 1."""
    if raw is None:
        return default
    match = _LEADING_INT.match(str(raw))
    if not match:
        return default
    value = int(match.group(1))
    return value if value >= 1 else default


def resolve_window(
    page: Union[str, int, None] = None,
    limit: Union[str, int, None] = None,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: Optional[int] = None,
    default_page: int = DEFAULT_PAGE,
) -> PageWindow:
    """Build the page window from raw ``page`` / ``limit`` parameters."""
    resolved_limit = parse_positive_int(limit, default_limit)
    if max_limit is not None:
        resolved_limit = min(resolved_limit, max_limit)
    resolved_page = min(parse_positive_int(page, default_page), MAX_OFFSET // resolved_limit + 1)
    return PageWindow(page=resolved_page, limit=resolved_limit)


def page_count(total: int, limit: int) -> int:
    """ceil(total / limit); 0 when there are no records."""
    if total <= 0:
        return 0
    return -(-total // limit)


def summarize(window: PageWindow, total: int) -> Pagination:
    return Pagination(page=window.page, limit=window.limit, total=total, pages=page_count(total, window.limit))
