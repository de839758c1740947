"""Page windows and navigation metadata for over-fetch pagination.

A list query asks for page_size + 1 rows starting at skip * page_size; the
extra row only signals that another page exists and is never returned.
"""

from collections.abc import Sequence
from typing import TypeVar

from app.core.errors import RequestTimeoutError
from app.schemas.pagination import PaginationDetails

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 5
# Highest accepted page index; keeps skip * page_size within a 64-bit OFFSET.
MAX_PAGE_INDEX = 1_000_000


def page_window(skip: int, page_size: int = DEFAULT_PAGE_SIZE) -> tuple[int, int]:
    """Return (offset, limit) for the zero-based page index skip."""
    if skip < 0:
        raise ValueError("skip must be >= 0")
    if skip > MAX_PAGE_INDEX:
        raise ValueError(f"skip must be <= {MAX_PAGE_INDEX}")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return skip * page_size, page_size + 1


def build_page(
    rows: Sequence[T],
    skip: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> tuple[list[T], PaginationDetails]:
    """
    Trim the over-fetched rows to one page and describe its neighbours.

    Raises RequestTimeoutError if rows is not a row sequence (no result set
    came back), so a failed fetch is never reported as an empty page.
    """
    if rows is None or isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise RequestTimeoutError()

    has_next = len(rows) > page_size
    has_previous = skip > 0
    items = list(rows[:page_size]) if has_next else list(rows)
    details = PaginationDetails(
        has_next_page=has_next,
        has_previous_page=has_previous,
        next_page=skip + 1 if has_next else None,
        previous_page=skip - 1 if has_previous else None,
    )
    return items, details
