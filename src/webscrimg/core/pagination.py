# ABOUTME: De-duplication and page slicing for accepted image candidates
# ABOUTME: Pure functions; page and limit are clamped instead of rejected

from collections.abc import Callable, Hashable, Iterable
from typing import Any

from pydantic import BaseModel

from .models import PaginationInfo


class Page[T](BaseModel):
    """A slice of items plus the metadata describing where it sits."""

    data: list[T]
    pagination: PaginationInfo


def coerce_positive(value: Any, default: int = 1) -> int:
    """Coerce a page or limit argument to an integer of at least 1.

    Missing or non-numeric values fall back to ``default``.
    """
    if value is None:
        return max(1, default)
    try:
        number = int(value)
    except (TypeError, ValueError):
        return max(1, default)
    return max(1, number)


def dedupe[T](items: Iterable[T], key: Callable[[T], Hashable] | None = None) -> list[T]:
    """Drop repeated items, keeping the first occurrence and original order."""
    seen: set[Hashable] = set()
    unique: list[T] = []
    for item in items:
        marker = key(item) if key else item
        if marker in seen:
            continue
        seen.add(marker)
        unique.append(item)
    return unique


def paginate[T](items: Iterable[T], page: Any = 1, limit: Any = 20) -> Page[T]:
    """Return the ``page``-th window of ``limit`` items.

    Pages past the end are empty but still report the requested page.
    """
    items = list(items)
    page = coerce_positive(page)
    limit = coerce_positive(limit)
    start = (page - 1) * limit
    end = start + limit
    return Page(
        data=items[start:end],
        pagination=PaginationInfo(
            current_page=page,
            has_next_page=end < len(items),
            next_page=page + 1,
            total=len(items),
        ),
    )
