from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page_count: int
    page_size: int
    total: int

    @property
    def has_more(self) -> bool:
        return len(self.items) < self.total


def visible(filtered: Sequence[T], page_size: int, page_count: int) -> list[T]:
    """Return the revealed prefix of ``filtered`` after ``page_count`` pages.

    Raising ``page_count`` only ever appends to the prefix, so the caller can
    render newly revealed items below the ones already shown.
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    if page_count < 0:
        raise ValueError("page_count must not be negative")
    return list(filtered[: min(page_size * page_count, len(filtered))])


def advance(page_count: int) -> int:
    """Reveal one more page."""
    return page_count + 1


def reset() -> int:
    """Page count to use whenever the query changes."""
    return 1


def paginate(filtered: Sequence[T], page_size: int, page_count: int) -> Page[T]:
    return Page(
        items=visible(filtered, page_size, page_count),
        page_count=page_count,
        page_size=page_size,
        total=len(filtered),
    )
