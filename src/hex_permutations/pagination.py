"""Fixed-size pages over a generated palette."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .permutations import ColorCode

PAGE_SIZE = 150


@dataclass(frozen=True)
class Page:
    """One window of codes plus the numbers a pager needs to display it."""

    items: Tuple[ColorCode, ...]
    page: int  # 1-based, already clamped
    page_size: int
    total: int  # codes in the whole set
    total_pages: int  # 0 for an empty set

    @property
    def start_ordinal(self) -> int:
        return (self.page - 1) * self.page_size + 1

    @property
    def end_ordinal(self) -> int:
        return self.start_ordinal + len(self.items) - 1

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def _positive(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")
    if value < 1:
        raise ValueError(f"{name} must be ≥ 1")
    return value


def paginate(
    codes: Sequence[ColorCode], page_size: int = PAGE_SIZE, page_number: int = 1
) -> Page:
    """
    Slice `codes` into page `page_number` of `page_size` items.

    A page number past the end is clamped to the last page. An empty set
    gives page 1 of 0 with no items (start_ordinal 1, end_ordinal 0).
    """
    _positive("page_size", page_size)
    _positive("page_number", page_number)

    total = len(codes)
    total_pages = -(-total // page_size)
    page = min(page_number, max(total_pages, 1))
    start = (page - 1) * page_size
    return Page(
        items=tuple(codes[start : start + page_size]),
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
    )


__all__ = ["PAGE_SIZE", "Page", "paginate"]
