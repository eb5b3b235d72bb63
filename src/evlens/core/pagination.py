"""Page-number pagination over an already filtered result set.

Eligibility filtering happens before slicing, so the page count always
reflects the filtered population rather than the current page.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from evlens.core.errors import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class PageWindow:
    """Position of one page within a result set."""

    page: int
    page_size: int
    total: int
    total_pages: int
    start: int
    end: int

    @classmethod
    def compute(cls, total: int, page: int, page_size: int) -> "PageWindow":
        """Compute the window for a page.

        Args:
            total: Number of items after filtering
            page: 1-based page number
            page_size: Items per page

        Returns:
            PageWindow with slice bounds clamped to the result set

        Raises:
            ValidationError: If page or page_size is below 1
        """
        if page_size < 1:
            raise ValidationError(f"Page size must be at least 1, got {page_size}", field="page_size")
        if page < 1:
            raise ValidationError(f"Page must be at least 1, got {page}", field="page")

        total = max(0, total)
        total_pages = max(1, math.ceil(total / page_size))
        start = min((page - 1) * page_size, total)
        end = min(page * page_size, total)
        return cls(
            page=page,
            page_size=page_size,
            total=total,
            total_pages=total_pages,
            start=start,
            end=end,
        )

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def slice(self, items: Sequence[T]) -> list[T]:
        """Return the items that fall on this page."""
        return list(items[self.start:self.end])

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
            "has_previous": self.has_previous,
            "has_next": self.has_next,
        }
