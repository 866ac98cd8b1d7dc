"""
Service for handling pagination logic.

Provides pure, testable pagination functions: page counts, page slice bounds
and the visible-page window ("lot") shown by a page selector.
Follows Single Responsibility Principle - only handles pagination math.
"""

import math
from typing import List, Optional, Sequence, Tuple

from config import LIST_PAGE_LOT_SIZE

# Number of page buttons shown at once by the page selector
QUANTITY_PAGE_PER_LOT = LIST_PAGE_LOT_SIZE


class PaginationService:
    """Service for pagination calculations and visible-page windows."""

    def __init__(self, lot_size: int = QUANTITY_PAGE_PER_LOT):
        self.lot_size = lot_size

    def calculate_total_pages(self, total_items: int, per_page: int) -> int:
        """
        Calculate the number of pages for a list of items.

        Args:
            total_items: Number of items in the (filtered) list
            per_page: Items per page; 0 puts everything on one page

        Returns:
            0 for an empty list, 1 when paging is disabled, otherwise
            ceil(total_items / per_page)
        """
        if total_items == 0:
            return 0
        if not per_page:
            return 1
        return math.ceil(total_items / per_page)

    def validate_page(self, page: int, page_count: int) -> int:
        """
        Validate and clamp page number to valid range.

        Args:
            page: Requested page number
            page_count: Total number of pages

        Returns:
            Valid page number (1 to page_count, or 1 if no pages)
        """
        if page_count == 0:
            return 1

        return max(1, min(page, page_count))

    def coerce_page(self, page) -> int:
        """Turn page input into an int; anything non-numeric becomes page 1."""
        if isinstance(page, bool):
            return 1
        try:
            return int(page)
        except (TypeError, ValueError, OverflowError):
            return 1

    def page_bounds(self, page: int, per_page: int, total_items: int) -> Tuple[int, int]:
        """
        Get the [start, end) item positions of a page.

        No clamping is done: a page past the data yields an empty range.

        Args:
            page: Page number (1-indexed)
            per_page: Items per page; 0 means the whole list
            total_items: Number of items in the list

        Returns:
            Tuple of (start, end) positions, both within [0, total_items]
        """
        if not per_page:
            return 0, total_items

        start = (page - 1) * per_page
        end = start + per_page
        if start < 0:
            # pages below 1 hold nothing
            return 0, 0
        return min(start, total_items), min(end, total_items)

    def generate_visible_pages(
        self,
        total_pages: int,
        current_window: Optional[Sequence[int]] = None,
        forward: bool = True
    ) -> Optional[List[int]]:
        """
        Compute the next visible-page window.

        Windows move in whole lots relative to the previous window's edge
        rather than being centred on the current page, so the selector
        never shows a partial lot in the middle of the range.

        Args:
            total_pages: Number of pages in the list
            current_window: Previous window, or None to start from page 1
            forward: Slide direction when a previous window exists

        Returns:
            The new window, or None when there are no pages
        """
        if total_pages < 1:
            return None

        if not current_window:
            low, high = 1, min(self.lot_size, total_pages)
        else:
            last = current_window[-1]
            if forward:
                low = last + 1
                high = min(last + self.lot_size, total_pages)
            else:
                high = last - len(current_window)
                low = max(high - self.lot_size + 1, 1)

        return list(range(low, high + 1))
