"""
Pagination helpers for the gallery.
Page math lives here so the store and the pagination controls agree on
offsets and page counts.
"""
import math
from typing import List, Tuple, Union

# Marker for a skipped range in the page window
ELLIPSIS = "ellipsis"

# Page windows for at most this many pages show every page
MAX_UNCOLLAPSED_PAGES = 7

PageEntry = Union[int, str]


def total_pages(total: int, page_size: int) -> int:
    """
    Number of pages needed to show total items.

    Args:
        total: Number of items matching the current filter
        page_size: Items per page

    Returns:
        int: ceil(total / page_size), 0 when there are no items

    Raises:
        ValueError: If total is negative or page_size is not positive
    """
    if total < 0:
        raise ValueError("total must be >= 0")
    if page_size <= 0:
        raise ValueError("page_size must be > 0")
    return math.ceil(total / page_size)


def page_range(page: int, page_size: int) -> Tuple[int, int]:
    """
    Convert a 1-based page number to inclusive zero-based row bounds.

    The span end - start + 1 always equals page_size.

    Raises:
        ValueError: If page or page_size is not positive
    """
    if page <= 0:
        raise ValueError("page must be >= 1")
    if page_size <= 0:
        raise ValueError("page_size must be > 0")
    start = (page - 1) * page_size
    end = start + page_size - 1
    return start, end


def page_window(current_page: int, total_pages: int) -> List[PageEntry]:
    """
    Page numbers to render around current_page, with ELLIPSIS for skipped ranges.

    Up to MAX_UNCOLLAPSED_PAGES pages are listed in full. Beyond that the
    first and last page are always present along with the neighbours of
    current_page, which keeps the control at seven entries or fewer.

    Returns:
        list: page numbers and ELLIPSIS markers; empty when total_pages <= 1
    """
    if total_pages <= 1:
        return []

    if total_pages <= MAX_UNCOLLAPSED_PAGES:
        return list(range(1, total_pages + 1))

    pages: List[PageEntry] = [1]

    if current_page > 3:
        pages.append(ELLIPSIS)

    start = max(2, current_page - 1)
    end = min(total_pages - 1, current_page + 1)
    pages.extend(range(start, end + 1))

    if current_page < total_pages - 2:
        pages.append(ELLIPSIS)

    pages.append(total_pages)
    return pages
