"""
Masonry column distribution for the gallery grid.

Photos are packed greedily into the currently shortest column. Rendered
heights are unknown until images load, so each photo gets an estimated
height derived from its position in the input only. The result is
reproducible for a given input order but is not guaranteed to look balanced
once real images are measured.
"""
from typing import List, Sequence, TypeVar

T = TypeVar("T")

BASE_HEIGHT_PX = 200
HEIGHT_STEP_PX = 100

# (max viewport width exclusive, columns), checked in order
COLUMN_BREAKPOINTS = (
    (640, 1),
    (768, 2),
    (1024, 3),
)
MAX_COLUMNS = 4


def estimate_height(index: int) -> int:
    """Estimated height in px of the photo at position index of the input."""
    return BASE_HEIGHT_PX + (index % 3) * HEIGHT_STEP_PX


def distribute(photos: Sequence[T], column_count: int) -> List[List[T]]:
    """
    Assign photos to column_count columns, shortest column first.

    Ties go to the lowest column index. Photos keep their input order within
    a column, and every column is returned even when it stays empty.

    Raises:
        ValueError: If column_count is not positive
    """
    if column_count <= 0:
        raise ValueError("column_count must be > 0")

    columns: List[List[T]] = [[] for _ in range(column_count)]
    heights = [0] * column_count

    for index, photo in enumerate(photos):
        # min() returns the first minimum, i.e. the lowest index on ties
        col = min(range(column_count), key=lambda c: heights[c])
        columns[col].append(photo)
        heights[col] += estimate_height(index)

    return columns


def columns_for_width(viewport_width_px: int) -> int:
    """
    Responsive column count for a viewport width.

    Raises:
        ValueError: If viewport_width_px is not positive
    """
    if viewport_width_px <= 0:
        raise ValueError("viewport_width_px must be > 0")
    for max_width, columns in COLUMN_BREAKPOINTS:
        if viewport_width_px < max_width:
            return columns
    return MAX_COLUMNS
