"""
Candidate region filtering.

Removes rectangles nested inside other candidates, then drops the ones
smaller than the configured minimum footprint.
"""

from collections import deque
from typing import List, Sequence

from .geometry import Rectangle, is_inside
from ..logging import get_logger

logger = get_logger(__name__)


def remove_nested(candidates: Sequence[Rectangle]) -> List[Rectangle]:
    """
    Drop every candidate that lies inside another one.

    Candidates are visited in discovery order. Each one is rejected if it is
    inside any candidate still waiting to be visited, whether or not that
    candidate survives later, or inside any candidate already accepted.
    Containment is reflexive, so of two identical rectangles only the later
    one is kept.

    The walk is quadratic; contour counts per scan are in the tens.
    """
    unchecked = deque(candidates)
    valid: List[Rectangle] = []

    while unchecked:
        current = unchecked.popleft()

        if any(is_inside(current, other) for other in unchecked):
            continue

        if any(is_inside(current, accepted) for accepted in valid):
            continue

        valid.append(current)

    return valid


def remove_small(rects: Sequence[Rectangle], min_width: int, min_height: int) -> List[Rectangle]:
    """Keep rectangles at least ``min_width`` wide and ``min_height`` tall."""
    return [r for r in rects if r.width >= min_width and r.height >= min_height]


def filter_regions(
    candidates: Sequence[Rectangle],
    min_width: int = 32,
    min_height: int = 32,
) -> List[Rectangle]:
    """
    Reduce the candidate set to the valid set.

    Args:
        candidates: Bounding rectangles in contour discovery order
        min_width: Minimum region width in pixels
        min_height: Minimum region height in pixels

    Returns:
        Surviving rectangles in acceptance order
    """
    if min_width < 0 or min_height < 0:
        raise ValueError(f"Minimum region size must be non-negative, got {min_width}x{min_height}")

    outer = remove_nested(candidates)
    logger.debug(f"Containment pass removed {len(candidates) - len(outer)} of {len(candidates)} candidates")

    valid = remove_small(outer, min_width, min_height)
    logger.debug(f"Size pass removed {len(outer) - len(valid)} regions below {min_width}x{min_height}")

    return valid
