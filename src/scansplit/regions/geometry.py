"""
Rectangle geometry and contour reduction.

Rectangles use image pixel coordinates with a top-left origin.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned rectangle in image pixel coordinates.

    The far edge at bottom_right() is closed for containment (contains_point,
    is_inside) but half-open for cropping, so crop_region returns exactly
    width x height pixels and never the bottom_right() row or column.
    """
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rectangle size must be non-negative, got {self.width}x{self.height}")

    def top_left(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def bottom_right(self) -> Tuple[int, int]:
        """Corner opposite the origin, one past the last covered pixel."""
        return (self.x + self.width, self.y + self.height)

    def area(self) -> int:
        return self.width * self.height

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)

    def contains_point(self, px: float, py: float) -> bool:
        """Closed-interval test: points on any edge count as contained."""
        x1, y1 = self.bottom_right()
        return self.x <= px <= x1 and self.y <= py <= y1

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def is_inside(a: Rectangle, b: Rectangle) -> bool:
    """
    Return True if ``a`` lies within ``b``.

    Both corners of ``a`` must be contained in ``b``. The test is reflexive:
    every rectangle is inside itself, so exact duplicates nest in each other.
    """
    return b.contains_point(*a.top_left()) and b.contains_point(*a.bottom_right())


def bounding_rect(contour: np.ndarray) -> Rectangle:
    """
    Minimal axis-aligned rectangle enclosing every point of a contour.

    Accepts OpenCV's ``(N, 1, 2)`` layout as well as ``(N, 2)``. A single
    point (or an empty contour) gives a zero-area rectangle.
    """
    points = np.asarray(contour, dtype=np.float64).reshape(-1, 2)
    if points.shape[0] == 0:
        return Rectangle(0, 0, 0, 0)

    min_x, min_y = points.min(axis=0)
    max_x, max_y = points.max(axis=0)

    x = int(math.floor(min_x))
    y = int(math.floor(min_y))
    return Rectangle(
        x=x,
        y=y,
        width=int(math.ceil(max_x)) - x,
        height=int(math.ceil(max_y)) - y,
    )


def bounding_rects(contours: Iterable[np.ndarray]) -> List[Rectangle]:
    """Reduce each contour to its bounding rectangle, preserving order."""
    return [bounding_rect(contour) for contour in contours]
