"""
Region extraction.

Crops each valid rectangle out of the source image.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .geometry import Rectangle
from ..errors import EmptyRegionError, RegionExtractionError, RegionOutOfBoundsError
from ..logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class ExtractedRegion:
    """One cropped photo, numbered from 1 in output order."""
    index: int
    rect: Rectangle
    image: np.ndarray

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])


@dataclass
class ExtractionResult:
    regions: List[ExtractedRegion] = field(default_factory=list)
    skipped: List[Tuple[Rectangle, RegionExtractionError]] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def is_empty(self) -> bool:
        return not self.regions


def crop_region(image: np.ndarray, rect: Rectangle, copy: bool = True) -> np.ndarray:
    """
    Return the pixels of ``image`` covered by ``rect``.

    With ``copy=False`` the result is a numpy view that shares memory with
    ``image``; writes to either one are visible through the other.

    Raises:
        RegionOutOfBoundsError: if the rectangle does not fit in the image
        EmptyRegionError: if the rectangle has zero width or height
    """
    img_height, img_width = image.shape[:2]
    x1, y1 = rect.bottom_right()
    if rect.x < 0 or rect.y < 0 or x1 > img_width or y1 > img_height:
        raise RegionOutOfBoundsError(rect, img_width, img_height)
    if rect.area() == 0:
        raise EmptyRegionError(rect)

    view = image[rect.y:y1, rect.x:x1]
    return view.copy() if copy else view


def extract_regions(
    image: np.ndarray,
    rects: Sequence[Rectangle],
    copy: bool = True,
) -> ExtractionResult:
    """
    Crop every rectangle, skipping the ones that fall outside the image
    or cover no pixels.

    Args:
        image: Source image (height, width[, channels])
        rects: Valid rectangles, in output order
        copy: Return independent copies rather than views of ``image``

    Returns:
        ExtractionResult with the cropped regions and the skipped rectangles
    """
    result = ExtractionResult()

    for rect in rects:
        try:
            pixels = crop_region(image, rect, copy=copy)
        except RegionExtractionError as exc:
            logger.warning(f"Skipping region: {exc}")
            result.skipped.append((rect, exc))
            continue

        result.regions.append(
            ExtractedRegion(index=len(result.regions) + 1, rect=rect, image=pixels)
        )

    if result.skipped:
        logger.warning(f"Skipped {result.skipped_count} of {len(rects)} regions that could not be cropped")

    return result
