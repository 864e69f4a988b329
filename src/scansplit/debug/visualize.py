"""
Debug renderings of the intermediate pipeline stages.

Colours come from a generator seeded per renderer so repeated runs produce
identical pictures.
"""

from pathlib import Path
from typing import Dict, Sequence, Tuple

import numpy as np
import cv2

from ..config import OutputSettings
from ..errors import ImageWriteError
from ..io.images import write_image
from ..regions.geometry import Rectangle
from ..logging import get_logger

logger = get_logger(__name__)

DEBUG_DIR_NAME = "debug"


class DebugRenderer:
    """Draws contours and rectangles on a black canvas of the scan's size."""

    def __init__(self, image_shape: Tuple[int, ...], seed: int = 12345) -> None:
        self._height, self._width = image_shape[:2]
        self._rng = np.random.default_rng(seed)

    def _random_color(self) -> Tuple[int, int, int]:
        b, g, r = self._rng.integers(0, 255, size=3)
        return (int(b), int(g), int(r))

    def _blank(self) -> np.ndarray:
        return np.zeros((self._height, self._width, 3), dtype=np.uint8)

    def draw_contours(self, contours: Sequence[np.ndarray], thickness: int = 2) -> np.ndarray:
        canvas = self._blank()
        for contour in contours:
            pts = np.asarray(contour, dtype=np.int32).reshape(-1, 1, 2)
            cv2.drawContours(canvas, [pts], 0, self._random_color(), thickness, cv2.LINE_8)
        return canvas

    def draw_rectangles(self, rects: Sequence[Rectangle], thickness: int = 2) -> np.ndarray:
        canvas = self._blank()
        for rect in rects:
            cv2.rectangle(canvas, rect.top_left(), rect.bottom_right(), self._random_color(), thickness)
        return canvas


def render_debug_images(
    gray: np.ndarray,
    edge_map: np.ndarray,
    contours: Sequence[np.ndarray],
    candidates: Sequence[Rectangle],
    valid: Sequence[Rectangle],
    seed: int = 12345,
) -> Dict[str, np.ndarray]:
    """Build the debug images keyed by file stem, in pipeline order."""
    renderer = DebugRenderer(gray.shape, seed=seed)
    return {
        "filtered": gray,
        "edges": edge_map,
        "contours": renderer.draw_contours(contours, thickness=2),
        "areas": renderer.draw_rectangles(candidates, thickness=2),
        "processed-areas": renderer.draw_rectangles(valid, thickness=3),
    }


def save_debug_images(
    images: Dict[str, np.ndarray],
    output_dir: Path,
    settings: OutputSettings,
) -> Dict[str, Path]:
    debug_dir = output_dir / DEBUG_DIR_NAME
    try:
        debug_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ImageWriteError(f"Cannot create debug directory {debug_dir}: {exc}") from exc

    paths = {}
    for stem, image in images.items():
        path = debug_dir / f"{stem}.{settings.image_format}"
        write_image(path, image, settings)
        paths[stem] = path

    logger.info(f"Wrote {len(paths)} debug images to {debug_dir}")
    return paths
