from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import cv2

from ..config import OutputSettings
from ..errors import ImageReadError, ImageWriteError, OutputDirectoryError
from ..regions.extraction import ExtractedRegion
from ..logging import get_logger

logger = get_logger(__name__)

REGION_PREFIX = "region"
ORIGINAL_STEM = "original"


def read_image(path: Path | str) -> np.ndarray:
    """Read a colour image from disk as a BGR array."""
    path = Path(path)
    if not path.is_file():
        raise ImageReadError(f"Image file does not exist: {path}")

    # cv2.imread cannot open non-ASCII paths on Windows; decode from bytes instead
    data = np.fromfile(str(path), dtype=np.uint8)
    image = cv2.imdecode(data, cv2.IMREAD_COLOR)
    if image is None:
        raise ImageReadError(f"Could not decode image: {path}")

    logger.debug(f"Read {path} as {image.shape}")
    return image


def ensure_output_dir(path: Path | str) -> Path:
    path = Path(path)
    if not path.exists():
        raise OutputDirectoryError(f"Output directory does not exist: {path}")
    if not path.is_dir():
        raise OutputDirectoryError(f"Output path is not a directory: {path}")
    return path


def _encode_params(settings: OutputSettings) -> list[int]:
    if settings.image_format in ("jpg", "jpeg"):
        return [cv2.IMWRITE_JPEG_QUALITY, settings.jpeg_quality]
    return []


def write_image(path: Path, image: np.ndarray, settings: OutputSettings | None = None) -> Path:
    """
    Encode and write one image.

    Raises:
        ImageWriteError: if encoding or writing fails
    """
    if settings is None:
        settings = OutputSettings()

    ext = path.suffix or f".{settings.image_format}"
    try:
        ok, buffer = cv2.imencode(ext, image, _encode_params(settings))
    except cv2.error as exc:
        raise ImageWriteError(f"Failed to encode {path}: {exc}") from exc
    if not ok:
        raise ImageWriteError(f"Failed to encode {path}")

    try:
        buffer.tofile(str(path))
    except OSError as exc:
        raise ImageWriteError(f"Failed to write {path}: {exc}") from exc

    return path


def region_file_name(index: int, settings: OutputSettings) -> str:
    return f"{REGION_PREFIX}-{index}.{settings.image_format}"


def save_regions(
    regions: Sequence[ExtractedRegion],
    output_dir: Path,
    settings: OutputSettings | None = None,
) -> list[Path]:
    """Write each region as region-<n>, numbered from 1 in order."""
    if settings is None:
        settings = OutputSettings()

    paths = []
    for region in regions:
        path = output_dir / region_file_name(region.index, settings)
        write_image(path, region.image, settings)
        logger.debug(f"Saved region {region.index} {region.rect.as_tuple()} to {path}")
        paths.append(path)

    logger.info(f"Saved {len(paths)} regions to {output_dir}")
    return paths


def save_original(image: np.ndarray, output_dir: Path, settings: OutputSettings | None = None) -> Path:
    if settings is None:
        settings = OutputSettings()
    return write_image(output_dir / f"{ORIGINAL_STEM}.{settings.image_format}", image, settings)
