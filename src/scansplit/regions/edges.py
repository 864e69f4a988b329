"""
Edge map construction.

Converts the scan to grayscale, optionally blurs it, and runs the configured
edge detector. The result is a single-channel uint8 image of the same size.
"""

from typing import Optional

import numpy as np
import cv2

from ..config import EdgeDetector, EdgeMapConfig
from ..logging import get_logger

logger = get_logger(__name__)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert a BGR/BGRA image to grayscale; 2-D input is copied."""
    if image.ndim == 2:
        return image.copy()
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    raise ValueError(f"Unsupported image shape {image.shape}")


def preprocess(image: np.ndarray, config: EdgeMapConfig) -> np.ndarray:
    """Grayscale conversion followed by the optional Gaussian blur."""
    gray = to_grayscale(image)
    if config.gaussian_blur:
        k = config.gaussian_kernel_size
        logger.debug(f"Applying Gaussian blur [kernel_size={k}x{k}]")
        gray = cv2.GaussianBlur(gray, (k, k), 0, 0)
    return gray


def detect_edges(gray: np.ndarray, config: EdgeMapConfig) -> np.ndarray:
    if config.detector is EdgeDetector.CANNY:
        low = config.canny_low_threshold
        logger.debug(f"Canny edge detection [low={low}, high={low * config.canny_ratio}]")
        return cv2.Canny(gray, low, low * config.canny_ratio, apertureSize=config.canny_kernel_size)

    logger.debug(f"Laplacian edge detection [ksize={config.laplacian_kernel_size}]")
    laplacian = cv2.Laplacian(gray, cv2.CV_16S, ksize=config.laplacian_kernel_size)
    return cv2.convertScaleAbs(laplacian)


def compute_edge_map(
    image: np.ndarray,
    config: Optional[EdgeMapConfig] = None,
    gray: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Build the edge map of a scanned image.

    Args:
        image: BGR, BGRA or grayscale numpy array
        config: Edge map options (defaults if None)
        gray: Already preprocessed grayscale image, to skip preprocessing

    Returns:
        uint8 array with the same height and width as ``image``
    """
    if config is None:
        config = EdgeMapConfig()

    if gray is None:
        gray = preprocess(image, config)

    edges = detect_edges(gray, config)

    if config.thresholding:
        _, edges = cv2.threshold(edges, config.threshold, 255, cv2.THRESH_BINARY)

        if config.convolution:
            k = config.filter_kernel_size
            kernel = np.ones((k, k), np.float32)
            edges = cv2.filter2D(edges, -1, kernel)

    return edges
