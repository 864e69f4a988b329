from dataclasses import dataclass, field
from enum import Enum


class EdgeDetector(str, Enum):
    """Edge detection algorithm used to build the edge map."""
    CANNY = "canny"
    LAPLACIAN = "laplacian"


SUPPORTED_FORMATS = ("jpg", "jpeg", "png", "bmp", "tiff")


def _require_odd_kernel(name: str, size: int) -> None:
    if size < 1 or size % 2 == 0:
        raise ValueError(f"{name} must be a positive odd integer, got {size}")


@dataclass
class EdgeMapConfig:
    """Preprocessing and edge detection options."""

    detector: EdgeDetector = EdgeDetector.LAPLACIAN

    # Gaussian blur applied to the grayscale image
    gaussian_blur: bool = True
    gaussian_kernel_size: int = 3

    # Canny: high threshold = low * ratio
    canny_low_threshold: int = 40
    canny_ratio: int = 3
    canny_kernel_size: int = 3

    laplacian_kernel_size: int = 3

    # Binary thresholding of the edge map, [0, 256)
    thresholding: bool = False
    threshold: int = 16

    # Box filter over the thresholded edges (ignored without thresholding)
    convolution: bool = False
    filter_kernel_size: int = 3

    def __post_init__(self) -> None:
        self.detector = EdgeDetector(self.detector)
        _require_odd_kernel("gaussian_kernel_size", self.gaussian_kernel_size)
        _require_odd_kernel("laplacian_kernel_size", self.laplacian_kernel_size)
        if self.canny_kernel_size not in (3, 5, 7):
            raise ValueError(f"canny_kernel_size must be 3, 5 or 7, got {self.canny_kernel_size}")
        if self.canny_low_threshold < 0 or self.canny_ratio < 1:
            raise ValueError("Canny thresholds must be non-negative with a ratio >= 1")
        if not 0 <= self.threshold < 256:
            raise ValueError(f"threshold must be in [0, 256), got {self.threshold}")
        if self.filter_kernel_size < 1:
            raise ValueError(f"filter_kernel_size must be positive, got {self.filter_kernel_size}")


@dataclass
class RegionFilterConfig:
    """Minimum footprint of an extracted photo, in pixels."""
    min_width: int = 32
    min_height: int = 32

    def __post_init__(self) -> None:
        if self.min_width < 0 or self.min_height < 0:
            raise ValueError(
                f"Minimum region size must be non-negative, got {self.min_width}x{self.min_height}"
            )


@dataclass
class OutputSettings:
    image_format: str = "jpg"
    jpeg_quality: int = 100
    write_manifest: bool = True
    debug: bool = False
    debug_seed: int = 12345

    def __post_init__(self) -> None:
        self.image_format = self.image_format.lower().lstrip(".")
        if self.image_format not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported image format '{self.image_format}', expected one of {SUPPORTED_FORMATS}"
            )
        if not 0 <= self.jpeg_quality <= 100:
            raise ValueError(f"jpeg_quality must be in [0, 100], got {self.jpeg_quality}")


@dataclass
class Settings:
    edges: EdgeMapConfig = field(default_factory=EdgeMapConfig)
    regions: RegionFilterConfig = field(default_factory=RegionFilterConfig)
    output: OutputSettings = field(default_factory=OutputSettings)
