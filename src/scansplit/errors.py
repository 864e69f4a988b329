"""Exceptions raised by the scan splitting pipeline."""


class ScanSplitError(Exception):
    """Base class for all scansplit errors."""


class ImageReadError(ScanSplitError):
    """Raised when the input image cannot be read or decoded."""


class ImageWriteError(ScanSplitError):
    """Raised when an output image, the manifest or the debug directory cannot be written."""


class OutputDirectoryError(ScanSplitError):
    """Raised when the output directory is missing or not a directory."""


class RegionExtractionError(ScanSplitError):
    """Raised when a single region cannot be cropped from the source image."""


class RegionOutOfBoundsError(RegionExtractionError):
    """Raised when a region does not fit inside the source image."""

    def __init__(self, rect, image_width: int, image_height: int) -> None:
        self.rect = rect
        self.image_width = image_width
        self.image_height = image_height
        super().__init__(
            f"Region {rect.as_tuple()} does not fit in a {image_width}x{image_height} image"
        )


class EmptyRegionError(RegionExtractionError):
    """Raised when a region covers no pixels."""

    def __init__(self, rect) -> None:
        self.rect = rect
        super().__init__(f"Region {rect.as_tuple()} has zero area")
