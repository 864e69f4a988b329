"""Split flatbed scans holding several photos into one file per photo."""

from .config import EdgeDetector, EdgeMapConfig, OutputSettings, RegionFilterConfig, Settings
from .pipeline import RunReport, SplitResult, run, split_image

__version__ = "0.1.0"

__all__ = [
    "EdgeDetector",
    "EdgeMapConfig",
    "OutputSettings",
    "RegionFilterConfig",
    "Settings",
    "RunReport",
    "SplitResult",
    "run",
    "split_image",
]
