"""
Region extraction for flatbed scans holding several photos.

Provides the edge map, contour tracing, bounding-box reduction, containment
and size filtering, and cropping stages.
"""

from .geometry import Rectangle, is_inside, bounding_rect, bounding_rects
from .filtering import filter_regions, remove_nested, remove_small
from .extraction import ExtractedRegion, ExtractionResult, crop_region, extract_regions
from .edges import compute_edge_map
from .contours import find_external_contours

__all__ = [
    'Rectangle',
    'is_inside',
    'bounding_rect',
    'bounding_rects',
    'filter_regions',
    'remove_nested',
    'remove_small',
    'ExtractedRegion',
    'ExtractionResult',
    'crop_region',
    'extract_regions',
    'compute_edge_map',
    'find_external_contours',
]
