"""Debug renderings of intermediate pipeline stages."""

from .visualize import DebugRenderer, render_debug_images, save_debug_images

__all__ = [
    "DebugRenderer",
    "render_debug_images",
    "save_debug_images",
]
