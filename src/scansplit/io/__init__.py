"""Image reading and writing."""

from .images import read_image, write_image, save_regions, save_original, ensure_output_dir

__all__ = [
    "read_image",
    "write_image",
    "save_regions",
    "save_original",
    "ensure_output_dir",
]
