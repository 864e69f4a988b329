"""Run manifest generation."""

from .manifest import Manifest, ManifestItem, build_manifest, write_manifest_json, load_manifest_json

__all__ = [
    "Manifest",
    "ManifestItem",
    "build_manifest",
    "write_manifest_json",
    "load_manifest_json",
]
