"""
Run manifest for scansplit output.

Describes the source scan, the settings in effect and every region written,
so a run can be audited or replayed.
"""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..config import Settings
from ..errors import ImageWriteError
from ..regions.extraction import ExtractedRegion
from ..logging import get_logger

logger = get_logger(__name__)

MANIFEST_VERSION = "1.0.0"
MANIFEST_FILE_NAME = "manifest.json"


@dataclass(frozen=True)
class ManifestItem:
    """Single written region."""
    index: int                      # 1-based output position
    file_name: str                  # Output file name
    bbox: Dict[str, int]            # Rectangle in source image pixels
    width: int
    height: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Manifest:
    version: str
    source_image: str
    extraction_timestamp: str
    image_width: int
    image_height: int
    settings: Dict[str, Any]
    candidate_count: int
    valid_count: int
    skipped_count: int
    original_file_name: Optional[str]
    items: List[ManifestItem]

    @property
    def total_items(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["items"] = [item.to_dict() for item in self.items]
        result["total_items"] = self.total_items
        return result


def _settings_to_dict(settings: Settings) -> Dict[str, Any]:
    data = asdict(settings)
    data["edges"]["detector"] = settings.edges.detector.value
    return data


def build_manifest(
    source_image: Path,
    image_shape: Sequence[int],
    settings: Settings,
    regions: Sequence[ExtractedRegion],
    region_paths: Sequence[Path],
    candidate_count: int,
    valid_count: int,
    skipped_count: int,
    original_path: Optional[Path] = None,
) -> Manifest:
    """
    Build a manifest from one run's results.

    Args:
        source_image: Path of the scanned input image
        image_shape: Shape of the decoded source image
        settings: Settings the run used
        regions: Extracted regions, in output order
        region_paths: Written file for each region, same order
        candidate_count: Rectangles found before filtering
        valid_count: Rectangles that survived filtering
        skipped_count: Valid rectangles that could not be cropped
        original_path: Where the copy of the original image was written

    Returns:
        Manifest object
    """
    if len(regions) != len(region_paths):
        raise ValueError(f"Got {len(regions)} regions but {len(region_paths)} paths")

    items = [
        ManifestItem(
            index=region.index,
            file_name=path.name,
            bbox=region.rect.to_dict(),
            width=region.width,
            height=region.height,
        )
        for region, path in zip(regions, region_paths)
    ]

    return Manifest(
        version=MANIFEST_VERSION,
        source_image=str(source_image),
        extraction_timestamp=datetime.now().isoformat(),
        image_width=int(image_shape[1]),
        image_height=int(image_shape[0]),
        settings=_settings_to_dict(settings),
        candidate_count=candidate_count,
        valid_count=valid_count,
        skipped_count=skipped_count,
        original_file_name=original_path.name if original_path else None,
        items=items,
    )


def write_manifest_json(manifest: Manifest, output_dir: Path) -> Path:
    """Write 'manifest.json' into output_dir.

    Raises:
        ImageWriteError: If the directory or the file cannot be written.
    """
    manifest_path = output_dir / MANIFEST_FILE_NAME

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with open(manifest_path, 'w', encoding='utf-8') as f:
            json.dump(manifest.to_dict(), f, indent=2, ensure_ascii=False)
    except OSError as exc:
        raise ImageWriteError(f"Failed to write manifest to {manifest_path}: {exc}") from exc

    logger.info(f"Wrote manifest to {manifest_path}")
    return manifest_path


def load_manifest_json(manifest_path: Path) -> Manifest:
    with open(manifest_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    data.pop("total_items", None)
    items = [ManifestItem(**item) for item in data.pop("items")]
    return Manifest(items=items, **data)
