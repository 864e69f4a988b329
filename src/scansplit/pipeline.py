"""
Scan splitting pipeline.

raw image -> edge map -> contours -> bounding rectangles -> filter -> crops
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import numpy as np

from .config import Settings
from .debug.visualize import render_debug_images, save_debug_images
from .io.images import ensure_output_dir, read_image, save_original, save_regions
from .output.manifest import build_manifest, write_manifest_json
from .regions.contours import find_external_contours
from .regions.edges import compute_edge_map, preprocess
from .regions.extraction import ExtractionResult, extract_regions
from .regions.filtering import filter_regions
from .regions.geometry import Rectangle, bounding_rects
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class SplitResult:
    candidates: List[Rectangle]
    valid: List[Rectangle]
    extraction: ExtractionResult
    # Only kept when debugging
    gray: Optional[np.ndarray] = None
    edge_map: Optional[np.ndarray] = None
    contours: Optional[List[np.ndarray]] = None


@dataclass
class RunReport:
    """Outcome of one split run."""
    source: Path
    output_dir: Path
    candidate_count: int
    region_paths: List[Path] = field(default_factory=list)
    original_path: Optional[Path] = None
    manifest_path: Optional[Path] = None
    debug_paths: List[Path] = field(default_factory=list)
    skipped_count: int = 0

    @property
    def region_count(self) -> int:
        return len(self.region_paths)


def split_image(
    image: np.ndarray,
    settings: Optional[Settings] = None,
    keep_debug: bool = False,
) -> SplitResult:
    """
    Find and crop the photos contained in one scanned image.

    Args:
        image: Scanned image, BGR or grayscale
        settings: Pipeline settings (defaults if None)
        keep_debug: Keep the grayscale image, edge map and contours on the result

    Returns:
        SplitResult with the candidate and valid rectangles and the crops
    """
    if settings is None:
        settings = Settings()

    logger.info(f"Preprocessing {image.shape[1]}x{image.shape[0]} image")
    gray = preprocess(image, settings.edges)

    logger.info(f"Detecting edges with {settings.edges.detector.value}")
    edge_map = compute_edge_map(image, settings.edges, gray=gray)

    logger.info("Tracing contours")
    contours = find_external_contours(edge_map)

    logger.info(f"Approximating {len(contours)} contours to rectangular areas")
    candidates = bounding_rects(contours)

    logger.info("Removing nested and undersized areas")
    valid = filter_regions(
        candidates,
        min_width=settings.regions.min_width,
        min_height=settings.regions.min_height,
    )
    logger.info(f"{len(valid)} of {len(candidates)} areas kept")

    logger.info("Extracting photos from the remaining areas")
    extraction = extract_regions(image, valid)

    result = SplitResult(candidates=candidates, valid=valid, extraction=extraction)
    if keep_debug:
        result.gray = gray
        result.edge_map = edge_map
        result.contours = contours
    return result


def run(image_path: Path, output_dir: Path, settings: Optional[Settings] = None) -> RunReport:
    """
    Split one scan file into per-photo files.

    Writes region-<n> for every extracted photo, then a copy of the original
    image, plus the manifest and debug images when enabled. A scan with no
    photos still produces the original copy.

    Raises:
        OutputDirectoryError: if ``output_dir`` is missing or not a directory
        ImageReadError: if the scan cannot be read
        ImageWriteError: if an output file cannot be written
    """
    if settings is None:
        settings = Settings()
    out = settings.output

    output_dir = ensure_output_dir(output_dir)
    image = read_image(image_path)

    result = split_image(image, settings, keep_debug=out.debug)
    regions = result.extraction.regions

    if not regions:
        logger.warning("No regions found; only the original image will be written")

    report = RunReport(
        source=Path(image_path),
        output_dir=output_dir,
        candidate_count=len(result.candidates),
        skipped_count=result.extraction.skipped_count,
    )
    report.region_paths = save_regions(regions, output_dir, out)
    report.original_path = save_original(image, output_dir, out)

    if out.write_manifest:
        manifest = build_manifest(
            source_image=report.source,
            image_shape=image.shape,
            settings=settings,
            regions=regions,
            region_paths=report.region_paths,
            candidate_count=len(result.candidates),
            valid_count=len(result.valid),
            skipped_count=report.skipped_count,
            original_path=report.original_path,
        )
        report.manifest_path = write_manifest_json(manifest, output_dir)

    if out.debug:
        debug_images = render_debug_images(
            gray=result.gray,
            edge_map=result.edge_map,
            contours=result.contours,
            candidates=result.candidates,
            valid=result.valid,
            seed=out.debug_seed,
        )
        report.debug_paths = list(save_debug_images(debug_images, output_dir, out).values())

    if report.skipped_count:
        logger.warning(f"{report.skipped_count} regions were skipped")

    return report
