"""End-to-end tests for the scan splitting pipeline."""

import json

import numpy as np
import pytest

import scansplit.pipeline as pipeline
from scansplit.config import EdgeDetector, EdgeMapConfig, OutputSettings, RegionFilterConfig, Settings
from scansplit.errors import ImageReadError, ImageWriteError, OutputDirectoryError
from scansplit.io.images import read_image
from scansplit.pipeline import run, split_image
from scansplit.regions.filtering import filter_regions
from scansplit.regions.geometry import Rectangle, is_inside
from tests.helpers.scan_factory import DEFAULT_PHOTOS, make_scan_array, make_scan_file

# Edge rings sit a couple of pixels either side of a photo border
TOLERANCE = 4


def _matches_photo(rect: Rectangle, photo) -> bool:
    x, y, w, h, _ = photo
    inner = Rectangle(x + TOLERANCE, y + TOLERANCE, w - 2 * TOLERANCE, h - 2 * TOLERANCE)
    outer = Rectangle(max(0, x - TOLERANCE), max(0, y - TOLERANCE), w + 2 * TOLERANCE, h + 2 * TOLERANCE)
    return is_inside(inner, rect) and is_inside(rect, outer)


def _assert_one_region_per_photo(rects):
    assert len(rects) == len(DEFAULT_PHOTOS)
    for photo in DEFAULT_PHOTOS:
        assert sum(_matches_photo(r, photo) for r in rects) == 1, f"No unique region for photo {photo[:4]}"


class TestSplitImage:
    @pytest.mark.parametrize("detector", list(EdgeDetector))
    def test_finds_each_photo(self, detector):
        settings = Settings(edges=EdgeMapConfig(detector=detector))
        result = split_image(make_scan_array(), settings)

        _assert_one_region_per_photo(result.valid)
        assert len(result.extraction.regions) == len(DEFAULT_PHOTOS)
        assert result.extraction.skipped_count == 0

    def test_inner_detail_is_not_a_separate_photo(self):
        result = split_image(make_scan_array(inner_detail=True))
        _assert_one_region_per_photo(result.valid)

    def test_small_specks_are_dropped(self):
        photos = list(DEFAULT_PHOTOS) + [(250, 230, 10, 10, (0, 0, 0))]
        result = split_image(make_scan_array(photos=photos))

        assert len(result.candidates) == len(photos)
        _assert_one_region_per_photo(result.valid)

    def test_min_size_is_applied(self):
        settings = Settings(regions=RegionFilterConfig(min_width=100, min_height=32))
        result = split_image(make_scan_array(), settings)

        assert all(r.width >= 100 for r in result.valid)
        assert len(result.valid) == 2

    def test_regions_are_crops_of_the_scan(self):
        img = make_scan_array()
        result = split_image(img)

        for region in result.extraction.regions:
            r = region.rect
            assert np.array_equal(region.image, img[r.y:r.y + r.height, r.x:r.x + r.width])

    def test_blank_scan_yields_nothing(self):
        img = np.full((200, 200, 3), 255, dtype=np.uint8)
        result = split_image(img)

        assert result.candidates == []
        assert result.valid == []
        assert result.extraction.is_empty()

    def test_debug_data_only_on_request(self):
        img = make_scan_array()
        assert split_image(img).edge_map is None

        result = split_image(img, keep_debug=True)
        assert result.edge_map.shape == img.shape[:2]
        assert result.gray.shape == img.shape[:2]
        assert len(result.contours) == len(result.candidates)

    def test_repeated_runs_are_identical(self):
        img = make_scan_array()
        assert split_image(img).valid == split_image(img).valid


class TestRun:
    def test_writes_regions_original_and_manifest(self, tmp_path):
        scan = make_scan_file(tmp_path)
        out = tmp_path / "out"
        out.mkdir()

        report = run(scan, out)

        assert report.region_count == len(DEFAULT_PHOTOS)
        assert [p.name for p in report.region_paths] == ["region-1.jpg", "region-2.jpg", "region-3.jpg"]
        assert report.original_path == out / "original.jpg"
        assert report.original_path.exists()
        for path in report.region_paths:
            assert path.exists()

        data = json.loads(report.manifest_path.read_text(encoding="utf-8"))
        assert data["valid_count"] == len(DEFAULT_PHOTOS)
        assert data["total_items"] == len(DEFAULT_PHOTOS)
        assert data["original_file_name"] == "original.jpg"

    def test_written_region_dimensions_match(self, tmp_path):
        scan = make_scan_file(tmp_path)
        out = tmp_path / "out"
        out.mkdir()

        settings = Settings(output=OutputSettings(image_format="png"))
        report = run(scan, out, settings)
        manifest = json.loads(report.manifest_path.read_text(encoding="utf-8"))

        for item, path in zip(manifest["items"], report.region_paths):
            written = read_image(path)
            assert written.shape[:2] == (item["bbox"]["height"], item["bbox"]["width"])

    def test_blank_scan_writes_only_original(self, tmp_path):
        scan = make_scan_file(tmp_path, photos=[])
        out = tmp_path / "out"
        out.mkdir()

        report = run(scan, out, Settings(output=OutputSettings(write_manifest=False)))

        assert report.region_count == 0
        assert report.manifest_path is None
        assert sorted(p.name for p in out.iterdir()) == ["original.jpg"]

    def test_out_of_bounds_region_is_skipped(self, tmp_path, monkeypatch):
        scan = make_scan_file(tmp_path, size=(320, 320))
        out = tmp_path / "out"
        out.mkdir()

        def filter_with_stray(candidates, min_width, min_height):
            return filter_regions(candidates, min_width, min_height) + [Rectangle(300, 300, 40, 40)]

        monkeypatch.setattr(pipeline, "filter_regions", filter_with_stray)
        report = run(scan, out)

        assert report.skipped_count == 1
        assert report.region_count == len(DEFAULT_PHOTOS)
        assert all(p.exists() for p in report.region_paths)

    def test_debug_images_written(self, tmp_path):
        scan = make_scan_file(tmp_path)
        out = tmp_path / "out"
        out.mkdir()

        report = run(scan, out, Settings(output=OutputSettings(debug=True)))

        names = sorted(p.name for p in report.debug_paths)
        assert names == sorted(
            f"{stem}.jpg" for stem in ("filtered", "edges", "contours", "areas", "processed-areas")
        )
        assert all((out / "debug" / n).exists() for n in names)

    def test_missing_output_dir_fails_before_reading(self, tmp_path):
        with pytest.raises(OutputDirectoryError):
            run(tmp_path / "missing.png", tmp_path / "nope")

    def test_output_path_must_be_directory(self, tmp_path):
        scan = make_scan_file(tmp_path)
        with pytest.raises(OutputDirectoryError):
            run(scan, scan)

    def test_unreadable_image(self, tmp_path):
        bogus = tmp_path / "scan.jpg"
        bogus.write_bytes(b"not an image")
        with pytest.raises(ImageReadError):
            run(bogus, tmp_path)

    def test_manifest_write_failure_is_an_image_write_error(self, tmp_path):
        scan = make_scan_file(tmp_path)
        out = tmp_path / "out"
        (out / "manifest.json").mkdir(parents=True)

        with pytest.raises(ImageWriteError):
            run(scan, out)

    def test_debug_dir_blocked_by_file(self, tmp_path):
        scan = make_scan_file(tmp_path)
        out = tmp_path / "out"
        out.mkdir()
        (out / "debug").write_text("")

        with pytest.raises(ImageWriteError):
            run(scan, out, Settings(output=OutputSettings(debug=True)))
