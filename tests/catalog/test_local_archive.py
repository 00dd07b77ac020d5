"""Tests for the local GeoTIFF archive."""

import numpy as np
import pytest

from landtemp.catalog.base import year_range
from landtemp.catalog.local import LocalArchive, _parse_date
from landtemp.core.exceptions import FetchError
from landtemp.io.cog import COGReader
from landtemp.products.profiles.landsat import LANDSAT5_TM

L1 = LANDSAT5_TM.l1_collection
L2 = LANDSAT5_TM.l2_collection


class TestParseDate:
    @pytest.mark.parametrize(
        "value",
        ["LT05_L1TP_180032_19900611_20200916_02_T1", "1990-06-11", "19900611"],
    )
    def test_formats(self, value):
        parsed = _parse_date(value)
        assert (parsed.year, parsed.month, parsed.day) == (1990, 6, 11)
        assert parsed.tzinfo is not None

    def test_no_date(self):
        assert _parse_date("scene") is None


class TestListing:
    def test_list_collections(self, sample_archive):
        assert LocalArchive(sample_archive).list_collections() == [L1, L2]

    def test_list_scenes(self, sample_archive):
        scenes = LocalArchive(sample_archive).list_scenes(L1)
        assert len(scenes) == 8
        first = scenes[0]
        assert first.scene_id == "LT05_L1TP_180032_19900611_20200916_02_T1"
        assert set(first.band_files) == {"B6", "QA_PIXEL"}
        assert first.cloud_cover == 4.0
        assert first.metadata["K1_CONSTANT_BAND_6"] == pytest.approx(607.76)

    def test_missing_collection(self, sample_archive):
        assert LocalArchive(sample_archive).list_scenes("LANDSAT/LC08/C02/T1") == []

    def test_missing_root(self, tmp_path):
        archive = LocalArchive(tmp_path / "nowhere")
        with pytest.raises(FetchError):
            archive.list_collections()
        with pytest.raises(FetchError):
            archive.search(L1, year_range(1990))


class TestSearch:
    def test_year_and_cloud_cover(self, sample_archive):
        found = LocalArchive(sample_archive).search(L1, year_range(1990), cloud_cover_threshold=30)
        assert [a.date.month for a in found] == [6, 7, 8]
        assert all(a.year == 1990 for a in found)

    def test_raster_bands(self, sample_archive):
        acq = LocalArchive(sample_archive).search(L2, year_range(1991))[0]
        assert set(acq.raster.data_vars) == {"SR_B3", "SR_B4", "ST_B6", "ST_TRAD", "QA_PIXEL"}
        assert acq.raster.sizes == {"y": 32, "x": 32}
        assert acq.raster["SR_B3"].dtype == np.float64
        assert np.issubdtype(acq.raster["QA_PIXEL"].dtype, np.integer)
        assert acq.raster.attrs["crs"] == "EPSG:32635"
        assert len(acq.raster.attrs["transform"]) == 6
        assert acq.require("RADIANCE_MULT_BAND_6") == pytest.approx(0.055375)

    def test_region_outside(self, sample_archive):
        archive = LocalArchive(sample_archive)
        assert archive.search(L1, year_range(1990), region=(-10.0, -10.0, -9.0, -9.0)) == []

    def test_region_clips(self, sample_archive):
        archive = LocalArchive(sample_archive)
        scene = archive.list_scenes(L1)[0]
        with COGReader(str(scene.band_files["B6"])) as reader:
            minx, miny, maxx, maxy = reader.get_bounds()
        west_half = (minx, miny, minx + 0.4 * (maxx - minx), maxy)

        acq = archive.search(L1, year_range(1990), region=west_half)[0]
        assert 0 < acq.raster.sizes["x"] < 32
        assert acq.raster["B6"].shape == acq.raster["QA_PIXEL"].shape

    def test_unreadable_scene_skipped(self, sample_archive, tmp_path):
        import shutil

        root = tmp_path / "archive"
        shutil.copytree(sample_archive, root)
        archive = LocalArchive(root)
        broken = archive.list_scenes(L1)[0]
        broken.band_files["B6"].write_bytes(b"not a tiff")

        found = archive.search(L1, year_range(1990), cloud_cover_threshold=30)
        assert broken.scene_id not in [a.scene_id for a in found]
        assert len(found) == 2
