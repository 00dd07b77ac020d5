"""
LandTemp Test Configuration

Shared pytest fixtures for all tests.
"""

from datetime import UTC, datetime

import numpy as np
import pytest
import xarray as xr

import landtemp.core.bandmath  # noqa: F401
from landtemp.config import RunConfig
from landtemp.core.acquisition import Acquisition
from landtemp.products.profiles.landsat import LANDSAT5_TM
from landtemp.sample_data import QA_CLEAR, THERMAL_CONSTANTS

# Landsat 5 MTL constants of the worked 1990 example
THERMAL_METADATA = dict(THERMAL_CONSTANTS)


def make_raster(shape=(2, 2), **bands) -> xr.Dataset:
    """Dataset with dims (y, x); scalars are broadcast to ``shape``."""
    data_vars = {}
    for name, value in bands.items():
        arr = np.asarray(value)
        if arr.ndim == 0:
            arr = np.full(shape, value)
        data_vars[name] = (("y", "x"), arr)
    return xr.Dataset(data_vars)


@pytest.fixture
def raster():
    """Factory for small (y, x) rasters"""
    return make_raster


@pytest.fixture
def acquisition():
    """Factory for acquisitions with sensible defaults"""

    def _make(
        bands,
        date=datetime(1990, 6, 11, tzinfo=UTC),
        scene_id=None,
        cloud_cover=10.0,
        metadata=None,
    ):
        meta = dict(THERMAL_METADATA)
        if cloud_cover is not None:
            meta["CLOUD_COVER"] = cloud_cover
        meta.update(metadata or {})
        if scene_id is None:
            scene_id = f"LT05_L1TP_180032_{date:%Y%m%d}_20200916_02_T1"
        ds = bands if isinstance(bands, xr.Dataset) else make_raster(**bands)
        return Acquisition(scene_id, date, ds, meta)

    return _make


@pytest.fixture
def thermal_acquisition(acquisition):
    """1990 Level-1 scene: DN 120 everywhere, clear sky"""
    return acquisition({"B6": 120.0, "QA_PIXEL": QA_CLEAR})


@pytest.fixture
def reflectance_acquisition(acquisition):
    """1990 Level-2 scene with vegetated reflectance"""
    scale, offset = LANDSAT5_TM.reflectance_scale, LANDSAT5_TM.reflectance_offset
    return acquisition(
        {
            "SR_B3": (0.05 - offset) / scale,
            "SR_B4": (0.40 - offset) / scale,
            "ST_B6": (300.0 - LANDSAT5_TM.st_offset) / LANDSAT5_TM.st_scale,
            "ST_TRAD": 7827.43,
            "QA_PIXEL": QA_CLEAR,
        },
        scene_id="LT05_L2SP_180032_19900611_20200916_02_T1",
    )


@pytest.fixture
def emissivity_098():
    """Emissivity raster with EM = 0.98 everywhere"""
    return make_raster(EM=0.98)


@pytest.fixture
def profile():
    return LANDSAT5_TM


@pytest.fixture
def config():
    """Single-year DN run without retry delays"""
    return RunConfig(start_year=1990, end_year=1990, retry_delay=0.0)


@pytest.fixture(scope="session")
def sample_archive(tmp_path_factory):
    """Synthetic Landsat 5 archive for 1990 and 1991"""
    from landtemp.sample_data import create_sample_archive

    return create_sample_archive(str(tmp_path_factory.mktemp("archive")), years=(1990, 1991))
