"""Tests for the NDVI -> FVC -> LAI -> emissivity chain."""

import math

import numpy as np
import pytest
import xarray as xr

from landtemp.retrieval.emissivity import (
    DEFAULT_MODEL,
    EmissivityModel,
    emissivity,
    estimate_emissivity,
    fvc,
    lai,
    ndvi,
    reflectance_composite,
)
from landtemp.sample_data import QA_CLEAR, QA_CLOUD


def _da(values):
    arr = np.asarray(values, dtype=np.float64)
    return xr.DataArray(arr, dims=("y", "x")[: arr.ndim])


class TestNDVI:
    def test_value(self):
        assert float(ndvi(_da(0.40), _da(0.05))) == pytest.approx(0.35 / 0.45)

    def test_range(self):
        rng = np.random.default_rng(0)
        nir = _da(rng.uniform(0.0, 1.0, (8, 8)))
        red = _da(rng.uniform(0.001, 1.0, (8, 8)))
        values = ndvi(nir, red).values
        assert np.all((values >= -1.0) & (values <= 1.0))

    def test_zero_denominator(self):
        assert np.isnan(float(ndvi(_da(0.0), _da(0.0))))


class TestFVC:
    def test_clamped(self):
        values = fvc(_da([[-1.0, 0.0, 0.5, 1.0]])).values
        assert values.min() >= 0.0
        assert values.max() <= 1.0

    def test_ndvi_one_gives_full_cover(self):
        assert float(fvc(_da(1.0))) == 1.0

    def test_linear_part(self):
        assert float(fvc(_da(0.5))) == pytest.approx(1.1101 * 0.5 - 0.0857)


class TestLAI:
    def test_value(self):
        assert float(lai(_da(0.5))) == pytest.approx(-2.0 * math.log(0.5))

    def test_full_cover_is_nan(self):
        assert np.isnan(float(lai(_da(1.0))))

    def test_bare_soil(self):
        assert float(lai(_da(0.0))) == 0.0


class TestEmissivity:
    def test_bounds(self):
        values = emissivity(_da(np.linspace(0.0, 10.0, 21))).values
        assert values.min() == pytest.approx(0.97)
        assert values.max() <= 1.0

    def test_lai_ten_is_clipped(self):
        # 0.97 + 0.0033 * 10 = 1.003
        assert float(emissivity(_da(10.0))) == 1.0

    def test_custom_model(self):
        model = EmissivityModel(em_base=0.96, em_slope=0.01)
        assert float(emissivity(_da(1.0), model)) == pytest.approx(0.97)

    def test_model_round_trip(self):
        model = EmissivityModel(fvc_gain=1.2)
        assert EmissivityModel.from_dict(model.to_dict()) == model
        assert DEFAULT_MODEL.max_emissivity == 1.0


class TestEstimateEmissivity:
    def test_bands(self, raster):
        out = estimate_emissivity(raster(red=0.05, nir=0.40))
        assert out.bands.names == ["NDVI", "FVC", "LAI", "EM"]
        assert out.bands.units == {"NDVI": "1", "FVC": "fraction", "LAI": "m2/m2", "EM": "1"}

        n = 0.35 / 0.45
        f = 1.1101 * n - 0.0857
        expected = 0.97 + 0.0033 * (-2.0 * math.log(1.0 - f))
        assert out["EM"].values == pytest.approx(np.full((2, 2), expected))

    def test_undefined_pixels_masked_in_every_band(self, raster):
        # Pixel 0: zero denominator; pixel 1: NDVI 1 -> FVC 1 -> LAI NaN
        out = estimate_emissivity(
            raster(red=np.array([[0.0, 0.0, 0.05]]), nir=np.array([[0.0, 0.5, 0.40]]))
        )
        for band in out.bands.names:
            np.testing.assert_array_equal(np.isnan(out[band].values), [[True, True, False]])

    def test_requires_red_and_nir(self, raster):
        with pytest.raises(KeyError):
            estimate_emissivity(raster(red=0.05))


class TestReflectanceComposite:
    def test_median_of_scenes(self, acquisition, reflectance_acquisition, profile):
        scale, offset = profile.reflectance_scale, profile.reflectance_offset
        brighter = acquisition(
            {
                "SR_B3": (0.15 - offset) / scale,
                "SR_B4": (0.30 - offset) / scale,
                "QA_PIXEL": QA_CLEAR,
            },
            scene_id="brighter",
        )
        composite, dropped = reflectance_composite([reflectance_acquisition, brighter], profile)
        assert dropped == []
        assert composite.bands.names == ["red", "nir"]
        assert composite["red"].values == pytest.approx(np.full((2, 2), 0.10))
        assert composite["nir"].values == pytest.approx(np.full((2, 2), 0.35))

    def test_cloudy_pixels_left_out(self, acquisition, reflectance_acquisition, profile):
        scale, offset = profile.reflectance_scale, profile.reflectance_offset
        cloudy = acquisition(
            {
                "SR_B3": (0.15 - offset) / scale,
                "SR_B4": (0.30 - offset) / scale,
                "QA_PIXEL": QA_CLOUD,
            },
            scene_id="cloudy",
        )
        composite, _ = reflectance_composite([reflectance_acquisition, cloudy], profile)
        assert composite["red"].values == pytest.approx(np.full((2, 2), 0.05))

    def test_scene_without_band_dropped(self, acquisition, reflectance_acquisition, profile):
        partial = acquisition({"SR_B3": 9000.0, "QA_PIXEL": QA_CLEAR}, scene_id="partial")
        composite, dropped = reflectance_composite([reflectance_acquisition, partial], profile)
        assert dropped == ["partial"]
        assert composite["nir"].values == pytest.approx(np.full((2, 2), 0.40))

    def test_nothing_usable(self, profile):
        assert reflectance_composite([], profile) == (None, [])
