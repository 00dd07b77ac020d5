"""Tests for the LST compositor."""

import numpy as np
import pytest
import xarray as xr

from landtemp.retrieval.compositor import (
    KELVIN_OFFSET,
    celsius_to_kelvin,
    composite,
    kelvin_to_celsius,
    land_surface_temperature,
)


def _da(values):
    arr = np.asarray(values, dtype=np.float64)
    return xr.DataArray(arr, dims=("y", "x")[: arr.ndim])


class TestUnits:
    @pytest.mark.parametrize("kelvin", [0.0, 273.15, 292.4615, 330.0])
    def test_round_trip(self, kelvin):
        assert celsius_to_kelvin(kelvin_to_celsius(kelvin)) == pytest.approx(kelvin)

    def test_offset(self):
        assert kelvin_to_celsius(KELVIN_OFFSET) == 0.0


class TestLandSurfaceTemperature:
    def test_unit_emissivity_is_identity(self):
        bt = _da([[280.0, 290.0, 300.0]])
        out = land_surface_temperature(bt, _da([[1.0, 1.0, 1.0]]))
        np.testing.assert_allclose(out.values, bt.values)

    def test_landsat5_example(self):
        lst_k = float(land_surface_temperature(_da(288.7919), _da(0.98)))
        assert lst_k == pytest.approx(292.46, abs=0.01)

    def test_lower_emissivity_is_warmer(self):
        bt = _da([[290.0, 290.0]])
        out = land_surface_temperature(bt, _da([[0.99, 0.97]])).values[0]
        assert out[1] > out[0] > 290.0

    @pytest.mark.parametrize("em", [0.0, -0.5, np.nan])
    def test_invalid_emissivity_is_nan(self, em):
        assert np.isnan(float(land_surface_temperature(_da(290.0), _da(em))))


class TestComposite:
    def test_adds_kelvin_and_celsius(self, raster, emissivity_098, profile):
        out = composite(raster(BT=288.7919), emissivity_098, profile)
        assert out["LST_K"].attrs["units"] == "K"
        assert out["LST"].attrs["units"] == "degC"
        assert out["LST"].values == pytest.approx(np.full((2, 2), 19.31), abs=0.05)
        np.testing.assert_allclose(out["LST"].values, out["LST_K"].values - 273.15)

    def test_without_emissivity(self, raster, profile):
        out = composite(raster(BT=300.0), None, profile)
        assert out["LST"].values == pytest.approx(np.full((2, 2), 26.85))

    def test_remasks_every_band(self, raster, profile):
        em = raster(EM=np.array([[0.98, np.nan], [0.98, 0.98]]))
        out = composite(raster(BT=290.0, radiance=7.8), em, profile)
        for band in ("BT", "radiance", "LST_K", "LST"):
            assert np.isnan(out[band].values[0, 1])
            assert not np.isnan(out[band].values[0, 0])

    def test_requires_bt(self, raster, emissivity_098, profile):
        with pytest.raises(KeyError):
            composite(raster(radiance=7.8), emissivity_098, profile)
