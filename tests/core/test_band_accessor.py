"""Tests for the xarray band accessor."""

import numpy as np
import pytest
import xarray as xr

import landtemp.core.bandmath  # noqa: F401
from landtemp.core.bandmath import with_units


@pytest.fixture
def sample_ds():
    bt = np.array([[290.0, 291.0], [np.nan, 293.0]])
    em = np.array([[0.98, np.nan], [0.97, 0.99]])
    return xr.Dataset(
        {
            "BT": (("y", "x"), bt, {"units": "K"}),
            "EM": (("y", "x"), em, {"units": "1"}),
        }
    )


class TestBandAccessor:
    def test_accessor_exists(self, sample_ds):
        assert hasattr(sample_ds, "bands")

    def test_names_and_units(self, sample_ds):
        assert sample_ds.bands.names == ["BT", "EM"]
        assert sample_ds.bands.units == {"BT": "K", "EM": "1"}

    def test_valid_requires_every_band(self, sample_ds):
        valid = sample_ds.bands.valid
        assert valid.name == "valid"
        np.testing.assert_array_equal(valid.values, [[True, False], [False, True]])

    def test_valid_empty_dataset(self):
        with pytest.raises(ValueError):
            xr.Dataset().bands.valid

    def test_require(self, sample_ds):
        sample_ds.bands.require("BT", "EM")
        with pytest.raises(KeyError, match="LST"):
            sample_ds.bands.require("BT", "LST")

    def test_repr(self, sample_ds):
        r = repr(sample_ds.bands)
        assert "Bands" in r
        assert "BT: K" in r


class TestNonMutating:
    def test_with_band_returns_new_dataset(self, sample_ds):
        out = sample_ds.bands.with_band("LST", sample_ds["BT"] - 273.15, "degC", "lst")
        assert "LST" in out
        assert "LST" not in sample_ds
        assert out["LST"].attrs == {"units": "degC", "long_name": "lst"}
        # Prior bands unchanged
        xr.testing.assert_identical(out["BT"], sample_ds["BT"])

    def test_masked_sets_all_bands(self, sample_ds):
        valid = sample_ds.bands.valid
        out = sample_ds.bands.masked(valid)
        assert np.isnan(out["BT"].values[0, 1])
        assert np.isnan(out["EM"].values[1, 0])
        assert out["BT"].attrs["units"] == "K"
        # Input untouched
        assert sample_ds["BT"].values[0, 1] == 291.0

    def test_masked_casts_integers(self):
        ds = xr.Dataset({"QA": (("y", "x"), np.array([[1, 2]], dtype=np.uint16))})
        valid = xr.DataArray(np.array([[True, False]]), dims=("y", "x"))
        out = ds.bands.masked(valid)
        assert out["QA"].dtype == np.float64
        assert np.isnan(out["QA"].values[0, 1])


class TestWithUnits:
    def test_copies(self):
        da = xr.DataArray(np.zeros((1, 1)), dims=("y", "x"))
        out = with_units(da, "K")
        assert out.attrs == {"units": "K"}
        assert da.attrs == {}
