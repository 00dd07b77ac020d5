"""Tests for QA_PIXEL cloud masking."""

import numpy as np
import pytest
import xarray as xr

from landtemp.core.exceptions import MissingBandError
from landtemp.products.base import QABitMask
from landtemp.retrieval.cloud_mask import apply_cloud_mask, qa_valid_mask
from landtemp.sample_data import QA_CLEAR, QA_CLOUD, QA_SHADOW


class TestQAValidMask:
    def test_cloud_and_shadow_bits(self):
        qa = xr.DataArray(
            np.array([[QA_CLEAR, QA_CLOUD], [QA_SHADOW, QA_CLOUD | QA_SHADOW]]),
            dims=("y", "x"),
        )
        np.testing.assert_array_equal(qa_valid_mask(qa).values, [[True, False], [False, False]])

    def test_other_bits_ignored(self):
        # Bit 1 (dilated cloud) and bit 7 (water) are not masking bits
        qa = xr.DataArray(np.array([[QA_CLEAR | 0b10 | (1 << 7)]]), dims=("y", "x"))
        assert bool(qa_valid_mask(qa).values[0, 0])

    def test_missing_quality_is_invalid(self):
        qa = xr.DataArray(np.array([[np.nan, float(QA_CLEAR)]]), dims=("y", "x"))
        np.testing.assert_array_equal(qa_valid_mask(qa).values, [[False, True]])

    def test_custom_bits(self):
        qa = xr.DataArray(np.array([[1 << 5]]), dims=("y", "x"))
        assert bool(qa_valid_mask(qa).values[0, 0])
        assert not bool(qa_valid_mask(qa, bits=(5,)).values[0, 0])


class TestApplyCloudMask:
    def test_masks_all_bands(self, raster):
        ds = raster(
            radiance=7.8,
            extra=1.0,
            QA_PIXEL=np.array([[QA_CLEAR, QA_CLOUD], [QA_CLEAR, QA_SHADOW]]),
        )
        out = apply_cloud_mask(ds, QABitMask())
        assert "QA_PIXEL" not in out
        for band in ("radiance", "extra"):
            np.testing.assert_array_equal(
                np.isnan(out[band].values), [[False, True], [False, True]]
            )
        # Input untouched
        assert "QA_PIXEL" in ds

    def test_missing_quality_band(self, raster):
        with pytest.raises(MissingBandError) as exc_info:
            apply_cloud_mask(raster(radiance=7.8), QABitMask(), scene_id="LT05_X")
        assert exc_info.value.scene_id == "LT05_X"

    def test_flag_value(self):
        assert QABitMask().flag_value == 0b11000
