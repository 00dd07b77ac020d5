"""
Cloud and cloud-shadow masking from bit-packed quality bands.
"""

import numpy as np
import xarray as xr

import landtemp.core.bandmath  # noqa: F401  (registers the .bands accessor)
from landtemp.core.exceptions import MissingBandError
from landtemp.products.base import QABitMask


def qa_valid_mask(qa: xr.DataArray, bits=(3, 4)) -> xr.DataArray:
    """
    Per-pixel validity from a quality band.

    A pixel is valid iff none of ``bits`` is set. Pixels without a quality
    value (NaN) are invalid.

    Examples:
        >>> qa = xr.DataArray(np.array([[21824, 22280]], dtype=np.uint16), dims=("y", "x"))
        >>> qa_valid_mask(qa).values
        array([[ True, False]])
    """
    flag = QABitMask(bits=tuple(bits)).flag_value
    flags = qa.fillna(0).astype(np.int64)
    return (qa.notnull() & ((flags & flag) == 0)).rename("valid")


def apply_cloud_mask(
    raster: xr.Dataset,
    cloud_mask: QABitMask,
    scene_id: str | None = None,
) -> xr.Dataset:
    """
    Mask every band of ``raster`` by its quality band.

    Masked pixels become NaN in all bands at once; the quality band itself
    is dropped from the result.

    Raises:
        MissingBandError: The quality band is absent
    """
    if cloud_mask.band not in raster.data_vars:
        raise MissingBandError(cloud_mask.band, scene_id=scene_id)
    valid = qa_valid_mask(raster[cloud_mask.band], cloud_mask.bits)
    return raster.drop_vars(cloud_mask.band).bands.masked(valid)
