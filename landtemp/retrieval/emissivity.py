"""
Vegetation index and emissivity estimation.

NDVI -> fractional vegetation cover (FVC) -> leaf area index (LAI) ->
surface emissivity, each derived from the previous one only. The chain runs
once per year on a median reflectance composite; the resulting emissivity is
shared by every acquisition of that year.
"""

import logging
from dataclasses import dataclass

import numpy as np
import xarray as xr

import landtemp.core.bandmath  # noqa: F401  (registers the .bands accessor)
from landtemp.core.acquisition import Collection
from landtemp.core.exceptions import AcquisitionError
from landtemp.retrieval.aggregate import median_composite
from landtemp.retrieval.calibration import calibrate_reflectance
from landtemp.retrieval.cloud_mask import apply_cloud_mask

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmissivityModel:
    """
    Coefficients of the NDVI -> emissivity chain.

    FVC = clip(fvc_gain * NDVI + fvc_offset, 0, 1)
    LAI = -2 * ln(1 - FVC)
    EM  = min(em_base + em_slope * LAI, max_emissivity)
    """

    fvc_gain: float = 1.1101
    fvc_offset: float = -0.0857
    em_base: float = 0.97
    em_slope: float = 0.0033
    max_emissivity: float = 1.0

    def to_dict(self) -> dict[str, float]:
        return {
            "fvc_gain": self.fvc_gain,
            "fvc_offset": self.fvc_offset,
            "em_base": self.em_base,
            "em_slope": self.em_slope,
            "max_emissivity": self.max_emissivity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, float]) -> "EmissivityModel":
        return cls(**{k: float(v) for k, v in data.items()})


DEFAULT_MODEL = EmissivityModel()


def ndvi(nir: xr.DataArray, red: xr.DataArray) -> xr.DataArray:
    """(NIR - RED) / (NIR + RED); NaN where the denominator is zero."""
    denom = nir + red
    with np.errstate(divide="ignore", invalid="ignore"):
        index = (nir - red) / denom
    return index.where(denom != 0)


def fvc(ndvi_: xr.DataArray, model: EmissivityModel = DEFAULT_MODEL) -> xr.DataArray:
    """Fractional vegetation cover, clamped into [0, 1]."""
    return (model.fvc_gain * ndvi_ + model.fvc_offset).clip(0.0, 1.0)


def lai(fvc_: xr.DataArray) -> xr.DataArray:
    """Leaf area index; NaN where FVC == 1 (log of zero)."""
    with np.errstate(divide="ignore", invalid="ignore"):
        index = -2.0 * np.log(1.0 - fvc_)
    return index.where(fvc_ < 1.0)


def emissivity(lai_: xr.DataArray, model: EmissivityModel = DEFAULT_MODEL) -> xr.DataArray:
    """Surface emissivity from LAI, bounded above by ``model.max_emissivity``."""
    return (model.em_base + model.em_slope * lai_).clip(max=model.max_emissivity)


def estimate_emissivity(
    composite: xr.Dataset,
    model: EmissivityModel = DEFAULT_MODEL,
) -> xr.Dataset:
    """
    Derive NDVI, FVC, LAI and EM from a reflectance composite.

    Args:
        composite: Dataset with ``red`` and ``nir`` reflectance bands

    Returns:
        New Dataset with bands NDVI (1), FVC (fraction), LAI (m2/m2), EM (1).
        Pixels where any step is undefined are NaN in every band.
    """
    composite.bands.require("red", "nir")
    n = ndvi(composite["nir"], composite["red"])
    f = fvc(n, model)
    leaf = lai(f)
    em = emissivity(leaf, model)

    out = xr.Dataset(coords=composite.coords, attrs=dict(composite.attrs))
    out = out.bands.with_band("NDVI", n, "1", "normalized difference vegetation index")
    out = out.bands.with_band("FVC", f, "fraction", "fractional vegetation cover")
    out = out.bands.with_band("LAI", leaf, "m2/m2", "leaf area index")
    out = out.bands.with_band("EM", em, "1", "surface emissivity")
    return out.bands.masked(out.bands.valid)


def reflectance_composite(collection: Collection, profile) -> tuple[xr.Dataset | None, list[str]]:
    """
    Per-pixel median of calibrated, cloud-masked reflectance over a collection.

    Acquisitions missing a reflectance band are left out of the composite.

    Returns:
        (composite with ``red`` and ``nir`` or None when nothing is usable,
        dropped scene ids)
    """
    rasters = []
    dropped = []
    for acq in collection:
        try:
            reflectance = calibrate_reflectance(acq, profile)
            rasters.append(apply_cloud_mask(reflectance, profile.cloud_mask, acq.scene_id))
        except AcquisitionError as e:
            logger.warning("Dropping %s from reflectance composite: %s", acq.scene_id, e)
            dropped.append(acq.scene_id)

    if not rasters:
        return None, dropped
    return median_composite(rasters), dropped
