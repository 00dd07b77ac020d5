"""
Radiometric calibration

Affine maps from stored digital numbers to physical quantities. NaN (no
data) passes through untouched: the archive converts fill DNs to NaN before
the pipeline sees them.
"""

import logging

import numpy as np
import xarray as xr

from landtemp.core.acquisition import Acquisition
from landtemp.core.bandmath import with_units
from landtemp.core.exceptions import MissingBandError
from landtemp.core.variant import ThermalCalibration, Variant, VariantSpec, get_variant_spec

logger = logging.getLogger(__name__)

RADIANCE_UNITS = "W/(m2 sr um)"


def radiance_from_dn(dn, ml: float, al: float):
    """At-sensor spectral radiance: ``ML * DN + AL``."""
    return ml * dn + al


def temperature_from_st(dn, scale: float, offset: float):
    """Level-2 surface temperature band to Kelvin: ``DN * scale + offset``."""
    return dn * scale + offset


def reflectance_from_dn(dn, scale: float, offset: float):
    """Level-2 surface reflectance: ``DN * scale + offset``."""
    return dn * scale + offset


def _empty_like(raster: xr.Dataset) -> xr.Dataset:
    return xr.Dataset(coords=raster.coords, attrs=dict(raster.attrs))


def _band(acquisition: Acquisition, name: str) -> xr.DataArray:
    if name not in acquisition.raster.data_vars:
        raise MissingBandError(name, scene_id=acquisition.scene_id)
    return acquisition.raster[name].astype(np.float64)


def _carry_qa(out: xr.Dataset, acquisition: Acquisition, profile) -> xr.Dataset:
    qa_band = profile.cloud_mask.band
    if qa_band in acquisition.raster.data_vars:
        out = out.assign({qa_band: acquisition.raster[qa_band]})
    return out


def calibrate_thermal(
    acquisition: Acquisition,
    variant: Variant | VariantSpec | str,
    profile,
) -> xr.Dataset:
    """
    Calibrate the variant's thermal band of one acquisition.

    Returns a new Dataset holding ``radiance`` (dn, trad) or ``BT`` (st),
    plus the quality band when the acquisition carries one.

    Raises:
        MissingBandError: The thermal band is absent
        MissingMetadataError: ML/AL absent on a DN-variant acquisition
    """
    spec = variant if isinstance(variant, VariantSpec) else get_variant_spec(variant)
    dn = _band(acquisition, spec.thermal_band(profile))
    out = _empty_like(acquisition.raster)

    if spec.calibration is ThermalCalibration.RADIANCE_FROM_METADATA:
        ml = acquisition.require(profile.radiance_mult_key)
        al = acquisition.require(profile.radiance_add_key)
        radiance = radiance_from_dn(dn, ml, al)
        out = out.bands.with_band("radiance", radiance, RADIANCE_UNITS, "at-sensor radiance")
    elif spec.calibration is ThermalCalibration.SCALED_RADIANCE:
        radiance = radiance_from_dn(dn, profile.trad_scale, profile.trad_offset)
        out = out.bands.with_band("radiance", radiance, RADIANCE_UNITS, "thermal radiance")
    else:
        kelvin = temperature_from_st(dn, profile.st_scale, profile.st_offset)
        out = out.bands.with_band("BT", kelvin, "K", "surface temperature")

    logger.debug("Calibrated %s thermal band of %s", spec.variant.value, acquisition.scene_id)
    return _carry_qa(out, acquisition, profile)


def calibrate_reflectance(acquisition: Acquisition, profile) -> xr.Dataset:
    """
    Calibrate the red and near-infrared reflectance bands.

    Returns a new Dataset with ``red`` and ``nir`` (unitless reflectance)
    plus the quality band when present.
    """
    out = _empty_like(acquisition.raster)
    for name, band in (("red", profile.red_band), ("nir", profile.nir_band)):
        dn = _band(acquisition, band)
        refl = reflectance_from_dn(dn, profile.reflectance_scale, profile.reflectance_offset)
        out = out.assign({name: with_units(refl, "1", f"{name} surface reflectance")})
    return _carry_qa(out, acquisition, profile)
