"""
Brightness / surface temperature resolution.

Two strategies produce the ``BT`` band (Kelvin):

- InvertRadiance: inverse-Planck inversion of calibrated radiance
- PassThrough: the Level-2 surface temperature band, already in Kelvin
"""

import logging

import numpy as np
import xarray as xr

import landtemp.core.bandmath  # noqa: F401  (registers the .bands accessor)
from landtemp.core.acquisition import Acquisition
from landtemp.core.exceptions import MissingBandError
from landtemp.core.variant import Resolver, VariantSpec

logger = logging.getLogger(__name__)


def brightness_temperature(radiance: xr.DataArray, k1: float, k2: float) -> xr.DataArray:
    """
    Inverse-Planck brightness temperature ``K2 / ln(K1 / L + 1)`` in Kelvin.

    Pixels with ``L <= 0`` or ``K1 / L + 1 <= 0`` (or any other undefined
    result) are NaN.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = k1 / radiance + 1.0
        bt = k2 / np.log(ratio)
    return bt.where((radiance > 0) & (ratio > 0) & np.isfinite(bt))


class InvertRadiance:
    """Invert the ``radiance`` band with the acquisition's K1/K2 constants."""

    def resolve(self, thermal: xr.Dataset, acquisition: Acquisition, profile) -> xr.Dataset:
        if "radiance" not in thermal.data_vars:
            raise MissingBandError("radiance", scene_id=acquisition.scene_id)
        # Per-scene constants win; sensor defaults cover archives that omit them
        k1 = acquisition.get(profile.k1_key, profile.k1)
        k2 = acquisition.get(profile.k2_key, profile.k2)
        bt = brightness_temperature(thermal["radiance"], k1, k2)
        return thermal.bands.with_band("BT", bt, "K", "brightness temperature")

    def __repr__(self) -> str:
        return "<InvertRadiance>"


class PassThrough:
    """Use the calibrated surface temperature band as-is."""

    def resolve(self, thermal: xr.Dataset, acquisition: Acquisition, profile) -> xr.Dataset:
        if "BT" not in thermal.data_vars:
            raise MissingBandError("BT", scene_id=acquisition.scene_id)
        return thermal

    def __repr__(self) -> str:
        return "<PassThrough>"


_RESOLVERS = {
    Resolver.INVERT: InvertRadiance(),
    Resolver.PASS_THROUGH: PassThrough(),
}


def resolver_for(spec: VariantSpec):
    """Return the temperature resolver a variant uses."""
    return _RESOLVERS[spec.resolver]
