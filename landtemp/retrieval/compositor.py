"""
Land surface temperature compositor.

Combines brightness temperature with emissivity:

    LST_K = Tb / (1 + (wavelength / rho) * Tb * ln(em))
    LST   = LST_K - 273.15
"""

import numpy as np
import xarray as xr

import landtemp.core.bandmath  # noqa: F401  (registers the .bands accessor)
from landtemp.core.result import OUTPUT_BAND

KELVIN_OFFSET = 273.15


def kelvin_to_celsius(kelvin):
    return kelvin - KELVIN_OFFSET


def celsius_to_kelvin(celsius):
    return celsius + KELVIN_OFFSET


def land_surface_temperature(
    bt: xr.DataArray,
    em: xr.DataArray,
    wavelength: float = 0.00104,
    rho: float = 0.48359547432,
) -> xr.DataArray:
    """
    Emissivity-corrected surface temperature in Kelvin.

    ``em == 1`` gives ``ln(em) == 0`` and returns ``bt`` unchanged.
    Non-positive emissivity yields NaN.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        lst = bt / (1.0 + (wavelength / rho) * bt * np.log(em))
    return lst.where((em > 0) & np.isfinite(lst))


def composite(thermal: xr.Dataset, emissivity: xr.Dataset | None, profile) -> xr.Dataset:
    """
    Add ``LST_K`` (K) and ``LST`` (degC) to a resolved thermal raster.

    With ``emissivity=None`` the correction is skipped and ``BT`` becomes
    the output temperature directly. The result is re-masked so that a pixel
    undefined in any band is NaN in all of them.
    """
    thermal.bands.require("BT")
    if emissivity is None:
        lst_k = thermal["BT"]
    else:
        lst_k = land_surface_temperature(
            thermal["BT"], emissivity["EM"], profile.wavelength, profile.rho
        )

    out = thermal.bands.with_band("LST_K", lst_k, "K", "land surface temperature")
    out = out.bands.with_band(
        OUTPUT_BAND, kelvin_to_celsius(lst_k), "degC", "land surface temperature"
    )
    return out.bands.masked(out.bands.valid)
