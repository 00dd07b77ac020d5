"""
Band accessor for xarray Datasets.

A LandTemp raster is an ``xarray.Dataset`` with dims ``(y, x)`` and one
float data variable per band; NaN marks "no data". The ``bands`` accessor
adds the few operations every pipeline stage needs, all of which return new
objects and leave the input untouched.

Usage:
    >>> ds.bands.units
    {'BT': 'K', 'LST': 'degC'}
    >>> out = ds.bands.with_band("EM", em, units="1", long_name="emissivity")
    >>> valid = ds.bands.valid
"""

import numpy as np
import xarray as xr


def with_units(da: xr.DataArray, units: str, long_name: str | None = None) -> xr.DataArray:
    """Return a copy of ``da`` carrying unit metadata."""
    attrs = {"units": units}
    if long_name:
        attrs["long_name"] = long_name
    return da.assign_attrs(attrs)


@xr.register_dataset_accessor("bands")
class BandAccessor:
    """
    xarray Dataset accessor for raster band bookkeeping.

    All operations are non-mutating: stages that "add a band" get a new
    Dataset with the prior bands unchanged plus the new ones.
    """

    def __init__(self, ds: xr.Dataset):
        self._ds = ds

    @property
    def names(self) -> list[str]:
        return [str(name) for name in self._ds.data_vars]

    @property
    def units(self) -> dict[str, str | None]:
        """Units per band (None if a band carries no unit metadata)."""
        return {str(name): var.attrs.get("units") for name, var in self._ds.data_vars.items()}

    @property
    def valid(self) -> xr.DataArray:
        """
        Per-pixel validity mask.

        A pixel is valid when every band holds a finite value. Masking sets
        all bands of a pixel to NaN together, so this recovers the mask.
        """
        if not self._ds.data_vars:
            raise ValueError("Dataset has no data variables")
        masks = [np.isfinite(var) for var in self._ds.data_vars.values()]
        valid = masks[0]
        for m in masks[1:]:
            valid = valid & m
        return valid.rename("valid")

    def require(self, *names: str) -> None:
        """Raise KeyError naming the first band that is missing."""
        for name in names:
            if name not in self._ds.data_vars:
                raise KeyError(name)

    def with_band(
        self,
        name: str,
        data: xr.DataArray,
        units: str,
        long_name: str | None = None,
    ) -> xr.Dataset:
        """Return a new Dataset with ``name`` added (or replaced)."""
        return self._ds.assign({name: with_units(data, units, long_name)})

    def masked(self, valid: xr.DataArray) -> xr.Dataset:
        """Return a new Dataset with every band set to NaN where ``valid`` is False."""
        return self._ds.map(lambda var: var.astype(np.float64).where(valid), keep_attrs=True)

    def __repr__(self) -> str:
        lines = ["<Bands>"]
        for name, units in self.units.items():
            lines.append(f"  {name}: {units or '?'}")
        return "\n".join(lines)
