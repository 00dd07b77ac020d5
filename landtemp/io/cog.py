"""
GeoTIFF band reader using Rasterio
"""

from typing import Any

import numpy as np
import rasterio
import xarray as xr
from numpy.typing import NDArray
from rasterio.errors import WindowError
from rasterio.warp import transform_bounds
from rasterio.windows import Window, from_bounds
from rasterio.windows import transform as window_transform


class COGReader:
    """
    Single-band GeoTIFF reader using Rasterio

    Reads one archive band, optionally clipped to a region, as an xarray
    DataArray with ``(y, x)`` pixel-centre coordinates.

    Attributes:
        file_path: Path to the GeoTIFF file
        dataset: Rasterio dataset handle

    Examples:
        >>> with COGReader("LT05_..._B6.TIF") as reader:
        ...     bounds = reader.get_bounds()
        ...     window = reader.window_for(bounds)
        ...     da = reader.read_array(window, nodata=0)
    """

    def __init__(self, file_path: str):
        """
        Open GeoTIFF file with Rasterio

        Raises:
            rasterio.errors.RasterioIOError: If file can't be opened
        """
        self.file_path = file_path
        self.dataset = rasterio.open(file_path, "r")

    def get_bounds(self, target_crs: str = "EPSG:4326") -> tuple[float, float, float, float]:
        """
        Get footprint bounds in target CRS

        Returns:
            Tuple of (minx, miny, maxx, maxy) in target CRS
        """
        if self.dataset.crs is None:
            # Assume WGS84 if no CRS
            return tuple(self.dataset.bounds)
        return transform_bounds(self.dataset.crs, target_crs, *self.dataset.bounds)

    def window_for(
        self,
        bounds: tuple[float, float, float, float] | None,
        bounds_crs: str = "EPSG:4326",
    ) -> Window | None:
        """
        Pixel window covering ``bounds``, clipped to the image.

        Returns the full image when ``bounds`` is None and None when the
        bounds miss the image entirely.
        """
        full = Window(0, 0, self.dataset.width, self.dataset.height)
        if bounds is None:
            return full
        if self.dataset.crs is not None:
            bounds = transform_bounds(bounds_crs, self.dataset.crs, *bounds)
        window = from_bounds(*bounds, transform=self.dataset.transform)
        window = window.round_offsets().round_lengths()
        try:
            window = window.intersection(full)
        except WindowError:
            return None
        if window.width < 1 or window.height < 1:
            return None
        return window

    def read_band(self, window: Window | None = None) -> NDArray:
        return self.dataset.read(1, window=window)

    def read_array(
        self,
        window: Window | None = None,
        nodata: float | None = None,
        as_float: bool = True,
    ) -> xr.DataArray:
        """
        Read the band as a DataArray.

        Args:
            window: Pixel window (None = full image)
            nodata: Fill value to treat as no data when the file declares none
            as_float: Convert to float64 with no-data pixels set to NaN.
                      Quality bands are read with ``as_float=False``.
        """
        if window is None:
            window = Window(0, 0, self.dataset.width, self.dataset.height)
        data = self.read_band(window)
        fill = self.dataset.nodata if self.dataset.nodata is not None else nodata

        if as_float:
            data = data.astype(np.float64)
            if fill is not None:
                data[data == fill] = np.nan

        t = window_transform(window, self.dataset.transform)
        height, width = data.shape
        x = t.c + (np.arange(width) + 0.5) * t.a
        y = t.f + (np.arange(height) + 0.5) * t.e
        return xr.DataArray(data, dims=("y", "x"), coords={"y": y, "x": x})

    def window_geo(self, window: Window) -> dict[str, Any]:
        """CRS and affine transform of a window (for raster attrs)."""
        t = window_transform(window, self.dataset.transform)
        return {
            "crs": str(self.dataset.crs) if self.dataset.crs else None,
            "transform": (t.a, t.b, t.c, t.d, t.e, t.f),
        }

    def close(self):
        if self.dataset is not None:
            self.dataset.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        if self.dataset.closed:
            return f"<COGReader (closed): {self.file_path}>"
        return (
            f"<COGReader: {self.file_path}>\n"
            f"  Size: {self.dataset.width} x {self.dataset.height}\n"
            f"  CRS: {self.dataset.crs}"
        )
