"""
GeoTIFF export of year results using Rasterio
"""

import logging
from pathlib import Path

import numpy as np
import rasterio
from rasterio.transform import Affine

from landtemp.core.result import OUTPUT_BAND, NoData, TimeSeries, YearRaster

logger = logging.getLogger(__name__)


def _transform_of(result: YearRaster) -> Affine:
    t = result.raster.attrs.get("transform")
    if t is not None:
        return Affine(*t[:6])

    ds = result.raster
    if "x" in ds.coords and "y" in ds.coords and ds.sizes["x"] > 1 and ds.sizes["y"] > 1:
        x = ds["x"].values
        y = ds["y"].values
        dx = float(x[1] - x[0])
        dy = float(y[1] - y[0])
        return Affine(dx, 0.0, float(x[0]) - dx / 2, 0.0, dy, float(y[0]) - dy / 2)

    logger.warning("Year %d has no georeferencing; writing pixel coordinates", result.year)
    return Affine.identity()


def write_geotiff(result: YearRaster, path: str | Path, band: str = OUTPUT_BAND) -> Path:
    """
    Write one band of a YearRaster as a single-band float32 GeoTIFF.

    No-data pixels are written as NaN (declared nodata).

    Examples:
        >>> write_geotiff(ts[1990], "out/lst_1990.tif")
    """
    da = result.raster[band]
    data = da.transpose("y", "x").values.astype(np.float32)
    height, width = data.shape

    profile = {
        "driver": "GTiff",
        "dtype": "float32",
        "width": width,
        "height": height,
        "count": 1,
        "crs": result.raster.attrs.get("crs"),
        "transform": _transform_of(result),
        "nodata": np.nan,
        "compress": "deflate",
    }

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with rasterio.open(str(path), "w", **profile) as dst:
        dst.write(data, 1)
        dst.update_tags(
            year=str(result.year),
            band=band,
            units=str(da.attrs.get("units", "")),
            acquisitions=str(result.acquisition_count),
        )

    logger.debug("Wrote %s", path)
    return path


def export_timeseries(
    series: TimeSeries,
    output_dir: str | Path,
    pattern: str = "lst_{year}.tif",
) -> dict[int, Path]:
    """
    Write one GeoTIFF per YearRaster; NoData years are reported and skipped.

    Returns:
        Mapping year -> written path
    """
    out = Path(output_dir)
    written = {}
    for year in series:
        result = series[year]
        if isinstance(result, NoData):
            logger.warning("No data for year %d, nothing exported", year)
            continue
        written[year] = write_geotiff(result, out / pattern.format(year=year))
    logger.info("Exported %d of %d years to %s", len(written), len(series), out)
    return written
