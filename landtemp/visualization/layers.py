"""
Hand-off of finished year results to display and export.

Computation is complete before anything here runs: ``build_layers`` walks a
TimeSeries and turns each YearRaster into a Layer, and each NoData into a
logged diagnostic.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import xarray as xr

from landtemp.core.result import NoData, TimeSeries, YearRaster

logger = logging.getLogger(__name__)

DEFAULT_PALETTE = ("blue", "cyan", "green", "yellow", "red")
DEFAULT_DISPLAY_RANGE = (10.0, 40.0)


@dataclass(frozen=True, eq=False)
class Layer:
    """
    A named display layer for one year.

    Attributes:
        year_label: Layer name (e.g. "LST 1990")
        raster: Final temperature band (degC)
        display_range: (min, max) of the colour stretch in degC
        palette: Colour ramp, low to high
    """

    year_label: str
    raster: xr.DataArray
    display_range: tuple[float, float] = DEFAULT_DISPLAY_RANGE
    palette: tuple[str, ...] = field(default=DEFAULT_PALETTE)


def build_layers(
    series: TimeSeries,
    display_range: tuple[float, float] = DEFAULT_DISPLAY_RANGE,
    palette: tuple[str, ...] = DEFAULT_PALETTE,
    label: str = "LST {year}",
) -> Iterator[Layer]:
    """
    Yield one Layer per YearRaster; log "No data for year Y" for NoData.

    Examples:
        >>> for layer in build_layers(ts):
        ...     render_quicklook(layer, f"{layer.year_label}.png")
    """
    for year in series:
        result = series[year]
        if isinstance(result, NoData):
            logger.warning("No data for year %d: %s", year, result.message or result.status.value)
            continue
        if not isinstance(result, YearRaster):
            raise TypeError(f"Unexpected year result: {result!r}")
        yield Layer(
            year_label=label.format(year=year),
            raster=result.temperature,
            display_range=display_range,
            palette=palette,
        )


def render_quicklook(layer: Layer, path: str | Path, dpi: int = 150) -> Path:
    """
    Save a PNG preview of a layer (not georeferenced).

    Returns:
        Path of the written PNG
    """
    import matplotlib.pyplot as plt
    from matplotlib.colors import LinearSegmentedColormap

    cmap = LinearSegmentedColormap.from_list("lst", list(layer.palette))
    vmin, vmax = layer.display_range

    fig, ax = plt.subplots(figsize=(6, 5))
    try:
        im = ax.imshow(layer.raster.values, cmap=cmap, vmin=vmin, vmax=vmax)
        fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04, label="Temperature (°C)")
        ax.set_title(layer.year_label)
        ax.axis("off")
        fig.tight_layout()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)

    logger.debug("Wrote quicklook %s", path)
    return path
