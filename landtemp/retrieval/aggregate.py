"""
Temporal aggregation: per-pixel, per-band median across a year's rasters.
"""

import logging
import warnings
from collections.abc import Iterable, Sequence

import xarray as xr

from landtemp.core.result import OUTPUT_BAND, NoData, YearRaster, YearResult, YearStatus

logger = logging.getLogger(__name__)

STACK_DIM = "acquisition"


def median_composite(rasters: Sequence[xr.Dataset]) -> xr.Dataset:
    """
    Per-pixel median over the valid (non-NaN) values of each band.

    Even counts average the two middle values. A pixel that is NaN in every
    raster stays NaN. Band attributes (units) are kept.
    """
    if not rasters:
        raise ValueError("median_composite needs at least one raster")
    stack = xr.concat(list(rasters), dim=STACK_DIM, combine_attrs="override")
    with warnings.catch_warnings():
        # All-NaN pixel stacks are expected and reduce to NaN
        warnings.simplefilter("ignore", category=RuntimeWarning)
        return stack.median(dim=STACK_DIM, skipna=True, keep_attrs=True)


def aggregate_year(
    year: int,
    rasters: Sequence[xr.Dataset],
    dropped: Iterable[str] = (),
) -> YearResult:
    """
    Reduce one year's per-acquisition results to a YearResult.

    Returns NoData(EMPTY_COLLECTION) when there is nothing to reduce and
    NoData(ALL_MASKED) when no pixel of the output band is valid.
    """
    dropped = tuple(dropped)
    if not rasters:
        return NoData(year, YearStatus.EMPTY_COLLECTION, "no usable acquisitions", dropped)

    reduced = median_composite(rasters)
    if not bool(reduced[OUTPUT_BAND].notnull().any()):
        logger.warning("Year %d: every pixel masked across %d acquisitions", year, len(rasters))
        return NoData(
            year,
            YearStatus.ALL_MASKED,
            f"all pixels invalid across {len(rasters)} acquisitions",
            dropped,
        )

    return YearRaster(
        year=year,
        raster=reduced,
        acquisition_count=len(rasters),
        dropped=dropped,
    )
