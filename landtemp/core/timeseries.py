"""
Yearly land surface temperature time series.

Runs the per-year pipeline for every configured year. Years share no state;
they run sequentially or in a thread pool.
"""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

from landtemp.catalog.region import Region, parse_region
from landtemp.config import RunConfig
from landtemp.core.result import NoData, TimeSeries, YearResult, YearStatus

logger = logging.getLogger(__name__)


def run_timeseries(
    archive,
    config: RunConfig,
    region: Region = None,
    sleeper: Callable[[float], None] | None = None,
) -> TimeSeries:
    """
    Compute one YearResult per configured year.

    Every year is attempted; a failure in one year never aborts the others.
    The region is parsed once, before the first archive query.

    Args:
        archive: Archive to fetch acquisitions from
        config: Run configuration (years, variant, sensor, thresholds)
        region: Opaque region passed through to the archive
        sleeper: Sleep function for retry backoff (for testing)

    Returns:
        TimeSeries mapping year -> YearRaster | NoData

    Raises:
        ValidationError: The region cannot be parsed

    Examples:
        >>> import landtemp as lt
        >>> archive = lt.LocalArchive("./archive")
        >>> config = lt.RunConfig(start_year=1990, end_year=1995, variant="dn")
        >>> ts = lt.run_timeseries(archive, config, region=(29.0, 40.9, 29.2, 41.1))
        >>> ts.status()
        {1990: 'ok', 1991: 'empty_collection', ...}
    """
    from landtemp.retrieval.pipeline import process_year

    geometry = parse_region(region)

    def _run(year: int) -> YearResult:
        try:
            return process_year(year, archive, config, geometry, sleeper)
        except Exception as e:
            logger.exception("Year %d failed", year)
            return NoData(year, YearStatus.FAILED, str(e))

    logger.info(
        "Processing %d years (%d-%d), variant=%s, sensor=%s",
        len(config.years),
        config.start_year,
        config.end_year,
        config.variant.value,
        config.sensor,
    )

    if config.max_workers > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            results = list(pool.map(_run, config.years))
    else:
        results = [_run(year) for year in config.years]

    series = TimeSeries({r.year: r for r in results})
    for year in series:
        result = series[year]
        if isinstance(result, NoData):
            logger.warning("No data for year %d (%s)", year, result.status.value)
        else:
            logger.info("Year %d: %d acquisitions composited", year, result.acquisition_count)
    return series
