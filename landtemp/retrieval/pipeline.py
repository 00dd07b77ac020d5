"""
Per-year retrieval pipeline.

    Fetch -> Filter -> [Calibrate -> Mask] -> {Emissivity | Temperature}
          -> Composite -> Aggregate -> YearRaster | NoData

A failing acquisition is dropped from its collection and processing goes
on; a failing fetch turns the year into NoData(FETCH_FAILED).
"""

import logging
from collections.abc import Callable

import xarray as xr

from landtemp.catalog.base import Archive, filter_collection, year_range
from landtemp.catalog.region import Region, parse_region
from landtemp.config import RunConfig
from landtemp.core.acquisition import Acquisition, Collection
from landtemp.core.exceptions import AcquisitionError, FetchError
from landtemp.core.result import NoData, YearResult, YearStatus
from landtemp.core.variant import Variant, VariantSpec, get_variant_spec
from landtemp.retrieval.aggregate import aggregate_year
from landtemp.retrieval.calibration import calibrate_thermal
from landtemp.retrieval.cloud_mask import apply_cloud_mask
from landtemp.retrieval.compositor import composite
from landtemp.retrieval.emissivity import (
    DEFAULT_MODEL,
    EmissivityModel,
    estimate_emissivity,
    reflectance_composite,
)
from landtemp.retrieval.temperature import resolver_for
from landtemp.util.retry import retry_call

logger = logging.getLogger(__name__)


def process_acquisition(
    acquisition: Acquisition,
    variant: Variant | VariantSpec | str,
    profile,
    emissivity: xr.Dataset | None = None,
) -> xr.Dataset:
    """
    Run one acquisition through calibrate, mask, resolve and composite.

    Args:
        acquisition: Scene from the thermal collection
        variant: Retrieval variant
        profile: Sensor profile
        emissivity: The year's emissivity raster (required unless the
                    variant skips emissivity)

    Returns:
        Raster with BT, LST_K and LST (plus radiance for radiance variants)

    Raises:
        AcquisitionError: Missing band or calibration metadata
    """
    spec = variant if isinstance(variant, VariantSpec) else get_variant_spec(variant)
    if spec.uses_emissivity and emissivity is None:
        raise ValueError(f"Variant '{spec.variant.value}' needs an emissivity raster")

    thermal = calibrate_thermal(acquisition, spec, profile)
    thermal = apply_cloud_mask(thermal, profile.cloud_mask, scene_id=acquisition.scene_id)
    thermal = resolver_for(spec).resolve(thermal, acquisition, profile)
    return composite(thermal, emissivity if spec.uses_emissivity else None, profile)


def build_emissivity(
    collection: Collection,
    profile,
    model: EmissivityModel = DEFAULT_MODEL,
) -> tuple[xr.Dataset | None, list[str]]:
    """
    Emissivity raster from the median reflectance composite of a collection.

    Returns:
        (emissivity raster or None when no acquisition is usable, dropped scene ids)
    """
    composite_, dropped = reflectance_composite(collection, profile)
    if composite_ is None:
        return None, dropped
    return estimate_emissivity(composite_, model), dropped


def fetch_collection(
    archive: Archive,
    collection_id: str,
    year: int,
    config: RunConfig,
    region: Region = None,
    sleeper: Callable[[float], None] | None = None,
) -> Collection:
    """
    Query one year of a collection, retrying transient failures.

    The archive's answer is filtered again so that the returned collection
    is guaranteed to hold only that year and the configured cloud cover.

    Raises:
        FetchError: The archive kept failing
    """
    date_range = year_range(year)
    found = retry_call(
        archive.search,
        collection_id,
        date_range,
        region,
        config.cloud_cover_threshold,
        retries=config.retries,
        delay=config.retry_delay,
        sleeper=sleeper,
        description=f"search {collection_id} {year}",
    )
    return filter_collection(found, date_range, config.cloud_cover_threshold)


def process_year(
    year: int,
    archive: Archive,
    config: RunConfig,
    region: Region = None,
    sleeper: Callable[[float], None] | None = None,
) -> YearResult:
    """
    Produce the YearResult for one year.

    Emissivity (when the variant uses it) is built from the full year's
    reflectance collection before any acquisition is composited.

    Raises:
        ValidationError: The region cannot be parsed
    """
    spec = config.variant_spec
    profile = config.profile
    region = parse_region(region)

    try:
        thermal_collection = fetch_collection(
            archive, spec.thermal_collection(profile), year, config, region, sleeper
        )
        reflectance_collection = []
        if spec.uses_emissivity and thermal_collection:
            reflectance_collection = fetch_collection(
                archive, spec.reflectance_collection(profile), year, config, region, sleeper
            )
    except FetchError as e:
        logger.error("Year %d: archive fetch failed: %s", year, e)
        return NoData(year, YearStatus.FETCH_FAILED, str(e))

    if not thermal_collection:
        return NoData(year, YearStatus.EMPTY_COLLECTION, "no thermal acquisitions")

    emissivity = None
    dropped: list[str] = []
    if spec.uses_emissivity:
        emissivity, dropped = build_emissivity(
            reflectance_collection, profile, config.emissivity_model
        )
        if emissivity is None:
            return NoData(
                year,
                YearStatus.EMPTY_COLLECTION,
                "no reflectance acquisitions for emissivity",
                tuple(dropped),
            )

    results = []
    for acq in thermal_collection:
        try:
            results.append(process_acquisition(acq, spec, profile, emissivity))
        except AcquisitionError as e:
            logger.warning("Year %d: dropping %s: %s", year, acq.scene_id, e)
            dropped.append(acq.scene_id)

    logger.debug(
        "Year %d: %d of %d acquisitions processed",
        year,
        len(results),
        len(thermal_collection),
    )
    return aggregate_year(year, results, dropped)
