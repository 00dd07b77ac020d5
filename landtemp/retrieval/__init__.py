"""
LandTemp Retrieval Module

Per-acquisition stages: calibration, cloud masking, emissivity,
temperature resolution, LST compositing and yearly aggregation.
The year driver lives in landtemp.retrieval.pipeline.
"""

from landtemp.retrieval.aggregate import aggregate_year, median_composite
from landtemp.retrieval.calibration import (
    calibrate_reflectance,
    calibrate_thermal,
    radiance_from_dn,
    reflectance_from_dn,
    temperature_from_st,
)
from landtemp.retrieval.cloud_mask import apply_cloud_mask, qa_valid_mask
from landtemp.retrieval.compositor import (
    celsius_to_kelvin,
    composite,
    kelvin_to_celsius,
    land_surface_temperature,
)
from landtemp.retrieval.emissivity import (
    DEFAULT_MODEL,
    EmissivityModel,
    emissivity,
    estimate_emissivity,
    reflectance_composite,
    fvc,
    lai,
    ndvi,
)
from landtemp.retrieval.temperature import (
    InvertRadiance,
    PassThrough,
    brightness_temperature,
    resolver_for,
)

__all__ = [
    "aggregate_year",
    "median_composite",
    "calibrate_reflectance",
    "calibrate_thermal",
    "radiance_from_dn",
    "reflectance_from_dn",
    "temperature_from_st",
    "apply_cloud_mask",
    "qa_valid_mask",
    "celsius_to_kelvin",
    "composite",
    "kelvin_to_celsius",
    "land_surface_temperature",
    "DEFAULT_MODEL",
    "EmissivityModel",
    "emissivity",
    "estimate_emissivity",
    "reflectance_composite",
    "fvc",
    "lai",
    "ndvi",
    "InvertRadiance",
    "PassThrough",
    "brightness_temperature",
    "resolver_for",
]
