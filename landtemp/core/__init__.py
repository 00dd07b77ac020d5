"""
LandTemp Core Module

Acquisitions, result types, retrieval variants and exceptions.
"""

from landtemp.core.acquisition import Acquisition, Collection, sort_collection
from landtemp.core.exceptions import (
    AcquisitionError,
    FetchError,
    LandTempError,
    MissingBandError,
    MissingMetadataError,
    ValidationError,
)
from landtemp.core.result import (
    OUTPUT_BAND,
    NoData,
    TimeSeries,
    YearRaster,
    YearResult,
    YearStatus,
)
from landtemp.core.variant import VARIANT_SPECS, Variant, VariantSpec, get_variant_spec

__all__ = [
    # Types
    "Acquisition",
    "Collection",
    "sort_collection",
    "OUTPUT_BAND",
    "NoData",
    "TimeSeries",
    "YearRaster",
    "YearResult",
    "YearStatus",
    # Variants
    "VARIANT_SPECS",
    "Variant",
    "VariantSpec",
    "get_variant_spec",
    # Exceptions
    "LandTempError",
    "ValidationError",
    "AcquisitionError",
    "MissingMetadataError",
    "MissingBandError",
    "FetchError",
]
