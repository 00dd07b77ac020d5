"""
LandTemp Catalog Module

Archive backends and collection filtering.
"""

from landtemp.catalog.base import Archive, DateRange, filter_collection, year_range
from landtemp.catalog.local import LocalArchive
from landtemp.catalog.memory import InMemoryArchive
from landtemp.catalog.region import Region, as_geometry, parse_region

__all__ = [
    "Archive",
    "DateRange",
    "InMemoryArchive",
    "LocalArchive",
    "Region",
    "as_geometry",
    "filter_collection",
    "parse_region",
    "year_range",
]
