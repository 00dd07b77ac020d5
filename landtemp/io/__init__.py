"""
LandTemp I/O Module

COG reading, MTL metadata parsing and GeoTIFF export.
"""

from landtemp.io.cog import COGReader
from landtemp.io.export import export_timeseries, write_geotiff
from landtemp.io.mtl import format_mtl, parse_mtl, parse_mtl_text

__all__ = [
    "COGReader",
    "export_timeseries",
    "format_mtl",
    "parse_mtl",
    "parse_mtl_text",
    "write_geotiff",
]
