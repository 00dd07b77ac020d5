"""
Region handling for archive queries.

The retrieval core treats a region as an opaque value and passes it through
to the archive. Archives call ``as_geometry`` to turn whatever the caller
supplied into a shapely geometry in EPSG:4326.

Supports:
- (minx, miny, maxx, maxy) bounding boxes
- GeoJSON dicts (geometry, Feature, FeatureCollection)
- Shapely geometries
- Paths to GeoJSON files
"""

import json
from pathlib import Path
from typing import Union

from shapely.geometry import box, shape
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from landtemp.core.exceptions import ValidationError

Region = Union[BaseGeometry, tuple[float, float, float, float], dict, str, Path, None]


def as_geometry(region: Region) -> BaseGeometry | None:
    """
    Parse a region into a shapely geometry (None means "no spatial filter").

    Examples:
        >>> as_geometry((29.0, 40.9, 29.2, 41.1)).bounds
        (29.0, 40.9, 29.2, 41.1)
    """
    if region is None:
        return None

    if isinstance(region, BaseGeometry):
        return region

    if isinstance(region, (str, Path)):
        path = Path(region)
        if not path.exists():
            raise FileNotFoundError(f"GeoJSON file not found: {region}")
        with open(path) as f:
            return _geojson_to_geometry(json.load(f))

    if isinstance(region, dict):
        return _geojson_to_geometry(region)

    if isinstance(region, (tuple, list)) and len(region) == 4:
        minx, miny, maxx, maxy = (float(v) for v in region)
        if minx >= maxx or miny >= maxy:
            raise ValueError(f"Invalid bounding box: {tuple(region)}")
        return box(minx, miny, maxx, maxy)

    raise TypeError(f"Unsupported region type: {type(region)}")


def _geojson_to_geometry(geojson: dict) -> BaseGeometry:
    if geojson.get("type") == "FeatureCollection":
        features = geojson.get("features", [])
        if not features:
            raise ValueError("Empty FeatureCollection")
        return unary_union([shape(f["geometry"]) for f in features])

    if geojson.get("type") == "Feature":
        return shape(geojson["geometry"])

    return shape(geojson)


def parse_region(region: Region) -> BaseGeometry | None:
    """
    Parse a region before any archive query.

    Raises:
        ValidationError: The region cannot be read or is not a valid geometry
    """
    try:
        return as_geometry(region)
    except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
        raise ValidationError(f"Invalid region {region!r}: {e}") from e
