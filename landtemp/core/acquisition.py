"""
Acquisition and Collection types.

An Acquisition is one scene handed over by an archive: its raster plus the
per-scene calibration metadata. Acquisitions are read-only to the pipeline.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any

import xarray as xr

from landtemp.core.exceptions import MissingMetadataError

logger = logging.getLogger(__name__)


def parse_cloud_cover(value: Any, scene_id: str = "") -> float | None:
    """Cloud cover in percent; None when absent or not a number."""
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("%s: unreadable CLOUD_COVER %r", scene_id, value)
        return None


@dataclass(frozen=True, eq=False)
class Acquisition:
    """
    One scene from the archive.

    Attributes:
        scene_id: Archive identifier (e.g. "LT05_L1TP_182029_19900611_...")
        date: Acquisition timestamp (UTC)
        raster: Dataset with one variable per archive band (NaN = no data)
        metadata: Calibration metadata by key (e.g. "RADIANCE_MULT_BAND_6")

    Examples:
        >>> acq = Acquisition("LT05_X", datetime(1990, 6, 11, tzinfo=UTC), ds,
        ...                   {"CLOUD_COVER": 12.0, "K1_CONSTANT_BAND_6": 607.76})
        >>> acq.require("K1_CONSTANT_BAND_6")
        607.76
    """

    scene_id: str
    date: datetime
    raster: xr.Dataset
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def cloud_cover(self) -> float | None:
        return parse_cloud_cover(self.metadata.get("CLOUD_COVER"), self.scene_id)

    def get(self, key: str, default: float | None = None) -> float | None:
        value = self.metadata.get(key)
        if value is None:
            return default
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise MissingMetadataError(key, scene_id=self.scene_id) from e

    def require(self, key: str) -> float:
        """Return a numeric metadata value, raising MissingMetadataError if absent."""
        value = self.metadata.get(key)
        if value is None:
            raise MissingMetadataError(key, scene_id=self.scene_id)
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise MissingMetadataError(key, scene_id=self.scene_id) from e

    def __repr__(self) -> str:
        bands = ", ".join(str(b) for b in self.raster.data_vars)
        return f"<Acquisition: {self.scene_id} {self.date.date()} [{bands}]>"


Collection = list[Acquisition]


def sort_collection(acquisitions) -> Collection:
    """Order acquisitions by date (scene id breaks ties)."""
    return sorted(acquisitions, key=lambda a: (a.date, a.scene_id))
