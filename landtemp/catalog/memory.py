"""
In-memory archive.

Holds acquisitions per collection id and answers queries with the same
filters as any other archive. Used in tests and notebooks.
"""

import logging
from collections.abc import Iterable

from landtemp.catalog.base import DateRange, filter_collection
from landtemp.catalog.region import Region, as_geometry
from landtemp.core.acquisition import Acquisition, Collection

logger = logging.getLogger(__name__)


class InMemoryArchive:
    """
    Archive backed by a dict of collection id -> acquisitions.

    Region filtering uses ``raster.attrs["bounds"]`` (EPSG:4326) when an
    acquisition carries it; acquisitions without bounds always match.

    Examples:
        >>> archive = InMemoryArchive()
        >>> archive.add("LANDSAT/LT05/C02/T1", [acq1, acq2])
        >>> archive.search("LANDSAT/LT05/C02/T1", year_range(1990))
    """

    def __init__(self, collections: dict[str, Iterable[Acquisition]] | None = None):
        self._collections: dict[str, list[Acquisition]] = {}
        for collection_id, acquisitions in (collections or {}).items():
            self.add(collection_id, acquisitions)

    def add(self, collection_id: str, acquisitions: Iterable[Acquisition]) -> None:
        self._collections.setdefault(collection_id, []).extend(acquisitions)

    def list_collections(self) -> list[str]:
        return sorted(self._collections)

    def search(
        self,
        collection_id: str,
        date_range: DateRange,
        region: Region = None,
        cloud_cover_threshold: float | None = None,
    ) -> Collection:
        candidates = self._collections.get(collection_id, [])
        geom = as_geometry(region)
        if geom is not None:
            candidates = [a for a in candidates if _intersects(a, geom)]
        found = filter_collection(candidates, date_range, cloud_cover_threshold)
        logger.debug("%s: %d of %d acquisitions match", collection_id, len(found), len(candidates))
        return found

    def __repr__(self) -> str:
        counts = ", ".join(f"{k}: {len(v)}" for k, v in sorted(self._collections.items()))
        return f"<InMemoryArchive [{counts}]>"


def _intersects(acquisition: Acquisition, geom) -> bool:
    from shapely.geometry import box

    bounds = acquisition.raster.attrs.get("bounds")
    if bounds is None:
        return True
    return geom.intersects(box(*bounds))
