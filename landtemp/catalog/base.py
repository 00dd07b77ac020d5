"""
Archive Protocol

The archive is the only I/O-bound collaborator of the pipeline: it turns a
query into an ordered Collection of Acquisitions.
"""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Protocol

from landtemp.catalog.region import Region
from landtemp.core.acquisition import Acquisition, Collection, sort_collection

logger = logging.getLogger(__name__)

DateRange = tuple[datetime, datetime]


class Archive(Protocol):
    """
    Satellite image archive

    Implementations raise FetchError (or OSError) on transient failures;
    the pipeline retries those with backoff.
    """

    def search(
        self,
        collection_id: str,
        date_range: DateRange,
        region: Region = None,
        cloud_cover_threshold: float | None = None,
    ) -> Collection:
        """
        Query one collection.

        Args:
            collection_id: Archive collection (e.g. "LANDSAT/LT05/C02/T1")
            date_range: (start, end) with start inclusive, end exclusive
            region: Opaque region, interpreted by the archive
            cloud_cover_threshold: Maximum scene cloud cover in percent

        Returns:
            Acquisitions ordered by date
        """
        ...


def year_range(year: int) -> DateRange:
    """Date range covering one calendar year (end exclusive)."""
    return datetime(year, 1, 1, tzinfo=UTC), datetime(year + 1, 1, 1, tzinfo=UTC)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def filter_collection(
    acquisitions: Iterable[Acquisition],
    date_range: DateRange | None = None,
    cloud_cover_threshold: float | None = None,
) -> Collection:
    """
    Keep acquisitions inside ``date_range`` and at or under the cloud threshold.

    Scenes without a CLOUD_COVER value are dropped when a threshold is set.
    """
    kept = []
    for acq in acquisitions:
        if date_range is not None:
            start, end = (_as_utc(d) for d in date_range)
            if not start <= _as_utc(acq.date) < end:
                continue
        if cloud_cover_threshold is not None:
            cover = acq.cloud_cover
            if cover is None or cover > cloud_cover_threshold:
                logger.debug("Filtered %s (cloud cover %s)", acq.scene_id, cover)
                continue
        kept.append(acq)
    return sort_collection(kept)
