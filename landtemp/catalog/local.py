"""
Local GeoTIFF archive.

Directory layout (one directory per scene, Landsat delivery naming)::

    <root>/<collection_id>/<scene_id>/<scene_id>_<BAND>.TIF
    <root>/<collection_id>/<scene_id>/<scene_id>_MTL.txt

``collection_id`` may contain slashes ("LANDSAT/LT05/C02/T1") and then maps
to nested directories.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import xarray as xr
from rasterio.errors import RasterioError
from shapely.geometry import box

from landtemp.catalog.base import DateRange, filter_collection
from landtemp.catalog.region import Region, as_geometry
from landtemp.core.acquisition import Acquisition, Collection, parse_cloud_cover
from landtemp.core.exceptions import FetchError
from landtemp.io.cog import COGReader
from landtemp.io.mtl import parse_mtl

logger = logging.getLogger(__name__)

# Date parsing patterns (tried in order)
_DATE_PATTERNS = [
    (r"_(\d{8})_", "%Y%m%d"),  # LT05_L1TP_182029_19900611_...
    (r"(\d{4}-\d{2}-\d{2})", "%Y-%m-%d"),  # 1990-06-11
    (r"(\d{8})", "%Y%m%d"),  # 19900611
]

_TIF_SUFFIXES = (".tif", ".tiff")


def _parse_date(value: str) -> datetime | None:
    """Extract an acquisition date from a DATE_ACQUIRED value or a scene id."""
    for pattern, fmt in _DATE_PATTERNS:
        m = re.search(pattern, value)
        if m:
            try:
                return datetime.strptime(m.group(1), fmt).replace(tzinfo=UTC)
            except ValueError:
                continue
    return None


@dataclass
class SceneEntry:
    """A scene found on disk, before any pixel is read."""

    scene_id: str
    directory: Path
    date: datetime | None
    metadata: dict[str, Any]
    band_files: dict[str, Path] = field(default_factory=dict)

    @property
    def cloud_cover(self) -> float | None:
        return parse_cloud_cover(self.metadata.get("CLOUD_COVER"), self.scene_id)


class LocalArchive:
    """
    Archive over a local directory of Landsat-style GeoTIFF scenes.

    Attributes:
        root: Archive root directory
        nodata: DN treated as fill when a file declares no nodata value
        qa_bands: Bands read as integers (bit-packed quality flags)

    Examples:
        >>> archive = LocalArchive("./archive")
        >>> archive.list_collections()
        ['LANDSAT/LT05/C02/T1', 'LANDSAT/LT05/C02/T1_L2']
        >>> scenes = archive.search("LANDSAT/LT05/C02/T1", year_range(1990),
        ...                         region=(29.0, 40.9, 29.2, 41.1),
        ...                         cloud_cover_threshold=30)
    """

    def __init__(self, root: str | Path, nodata: float = 0, qa_bands=("QA_PIXEL",)):
        self.root = Path(root)
        self.nodata = nodata
        self.qa_bands = tuple(qa_bands)

    def list_collections(self) -> list[str]:
        """Collection ids: directories (relative to root) that hold scene directories."""
        if not self.root.is_dir():
            raise FetchError(f"Archive root not found: {self.root}")
        collections = set()
        for mtl in self.root.glob("**/*_MTL.txt"):
            collection_dir = mtl.parent.parent
            collections.add(collection_dir.relative_to(self.root).as_posix())
        return sorted(collections)

    def list_scenes(self, collection_id: str) -> list[SceneEntry]:
        """All scenes of a collection, with parsed metadata, sorted by scene id."""
        collection_dir = self.root / collection_id
        if not collection_dir.is_dir():
            if not self.root.is_dir():
                raise FetchError(f"Archive root not found: {self.root}")
            logger.debug("Collection %s not present in %s", collection_id, self.root)
            return []

        scenes = []
        for scene_dir in sorted(p for p in collection_dir.iterdir() if p.is_dir()):
            mtl_files = sorted(scene_dir.glob("*_MTL.txt"))
            if not mtl_files:
                continue
            scene_id = mtl_files[0].name[: -len("_MTL.txt")]
            try:
                metadata = parse_mtl(mtl_files[0])
            except OSError as e:
                logger.warning("Failed to read metadata of %s: %s", scene_id, e)
                continue

            date = _parse_date(str(metadata.get("DATE_ACQUIRED", ""))) or _parse_date(scene_id)
            if date is None:
                logger.warning("No acquisition date for %s, skipping", scene_id)
                continue

            band_files = {}
            prefix = scene_id + "_"
            for f in sorted(scene_dir.iterdir()):
                if f.suffix.lower() in _TIF_SUFFIXES and f.name.startswith(prefix):
                    band_files[f.stem[len(prefix) :]] = f

            scenes.append(SceneEntry(scene_id, scene_dir, date, metadata, band_files))
        return scenes

    def search(
        self,
        collection_id: str,
        date_range: DateRange,
        region: Region = None,
        cloud_cover_threshold: float | None = None,
    ) -> Collection:
        geom = as_geometry(region)
        entries = self.list_scenes(collection_id)

        # Cheap metadata filters first, pixels only for what survives
        by_id = {e.scene_id: e for e in entries}
        stubs = [
            Acquisition(e.scene_id, e.date, xr.Dataset(), e.metadata) for e in entries
        ]
        survivors = filter_collection(stubs, date_range, cloud_cover_threshold)

        found = []
        for stub in survivors:
            acq = self._load(by_id[stub.scene_id], geom)
            if acq is not None:
                found.append(acq)

        logger.info(
            "%s %s..%s: %d of %d scenes",
            collection_id,
            date_range[0].date(),
            date_range[1].date(),
            len(found),
            len(entries),
        )
        return found

    def _load(self, entry: SceneEntry, geom) -> Acquisition | None:
        """Read all bands of one scene, clipped to the region bounds."""
        if not entry.band_files:
            logger.warning("Scene %s has no band files", entry.scene_id)
            return None

        bands = {}
        attrs: dict[str, Any] = {}
        region_bounds = geom.bounds if geom is not None else None
        try:
            for band, path in entry.band_files.items():
                with COGReader(str(path)) as reader:
                    if not attrs:
                        footprint = reader.get_bounds()
                        if geom is not None and not geom.intersects(box(*footprint)):
                            logger.debug("Scene %s outside region", entry.scene_id)
                            return None
                        window = reader.window_for(region_bounds)
                        if window is None:
                            return None
                        attrs = reader.window_geo(window)
                        attrs["bounds"] = tuple(footprint)
                    else:
                        window = reader.window_for(region_bounds)
                    bands[band] = reader.read_array(
                        window,
                        nodata=self.nodata,
                        as_float=band not in self.qa_bands,
                    )
        except RasterioError as e:
            logger.warning("Failed to read scene %s: %s", entry.scene_id, e)
            return None

        raster = xr.Dataset(bands, attrs=attrs)
        return Acquisition(entry.scene_id, entry.date, raster, entry.metadata)

    def __repr__(self) -> str:
        return f"<LocalArchive: {self.root}>"
