"""
Sample archive generator for LandTemp tutorials.

Creates a small synthetic Landsat 5 archive (Level-1 thermal DN scenes and
Level-2 reflectance / surface temperature scenes, with MTL metadata) in the
directory layout LocalArchive reads.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any

import numpy as np

from landtemp.io.mtl import format_mtl
from landtemp.products.profiles.landsat import LANDSAT5_TM

logger = logging.getLogger(__name__)

QA_CLEAR = 5440  # Landsat 4-7 QA_PIXEL: clear, low confidence everything
QA_CLOUD = QA_CLEAR | (1 << 3)
QA_SHADOW = QA_CLEAR | (1 << 4)

# Calibration constants written to every Level-1 MTL
THERMAL_CONSTANTS = {
    "RADIANCE_MULT_BAND_6": 0.055375,
    "RADIANCE_ADD_BAND_6": 1.18243,
    "K1_CONSTANT_BAND_6": 607.76,
    "K2_CONSTANT_BAND_6": 1260.56,
}

# Scenes generated for every sample year
_SAMPLE_SCENES: list[dict[str, Any]] = [
    {"month": 6, "day": 11, "cloud_cover": 4.0, "thermal_dn": 120, "cloud_block": False},
    {"month": 7, "day": 13, "cloud_cover": 12.0, "thermal_dn": 135, "cloud_block": True},
    {"month": 8, "day": 14, "cloud_cover": 9.0, "thermal_dn": 128, "cloud_block": False},
    {"month": 9, "day": 15, "cloud_cover": 85.0, "thermal_dn": 100, "cloud_block": True},
]

SIZE = 32
# Sample area: UTM 35N (EPSG:32635), 32 x 32 pixels at 30 m
WEST, NORTH = 665000.0, 4540000.0


def _scene_id(level: str, acquired: date) -> str:
    return f"LT05_{level}_180032_{acquired:%Y%m%d}_20200916_02_T1"


def _write_band(path: Path, data: np.ndarray, nodata: int | None) -> None:
    import rasterio
    from rasterio.crs import CRS
    from rasterio.transform import from_origin

    profile = {
        "driver": "GTiff",
        "dtype": "uint16",
        "width": SIZE,
        "height": SIZE,
        "count": 1,
        "crs": CRS.from_epsg(32635),
        "transform": from_origin(WEST, NORTH, 30.0, 30.0),
        "compress": "deflate",
    }
    if nodata is not None:
        profile["nodata"] = nodata
    with rasterio.open(str(path), "w", **profile) as dst:
        dst.write(data.astype(np.uint16), 1)


def _write_scene(
    collection_dir: Path,
    scene_id: str,
    bands: dict[str, np.ndarray],
    metadata: dict[str, Any],
) -> None:
    scene_dir = collection_dir / scene_id
    scene_dir.mkdir(parents=True, exist_ok=True)
    for band, data in bands.items():
        _write_band(scene_dir / f"{scene_id}_{band}.TIF", data, None if band == "QA_PIXEL" else 0)
    (scene_dir / f"{scene_id}_MTL.txt").write_text(format_mtl(metadata))


def create_sample_archive(
    output_dir: str | None = None,
    years: tuple[int, ...] = (1990, 1991),
) -> str:
    """
    Create a synthetic Landsat 5 archive for the quick-start tutorial.

    Each year gets four scenes in both LANDSAT/LT05/C02/T1 (thermal DN) and
    LANDSAT/LT05/C02/T1_L2 (reflectance, ST_B6, ST_TRAD). One scene per year
    has a cloudy block flagged in QA_PIXEL; one exceeds 30% cloud cover.

    Args:
        output_dir: Directory to write the archive. If None, uses a temp directory.
        years: Years to generate

    Returns:
        Path to the archive root.

    Examples:
        >>> from landtemp.sample_data import create_sample_archive
        >>> root = create_sample_archive()
        >>> LocalArchive(root).list_collections()
        ['LANDSAT/LT05/C02/T1', 'LANDSAT/LT05/C02/T1_L2']
    """
    if output_dir is None:
        import tempfile

        output_dir = tempfile.mkdtemp(prefix="landtemp_sample_")

    root = Path(output_dir)
    l1_dir = root / LANDSAT5_TM.l1_collection
    l2_dir = root / LANDSAT5_TM.l2_collection

    rng = np.random.default_rng(42)  # Reproducible
    gradient = np.linspace(0.95, 1.05, SIZE)[None, :] * np.ones((SIZE, 1))

    count = 0
    for year in years:
        for scene in _SAMPLE_SCENES:
            acquired = date(year, scene["month"], scene["day"])

            qa = np.full((SIZE, SIZE), QA_CLEAR, dtype=np.uint16)
            if scene["cloud_block"]:
                qa[4:10, 4:10] = QA_CLOUD
                qa[10:12, 4:10] = QA_SHADOW

            thermal = np.round(scene["thermal_dn"] * gradient).astype(np.uint16)
            # Vegetated west half, bare east half
            red = np.where(np.arange(SIZE)[None, :] < SIZE // 2, 0.05, 0.15) * np.ones((SIZE, 1))
            nir = np.where(np.arange(SIZE)[None, :] < SIZE // 2, 0.40, 0.22) * np.ones((SIZE, 1))
            red = red + rng.normal(0, 0.005, (SIZE, SIZE))
            nir = nir + rng.normal(0, 0.005, (SIZE, SIZE))
            st_kelvin = 295.0 + 10.0 * (gradient - 0.95) / 0.1

            common = {
                "SPACECRAFT_ID": LANDSAT5_TM.spacecraft,
                "SENSOR_ID": LANDSAT5_TM.sensor,
                "DATE_ACQUIRED": acquired.isoformat(),
                "CLOUD_COVER": scene["cloud_cover"],
            }

            _write_scene(
                l1_dir,
                _scene_id("L1TP", acquired),
                {"B6": thermal, "QA_PIXEL": qa},
                {**common, "PROCESSING_LEVEL": "L1TP", **THERMAL_CONSTANTS},
            )
            _write_scene(
                l2_dir,
                _scene_id("L2SP", acquired),
                {
                    "SR_B3": np.round((red + 0.2) / LANDSAT5_TM.reflectance_scale),
                    "SR_B4": np.round((nir + 0.2) / LANDSAT5_TM.reflectance_scale),
                    "ST_B6": np.round((st_kelvin - LANDSAT5_TM.st_offset) / LANDSAT5_TM.st_scale),
                    "ST_TRAD": np.round(
                        (0.055375 * thermal + 1.18243) / LANDSAT5_TM.trad_scale
                    ),
                    "QA_PIXEL": qa,
                },
                {**common, "PROCESSING_LEVEL": "L2SP", **THERMAL_CONSTANTS},
            )
            count += 1
            logger.debug("Created sample scene pair for %s", acquired)

    logger.info("Created %d sample scene pairs in %s", count, root)
    return str(root)
