"""
Sensor Profiles

Landsat thermal profile implementations (Landsat 5, 7, 8).
"""

from landtemp.products.profiles.landsat import (
    LANDSAT5_TM,
    LANDSAT7_ETM,
    LANDSAT8_OLI,
    LandsatThermalProfile,
)

__all__ = [
    "LANDSAT5_TM",
    "LANDSAT7_ETM",
    "LANDSAT8_OLI",
    "LandsatThermalProfile",
]
