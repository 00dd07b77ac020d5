"""
In-memory registry of sensor profiles.
"""

import logging

from landtemp.core.exceptions import ValidationError
from landtemp.products.profiles.landsat import (
    LANDSAT5_TM,
    LANDSAT7_ETM,
    LANDSAT8_OLI,
    LandsatThermalProfile,
)

logger = logging.getLogger(__name__)

BUILTIN_PROFILES = {p.sensor_id: p for p in (LANDSAT5_TM, LANDSAT7_ETM, LANDSAT8_OLI)}


class ProfileRegistry:
    """Built-in profiles plus user-registered ones."""

    def __init__(self):
        self._profiles: dict[str, LandsatThermalProfile] = dict(BUILTIN_PROFILES)

    def register(self, profile: LandsatThermalProfile) -> None:
        self._profiles[profile.sensor_id] = profile
        logger.info("Registered sensor profile: %s", profile.sensor_id)

    def get(self, sensor_id: str) -> LandsatThermalProfile:
        try:
            return self._profiles[sensor_id]
        except KeyError:
            raise ValidationError(
                f"Unknown sensor '{sensor_id}'. Available: {', '.join(self.list_sensors())}"
            ) from None

    def list_sensors(self) -> list[str]:
        return sorted(self._profiles)


_global_registry = ProfileRegistry()


def register_profile(profile: LandsatThermalProfile) -> LandsatThermalProfile:
    """
    Register a sensor profile in the global registry.

    Examples:
        >>> from dataclasses import replace
        >>> lt.register_profile(replace(LANDSAT8_OLI, sensor_id="landsat9",
        ...                             k1=799.0284, k2=1329.2405))
    """
    _global_registry.register(profile)
    return profile


def get_profile(sensor_id: str) -> LandsatThermalProfile:
    """Look up a sensor profile by id (raises ValidationError if unknown)."""
    return _global_registry.get(sensor_id)
