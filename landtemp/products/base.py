"""
Sensor Profile Protocol and QA bit mask definition

Defines the calibration constants and band names a thermal retrieval needs
from a sensor.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class QABitMask:
    """
    Defines how to read a bit-packed quality band.

    A pixel is valid when none of ``bits`` is set.

    Attributes:
        band: Quality band name in the archive (e.g. "QA_PIXEL")
        bits: Bit positions that flag an invalid pixel

    Examples:
        >>> # Landsat Collection 2 QA_PIXEL: bit 3 = cloud, bit 4 = cloud shadow
        >>> QABitMask(band="QA_PIXEL", bits=(3, 4))
    """

    band: str = "QA_PIXEL"
    bits: tuple[int, ...] = (3, 4)

    @property
    def flag_value(self) -> int:
        """All flag bits OR-ed together."""
        value = 0
        for bit in self.bits:
            value |= 1 << bit
        return value


class SensorProfile(Protocol):
    """
    Thermal sensor specification

    Attributes:
        sensor_id: Unique identifier (e.g. "landsat5")
        l1_collection: Archive id of the raw-DN (Level-1) collection
        l2_collection: Archive id of the surface-reflectance/temperature (Level-2) collection
        thermal_key: Metadata suffix of the thermal band (e.g. "6", "10")
        l1_thermal_band: Raw thermal band name (e.g. "B6")
        st_band: Level-2 surface temperature band (e.g. "ST_B6")
        trad_band: Level-2 thermal radiance band ("ST_TRAD")
        red_band: Level-2 red reflectance band
        nir_band: Level-2 near-infrared reflectance band
        k1: Default inverse-Planck K1 (W/(m2 sr um))
        k2: Default inverse-Planck K2 (K)
        wavelength: Emitted radiance wavelength constant of the LST equation
        rho: Radiation constant of the LST equation
        cloud_mask: Quality band definition
    """

    sensor_id: str
    l1_collection: str
    l2_collection: str
    thermal_key: str
    l1_thermal_band: str
    st_band: str
    trad_band: str
    red_band: str
    nir_band: str
    reflectance_scale: float
    reflectance_offset: float
    st_scale: float
    st_offset: float
    trad_scale: float
    trad_offset: float
    k1: float
    k2: float
    wavelength: float
    rho: float
    cloud_mask: QABitMask
