"""
Landsat Thermal Profiles

Implements SensorProfile for Landsat 5 TM, Landsat 7 ETM+ and Landsat 8
OLI/TIRS, Collection 2.
"""

from dataclasses import dataclass, field

from landtemp.products.base import QABitMask


@dataclass(frozen=True)
class LandsatThermalProfile:
    """
    Landsat Collection 2 thermal profile

    Data Format (Collection 2):
    - Level-1 thermal DN to radiance: ML * DN + AL (per-scene MTL constants)
    - Level-2 reflectance: (DN * 0.0000275) - 0.2
    - Level-2 surface temperature: (DN * 0.00341802) + 149.0 (Kelvin)
    - Level-2 thermal radiance (ST_TRAD): DN * 0.001
    - No-data value: 0

    Examples:
        >>> from landtemp.products.profiles import LANDSAT5_TM
        >>> LANDSAT5_TM.radiance_mult_key
        'RADIANCE_MULT_BAND_6'
        >>> LANDSAT5_TM.k1
        607.76
    """

    sensor_id: str
    spacecraft: str
    sensor: str
    l1_collection: str
    l2_collection: str
    thermal_key: str
    l1_thermal_band: str
    st_band: str
    red_band: str
    nir_band: str
    k1: float
    k2: float
    trad_band: str = "ST_TRAD"

    # Radiometric conversion (Collection 2 Level-2)
    reflectance_scale: float = 0.0000275
    reflectance_offset: float = -0.2
    st_scale: float = 0.00341802
    st_offset: float = 149.0
    trad_scale: float = 0.001
    trad_offset: float = 0.0
    nodata: int = 0

    # LST equation constants
    wavelength: float = 0.00104
    rho: float = 0.48359547432

    cloud_mask: QABitMask = field(default_factory=QABitMask)

    @property
    def radiance_mult_key(self) -> str:
        return f"RADIANCE_MULT_BAND_{self.thermal_key}"

    @property
    def radiance_add_key(self) -> str:
        return f"RADIANCE_ADD_BAND_{self.thermal_key}"

    @property
    def k1_key(self) -> str:
        return f"K1_CONSTANT_BAND_{self.thermal_key}"

    @property
    def k2_key(self) -> str:
        return f"K2_CONSTANT_BAND_{self.thermal_key}"

    def __repr__(self) -> str:
        return (
            f"<LandsatThermalProfile: {self.sensor_id}>\n"
            f"Spacecraft: {self.spacecraft}\n"
            f"Sensor: {self.sensor}\n"
            f"Thermal band: {self.l1_thermal_band} (K1={self.k1}, K2={self.k2})"
        )


LANDSAT5_TM = LandsatThermalProfile(
    sensor_id="landsat5",
    spacecraft="LANDSAT_5",
    sensor="TM",
    l1_collection="LANDSAT/LT05/C02/T1",
    l2_collection="LANDSAT/LT05/C02/T1_L2",
    thermal_key="6",
    l1_thermal_band="B6",
    st_band="ST_B6",
    red_band="SR_B3",
    nir_band="SR_B4",
    k1=607.76,
    k2=1260.56,
)

LANDSAT7_ETM = LandsatThermalProfile(
    sensor_id="landsat7",
    spacecraft="LANDSAT_7",
    sensor="ETM",
    l1_collection="LANDSAT/LE07/C02/T1",
    l2_collection="LANDSAT/LE07/C02/T1_L2",
    thermal_key="6_VCID_1",
    l1_thermal_band="B6_VCID_1",
    st_band="ST_B6",
    red_band="SR_B3",
    nir_band="SR_B4",
    k1=666.09,
    k2=1282.71,
)

LANDSAT8_OLI = LandsatThermalProfile(
    sensor_id="landsat8",
    spacecraft="LANDSAT_8",
    sensor="OLI_TIRS",
    l1_collection="LANDSAT/LC08/C02/T1",
    l2_collection="LANDSAT/LC08/C02/T1_L2",
    thermal_key="10",
    l1_thermal_band="B10",
    st_band="ST_B10",
    red_band="SR_B4",
    nir_band="SR_B5",
    k1=774.8853,
    k2=1321.0789,
)
