"""
Retrieval variants

The three retrieval variants share one stage sequence and differ only in
the thermal input, its calibration, the temperature resolver and whether
emissivity is applied. Those differences are tabulated in VARIANT_SPECS.
"""

from dataclasses import dataclass
from enum import Enum

from landtemp.core.exceptions import ValidationError


class Variant(str, Enum):
    """Retrieval variant selector."""

    DN_RADIANCE = "dn"
    ST_BAND = "st"
    TRAD_RADIANCE = "trad"

    @classmethod
    def parse(cls, value: "Variant | str") -> "Variant":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(v.value for v in cls)
            raise ValidationError(f"Unknown variant '{value}'. Choose one of: {choices}") from None


class ThermalCalibration(str, Enum):
    RADIANCE_FROM_METADATA = "radiance_from_metadata"
    SCALED_RADIANCE = "scaled_radiance"
    SURFACE_TEMPERATURE = "surface_temperature"


class Resolver(str, Enum):
    INVERT = "invert"
    PASS_THROUGH = "pass_through"


@dataclass(frozen=True)
class VariantSpec:
    """
    Variant-specific wiring of the retrieval pipeline.

    Attributes:
        variant: Variant this spec describes
        level: Archive level of the thermal collection ("l1" raw DN, "l2" scaled)
        calibration: How the thermal band is calibrated
        resolver: How brightness temperature is obtained
        uses_emissivity: Whether the LST equation is applied
    """

    variant: Variant
    level: str
    calibration: ThermalCalibration
    resolver: Resolver
    uses_emissivity: bool

    def thermal_collection(self, profile) -> str:
        return profile.l1_collection if self.level == "l1" else profile.l2_collection

    def reflectance_collection(self, profile) -> str:
        return profile.l2_collection

    def thermal_band(self, profile) -> str:
        if self.calibration is ThermalCalibration.RADIANCE_FROM_METADATA:
            return profile.l1_thermal_band
        if self.calibration is ThermalCalibration.SCALED_RADIANCE:
            return profile.trad_band
        return profile.st_band


VARIANT_SPECS = {
    Variant.DN_RADIANCE: VariantSpec(
        variant=Variant.DN_RADIANCE,
        level="l1",
        calibration=ThermalCalibration.RADIANCE_FROM_METADATA,
        resolver=Resolver.INVERT,
        uses_emissivity=True,
    ),
    Variant.ST_BAND: VariantSpec(
        variant=Variant.ST_BAND,
        level="l2",
        calibration=ThermalCalibration.SURFACE_TEMPERATURE,
        resolver=Resolver.PASS_THROUGH,
        uses_emissivity=False,
    ),
    Variant.TRAD_RADIANCE: VariantSpec(
        variant=Variant.TRAD_RADIANCE,
        level="l2",
        calibration=ThermalCalibration.SCALED_RADIANCE,
        resolver=Resolver.INVERT,
        uses_emissivity=True,
    ),
}


def get_variant_spec(variant: Variant | str) -> VariantSpec:
    return VARIANT_SPECS[Variant.parse(variant)]
