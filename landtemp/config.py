"""
Run configuration.

Everything the time-series run depends on is passed explicitly through a
RunConfig; there is no module-level state.
"""

from dataclasses import dataclass, field
from typing import Any

from landtemp.core.exceptions import ValidationError
from landtemp.core.variant import Variant, VariantSpec, get_variant_spec
from landtemp.products.registry import get_profile
from landtemp.retrieval.emissivity import DEFAULT_MODEL, EmissivityModel


@dataclass
class RunConfig:
    """
    Configuration of one time-series run.

    Attributes:
        start_year: First year (inclusive)
        end_year: Last year (inclusive)
        cloud_cover_threshold: Maximum scene cloud cover in percent (None = no limit)
        variant: Retrieval variant ("dn", "st" or "trad")
        sensor: Sensor profile id (see ``landtemp.products.get_profile``)
        retries: Archive retries after the first failed attempt
        retry_delay: Initial backoff delay in seconds (doubles per retry)
        max_workers: Years processed concurrently (1 = sequential)
        emissivity_model: NDVI -> emissivity coefficients

    Examples:
        >>> config = RunConfig(start_year=1985, end_year=2011, variant="dn")
        >>> list(config.years)[:3]
        [1985, 1986, 1987]
    """

    start_year: int
    end_year: int
    cloud_cover_threshold: float | None = 30.0
    variant: Variant = Variant.DN_RADIANCE
    sensor: str = "landsat5"
    retries: int = 3
    retry_delay: float = 2.0
    max_workers: int = 1
    emissivity_model: EmissivityModel = field(default_factory=lambda: DEFAULT_MODEL)

    def __post_init__(self):
        self.variant = Variant.parse(self.variant)
        if self.start_year > self.end_year:
            raise ValidationError(
                f"start_year ({self.start_year}) is after end_year ({self.end_year})"
            )
        if self.cloud_cover_threshold is not None:
            try:
                self.cloud_cover_threshold = float(self.cloud_cover_threshold)
            except (TypeError, ValueError):
                raise ValidationError(
                    f"cloud_cover_threshold must be a number, got {self.cloud_cover_threshold!r}"
                ) from None
            if not 0.0 <= self.cloud_cover_threshold <= 100.0:
                raise ValidationError(
                    f"cloud_cover_threshold must be within [0, 100], "
                    f"got {self.cloud_cover_threshold}"
                )
        if self.retries < 0:
            raise ValidationError(f"retries must be >= 0, got {self.retries}")
        if self.retry_delay < 0:
            raise ValidationError(f"retry_delay must be >= 0, got {self.retry_delay}")
        if self.max_workers < 1:
            raise ValidationError(f"max_workers must be >= 1, got {self.max_workers}")
        # Fail early on unknown sensors
        get_profile(self.sensor)

    @property
    def years(self) -> range:
        return range(self.start_year, self.end_year + 1)

    @property
    def profile(self):
        return get_profile(self.sensor)

    @property
    def variant_spec(self) -> VariantSpec:
        return get_variant_spec(self.variant)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_year": self.start_year,
            "end_year": self.end_year,
            "cloud_cover_threshold": self.cloud_cover_threshold,
            "variant": self.variant.value,
            "sensor": self.sensor,
            "retries": self.retries,
            "retry_delay": self.retry_delay,
            "max_workers": self.max_workers,
            "emissivity_model": self.emissivity_model.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunConfig":
        try:
            start_year = int(data["start_year"])
            end_year = int(data["end_year"])
        except KeyError as e:
            raise ValidationError(f"Missing configuration key: {e.args[0]}") from None
        model = data.get("emissivity_model")
        return cls(
            start_year=start_year,
            end_year=end_year,
            cloud_cover_threshold=data.get("cloud_cover_threshold", 30.0),
            variant=data.get("variant", Variant.DN_RADIANCE),
            sensor=data.get("sensor", "landsat5"),
            retries=int(data.get("retries", 3)),
            retry_delay=float(data.get("retry_delay", 2.0)),
            max_workers=int(data.get("max_workers", 1)),
            emissivity_model=EmissivityModel.from_dict(model) if model else DEFAULT_MODEL,
        )

    def __repr__(self) -> str:
        cover = (
            "any"
            if self.cloud_cover_threshold is None
            else f"<= {self.cloud_cover_threshold}%"
        )
        return (
            f"<RunConfig: {self.start_year}-{self.end_year}>\n"
            f"  Variant: {self.variant.value}\n"
            f"  Sensor: {self.sensor}\n"
            f"  Cloud cover: {cover}"
        )
