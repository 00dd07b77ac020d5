"""
Year-result types

One value per configured year: either a YearRaster or an explicit NoData
marker. NoData is never represented as an empty Dataset.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

import xarray as xr

OUTPUT_BAND = "LST"


class YearStatus(str, Enum):
    """Outcome of processing one year."""

    OK = "ok"
    EMPTY_COLLECTION = "empty_collection"
    ALL_MASKED = "all_masked"
    FETCH_FAILED = "fetch_failed"
    FAILED = "failed"


@dataclass(frozen=True, eq=False)
class YearRaster:
    """
    Median-composited temperature raster for one year.

    Attributes:
        year: Calendar year
        raster: Dataset holding at least the ``LST`` band (degC)
        acquisition_count: Acquisitions that contributed to the composite
        dropped: Scene ids excluded along the way (missing metadata, bands)
    """

    year: int
    raster: xr.Dataset
    acquisition_count: int
    dropped: tuple[str, ...] = ()

    status = YearStatus.OK

    @property
    def temperature(self) -> xr.DataArray:
        """Final land surface temperature band (degC)."""
        return self.raster[OUTPUT_BAND]

    def __repr__(self) -> str:
        return (
            f"<YearRaster {self.year}: {self.acquisition_count} acquisitions, "
            f"{len(self.dropped)} dropped>"
        )


@dataclass(frozen=True)
class NoData:
    """Explicit absent result for a year."""

    year: int
    status: YearStatus
    message: str = ""
    dropped: tuple[str, ...] = ()

    def __repr__(self) -> str:
        return f"<NoData {self.year}: {self.status.value}>"


YearResult = YearRaster | NoData


@dataclass
class TimeSeries(Mapping):
    """
    Ordered year -> YearResult mapping produced by ``run_timeseries``.

    Examples:
        >>> ts = run_timeseries(archive, config)
        >>> for year, result in ts.items():
        ...     print(year, result)
        >>> ts.status()
        {1990: 'ok', 1991: 'empty_collection'}
    """

    results: dict[int, YearResult] = field(default_factory=dict)

    def __getitem__(self, year: int) -> YearResult:
        return self.results[year]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self.results))

    def __len__(self) -> int:
        return len(self.results)

    def rasters(self) -> list[YearRaster]:
        return [self.results[y] for y in self if isinstance(self.results[y], YearRaster)]

    def missing_years(self) -> list[int]:
        return [y for y in self if isinstance(self.results[y], NoData)]

    def status(self) -> dict[int, str]:
        return {y: self.results[y].status.value for y in self}

    def __repr__(self) -> str:
        lines = [f"<TimeSeries: {len(self)} years>"]
        for year in self:
            lines.append(f"  {year}: {self.results[year].status.value}")
        return "\n".join(lines)
