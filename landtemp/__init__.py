"""
LandTemp - Yearly land surface temperature time series from Landsat archives

Per-scene thermal calibration, QA cloud masking, NDVI-based emissivity and
yearly median compositing, returned as xarray Datasets.

Quick Start:
    >>> import landtemp as lt
    >>>
    >>> # Write a synthetic Landsat 5 archive
    >>> root = lt.create_sample_archive("./archive")
    >>>
    >>> # Yearly LST from Level-1 thermal DN
    >>> config = lt.RunConfig(start_year=1990, end_year=1991, variant="dn")
    >>> series = lt.run_timeseries(lt.LocalArchive(root), config)
    >>> series[1990].temperature  # xarray DataArray in degC
    >>>
    >>> # GeoTIFF per year
    >>> lt.export_timeseries(series, "./lst")
"""

# Register xarray band accessor (ds.bands.valid, ds.bands.masked(), etc.)
import landtemp.core.bandmath
from landtemp.catalog import InMemoryArchive, LocalArchive
from landtemp.config import RunConfig
from landtemp.core import (
    # Types
    Acquisition,
    AcquisitionError,
    FetchError,
    # Exceptions
    LandTempError,
    MissingBandError,
    MissingMetadataError,
    NoData,
    TimeSeries,
    ValidationError,
    Variant,
    YearRaster,
    YearStatus,
)
from landtemp.core.timeseries import run_timeseries
from landtemp.products import get_profile, register_profile

__version__ = "0.1.0"

__all__ = [
    "Acquisition",
    "AcquisitionError",
    "FetchError",
    "InMemoryArchive",
    "LandTempError",
    "LocalArchive",
    "MissingBandError",
    "MissingMetadataError",
    "NoData",
    "RunConfig",
    "TimeSeries",
    "ValidationError",
    "Variant",
    "YearRaster",
    "YearStatus",
    "__version__",
    "build_layers",
    "create_sample_archive",
    "export_timeseries",
    "get_profile",
    "process_year",
    "register_profile",
    "render_quicklook",
    "run_timeseries",
]


# Lazy imports for export and plotting (avoids heavy import at startup)
def __getattr__(name):
    if name == "process_year":
        from landtemp.retrieval.pipeline import process_year

        return process_year
    elif name == "export_timeseries":
        from landtemp.io.export import export_timeseries

        return export_timeseries
    elif name == "build_layers":
        from landtemp.visualization.layers import build_layers

        return build_layers
    elif name == "render_quicklook":
        from landtemp.visualization.layers import render_quicklook

        return render_quicklook
    elif name == "create_sample_archive":
        from landtemp.sample_data import create_sample_archive

        return create_sample_archive
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
