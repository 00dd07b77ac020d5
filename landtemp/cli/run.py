"""
Run CLI command

Computes the yearly time series, prints per-year status and optionally
writes GeoTIFFs and quicklooks.
"""

import argparse
from pathlib import Path

from landtemp.catalog.local import LocalArchive
from landtemp.config import RunConfig
from landtemp.core.exceptions import ValidationError
from landtemp.core.result import NoData
from landtemp.core.timeseries import run_timeseries


def run_series(args: argparse.Namespace) -> int:
    """Run the run command; returns the process exit code"""
    archive_path = Path(args.archive)
    if not archive_path.is_dir():
        print(f"Error: Archive not found: {archive_path}")
        return 1

    try:
        config = RunConfig(
            start_year=args.start_year,
            end_year=args.end_year,
            cloud_cover_threshold=args.cloud_cover,
            variant=args.variant,
            sensor=args.sensor,
            retries=args.retries,
            max_workers=args.workers,
        )
    except ValidationError as e:
        print(f"Error: {e}")
        return 2

    region = args.region or (tuple(args.bbox) if args.bbox else None)
    try:
        series = run_timeseries(LocalArchive(archive_path), config, region=region)
    except ValidationError as e:
        print(f"Error: {e}")
        return 2

    written = {}
    if args.output:
        from landtemp.io.export import export_timeseries

        written = export_timeseries(series, args.output)
        if args.quicklook:
            from landtemp.visualization.layers import build_layers, render_quicklook

            for layer in build_layers(series):
                name = layer.year_label.replace(" ", "_").lower()
                render_quicklook(layer, Path(args.output) / f"{name}.png")

    print()
    print(f"{'Year':<6} {'Status':<18} {'Scenes':>6}  Output")
    print("-" * 60)
    for year in series:
        result = series[year]
        if isinstance(result, NoData):
            print(f"{year:<6} {result.status.value:<18} {'-':>6}  no data for year {year}")
        else:
            out = written.get(year, "")
            print(f"{year:<6} {result.status.value:<18} {result.acquisition_count:>6}  {out}")

    return 0
