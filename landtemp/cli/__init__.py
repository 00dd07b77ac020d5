"""
LandTemp CLI Entry Points

Provides command-line interface for:
- run: Compute the yearly LST time series from a local archive
- info: Show archive collections and scenes
- sample: Write a synthetic Landsat 5 sample archive
"""

import argparse
import logging
import sys


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="LandTemp - Yearly land surface temperature from Landsat archives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  landtemp sample ./archive                               Write sample archive
  landtemp info ./archive                                 List collections and scenes
  landtemp run ./archive --start-year 1990 --end-year 1991 --output ./lst
  landtemp run ./archive --start-year 1990 --end-year 1991 --variant st
        """,
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Compute the yearly LST time series")
    run_parser.add_argument("archive", help="Archive root directory")
    run_parser.add_argument("--start-year", type=int, required=True, help="First year")
    run_parser.add_argument("--end-year", type=int, required=True, help="Last year (inclusive)")
    run_parser.add_argument(
        "--variant",
        choices=["dn", "st", "trad"],
        default="dn",
        help="Retrieval variant (default: dn)",
    )
    run_parser.add_argument(
        "--sensor", default="landsat5", help="Sensor profile (default: landsat5)"
    )
    run_parser.add_argument(
        "--cloud-cover",
        type=float,
        default=30.0,
        help="Maximum scene cloud cover in percent (default: 30)",
    )
    run_parser.add_argument(
        "--bbox",
        type=float,
        nargs=4,
        metavar=("MINX", "MINY", "MAXX", "MAXY"),
        help="Region bounding box in EPSG:4326",
    )
    run_parser.add_argument("--region", help="Region GeoJSON file (overrides --bbox)")
    run_parser.add_argument("--output", help="Output directory for GeoTIFFs")
    run_parser.add_argument(
        "--quicklook", action="store_true", help="Also write PNG quicklooks (needs --output)"
    )
    run_parser.add_argument(
        "--workers", type=int, default=1, help="Years processed in parallel (default: 1)"
    )
    run_parser.add_argument(
        "--retries", type=int, default=3, help="Archive retries per query (default: 3)"
    )

    # Info command
    info_parser = subparsers.add_parser("info", help="Show archive collections and scenes")
    info_parser.add_argument("archive", help="Archive root directory")
    info_parser.add_argument("--scenes", action="store_true", help="List every scene")

    # Sample command
    sample_parser = subparsers.add_parser("sample", help="Write a synthetic sample archive")
    sample_parser.add_argument("output", help="Output directory")
    sample_parser.add_argument(
        "--years", type=int, nargs="+", default=[1990, 1991], help="Years to generate"
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(message)s" if not args.verbose else "%(levelname)s: %(message)s"
    )

    if args.command == "run":
        from landtemp.cli.run import run_series

        sys.exit(run_series(args))
    elif args.command == "info":
        from landtemp.cli.info import run_info

        run_info(args)
    elif args.command == "sample":
        from landtemp.sample_data import create_sample_archive

        root = create_sample_archive(args.output, years=tuple(args.years))
        print(f"Sample archive written to {root}")
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
