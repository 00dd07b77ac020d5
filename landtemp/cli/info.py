"""
Info CLI command

Shows the collections of a local archive and their scenes.
"""

import argparse
from pathlib import Path

from landtemp.catalog.local import LocalArchive
from landtemp.core.exceptions import FetchError


def run_info(args: argparse.Namespace) -> None:
    """Run the info command"""
    archive_path = Path(args.archive)

    if not archive_path.exists():
        print(f"Error: Archive not found: {archive_path}")
        return

    print(f"Archive: {archive_path.resolve()}")
    print()

    archive = LocalArchive(archive_path)
    try:
        collections = archive.list_collections()
    except FetchError as e:
        print(f"Error reading archive: {e}")
        return

    if not collections:
        print("Status: Empty archive")
        return

    for collection_id in collections:
        scenes = archive.list_scenes(collection_id)
        years = sorted({s.date.year for s in scenes if s.date})
        print(f"Collection: {collection_id}")
        print(f"  Scenes: {len(scenes):,}")
        if years:
            print(f"  Years: {years[0]} to {years[-1]}")
        if args.scenes:
            for s in scenes:
                cover = "?" if s.cloud_cover is None else f"{s.cloud_cover:.1f}%"
                bands = ", ".join(sorted(s.band_files))
                print(f"    {s.date.date()}  {s.scene_id}  cloud={cover}  [{bands}]")
        print()
