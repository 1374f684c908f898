"""
Info CLI command

Shows level 0 geometry, the XYZ zoom it matches and every pyramid level.
"""

import argparse

from cogxyz.cogs.pyramid import open_cog
from cogxyz.core.exceptions import SourceError
from cogxyz.grid.xyz import XYZTileGrid


def run_info(args: argparse.Namespace) -> None:
    """Run the info command"""
    try:
        cog = open_cog(args.cog)
    except SourceError as e:
        print(f"Error: {e}")
        return

    with cog:
        print(f"COG: {args.cog}")
        print(f"Projection: {cog.projection}")
        print(f"Origin: {cog.origin}")
        print(f"BBox: {cog.bbox.as_tuple()}")
        print(f"Level 0 resolution: {cog.resolution} m/px")
        print(f"Best XYZ zoom: {cog.xyz_main_zoom} (origin tile {cog.xyz_main_tile})")
        print()

        print("Levels:")
        for meta in cog.describe_levels():
            expected = cog.level_resolution(meta.level)
            zoom = max(0, cog.xyz_main_zoom - meta.level)
            print(f"  {meta}")
            print(f"    expected {expected} m/px, serves XYZ zoom {zoom}")

        if args.tiles_at is not None:
            tiles = XYZTileGrid().tiles_in_bounds(cog.bbox, args.tiles_at)
            print()
            print(f"Tiles at zoom {args.tiles_at}: {len(tiles)}")
            for tile in tiles[:20]:
                print(f"  {tile}")
            if len(tiles) > 20:
                print(f"  ... and {len(tiles) - 20} more")
