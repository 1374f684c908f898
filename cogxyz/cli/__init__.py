"""
cogxyz CLI Entry Points

Provides command-line interface for:
- info: Show COG pyramid levels and their XYZ zoom match
- tile: Render one XYZ tile of a COG to PNG
- sample: Write the synthetic sample COG
"""

import argparse
import logging
import sys


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="cogxyz - Render Cloud-Optimized GeoTIFFs as XYZ map tiles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cogxyz info ./landcover_cog.tif                  Show pyramid levels
  cogxyz tile ./landcover_cog.tif 10 639 381 -o t.png   Render tile z/x/y
  cogxyz sample ./sample_cog.tif                   Write the sample COG
        """,
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Info command
    info_parser = subparsers.add_parser("info", help="Show COG pyramid information")
    info_parser.add_argument("cog", help="COG path or URL")
    info_parser.add_argument(
        "--tiles-at", type=int, default=None, help="Also list the XYZ tiles covering the COG at this zoom"
    )

    # Tile command
    tile_parser = subparsers.add_parser("tile", help="Render one XYZ tile to PNG")
    tile_parser.add_argument("cog", help="COG path or URL")
    tile_parser.add_argument("z", type=int, help="Zoom level")
    tile_parser.add_argument("x", type=int, help="Tile column")
    tile_parser.add_argument("y", type=int, help="Tile row")
    tile_parser.add_argument("--output", "-o", required=True, help="Output PNG path")
    tile_parser.add_argument(
        "--tile-size", type=int, default=256, help="Tile size in pixels (default: 256)"
    )
    tile_parser.add_argument(
        "--palette", default=None, help='JSON file mapping values to RGBA, e.g. {"11": [255, 232, 117, 170], "unknown": [0, 0, 0, 0]}'
    )
    tile_parser.add_argument("--band", type=int, default=1, help="1-based band to render (default: 1)")
    tile_parser.add_argument("--debug", action="store_true", help="Color unmapped values per tile")
    tile_parser.add_argument("--seed", type=int, default=None, help="Seed of debug colors")

    # Sample command
    sample_parser = subparsers.add_parser("sample", help="Write the synthetic sample COG")
    sample_parser.add_argument("output", help="Output COG path")

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(message)s" if not args.verbose else "%(levelname)s: %(message)s"
    )

    if args.command == "info":
        from cogxyz.cli.info import run_info

        run_info(args)
    elif args.command == "tile":
        from cogxyz.cli.tile import run_tile

        run_tile(args)
    elif args.command == "sample":
        from cogxyz.sample_data import create_sample_cog

        print(create_sample_cog(args.output))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
