"""
Tile CLI command

Renders one XYZ tile of a COG and writes it as an RGBA PNG.
"""

import argparse
import json
from pathlib import Path

import numpy as np
import rasterio

from cogxyz.cogs.pyramid import open_cog
from cogxyz.core.types import TileIndex
from cogxyz.rendering.decider import RenderingDecider
from cogxyz.sample_data import SAMPLE_PALETTE
from cogxyz.tiles.renderer import CogTileRenderer, TileLayerConfig


def load_palette(path: str | None) -> RenderingDecider:
    """Decider from a JSON palette file, or the sample palette"""
    if path is None:
        return RenderingDecider(dict(SAMPLE_PALETTE))

    with open(path) as f:
        return RenderingDecider.from_mapping(json.load(f))


def write_png(rgba: np.ndarray, output: str) -> None:
    """Write a (size, size, 4) uint8 array as PNG"""
    height, width, _ = rgba.shape
    Path(output).parent.mkdir(parents=True, exist_ok=True)

    with rasterio.open(
        output, "w", driver="PNG", width=width, height=height, count=4, dtype="uint8"
    ) as dst:
        dst.write(np.moveaxis(rgba, -1, 0))


def run_tile(args: argparse.Namespace) -> None:
    """Run the tile command"""
    tile = TileIndex(x=args.x, y=args.y, z=args.z)
    config = TileLayerConfig(
        tile_size=args.tile_size,
        max_zoom=max(20, args.z),
        debug=args.debug,
        debug_seed=args.seed,
        band=args.band - 1,
    )

    with open_cog(args.cog) as cog:
        renderer = CogTileRenderer(cog, load_palette(args.palette), config)
        bitmap = renderer.render_tile(tile)

    if bitmap is None:
        print(f"No data for tile {tile}")
        return

    write_png(bitmap.rgba, args.output)
    print(f"Wrote tile {tile} to {args.output}")
