"""
Sample data generator for cogxyz.

Creates a small synthetic land-cover COG in Web Mercator, aligned to the XYZ
grid, for quick-start demonstrations and tests.
"""

import logging
from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
import rasterio
from rasterio.enums import Resampling
from rasterio.transform import from_origin

from cogxyz.grid.xyz import XYZTileGrid, exact_resolution
from cogxyz.core.types import TileIndex

logger = logging.getLogger(__name__)

# Land-cover classes written into the four quadrants of the sample
SAMPLE_CLASSES = {
    "top_left": 11,
    "top_right": 12,
    "bottom_left": 13,
    "bottom_right": 22,
}

# Colors for the sample classes (alpha 170)
SAMPLE_PALETTE = {
    11: (255, 232, 117, 170),
    12: (216, 255, 146, 170),
    13: (237, 130, 0, 170),
    22: (0, 150, 40, 170),
}

# XYZ tile at zoom 10 over Tbilisi, Georgia
SAMPLE_ANCHOR = TileIndex(x=639, y=381, z=10)


def create_sample_cog(
    output_path: str | None = None,
    anchor: Tuple[int, int, int] = SAMPLE_ANCHOR,
    size: int = 1024,
    overview_factors: Sequence[int] = (2,),
    block_size: int = 256,
    tiled: bool = True,
    crs: str | None = "EPSG:3857",
) -> str:
    """
    Create a sample land-cover COG.

    The image's top-left corner is the top-left corner of the ``anchor`` tile
    and its level 0 resolution equals the XYZ resolution of the anchor zoom,
    so level 0 matches that zoom and each overview matches one zoom coarser.
    Quadrants carry the classes in SAMPLE_CLASSES.

    Args:
        output_path: File to write. If None, uses a temp directory.
        anchor: (x, y, z) tile whose top-left corner is the image origin
        size: Width and height of level 0 in pixels
        overview_factors: Internal overview decimation factors (one level each)
        block_size: Internal tile size
        tiled: Write internal tiles (False writes strips)
        crs: CRS written to the file (None writes no CRS)

    Returns:
        Path to the COG.

    Examples:
        >>> from cogxyz.sample_data import create_sample_cog
        >>> path = create_sample_cog()
        >>> inspect_cog(path).levels[1].width
        512
    """
    if output_path is None:
        import tempfile

        output_path = str(Path(tempfile.mkdtemp(prefix="cogxyz_sample_")) / "sample_cog.tif")

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    anchor = TileIndex(*anchor)
    grid = XYZTileGrid()
    resolution = exact_resolution(anchor.z, grid.tile_size)
    tile_bounds = grid.tile_bounds(anchor)

    half = size // 2
    data = np.empty((size, size), dtype=np.uint8)
    data[:half, :half] = SAMPLE_CLASSES["top_left"]
    data[:half, half:] = SAMPLE_CLASSES["top_right"]
    data[half:, :half] = SAMPLE_CLASSES["bottom_left"]
    data[half:, half:] = SAMPLE_CLASSES["bottom_right"]

    profile = {
        "driver": "GTiff",
        "dtype": "uint8",
        "width": size,
        "height": size,
        "count": 1,
        "crs": crs,
        "transform": from_origin(tile_bounds.west, tile_bounds.north, resolution, resolution),
        "compress": "deflate",
        "nodata": 0,
    }
    if tiled:
        profile.update(tiled=True, blockxsize=block_size, blockysize=block_size)

    with rasterio.open(output_path, "w", **profile) as dst:
        dst.write(data, 1)

    if overview_factors:
        with rasterio.open(output_path, "r+") as dst:
            dst.build_overviews(list(overview_factors), Resampling.nearest)
            dst.update_tags(ns="rio_overview", resampling="nearest")

    logger.debug("Created sample COG: %s (%dx%d, anchor %s)", output_path, size, size, anchor)
    return str(output_path)
