"""
XYZ Tile Grid Implementation

Resolution pyramid of the Web Mercator XYZ tiling scheme and conversions
between tile indexes and projected footprints.
"""

import math
from typing import Dict, List, Tuple

from cogxyz.core.exceptions import ResolutionLookupError
from cogxyz.core.types import TileIndex
from cogxyz.gis.bbox import BBoxLike, BoundingBox, bounds_to_tuple, overlap
from cogxyz.gis.mercator import MERCATOR_ORIGIN_SHIFT, MERCATOR_ZERO_256_RESOLUTION

DEFAULT_TILE_SIZE = 256
DEFAULT_MAX_ZOOM = 22

# Resolutions are compared after rounding to this many decimals
RESOLUTION_PRECISION = 3


def build_resolution_table(
    tile_size: int = DEFAULT_TILE_SIZE, max_zoom: int = DEFAULT_MAX_ZOOM
) -> Dict[int, float]:
    """
    Map every zoom level 0..max_zoom to its ground resolution

    Zoom 0 is the Web Mercator resolution for 256 pixel tiles, scaled by
    ``256 / tile_size`` for other tile sizes; each following zoom halves it.

    Args:
        tile_size: Tile edge in pixels
        max_zoom: Highest zoom level (inclusive)

    Returns:
        {zoom: meters per pixel}

    Examples:
        >>> table = build_resolution_table(256, 2)
        >>> table
        {0: 156543.031, 1: 78271.516, 2: 39135.758}
    """
    if tile_size <= 0:
        raise ValueError(f"Tile size must be positive, got {tile_size}")

    base_resolution = MERCATOR_ZERO_256_RESOLUTION * (256 / tile_size)

    return {
        zoom: round(base_resolution / 2**zoom, RESOLUTION_PRECISION)
        for zoom in range(max_zoom + 1)
    }


def best_zoom_for_resolution(table: Dict[int, float], resolution_m: float) -> Tuple[int, float]:
    """
    Zoom level whose resolution is closest to ``resolution_m``

    Entries are scanned in table order; on equal distance the first one found
    is kept, so coarser zooms win ties.

    Args:
        table: {zoom: meters per pixel}, as built by build_resolution_table
        resolution_m: Target resolution in meters per pixel

    Returns:
        (zoom, resolution of that zoom)

    Examples:
        >>> best_zoom_for_resolution(build_resolution_table(), 9700)
        (4, 9783.939)
    """
    if not table:
        raise ResolutionLookupError("Resolution table is empty")

    entries = list(table.items())
    best_zoom, best_resolution = entries[0]

    for zoom, resolution in entries:
        if abs(resolution - resolution_m) < abs(best_resolution - resolution_m):
            best_zoom, best_resolution = zoom, resolution

    return best_zoom, best_resolution


def exact_resolution(zoom: int, tile_size: int = DEFAULT_TILE_SIZE) -> float:
    """
    Unrounded ground resolution of a zoom level

    Tile geometry is built from this value; the rounded table is only used to
    match resolutions against each other.

    Examples:
        >>> round(exact_resolution(0), 6)
        156543.033928
    """
    return (2 * MERCATOR_ORIGIN_SHIFT) / tile_size / 2**zoom


def tile_to_mercator_bbox(
    tile: Tuple[int, int, int],
    tile_size: int = DEFAULT_TILE_SIZE,
    max_zoom: int | None = None,
) -> BoundingBox:
    """
    Web Mercator footprint of an XYZ tile

    Args:
        tile: (x, y, z)
        tile_size: Tile edge in pixels
        max_zoom: Highest zoom accepted (None = no limit)

    Returns:
        Bounding box in meters

    Raises:
        ResolutionLookupError: If the zoom is negative or above ``max_zoom``

    Examples:
        >>> tile_to_mercator_bbox((1, 1, 1)).west
        0.0
    """
    x, y, z = tile
    if z < 0 or (max_zoom is not None and z > max_zoom):
        raise ResolutionLookupError(f"Resolution not found for zoom level {z}")

    # world is centered on (0, 0)
    tile_span = tile_size * exact_resolution(z, tile_size)

    west = x * tile_span - MERCATOR_ORIGIN_SHIFT
    north = MERCATOR_ORIGIN_SHIFT - y * tile_span

    return BoundingBox(west=west, south=north - tile_span, east=west + tile_span, north=north)


def meters_to_tile(
    x_m: float, y_m: float, zoom: int, tile_size: int = DEFAULT_TILE_SIZE
) -> TileIndex:
    """
    XYZ tile containing a Web Mercator point

    Examples:
        >>> meters_to_tile(0.0, 0.0, 1)
        TileIndex(x=1, y=1, z=1)
    """
    resolution = exact_resolution(zoom, tile_size)

    pixel_x = (x_m + MERCATOR_ORIGIN_SHIFT) / resolution
    pixel_y = (MERCATOR_ORIGIN_SHIFT - y_m) / resolution

    return TileIndex(
        x=int(math.floor(pixel_x / tile_size)),
        y=int(math.floor(pixel_y / tile_size)),
        z=zoom,
    )


class XYZTileGrid:
    """
    Web Mercator XYZ tile grid

    Holds the resolution table for one tile size and answers zoom/resolution
    and tile/footprint questions against it.

    Examples:
        >>> grid = XYZTileGrid()
        >>> grid.best_zoom_for_resolution(0.3)
        (19, 0.299)
        >>> grid.tile_bounds(TileIndex(0, 0, 0)).east
        20037508.342789244
    """

    def __init__(self, tile_size: int = DEFAULT_TILE_SIZE, max_zoom: int = DEFAULT_MAX_ZOOM):
        """
        Initialize tile grid

        Args:
            tile_size: Tile edge in pixels (default: 256)
            max_zoom: Highest zoom level in the table (default: 22)
        """
        self.tile_size = tile_size
        self.max_zoom = max_zoom
        self.resolutions = build_resolution_table(tile_size, max_zoom)

    def resolution_for_zoom(self, zoom: int) -> float:
        try:
            return self.resolutions[zoom]
        except KeyError:
            raise ResolutionLookupError(
                f"Zoom level {zoom} not found in tile zoom resolution table"
            ) from None

    def best_zoom_for_resolution(self, resolution_m: float) -> Tuple[int, float]:
        return best_zoom_for_resolution(self.resolutions, resolution_m)

    def tile_bounds(self, tile: TileIndex) -> BoundingBox:
        return tile_to_mercator_bbox(tile, self.tile_size, self.max_zoom)

    def tile_for_point(self, x_m: float, y_m: float, zoom: int) -> TileIndex:
        return meters_to_tile(x_m, y_m, zoom, self.tile_size)

    def tiles_in_bounds(self, bounds: BBoxLike, zoom: int) -> List[TileIndex]:
        """
        All tiles at ``zoom`` whose footprint overlaps a Web Mercator box

        Args:
            bounds: Box in Web Mercator meters
            zoom: XYZ zoom level

        Returns:
            Tiles in row-major order (y, then x)
        """
        west, south, east, north = bounds_to_tuple(bounds)
        last = 2**zoom - 1

        top_left = self.tile_for_point(west, north, zoom)
        bottom_right = self.tile_for_point(east, south, zoom)

        tiles = []
        for y in range(max(0, top_left.y), min(last, bottom_right.y) + 1):
            for x in range(max(0, top_left.x), min(last, bottom_right.x) + 1):
                tile = TileIndex(x, y, zoom)
                # corner tiles may only touch the box
                if overlap(self.tile_bounds(tile), bounds):
                    tiles.append(tile)

        return tiles

    def __repr__(self) -> str:
        return f"<XYZTileGrid tile_size={self.tile_size} zooms=0..{self.max_zoom}>"
