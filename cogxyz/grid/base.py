"""
Tile Grid System Protocol

Worldwide XYZ tile grid with a resolution pyramid.
"""

from typing import Protocol, Tuple

from cogxyz.core.types import TileIndex
from cogxyz.gis.bbox import BoundingBox


class TileGrid(Protocol):
    """
    Tile grid with one ground resolution per zoom level

    Zoom 0 covers the world with a single tile; every following zoom halves
    the ground resolution (meters per pixel) and doubles the tiles per axis:
    - zoom 0 @ 256px: 156543.031 m/px
    - zoom 10 @ 256px: 152.874 m/px
    - zoom 19 @ 256px: 0.299 m/px
    """

    tile_size: int

    def resolution_for_zoom(self, zoom: int) -> float:
        """
        Ground resolution of a zoom level

        Args:
            zoom: XYZ zoom level

        Returns:
            Meters per pixel

        Raises:
            ResolutionLookupError: If the grid has no entry for ``zoom``
        """
        ...

    def best_zoom_for_resolution(self, resolution_m: float) -> Tuple[int, float]:
        """
        Zoom level whose resolution is closest to ``resolution_m``

        Returns:
            (zoom, resolution of that zoom)
        """
        ...

    def tile_bounds(self, tile: TileIndex) -> BoundingBox:
        """
        Projected footprint of a tile

        Returns:
            Bounding box in Web Mercator meters
        """
        ...

    def tile_for_point(self, x_m: float, y_m: float, zoom: int) -> TileIndex:
        """
        Tile containing a Web Mercator point at a zoom level
        """
        ...
