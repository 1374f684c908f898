"""
cogxyz Grid Module

XYZ tile grid and its resolution pyramid.
"""

from cogxyz.grid.base import TileGrid
from cogxyz.grid.xyz import (
    XYZTileGrid,
    best_zoom_for_resolution,
    build_resolution_table,
    exact_resolution,
    meters_to_tile,
    tile_to_mercator_bbox,
)

__all__ = [
    "TileGrid",
    "XYZTileGrid",
    "best_zoom_for_resolution",
    "build_resolution_table",
    "exact_resolution",
    "meters_to_tile",
    "tile_to_mercator_bbox",
]
