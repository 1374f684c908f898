"""
cogxyz Tiles Module

Per-tile rendering of a COG into XYZ map tiles.
"""

from cogxyz.tiles.renderer import CogTileRenderer, TileLayerConfig

__all__ = ["CogTileRenderer", "TileLayerConfig"]
