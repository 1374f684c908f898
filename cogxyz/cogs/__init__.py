"""
cogxyz COG Module

Pyramid index matching COG levels to XYZ zooms and reading tile windows.
"""

from cogxyz.cogs.pyramid import (
    CogPyramidIndex,
    LevelResolution,
    LevelZeroGeometry,
    bbox_to_window,
    initialize,
    level_resolution,
    open_cog,
)

__all__ = [
    "CogPyramidIndex",
    "LevelResolution",
    "LevelZeroGeometry",
    "bbox_to_window",
    "initialize",
    "level_resolution",
    "open_cog",
]
