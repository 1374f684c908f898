"""
cogxyz Rendering Module

Raster value to RGBA color mapping and tile encoding.
"""

from cogxyz.rendering.decider import (
    UNKNOWN,
    DebugColorSource,
    RenderingDecider,
    decide_color,
)
from cogxyz.rendering.encoder import encode_tile

__all__ = [
    "UNKNOWN",
    "DebugColorSource",
    "RenderingDecider",
    "decide_color",
    "encode_tile",
]
