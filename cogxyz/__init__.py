"""
cogxyz - Serve Cloud-Optimized GeoTIFFs as XYZ map tiles

Matches a COG's internal overview pyramid to the Web Mercator XYZ zoom ladder,
reads the pixel window under a requested tile and paints it with a
value to RGBA palette.

Quick Start:
    >>> import cogxyz
    >>>
    >>> # Open a COG and look at its pyramid
    >>> cog = cogxyz.open_cog("./landcover_cog.tif")
    >>> cog.xyz_main_zoom
    10
    >>>
    >>> # Render a tile
    >>> decider = cogxyz.RenderingDecider({11: (255, 232, 117, 170)})
    >>> renderer = cogxyz.CogTileRenderer(cog, decider)
    >>> bitmap = renderer.render_tile(cogxyz.TileIndex(x=639, y=381, z=10))
    >>> bitmap.rgba.shape
    (256, 256, 4)
"""

from cogxyz.cogs import CogPyramidIndex, initialize, open_cog
from cogxyz.core import (
    ChannelOrder,
    # Exceptions
    CogXYZError,
    DimensionMismatchError,
    LayoutError,
    LevelNotFoundError,
    # Observer
    LoggingObserver,
    MissingProjectionError,
    PipelineObserver,
    PixelWindow,
    # Results
    RasterWindow,
    ResolutionLookupError,
    SourceError,
    SourceUnreachableError,
    TileBitmap,
    # Types
    TileIndex,
    UnsupportedLayoutError,
)
from cogxyz.gis import BoundingBox
from cogxyz.grid import XYZTileGrid
from cogxyz.io import RasterioSource, TiffSource, inspect_cog, open_source
from cogxyz.rendering import DebugColorSource, RenderingDecider, decide_color, encode_tile
from cogxyz.tiles import CogTileRenderer, TileLayerConfig

__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "ChannelOrder",
    "CogPyramidIndex",
    "CogTileRenderer",
    "CogXYZError",
    "DebugColorSource",
    "DimensionMismatchError",
    "LayoutError",
    "LevelNotFoundError",
    "LoggingObserver",
    "MissingProjectionError",
    "PipelineObserver",
    "PixelWindow",
    "RasterWindow",
    "RasterioSource",
    "RenderingDecider",
    "ResolutionLookupError",
    "SourceError",
    "SourceUnreachableError",
    "TiffSource",
    "TileBitmap",
    "TileIndex",
    "TileLayerConfig",
    "UnsupportedLayoutError",
    "XYZTileGrid",
    "__version__",
    "decide_color",
    "encode_tile",
    "initialize",
    "inspect_cog",
    "open_cog",
    "open_source",
]
