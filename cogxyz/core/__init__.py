"""
cogxyz Core Module

Exceptions, shared value types, result containers and the pipeline observer.
"""

from cogxyz.core.exceptions import (
    CogXYZError,
    DimensionMismatchError,
    LayoutError,
    LevelNotFoundError,
    MissingProjectionError,
    ResolutionLookupError,
    SourceError,
    SourceUnreachableError,
    UnsupportedLayoutError,
)
from cogxyz.core.interfaces import LoggingObserver, PipelineObserver
from cogxyz.core.result import RasterWindow, TileBitmap
from cogxyz.core.types import RGBA, TRANSPARENT, ChannelOrder, PixelWindow, TileIndex

__all__ = [
    # Types
    "RGBA",
    "TRANSPARENT",
    "ChannelOrder",
    "PixelWindow",
    "TileIndex",
    # Results
    "RasterWindow",
    "TileBitmap",
    # Observer
    "LoggingObserver",
    "PipelineObserver",
    # Exceptions
    "CogXYZError",
    "DimensionMismatchError",
    "LayoutError",
    "LevelNotFoundError",
    "MissingProjectionError",
    "ResolutionLookupError",
    "SourceError",
    "SourceUnreachableError",
    "UnsupportedLayoutError",
]
