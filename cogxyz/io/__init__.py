"""
cogxyz I/O Module

COG source access and inspection.
"""

from cogxyz.io.cog_metadata import COGMetadata, CogLayerData, analyse_cog, inspect_cog
from cogxyz.io.source import LevelMetadata, RasterioSource, TiffSource, open_source

__all__ = [
    "COGMetadata",
    "CogLayerData",
    "LevelMetadata",
    "RasterioSource",
    "TiffSource",
    "analyse_cog",
    "inspect_cog",
    "open_source",
]
