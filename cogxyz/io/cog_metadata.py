"""
COG inspection utilities.

Read pyramid metadata from Cloud-Optimized GeoTIFF files, and load a whole
level together with its footprint for overlay rendering.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray

from cogxyz.core.types import ChannelOrder
from cogxyz.gis.bbox import BoundingBox, to_closed_path
from cogxyz.io.source import LevelMetadata, open_source

logger = logging.getLogger(__name__)


@dataclass
class COGMetadata:
    """Metadata extracted from a COG file header, one entry per pyramid level."""

    path: str
    projection: str | None
    bounds: BoundingBox
    width: int
    height: int
    band_count: int
    dtype: str
    resolution: Tuple[float, float]
    levels: List[LevelMetadata] = field(default_factory=list)

    def __repr__(self):
        return (
            f"<COGMetadata: {Path(self.path).name}>\n"
            f"  Size: {self.width}x{self.height}, {self.band_count} bands\n"
            f"  Projection: {self.projection}\n"
            f"  Bounds: {self.bounds.as_tuple()}\n"
            f"  Resolution: {self.resolution}\n"
            f"  Levels: {len(self.levels)}\n"
            f"  Dtype: {self.dtype}"
        )


def inspect_cog(path: str) -> COGMetadata:
    """
    Extract pyramid metadata from a COG file without reading pixel data.

    Args:
        path: Path or URL to COG/GeoTIFF file

    Returns:
        COGMetadata with level 0 geometry and every level the file carries

    Raises:
        SourceUnreachableError: If the file cannot be opened

    Examples:
        >>> meta = inspect_cog("./landcover_cog.tif")
        >>> print(meta.projection)   # "EPSG:3857"
        >>> print(len(meta.levels))  # 3
    """
    with open_source(path) as source:
        levels = [source.level_metadata(level) for level in range(source.level_count())]

    main = levels[0]
    return COGMetadata(
        path=str(path),
        projection=main.projection,
        bounds=main.bbox,
        width=main.width,
        height=main.height,
        band_count=main.band_count,
        dtype=main.dtype,
        resolution=main.resolution,
        levels=levels,
    )


@dataclass
class CogLayerData:
    """
    A whole COG level read into memory with its footprint

    Attributes:
        bbox: Footprint (west, south, east, north) in the COG's CRS
        bounds: Closed ring of the footprint corners
        rasters: Pixel values, layout given by ``channel_order``
        width: Width in pixels
        height: Height in pixels
        res_x: Units per pixel along x
        res_y: Units per pixel along y (negative for north-up images)
    """

    bbox: BoundingBox
    bounds: List[Tuple[float, float]]
    rasters: NDArray
    channel_order: ChannelOrder
    width: int
    height: int
    res_x: float
    res_y: float


def analyse_cog(
    path: str, level: int = 0, channel_order: ChannelOrder = ChannelOrder.BAND
) -> CogLayerData:
    """
    Read one full COG level and its footprint.

    Intended for small COGs or coarse levels that are drawn as a single
    overlay instead of XYZ tiles.

    Args:
        path: Path or URL to the COG
        level: Pyramid level to read (0 = full resolution)
        channel_order: INTERLEAVED gives (height, width, bands), BAND gives
            (bands, height, width)

    Returns:
        CogLayerData

    Examples:
        >>> layer = analyse_cog("./small_cog.tif")
        >>> layer.rasters.shape
        (1, 256, 256)
    """
    with open_source(path) as source:
        meta = source.level_metadata(level)
        with source.open_level(level) as dataset:
            rasters = dataset.read()

    if channel_order is ChannelOrder.INTERLEAVED:
        rasters = np.ascontiguousarray(np.moveaxis(rasters, 0, -1))

    origin_x, origin_y = meta.origin
    res_x, res_y = meta.resolution

    # start at the top-left anchor and walk right/down
    bbox = BoundingBox(
        west=origin_x,
        south=origin_y + res_y * meta.height,
        east=origin_x + res_x * meta.width,
        north=origin_y,
    )

    logger.debug("Analysed %s level %d: %dx%d", path, level, meta.width, meta.height)

    return CogLayerData(
        bbox=bbox,
        bounds=to_closed_path(bbox),
        rasters=rasters,
        channel_order=channel_order,
        width=meta.width,
        height=meta.height,
        res_x=res_x,
        res_y=res_y,
    )
