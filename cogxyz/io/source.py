"""
COG source access using Rasterio

The pyramid index talks to the TIFF reader only through the ``TiffSource``
protocol: level count, per-level metadata and windowed reads. ``RasterioSource``
implements it on top of GDAL; level 0 is the full resolution image and level
``n`` is GDAL overview ``n - 1``.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence, Tuple

import numpy as np
import rasterio
from rasterio.enums import Resampling
from rasterio.errors import RasterioIOError
from rasterio.windows import Window

from cogxyz.core.exceptions import LevelNotFoundError, SourceUnreachableError
from cogxyz.core.result import RasterWindow
from cogxyz.core.types import ChannelOrder, PixelWindow
from cogxyz.gis.bbox import BoundingBox

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelMetadata:
    """Geometry and layout of one pyramid level"""

    level: int
    origin: Tuple[float, float]
    resolution: Tuple[float, float]
    bbox: BoundingBox
    tile_width: int
    tile_height: int
    is_tiled: bool
    width: int
    height: int
    projection: str | None
    band_count: int
    dtype: str

    def __str__(self) -> str:
        return (
            f"Level {self.level}: {self.width}x{self.height} px, "
            f"tiles {self.tile_width}x{self.tile_height}"
            f"{'' if self.is_tiled else ' (untiled)'}, "
            f"resolution {self.resolution}, origin {self.origin}, "
            f"bbox {self.bbox.as_tuple()}"
        )


class TiffSource(Protocol):
    """Lower-level TIFF reader consumed by the pyramid index"""

    def level_count(self) -> int:
        """Number of pyramid levels (full image plus overviews)"""
        ...

    def level_metadata(self, level: int) -> LevelMetadata:
        """
        Geometry of one level

        Raises:
            LevelNotFoundError: If the source has no image at ``level``
        """
        ...

    def read_window(
        self,
        level: int,
        window: PixelWindow,
        output_size: int,
        channel_order: ChannelOrder = ChannelOrder.INTERLEAVED,
        bands: Sequence[int] | None = None,
    ) -> RasterWindow:
        """
        Read a pixel window of a level, resampled to output_size x output_size

        Args:
            level: Pyramid level
            window: Pixel window of that level
            output_size: Edge of the returned raster in pixels
            channel_order: Layout of the returned array
            bands: 1-based band indexes (default: all bands)
        """
        ...

    def close(self) -> None: ...


class RasterioSource:
    """
    COG reader using Rasterio

    Every level read and metadata probe opens its own dataset handle, so
    concurrent tile renders never share a GDAL handle.

    Attributes:
        path: Path or URL of the COG
        dataset: Rasterio handle of level 0

    Examples:
        >>> with RasterioSource("landcover_cog.tif") as source:
        ...     source.level_count()
        ...     meta = source.level_metadata(0)
        3
    """

    def __init__(self, path: str):
        """
        Open COG file with Rasterio

        Args:
            path: Path or URL (anything GDAL can open, e.g. /vsicurl/ or https://)

        Raises:
            rasterio.errors.RasterioIOError: If the file can't be opened
        """
        self.path = str(path)
        self.dataset = rasterio.open(self.path, "r")
        self._level_count = 1 + (len(self.dataset.overviews(1)) if self.dataset.count else 0)

    def level_count(self) -> int:
        return self._level_count

    def level_metadata(self, level: int) -> LevelMetadata:
        with self.open_level(level) as dataset:
            return self._describe(dataset, level)

    def read_window(
        self,
        level: int,
        window: PixelWindow,
        output_size: int,
        channel_order: ChannelOrder = ChannelOrder.INTERLEAVED,
        bands: Sequence[int] | None = None,
    ) -> RasterWindow:
        with self.open_level(level) as dataset:
            indexes = list(bands) if bands else list(dataset.indexes)

            # flooring can push the far edge one pixel past the level
            boundless = window.end_x > dataset.width or window.end_y > dataset.height

            data = dataset.read(
                indexes=indexes,
                window=Window(window.origin_x, window.origin_y, window.width, window.height),
                out_shape=(len(indexes), output_size, output_size),
                resampling=Resampling.nearest,
                boundless=boundless,
                fill_value=dataset.nodata if boundless else None,
            )

        if channel_order is ChannelOrder.INTERLEAVED:
            data = np.ascontiguousarray(np.moveaxis(data, 0, -1))

        return RasterWindow(
            data=data,
            width=output_size,
            height=output_size,
            channel_order=channel_order,
            level=level,
            window=window,
        )

    def close(self):
        """Close the level 0 handle"""
        if self.dataset is not None:
            self.dataset.close()

    def open_level(self, level: int):
        """Open a dataset handle for one pyramid level"""
        if level < 0 or level >= self.level_count():
            raise LevelNotFoundError(level)

        try:
            if level == 0:
                return rasterio.open(self.path, "r")
            return rasterio.open(self.path, "r", overview_level=level - 1)
        except RasterioIOError as e:
            raise LevelNotFoundError(level, f"No image at level {level}: {e}") from e

    # -------------------------------------------------------------------------
    # Internal helper methods
    # -------------------------------------------------------------------------

    @staticmethod
    def _describe(dataset, level: int) -> LevelMetadata:
        """Extract level geometry from an open dataset"""
        transform = dataset.transform
        bounds = dataset.bounds
        block_height, block_width = dataset.block_shapes[0]

        return LevelMetadata(
            level=level,
            origin=(transform.c, transform.f),
            resolution=(transform.a, transform.e),
            bbox=BoundingBox(
                west=bounds.left, south=bounds.bottom, east=bounds.right, north=bounds.top
            ),
            tile_width=block_width,
            tile_height=block_height,
            is_tiled=bool(dataset.profile.get("tiled", False)),
            width=dataset.width,
            height=dataset.height,
            projection=_projection_key(dataset.crs),
            band_count=dataset.count,
            dtype=dataset.dtypes[0],
        )

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()

    def __repr__(self) -> str:
        """String representation"""
        if self.dataset.closed:
            return f"<RasterioSource (closed): {self.path}>"
        return (
            f"<RasterioSource: {self.path}>\n"
            f"  Size: {self.dataset.width} x {self.dataset.height}\n"
            f"  Levels: {self.level_count()}\n"
            f"  CRS: {self.dataset.crs}"
        )


def _projection_key(crs) -> str | None:
    """EPSG code as "EPSG:nnnn" when known, else the CRS string"""
    if crs is None:
        return None

    epsg = crs.to_epsg()
    if epsg is not None:
        return f"EPSG:{epsg}"
    return crs.to_string() or None


def open_source(path: str) -> RasterioSource:
    """
    Open a COG for pyramid access

    Args:
        path: Path or URL of the COG

    Raises:
        SourceUnreachableError: If GDAL cannot open the source
    """
    try:
        source = RasterioSource(path)
    except RasterioIOError as e:
        raise SourceUnreachableError(f"Cannot open COG source {path}: {e}") from e

    logger.debug("Opened COG source %s with %d level(s)", path, source.level_count())
    return source
