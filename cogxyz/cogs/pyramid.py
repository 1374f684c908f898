"""
COG pyramid index

Bridges the COG's own resolution pyramid (level 0 = full resolution, each
next level half the resolution) and the XYZ tile pyramid.

The COG does not declare which of its levels corresponds to which XYZ zoom,
so the mapping is predicted: level 0 is matched to the XYZ zoom with the
closest resolution, and every XYZ zoom step coarser than that is assumed to
be one COG level further down the pyramid. This is an approximation that
seeds level guesses; a missing level simply yields no data.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Sequence, Tuple

from cogxyz.core.exceptions import LevelNotFoundError, MissingProjectionError, UnsupportedLayoutError
from cogxyz.core.interfaces import LoggingObserver, PipelineObserver
from cogxyz.core.result import RasterWindow
from cogxyz.core.types import ChannelOrder, PixelWindow, TileIndex
from cogxyz.gis.bbox import BBoxLike, BoundingBox, bounds_to_tuple, intersection, overlap
from cogxyz.gis.mercator import bounds_to_mercator
from cogxyz.grid.base import TileGrid
from cogxyz.grid.xyz import DEFAULT_TILE_SIZE, RESOLUTION_PRECISION, XYZTileGrid
from cogxyz.io.source import LevelMetadata, TiffSource, open_source

logger = logging.getLogger(__name__)

# How many COG levels expected_level_for_resolution looks at
DEFAULT_LEVELS_TO_SCAN = 30


class LevelResolution(NamedTuple):
    """A COG pyramid level and its expected resolution in meters per pixel"""

    level: int
    resolution: float


@dataclass(frozen=True)
class LevelZeroGeometry:
    """
    Geometry shared by every level of a COG

    Attributes:
        origin: Top-left corner of level 0 in projected meters
        bbox: Projected footprint (identical at every level)
        projection: CRS identifier (e.g. "EPSG:3857")
        resolution: Level 0 meters per pixel
        xyz_main_zoom: XYZ zoom whose resolution best matches level 0
        xyz_main_tile: XYZ tile containing the origin at that zoom
    """

    origin: Tuple[float, float]
    bbox: BoundingBox
    projection: str
    resolution: float
    xyz_main_zoom: int
    xyz_main_tile: TileIndex


def level_resolution(level: int, level_zero_resolution: float) -> float:
    """
    Expected resolution of a COG level

    Level 0 has the finest resolution; each level further down doubles the
    meters represented by one pixel.

    Examples:
        >>> level_resolution(3, 0.3)
        2.4
    """
    return round(level_zero_resolution * 2**level, RESOLUTION_PRECISION)


def bbox_to_window(
    part: BBoxLike, origin: Tuple[float, float], resolution: Tuple[float, float]
) -> PixelWindow:
    """
    Pixel window of a level covering a projected box

    Each corner is converted with ``floor((meters - origin) / resolution)``
    and made non-negative with ``abs()``; since the sign of the vertical
    resolution can flip the axis order, the window is the min/max over the
    north-west and south-east corners.

    Args:
        part: Box in the COG's projected CRS (usually the tile/COG intersection)
        origin: Top-left corner of the COG in the same CRS
        resolution: (x, y) meters per pixel at the level being read

    Returns:
        PixelWindow of that level
    """
    origin_x, origin_y = origin
    res_x, res_y = resolution
    min_x, min_y, max_x, max_y = bounds_to_tuple(part)

    def to_pixel(x_m: float, y_m: float) -> Tuple[int, int]:
        # TODO: abs() hides a north-up/south-up axis inversion instead of resolving it
        return (
            abs(math.floor((x_m - origin_x) / res_x)),
            abs(math.floor((y_m - origin_y) / res_y)),
        )

    px0, py0 = to_pixel(min_x, max_y)
    px1, py1 = to_pixel(max_x, min_y)

    return PixelWindow(
        origin_x=min(px0, px1),
        origin_y=min(py0, py1),
        end_x=max(px0, px1),
        end_y=max(py0, py1),
    )


class CogPyramidIndex:
    """
    Level-0 geometry of an opened COG and the level/window resolver

    Create it with ``open_cog`` (or ``initialize`` for an already opened
    source). It is read-only after construction, so one instance can serve
    concurrent tile reads. Close it explicitly or use it as a context manager.

    Examples:
        >>> with open_cog("landcover_cog.tif") as cog:
        ...     cog.expected_level_for_zoom(12)
        ...     raster = cog.read_window_for_tile_footprint(12, tile_bbox)
        LevelResolution(level=2, resolution=152.874)
    """

    def __init__(
        self,
        source: TiffSource,
        geometry: LevelZeroGeometry,
        grid: TileGrid,
        observer: PipelineObserver | None = None,
    ):
        self.source = source
        self.geometry = geometry
        self.grid = grid
        self.observer = observer or LoggingObserver(logger)

    @classmethod
    def open(cls, path: str, **kwargs) -> "CogPyramidIndex":
        """Alias of ``open_cog``"""
        return open_cog(path, **kwargs)

    @property
    def origin(self) -> Tuple[float, float]:
        return self.geometry.origin

    @property
    def bbox(self) -> BoundingBox:
        return self.geometry.bbox

    @property
    def projection(self) -> str:
        return self.geometry.projection

    @property
    def resolution(self) -> float:
        return self.geometry.resolution

    @property
    def xyz_main_zoom(self) -> int:
        return self.geometry.xyz_main_zoom

    @property
    def xyz_main_tile(self) -> TileIndex:
        return self.geometry.xyz_main_tile

    def level_resolution(self, level: int) -> float:
        """Expected meters per pixel at a COG level"""
        return level_resolution(level, self.resolution)

    def expected_level_for_zoom(self, zoom: int) -> LevelResolution:
        """
        COG level predicted for an XYZ zoom

        Every XYZ zoom step coarser than the zoom matching level 0 moves one
        level down the COG pyramid. Zooms finer than level 0 stay at level 0.

        Args:
            zoom: XYZ zoom level

        Returns:
            (level, expected resolution of that level)
        """
        level = max(0, self.xyz_main_zoom - zoom)
        return LevelResolution(level, self.level_resolution(level))

    def expected_level_for_resolution(
        self, resolution_m: float, max_levels_to_scan: int = DEFAULT_LEVELS_TO_SCAN
    ) -> LevelResolution:
        """
        COG level whose expected resolution is closest to ``resolution_m``

        Levels 0..max_levels_to_scan-1 are scanned in order; on equal
        distance the first level found is kept.
        """
        best = LevelResolution(0, self.level_resolution(0))

        for level in range(max_levels_to_scan):
            candidate = LevelResolution(level, self.level_resolution(level))
            if abs(candidate.resolution - resolution_m) < abs(best.resolution - resolution_m):
                best = candidate

        return best

    def try_read_level(self, level: int) -> LevelMetadata | None:
        """
        Probe a COG level

        The number of levels is not known up front, so a missing level is
        reported as None rather than raised.
        """
        try:
            return self.source.level_metadata(level)
        except LevelNotFoundError:
            logger.info("No image at level %d", level)
            return None

    def describe_levels(self) -> Iterator[LevelMetadata]:
        """Metadata of every level the source reports, finest first"""
        for level in range(self.source.level_count()):
            meta = self.try_read_level(level)
            if meta is not None:
                yield meta

    def read_window_for_tile_footprint(
        self,
        zoom: int,
        tile_bbox: BBoxLike,
        tile_size: int = DEFAULT_TILE_SIZE,
        channel_order: ChannelOrder = ChannelOrder.INTERLEAVED,
        bands: Sequence[int] | None = None,
    ) -> RasterWindow | None:
        """
        Read the raster covering one XYZ tile footprint

        Args:
            zoom: XYZ zoom of the tile
            tile_bbox: Tile footprint in the COG's projected CRS
            tile_size: Edge of the returned raster in pixels
            channel_order: Layout of the returned array
            bands: 1-based band indexes (default: all bands)

        Returns:
            RasterWindow of tile_size x tile_size pixels, or None when the
            footprint misses the COG or the predicted level does not exist

        Raises:
            UnsupportedLayoutError: If the level is not internally tiled
        """
        tile_bbox = bounds_to_tuple(tile_bbox)

        # touching along an edge is not an overlap
        has_overlap = overlap(tile_bbox, self.bbox)
        self.observer.event("overlap", zoom=zoom, tile_bbox=tile_bbox, overlap=has_overlap)
        if not has_overlap:
            return None

        shared = intersection(tile_bbox, self.bbox)

        level, expected_resolution = self.expected_level_for_zoom(zoom)
        self.observer.event("level", zoom=zoom, level=level, resolution=expected_resolution)

        meta = self.try_read_level(level)
        if meta is None:
            return None

        if not meta.is_tiled:
            raise UnsupportedLayoutError(f"The image at level {level} is not tiled")

        window = bbox_to_window(shared, self.origin, (expected_resolution, expected_resolution))
        self.observer.event("window", zoom=zoom, level=level, shared=shared, window=window)

        if window.is_empty:
            logger.debug("Empty pixel window %s at level %d", window.as_tuple(), level)
            return None

        return self.source.read_window(
            level, window, tile_size, channel_order=channel_order, bands=bands
        )

    def read_window_for_geographic_bounds(
        self,
        zoom: int,
        bounds: BBoxLike,
        tile_size: int = DEFAULT_TILE_SIZE,
        channel_order: ChannelOrder = ChannelOrder.INTERLEAVED,
        bands: Sequence[int] | None = None,
    ) -> RasterWindow | None:
        """
        Same as read_window_for_tile_footprint, for a lon/lat footprint

        The footprint is projected to Web Mercator (corners floored to whole
        meters) before it is matched against the COG.
        """
        return self.read_window_for_tile_footprint(
            zoom,
            bounds_to_mercator(bounds),
            tile_size=tile_size,
            channel_order=channel_order,
            bands=bands,
        )

    def close(self):
        """Close the underlying source"""
        self.source.close()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()

    def __repr__(self) -> str:
        return (
            f"<CogPyramidIndex: {self.projection}>\n"
            f"  Origin: {self.origin}\n"
            f"  BBox: {self.bbox.as_tuple()}\n"
            f"  Level 0 resolution: {self.resolution}\n"
            f"  XYZ main zoom: {self.xyz_main_zoom} (tile {self.xyz_main_tile})"
        )


def initialize(
    source: TiffSource,
    grid: TileGrid | None = None,
    observer: PipelineObserver | None = None,
) -> CogPyramidIndex:
    """
    Read level 0 of an opened source and build its pyramid index

    Args:
        source: Opened TIFF source
        grid: XYZ grid used to match level 0 to a zoom (default: 256px, zooms 0-22)
        observer: Pipeline checkpoint hook (default: debug logging)

    Raises:
        MissingProjectionError: If level 0 has no projected or geographic CRS
    """
    grid = grid or XYZTileGrid()
    main = source.level_metadata(0)

    if not main.projection:
        raise MissingProjectionError("No projection found in the COG image")

    resolution = main.resolution[0]
    xyz_main_zoom, _ = grid.best_zoom_for_resolution(resolution)
    origin_x, origin_y = main.origin

    geometry = LevelZeroGeometry(
        origin=main.origin,
        bbox=main.bbox,
        projection=main.projection,
        resolution=resolution,
        xyz_main_zoom=xyz_main_zoom,
        xyz_main_tile=grid.tile_for_point(origin_x, origin_y, xyz_main_zoom),
    )

    logger.debug(
        "Initialized COG pyramid: %s, level 0 at %.3f m/px ~ XYZ zoom %d",
        geometry.projection,
        geometry.resolution,
        geometry.xyz_main_zoom,
    )

    return CogPyramidIndex(source, geometry, grid, observer)


def open_cog(
    path: str,
    grid: TileGrid | None = None,
    observer: PipelineObserver | None = None,
) -> CogPyramidIndex:
    """
    Open a COG and build its pyramid index

    Args:
        path: Path or URL of the COG

    Raises:
        SourceUnreachableError: If the source cannot be opened
        MissingProjectionError: If level 0 has no CRS

    Examples:
        >>> cog = open_cog("https://example.com/landcover_cog.tif")
        >>> cog.xyz_main_zoom
        14
        >>> cog.close()
    """
    source = open_source(path)
    try:
        return initialize(source, grid=grid, observer=observer)
    except Exception:
        source.close()
        raise
