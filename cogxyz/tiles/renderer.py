"""
XYZ tile renderer

Per-tile entry point of the pipeline: tile index -> Mercator footprint ->
COG window -> RGBA bitmap, or None when the tile has no data.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from cogxyz.cogs.pyramid import CogPyramidIndex
from cogxyz.core.interfaces import PipelineObserver
from cogxyz.core.result import TileBitmap
from cogxyz.core.types import ChannelOrder, TileIndex
from cogxyz.grid.xyz import DEFAULT_MAX_ZOOM, DEFAULT_TILE_SIZE, XYZTileGrid
from cogxyz.rendering.decider import DebugColorSource, RenderingDecider
from cogxyz.rendering.encoder import encode_tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TileLayerConfig:
    """
    Tile layer settings

    Attributes:
        tile_size: Tile edge in pixels
        min_zoom: Lowest zoom that is rendered
        max_zoom: Highest zoom that is rendered
        debug: Color unmapped values with a per-tile random color
        debug_seed: Seed of the debug colors (None = random per renderer)
        band: 0-based band of the COG that is encoded
    """

    tile_size: int = DEFAULT_TILE_SIZE
    min_zoom: int = 0
    max_zoom: int = 20
    debug: bool = False
    debug_seed: int | None = None
    band: int = 0

    def __post_init__(self):
        if self.tile_size <= 0:
            raise ValueError(f"Tile size must be positive, got {self.tile_size}")
        if not 0 <= self.min_zoom <= self.max_zoom:
            raise ValueError(f"Invalid zoom range {self.min_zoom}..{self.max_zoom}")


class CogTileRenderer:
    """
    Renders XYZ tiles of one COG

    Tiles are independent: nothing is cached and no state is shared between
    renders beyond the read-only pyramid index.

    Examples:
        >>> decider = RenderingDecider({11: (255, 232, 117, 170)})
        >>> with open_cog("landcover_cog.tif") as cog:
        ...     renderer = CogTileRenderer(cog, decider)
        ...     bitmap = renderer.render_tile(TileIndex(x=9984, y=5888, z=14))
    """

    def __init__(
        self,
        cog: CogPyramidIndex,
        decider: RenderingDecider,
        config: TileLayerConfig | None = None,
        observer: PipelineObserver | None = None,
    ):
        self.cog = cog
        self.decider = decider
        self.config = config or TileLayerConfig()
        self.observer = observer or cog.observer
        self.grid = XYZTileGrid(
            self.config.tile_size, max(self.config.max_zoom, DEFAULT_MAX_ZOOM)
        )
        self.debug_colors = DebugColorSource(self.config.debug_seed) if self.config.debug else None

    def render_tile(self, tile: Tuple[int, int, int]) -> TileBitmap | None:
        """
        Render one tile

        Args:
            tile: (x, y, z) index

        Returns:
            TileBitmap of tile_size x tile_size RGBA pixels, or None if the tile
            has no data (outside the COG, outside the zoom range, or no COG
            level for its zoom)

        Raises:
            ValueError: If the tile index is outside the tiling scheme
            UnsupportedLayoutError: If the COG level is not internally tiled
            DimensionMismatchError: If the read window has the wrong size
        """
        tile = TileIndex(*tile).validate()
        tile_size = self.config.tile_size

        if not self.config.min_zoom <= tile.z <= self.config.max_zoom:
            logger.debug("Tile %s outside zoom range, skipped", tile)
            return None

        bbox = self.grid.tile_bounds(tile)
        self.observer.event("tile_bbox", tile=tile, bbox=bbox.as_tuple())

        raster = self.cog.read_window_for_tile_footprint(
            tile.z,
            bbox,
            tile_size=tile_size,
            channel_order=ChannelOrder.BAND,
            bands=[self.config.band + 1],
        )

        if raster is None:
            self.observer.event("tile_rendered", tile=tile, has_data=False)
            return None

        override = self.debug_colors.color_for_tile(tile) if self.debug_colors else None
        bitmap = encode_tile(raster, self.decider, tile_size, override=override)

        self.observer.event("tile_rendered", tile=tile, has_data=True, level=raster.level)
        return bitmap

    def render_tiles(
        self, tiles: Iterable[Tuple[int, int, int]], max_workers: int | None = None
    ) -> Dict[TileIndex, TileBitmap | None]:
        """
        Render several tiles concurrently

        The first error raised by any tile propagates.

        Returns:
            {tile: bitmap or None}
        """
        indexes = [TileIndex(*tile) for tile in tiles]

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            bitmaps = list(executor.map(self.render_tile, indexes))

        return dict(zip(indexes, bitmaps))

    def tiles_covering_cog(self, zoom: int) -> List[TileIndex]:
        """Tiles at ``zoom`` whose footprint overlaps the COG extent"""
        return self.grid.tiles_in_bounds(self.cog.bbox, zoom)
