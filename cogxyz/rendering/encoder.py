"""
Tile encoder

Turns one band of a raster window into a fixed-size RGBA bitmap using a
rendering decider.
"""

import numpy as np

from cogxyz.core.exceptions import DimensionMismatchError
from cogxyz.core.result import RasterWindow, TileBitmap
from cogxyz.core.types import RGBA
from cogxyz.rendering.decider import RenderingDecider


def encode_tile(
    raster: RasterWindow,
    decider: RenderingDecider,
    output_size: int,
    override: RGBA | None = None,
    band: int = 0,
) -> TileBitmap:
    """
    Encode a raster window as an RGBA tile

    Every pixel gets the color ``decide_color(decider, value, override)``
    would give it; pixels are laid out row-major with 4 bytes (R, G, B, A)
    each.

    Args:
        raster: Window read for the tile
        decider: Value-to-color table
        output_size: Tile edge in pixels; must equal the window's declared size
        override: Color for unmapped values, ahead of the decider's unknown color
        band: 0-based band of the window to encode

    Returns:
        TileBitmap of output_size x output_size x 4 bytes

    Raises:
        DimensionMismatchError: If the window is not output_size x output_size
    """
    if raster.width != output_size or raster.height != output_size:
        raise DimensionMismatchError(
            f"Raster data dimensions {raster.width}x{raster.height} do not match "
            f"tile size {output_size}"
        )

    values = raster.band(band)

    rgba = np.empty((output_size, output_size, 4), dtype=np.uint8)
    rgba[:] = decider.fallback(override)

    for value, color in decider.colors.items():
        rgba[values == value] = color

    return TileBitmap(rgba=rgba)
