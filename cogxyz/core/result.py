"""
Result containers

Raster windows read from a COG level and the RGBA bitmaps encoded from them.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from cogxyz.core.types import ChannelOrder, PixelWindow


@dataclass(frozen=True)
class RasterWindow:
    """
    Raw pixel values read for one tile footprint

    The element type and channel layout are explicit so the same read path
    serves single-band classification rasters and multi-band imagery.

    Attributes:
        data: (height, width, bands) if interleaved, (bands, height, width) otherwise
        width: Declared width in pixels
        height: Declared height in pixels
        channel_order: Layout of ``data``
        level: COG pyramid level the values were read from
        window: Pixel window of that level that was read
    """

    data: NDArray
    width: int
    height: int
    channel_order: ChannelOrder
    level: int
    window: PixelWindow

    def __post_init__(self):
        if self.data.ndim != 3:
            raise ValueError(f"Raster data must be 3-dimensional, got shape {self.data.shape}")

        if self.channel_order is ChannelOrder.INTERLEAVED:
            rows, cols = self.data.shape[0], self.data.shape[1]
        else:
            rows, cols = self.data.shape[1], self.data.shape[2]

        if (rows, cols) != (self.height, self.width):
            raise ValueError(
                f"Raster data shape {self.data.shape} does not match declared "
                f"{self.width}x{self.height} ({self.channel_order.value})"
            )

    @property
    def dtype(self) -> np.dtype:
        return self.data.dtype

    @property
    def band_count(self) -> int:
        if self.channel_order is ChannelOrder.INTERLEAVED:
            return self.data.shape[2]
        return self.data.shape[0]

    def band(self, index: int = 0) -> NDArray:
        """
        Single band as a (height, width) array

        Args:
            index: 0-based band position within ``data``

        Raises:
            IndexError: If the band is not part of this window
        """
        if not 0 <= index < self.band_count:
            raise IndexError(f"Band {index} out of range, window has {self.band_count} band(s)")

        if self.channel_order is ChannelOrder.INTERLEAVED:
            return self.data[:, :, index]
        return self.data[index]


@dataclass(frozen=True)
class TileBitmap:
    """RGBA tile as a (size, size, 4) uint8 array"""

    rgba: NDArray[np.uint8]

    @property
    def size(self) -> int:
        return self.rgba.shape[0]

    def to_bytes(self) -> bytes:
        """Row-major R, G, B, A bytes (size * size * 4)"""
        return self.rgba.tobytes()
