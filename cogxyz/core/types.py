"""
Shared value types

Tile indexes, pixel windows and color tuples used across the pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple

# RGBA color, each channel 0-255
RGBA = Tuple[int, int, int, int]

TRANSPARENT: RGBA = (0, 0, 0, 0)


class TileIndex(NamedTuple):
    """
    One tile of the worldwide XYZ tiling scheme

    Examples:
        >>> tile = TileIndex(x=9984, y=5888, z=14)
        >>> tile.validate()
        TileIndex(x=9984, y=5888, z=14)
    """

    x: int
    y: int
    z: int

    def validate(self) -> "TileIndex":
        """
        Check the index lies inside the tiling scheme

        Raises:
            ValueError: If zoom is negative or x/y are outside [0, 2**zoom)
        """
        if self.z < 0:
            raise ValueError(f"Zoom must be >= 0, got {self.z}")

        tiles_per_axis = 2**self.z
        if not (0 <= self.x < tiles_per_axis and 0 <= self.y < tiles_per_axis):
            raise ValueError(
                f"Tile {self.z}/{self.x}/{self.y} is outside [0, {tiles_per_axis}) at zoom {self.z}"
            )
        return self

    def __str__(self) -> str:
        return f"{self.z}/{self.x}/{self.y}"


@dataclass(frozen=True)
class PixelWindow:
    """
    Pixel-space rectangle of one pyramid level

    Coordinates are column/row offsets; ``end`` is exclusive.
    """

    origin_x: int
    origin_y: int
    end_x: int
    end_y: int

    def __post_init__(self):
        if min(self.origin_x, self.origin_y, self.end_x, self.end_y) < 0:
            raise ValueError(f"Pixel window coordinates must be non-negative: {self}")
        if self.end_x < self.origin_x or self.end_y < self.origin_y:
            raise ValueError(f"Pixel window end must not precede its origin: {self}")

    @property
    def width(self) -> int:
        return self.end_x - self.origin_x

    @property
    def height(self) -> int:
        return self.end_y - self.origin_y

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.origin_x, self.origin_y, self.end_x, self.end_y)


class ChannelOrder(str, Enum):
    """Layout of multi-band raster reads"""

    # (height, width, bands): values of one pixel are adjacent
    INTERLEAVED = "interleaved"
    # (bands, height, width): one 2D array per band
    BAND = "band"
