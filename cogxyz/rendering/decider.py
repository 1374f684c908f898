"""
Raster value decider

Maps raw raster values (classification codes, measurements, ...) to RGBA
colors. Lookup order for a value:

1. exact match in the decider's value table
2. the per-call override color, if one is given
3. the decider's "unknown" color, if it has one
4. transparent black (0, 0, 0, 0)

Debug rendering injects a per-tile override at step 2 to make tile
boundaries visible without touching steps 1 and 3.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

import numpy as np

from cogxyz.core.types import RGBA, TRANSPARENT, TileIndex

# Key accepted by from_mapping for the fallback color
UNKNOWN = "unknown"

DEBUG_ALPHA = 177


def _validate_color(color: Any) -> RGBA:
    """Check a color is 4 channels in 0-255 and normalize it to a tuple of ints"""
    rgba = tuple(int(channel) for channel in color)
    if len(rgba) != 4 or not all(0 <= channel <= 255 for channel in rgba):
        raise ValueError(f"Color must be 4 channels in 0-255, got {color!r}")
    return rgba  # type: ignore[return-value]


@dataclass
class RenderingDecider:
    """
    Value-to-color table with an optional color for unmapped values

    Attributes:
        colors: {raster value: RGBA}, matched by exact equality
        unknown: Color for values missing from ``colors`` (None = transparent)

    Examples:
        >>> decider = RenderingDecider({11: (255, 232, 117, 170)}, unknown=(0, 0, 0, 170))
        >>> decider.lookup(11)
        (255, 232, 117, 170)
        >>> decider.lookup(12) is None
        True
    """

    colors: Dict[float, RGBA] = field(default_factory=dict)
    unknown: RGBA | None = None

    def __post_init__(self):
        self.colors = {value: _validate_color(color) for value, color in self.colors.items()}
        if self.unknown is not None:
            self.unknown = _validate_color(self.unknown)

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> "RenderingDecider":
        """
        Build a decider from a mapping that may carry an "unknown" key

        Examples:
            >>> RenderingDecider.from_mapping({"unknown": (9, 9, 9, 255), 1: (34, 139, 34, 200)})
            RenderingDecider(colors={1: (34, 139, 34, 200)}, unknown=(9, 9, 9, 255))
        """
        colors = {}
        unknown = None

        for key, color in mapping.items():
            if key == UNKNOWN:
                unknown = color
            else:
                colors[float(key) if isinstance(key, str) else key] = color

        return cls(colors=colors, unknown=unknown)

    def lookup(self, value: Any) -> RGBA | None:
        """Exact-match color for a value, None if the value is not mapped"""
        return self.colors.get(value)

    def fallback(self, override: RGBA | None = None) -> RGBA:
        """Color used for every unmapped value (steps 2-4 of the lookup order)"""
        if override is not None:
            return override
        if self.unknown is not None:
            return self.unknown
        return TRANSPARENT


def decide_color(decider: RenderingDecider, value: Any, override: RGBA | None = None) -> RGBA:
    """
    Color of one raster value

    Args:
        decider: Value-to-color table
        value: Raw raster value
        override: Per-call color for unmapped values (takes precedence over
            the decider's unknown color)

    Returns:
        RGBA tuple
    """
    color = decider.lookup(value)
    if color is not None:
        return color
    return decider.fallback(override)


class DebugColorSource:
    """
    Random but reproducible colors per tile

    The color of a tile depends only on the seed and the tile index, so
    concurrent renders and re-renders of the same tile agree. Without a seed a
    fresh one is drawn once per instance.

    Examples:
        >>> colors = DebugColorSource(seed=7)
        >>> colors.color_for_tile(TileIndex(1, 2, 3)) == colors.color_for_tile(TileIndex(1, 2, 3))
        True
    """

    def __init__(self, seed: int | None = None, alpha: int = DEBUG_ALPHA):
        self.seed = seed if seed is not None else int(np.random.SeedSequence().entropy)
        self.alpha = alpha

    def color_for_tile(self, tile: TileIndex) -> RGBA:
        rng = np.random.default_rng([self.seed, tile.z, tile.x, tile.y])
        red, green, blue = rng.integers(0, 256, size=3)
        return (int(red), int(green), int(blue), self.alpha)
