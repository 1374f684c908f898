"""
Bounding box primitives

Axis-aligned rectangles in a single coordinate system (geographic degrees or
projected meters). Every function accepts either a ``BoundingBox`` or a
``(minx, miny, maxx, maxy)`` tuple.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

TupleBBox = Tuple[float, float, float, float]
Point = Tuple[float, float]


@dataclass(frozen=True)
class BoundingBox:
    """
    Rectangle as (west, south, east, north)

    Examples:
        >>> bbox = BoundingBox(west=39.98, south=41.05, east=46.69, north=43.58)
        >>> bbox.as_tuple()
        (39.98, 41.05, 46.69, 43.58)
    """

    west: float
    south: float
    east: float
    north: float

    def as_tuple(self) -> TupleBBox:
        return (self.west, self.south, self.east, self.north)

    @property
    def width(self) -> float:
        return self.east - self.west

    @property
    def height(self) -> float:
        return self.north - self.south


BBoxLike = Union[BoundingBox, TupleBBox]


def bounds_to_tuple(bounds: BBoxLike) -> TupleBBox:
    """
    Convert a bounding box to a (minx, miny, maxx, maxy) tuple

    Args:
        bounds: BoundingBox or 4-sequence

    Returns:
        Tuple in (west, south, east, north) order
    """
    if isinstance(bounds, BoundingBox):
        return bounds.as_tuple()

    west, south, east, north = bounds
    return (west, south, east, north)


def tuple_to_bounds(bbox: BBoxLike) -> BoundingBox:
    """
    Convert a (minx, miny, maxx, maxy) tuple to a BoundingBox

    Args:
        bbox: 4-sequence or BoundingBox

    Returns:
        BoundingBox with west, south, east, north
    """
    if isinstance(bbox, BoundingBox):
        return bbox

    west, south, east, north = bbox
    return BoundingBox(west=west, south=south, east=east, north=north)


def overlap(bbox_a: BBoxLike, bbox_b: BBoxLike) -> bool:
    """
    Test whether two boxes overlap

    Inequalities are strict: boxes that only touch along an edge do not overlap.

    Examples:
        >>> overlap((0, 0, 10, 10), (5, 5, 15, 15))
        True
        >>> overlap((0, 0, 10, 10), (10, 0, 20, 10))
        False
    """
    a = bounds_to_tuple(bbox_a)
    b = bounds_to_tuple(bbox_b)

    return (
        a[0] < b[2]  # A.minX < B.maxX
        and a[2] > b[0]  # A.maxX > B.minX
        and a[1] < b[3]  # A.minY < B.maxY
        and a[3] > b[1]  # A.maxY > B.minY
    )


def contains(outer: BBoxLike, inner: BBoxLike) -> bool:
    """Test whether ``inner`` lies fully within ``outer`` (edges inclusive)"""
    o = bounds_to_tuple(outer)
    i = bounds_to_tuple(inner)

    return i[0] >= o[0] and i[1] >= o[1] and i[2] <= o[2] and i[3] <= o[3]


def intersection(bbox_a: BBoxLike, bbox_b: BBoxLike) -> BoundingBox | None:
    """
    Shared part of two boxes

    Returns:
        The intersection, or None if the boxes do not intersect. Boxes that
        touch along an edge give a zero-area intersection, not None.

    Examples:
        >>> intersection((0, 0, 10, 10), (5, 5, 15, 15))
        BoundingBox(west=5, south=5, east=10, north=10)
        >>> intersection((0, 0, 1, 1), (2, 2, 3, 3)) is None
        True
    """
    a = bounds_to_tuple(bbox_a)
    b = bounds_to_tuple(bbox_b)

    min_x = max(a[0], b[0])
    min_y = max(a[1], b[1])
    max_x = min(a[2], b[2])
    max_y = min(a[3], b[3])

    if max_x < min_x or max_y < min_y:
        return None

    return BoundingBox(west=min_x, south=min_y, east=max_x, north=max_y)


def to_closed_path(bbox: BBoxLike) -> List[Point]:
    """
    Corners of a box as a closed ring

    Order is south-west, south-east, north-east, north-west and back to
    south-west, so the first and last points are equal.
    """
    west, south, east, north = bounds_to_tuple(bbox)

    return [
        (west, south),
        (east, south),
        (east, north),
        (west, north),
        (west, south),
    ]
