"""
Web Mercator transforms

Forward/inverse conversion between geographic (EPSG:4326) and Web Mercator
(EPSG:3857) bounding boxes using rasterio's CRS transforms.
"""

import math
from typing import Tuple

from rasterio.warp import transform

from cogxyz.gis.bbox import BBoxLike, BoundingBox, tuple_to_bounds

WGS84 = "EPSG:4326"
WEB_MERCATOR = "EPSG:3857"

# Ground resolution (m/px) of XYZ zoom 0 for 256 pixel tiles
MERCATOR_ZERO_256_RESOLUTION = 156543.03125

# Half of the Web Mercator world width in meters
MERCATOR_ORIGIN_SHIFT = 2 * math.pi * 6378137 / 2.0  # 20037508.342789244


def project_forward(bbox: BBoxLike, source_crs: str, target_crs: str) -> BoundingBox:
    """
    Project a bounding box between coordinate systems

    Only the south-west and north-east corners are transformed; edges are not
    densified, so the result is exact only where the projection keeps
    axis-aligned rectangles axis-aligned (Web Mercator <-> geographic).

    Args:
        bbox: Box in ``source_crs``
        source_crs: Source CRS (e.g. "EPSG:4326")
        target_crs: Target CRS (e.g. "EPSG:3857")

    Returns:
        Box in ``target_crs``

    Examples:
        >>> project_forward((0, 0, 1, 1), WGS84, WEB_MERCATOR).east
        111319.49079327357
    """
    bounds = tuple_to_bounds(bbox)

    xs, ys = transform(
        source_crs,
        target_crs,
        [bounds.west, bounds.east],
        [bounds.south, bounds.north],
    )

    return BoundingBox(west=xs[0], south=ys[0], east=xs[1], north=ys[1])


def bounds_to_mercator(bbox: BBoxLike) -> BoundingBox:
    """
    Geographic bounds to Web Mercator meters

    Corner coordinates are floored to whole meters.
    """
    projected = project_forward(bbox, WGS84, WEB_MERCATOR)

    return BoundingBox(
        west=math.floor(projected.west),
        south=math.floor(projected.south),
        east=math.floor(projected.east),
        north=math.floor(projected.north),
    )


def mercator_to_bounds(bbox: BBoxLike) -> BoundingBox:
    """Web Mercator meters to geographic bounds"""
    return project_forward(bbox, WEB_MERCATOR, WGS84)


def difference_between_points(
    origin_meters: Tuple[float, float], point_meters: Tuple[float, float]
) -> Tuple[float, float]:
    """
    Offset of a point from an origin, in meters

    Examples:
        >>> difference_between_points((-10, -5), (-5, 0))
        (5, 5)
    """
    origin_x, origin_y = origin_meters
    point_x, point_y = point_meters

    return (point_x - origin_x, point_y - origin_y)
