"""
cogxyz GIS Module

Bounding box primitives and Web Mercator transforms.
"""

from cogxyz.gis.bbox import (
    BoundingBox,
    bounds_to_tuple,
    contains,
    intersection,
    overlap,
    to_closed_path,
    tuple_to_bounds,
)
from cogxyz.gis.mercator import (
    MERCATOR_ORIGIN_SHIFT,
    MERCATOR_ZERO_256_RESOLUTION,
    WEB_MERCATOR,
    WGS84,
    bounds_to_mercator,
    difference_between_points,
    mercator_to_bounds,
    project_forward,
)

__all__ = [
    "BoundingBox",
    "MERCATOR_ORIGIN_SHIFT",
    "MERCATOR_ZERO_256_RESOLUTION",
    "WEB_MERCATOR",
    "WGS84",
    "bounds_to_mercator",
    "bounds_to_tuple",
    "contains",
    "difference_between_points",
    "intersection",
    "mercator_to_bounds",
    "overlap",
    "project_forward",
    "to_closed_path",
    "tuple_to_bounds",
]
