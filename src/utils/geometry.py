"""Planar geometry helpers used for pruning tiles against the warmed region."""
from typing import Sequence, Union

from shapely.geometry import Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.prepared import PreparedGeometry, prep


def polygon_from_bbox(bbox: Sequence[float]) -> Polygon:
    """Polygon for [minLon, minLat, maxLon, maxLat]"""
    min_lon, min_lat, max_lon, max_lat = bbox
    return box(min_lon, min_lat, max_lon, max_lat)


def prepare(geometry: BaseGeometry) -> PreparedGeometry:
    """Prepared geometry for repeated predicate tests"""
    return prep(geometry)


def intersects(polygon: BaseGeometry, other: Union[BaseGeometry, PreparedGeometry]) -> bool:
    """True when the two shapes share area.

    Shapes that only touch along an edge or at a corner do not count.
    `other` may be a prepared geometry.
    """
    if isinstance(other, PreparedGeometry):
        return other.intersects(polygon) and not other.touches(polygon)
    return polygon.intersects(other) and not polygon.touches(other)
