import math
from dataclasses import dataclass, field
from numbers import Real
from typing import List, Sequence

from exceptions.tile_warmer_exceptions import InvalidRegionError, InvalidZoomBoundsError


# Web mercator tiles stop at this latitude
MAX_LATITUDE = 85.0511287798

DEFAULT_MIN_ZOOM = 10
DEFAULT_MAX_ZOOM = 15


@dataclass(frozen=True)
class Region:
    """Axis-aligned geographic bounding box (WGS84 degrees)"""
    west: float
    south: float
    east: float
    north: float

    def __post_init__(self):
        values = (self.west, self.south, self.east, self.north)
        for value in values:
            if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
                raise InvalidRegionError(f"Bounding box values must be finite numbers: {list(values)}")

        if not (-180.0 <= self.west < self.east <= 180.0):
            raise InvalidRegionError(
                f"Invalid longitude range west={self.west} east={self.east} "
                "(expected -180 <= west < east <= 180)"
            )
        if not (-90.0 <= self.south < self.north <= 90.0):
            raise InvalidRegionError(
                f"Invalid latitude range south={self.south} north={self.north} "
                "(expected -90 <= south < north <= 90)"
            )
        if self.south >= MAX_LATITUDE or self.north <= -MAX_LATITUDE:
            raise InvalidRegionError(
                f"Latitude range south={self.south} north={self.north} lies outside "
                f"the web mercator tile grid (+/-{MAX_LATITUDE})"
            )

    @classmethod
    def from_bbox(cls, bbox: Sequence[float]) -> "Region":
        """Build a region from [min_lon, min_lat, max_lon, max_lat]"""
        try:
            values = list(bbox)
        except TypeError as e:
            raise InvalidRegionError(f"Bounding box must be a sequence of 4 numbers, got {bbox!r}") from e
        if len(values) != 4:
            raise InvalidRegionError(f"Bounding box needs exactly 4 values, got {len(values)}")
        return cls(*values)

    @property
    def bbox(self) -> List[float]:
        """[min_lon, min_lat, max_lon, max_lat]"""
        return [self.west, self.south, self.east, self.north]


@dataclass(frozen=True)
class ZoomBounds:
    """Inclusive zoom range of a warming run"""
    min_zoom: int
    max_zoom: int

    def __post_init__(self):
        for value in (self.min_zoom, self.max_zoom):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidZoomBoundsError(f"Zoom levels must be integers: {self.min_zoom}-{self.max_zoom}")
        if self.min_zoom < 0:
            raise InvalidZoomBoundsError(f"Minimum zoom cannot be negative: {self.min_zoom}")
        if self.min_zoom > self.max_zoom:
            raise InvalidZoomBoundsError(
                f"Minimum zoom cannot be greater than maximum zoom: {self.min_zoom} > {self.max_zoom}"
            )


@dataclass
class RegionPreset:
    """Named region from configuration"""
    name: str
    region: Region
    zoom_bounds: ZoomBounds
    description: str = field(default="")
