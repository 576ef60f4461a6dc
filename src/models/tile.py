from dataclasses import dataclass
from typing import Tuple

from exceptions.tile_warmer_exceptions import ValidationError


@dataclass(frozen=True)
class TileCoordinate:
    """XYZ tile address in the web mercator quadtree"""
    x: int
    y: int
    z: int

    def __post_init__(self):
        if self.z < 0:
            raise ValidationError(f"Negative zoom level in tile {self}")
        n = 1 << self.z
        if not (0 <= self.x < n and 0 <= self.y < n):
            raise ValidationError(f"Tile {self.x}/{self.y} out of range for zoom {self.z}")

    def as_tuple(self) -> Tuple[int, int, int]:
        """Return (x, y, z)"""
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        return f"{self.z}/{self.x}/{self.y}"
