from typing import List, Sequence

import mercantile
from shapely.geometry import Polygon, box

from models.tile import TileCoordinate


class TileCalculator:
    """Utility class for XYZ tile coordinate calculations"""
    
    @staticmethod
    def bbox_to_tile(bbox: Sequence[float]) -> TileCoordinate:
        """Smallest tile that fully covers bbox [minLon, minLat, maxLon, maxLat]"""
        west, south, east, north = bbox
        tile = mercantile.bounding_tile(west, south, east, north, truncate=True)
        return TileCoordinate(tile.x, tile.y, tile.z)
    
    @staticmethod
    def parent_of(tile: TileCoordinate) -> TileCoordinate:
        """Tile one zoom level up that contains tile"""
        parent = mercantile.parent(tile.x, tile.y, tile.z)
        return TileCoordinate(parent.x, parent.y, parent.z)
    
    @staticmethod
    def children_of(tile: TileCoordinate) -> List[TileCoordinate]:
        """The four tiles one zoom level down, in mercantile order"""
        return [TileCoordinate(c.x, c.y, c.z) for c in mercantile.children(tile.x, tile.y, tile.z)]

    @staticmethod
    def start_tile(bbox: Sequence[float], min_zoom: int) -> TileCoordinate:
        """Covering tile for bbox lifted up to min_zoom.

        Only ascends: a covering tile that is already coarser than min_zoom
        is returned unchanged.
        """
        tile = TileCalculator.bbox_to_tile(bbox)
        while tile.z > min_zoom:
            tile = TileCalculator.parent_of(tile)
        return tile

    @staticmethod
    def tile_bounds(zoom: int, x: int, y: int) -> List[float]:
        """Return geographic bounds [minLon, minLat, maxLon, maxLat] for XYZ tile."""
        bounds = mercantile.bounds(x, y, zoom)
        return [bounds.west, bounds.south, bounds.east, bounds.north]

    @staticmethod
    def tile_polygon(zoom: int, x: int, y: int) -> Polygon:
        """Tile footprint as a lon/lat polygon"""
        return box(*TileCalculator.tile_bounds(zoom, x, y))
