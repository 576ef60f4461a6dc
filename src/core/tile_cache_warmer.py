import logging
import time
from collections import deque
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from enum import Enum
from typing import Deque, Dict, List, Optional, Sequence, Union

from exceptions.tile_warmer_exceptions import (
    BackendInitError, FetchError, WarmerStateError
)
from interfaces.progress_reporter import IProgressReporter
from interfaces.tile_backend import ITileBackend
from models.layer import LayerSpec
from models.region import Region, ZoomBounds
from models.tile import TileCoordinate
from services.progress_service import NullProgressReporter
from utils import geometry
from utils.tile_calculator import TileCalculator


logger = logging.getLogger(__name__)


class WarmerState(Enum):
    CONSTRUCTED = 'constructed'
    INITIALIZED = 'initialized'
    RUNNING = 'running'
    COMPLETED = 'completed'
    FAILED = 'failed'


class TileCacheWarmer:
    """Walks the tile pyramid of a region and requests every sub-layer of every tile.

    A warmer is good for exactly one run: construct it, call `initialize()`,
    then `warm()`. Tiles are processed breadth first, one tile at a time; the
    sub-layers of a tile are fetched concurrently and must all succeed.
    """

    def __init__(self, region: Union[Region, Sequence[float]], layer: LayerSpec,
                 zoom_bounds: ZoomBounds, backend: ITileBackend,
                 progress: Optional[IProgressReporter] = None,
                 max_workers: Optional[int] = None):
        if not isinstance(region, Region):
            region = Region.from_bbox(region)

        self.region = region
        self.layer = layer
        self.zoom_bounds = zoom_bounds
        self.backend = backend
        self.progress = progress or NullProgressReporter()
        self.max_workers = max_workers or len(layer.sub_layers)

        self.start_tile = TileCalculator.start_tile(region.bbox, zoom_bounds.min_zoom)
        self.region_polygon = geometry.polygon_from_bbox(region.bbox)
        self._prepared_region = geometry.prepare(self.region_polygon)

        self.to_process: Deque[TileCoordinate] = deque([self.start_tile])
        self.processed: List[TileCoordinate] = []
        self.state = WarmerState.CONSTRUCTED
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def layer_name(self) -> str:
        return self.layer.layer_name

    @property
    def max_zoom(self) -> int:
        return self.zoom_bounds.max_zoom

    def initialize(self) -> None:
        """Initialize the tile backend"""
        self._require_state(WarmerState.CONSTRUCTED, 'initialize')
        try:
            self.backend.initialize()
        except BackendInitError:
            self.state = WarmerState.FAILED
            raise
        except Exception as e:
            self.state = WarmerState.FAILED
            raise BackendInitError(f"Backend initialization failed: {e}") from e
        self.state = WarmerState.INITIALIZED

    def warm(self) -> List[TileCoordinate]:
        """Warm every tile of the region between min and max zoom.

        Returns the processed tiles in the order they were fetched. Any fetch
        failure aborts the run and propagates as FetchError.
        """
        self._require_state(WarmerState.INITIALIZED, 'warm')
        self.state = WarmerState.RUNNING
        started = time.monotonic()
        logger.info(
            "Warming layer '%s' from tile %s down to zoom %d",
            self.layer_name, self.start_tile, self.max_zoom
        )

        self.progress.start(len(self.to_process))
        try:
            with ThreadPoolExecutor(max_workers=self.max_workers,
                                    thread_name_prefix='tile-warmer') as executor:
                self._executor = executor
                self._warm_tiles()
        except BaseException:
            self.state = WarmerState.FAILED
            raise
        finally:
            self._executor = None
            self.progress.stop()

        self.state = WarmerState.COMPLETED
        logger.info(
            "Warmed %d tiles of layer '%s' in %.1fs",
            len(self.processed), self.layer_name, time.monotonic() - started
        )
        return list(self.processed)

    def _warm_tiles(self) -> None:
        """Drain the work queue, enqueueing overlapping children of each fetched tile"""
        tiles = self.to_process

        while tiles:
            t0 = tiles.popleft()

            self.progress.increment(1, layer=self.layer_name, x=t0.x, y=t0.y, z=t0.z)

            self.warm_tile(t0)
            self.processed.append(t0)

            if t0.z >= self.max_zoom:
                continue

            for child in TileCalculator.children_of(t0):
                # only add overlapping tiles to the queue
                tile_polygon = TileCalculator.tile_polygon(child.z, child.x, child.y)
                if geometry.intersects(tile_polygon, self._prepared_region):
                    tiles.append(child)

            self.progress.set_total(len(tiles) + len(self.processed))

    def warm_tile(self, tile: TileCoordinate) -> Dict[str, bytes]:
        """Fetch all sub-layers of a single tile concurrently.

        Returns the fetched data keyed by sub-layer. Raises FetchError as soon
        as any sub-layer fails; requests not yet started are cancelled.
        """
        logger.debug("Fetching %s for layer '%s'", tile, self.layer_name)

        if self._executor is None:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                return self._fetch_sub_layers(executor, tile)
        return self._fetch_sub_layers(self._executor, tile)

    def _fetch_sub_layers(self, executor: ThreadPoolExecutor,
                          tile: TileCoordinate) -> Dict[str, bytes]:
        futures = {
            executor.submit(
                self.backend.fetch_tile, self.layer_name, sub_layer, tile.x, tile.y, tile.z
            ): sub_layer
            for sub_layer in self.layer.sub_layers
        }
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)

        failed = [f for f in done if f.exception() is not None]
        if failed:
            for future in pending:
                future.cancel()
            future = failed[0]
            sub_layer = futures[future]
            error = future.exception()
            if isinstance(error, FetchError):
                if error.tile is None:
                    error.tile = tile
                raise error
            raise FetchError(
                f"Failed to fetch {self.layer_name}/{sub_layer} for tile {tile}: {error}",
                layer_name=self.layer_name, sub_layer=sub_layer, tile=tile
            ) from error

        return {sub_layer: future.result() for future, sub_layer in futures.items()}

    def _require_state(self, expected: WarmerState, operation: str) -> None:
        if self.state is not expected:
            raise WarmerStateError(
                f"Cannot {operation} warmer in state '{self.state.value}' "
                f"(expected '{expected.value}')"
            )
