import argparse
import logging
from typing import Callable, Dict, Any, List, Optional

from core.tile_cache_warmer import TileCacheWarmer
from exceptions.tile_warmer_exceptions import ConfigurationError
from infrastructure.logging import LoggingManager
from interfaces.progress_reporter import IProgressReporter
from interfaces.tile_backend import ITileBackend
from models.backend_config import BackendConfig
from models.layer import LayerSpec
from models.region import DEFAULT_MAX_ZOOM, DEFAULT_MIN_ZOOM, Region, ZoomBounds
from models.tile import TileCoordinate
from services.backend_factory import BackendFactory
from services.config_service import ConfigService
from services.progress_service import NullProgressReporter, TqdmProgressReporter


logger = logging.getLogger(__name__)


class WarmManager:
    """Main manager class for tile cache warming operations"""

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 config_service: Optional[ConfigService] = None,
                 backend_factory: Callable[[BackendConfig], ITileBackend] = BackendFactory.create_backend):
        self.config_service = config_service or ConfigService()
        self.config = config
        self.backend_factory = backend_factory
        self.quiet = False

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """Load configuration from file"""
        self.config = self.config_service.load_config(config_path)
        return self.config

    def list_regions(self) -> None:
        """List available regions"""
        print("Available regions:")
        for name, region_data in self.config.get('regions', {}).items():
            description = region_data.get('description', 'No description')
            print(f"  {name}: {description}")

    def list_layers(self) -> None:
        """List configured layers and their sub-layers"""
        print("Available layers:")
        for layer in self.config_service.get_layers(self.config):
            print(f"  {layer.layer_name}: {', '.join(layer.sub_layers)}")

    def warm_region(self, region_name: str, min_zoom: Optional[int] = None,
                    max_zoom: Optional[int] = None,
                    layer_names: Optional[List[str]] = None,
                    filenames: Optional[List[str]] = None) -> Dict[str, List[TileCoordinate]]:
        """Warm tiles for a configured region"""
        preset = self.config_service.get_region(self.config, region_name)

        # Use provided zoom levels or the region's defaults
        zoom_bounds = ZoomBounds(
            preset.zoom_bounds.min_zoom if min_zoom is None else min_zoom,
            preset.zoom_bounds.max_zoom if max_zoom is None else max_zoom
        )

        return self._warm_area(region_name, preset.region, zoom_bounds,
                               self._select_layers(layer_names, filenames))

    def warm_bbox(self, bbox: List[float], min_zoom: int, max_zoom: int,
                  layer_names: Optional[List[str]] = None,
                  filenames: Optional[List[str]] = None) -> Dict[str, List[TileCoordinate]]:
        """Warm tiles for a custom bounding box"""
        region = Region.from_bbox(bbox)
        name = f"bbox_{region.west:.3f}_{region.south:.3f}_{region.east:.3f}_{region.north:.3f}"
        return self._warm_area(name, region, ZoomBounds(min_zoom, max_zoom),
                               self._select_layers(layer_names, filenames))

    def _select_layers(self, layer_names: Optional[List[str]],
                       filenames: Optional[List[str]]) -> List[LayerSpec]:
        if filenames:
            if not layer_names or len(layer_names) != 1:
                raise ConfigurationError("--filenames requires exactly one layer in --layers")
            return [self.config_service.get_layer(self.config, layer_names[0], filenames)]
        return self.config_service.get_layers(self.config, layer_names)

    def _create_progress(self, layer: LayerSpec) -> IProgressReporter:
        if self.quiet:
            return NullProgressReporter()
        return TqdmProgressReporter(description=layer.layer_name)

    def _warm_area(self, area_name: str, region: Region, zoom_bounds: ZoomBounds,
                   layers: List[LayerSpec]) -> Dict[str, List[TileCoordinate]]:
        """Warm every layer over one area, one warmer per layer"""
        print(f"=== Warming {area_name.upper()} ===")
        print(f"Bounding Box: {region.bbox}")
        print(f"Zoom Levels: {zoom_bounds.min_zoom} to {zoom_bounds.max_zoom}")
        print(f"Layers: {', '.join(layer.layer_name for layer in layers)}")
        print()

        backend = self.backend_factory(self.config_service.get_backend_config(self.config))
        results: Dict[str, List[TileCoordinate]] = {}
        try:
            for layer in layers:
                warmer = TileCacheWarmer(
                    region, layer, zoom_bounds, backend,
                    progress=self._create_progress(layer),
                    max_workers=self.config.get('max_workers')
                )
                warmer.initialize()
                results[layer.layer_name] = warmer.warm()
                print(f"Layer {layer.layer_name}: warmed {len(results[layer.layer_name])} tiles "
                      f"x {len(layer.sub_layers)} sub-layers")
        finally:
            backend.close()

        return results

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description=(
                'Warm the cache of a tile server by requesting every tile of a region.\n'
                '- Tiles are visited breadth first from min zoom down to max zoom; only tiles overlapping the region are requested.'
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=(
                'Examples:\n\n'
                '1) Warm a configured region, all layers:\n'
                '   python src/tile_warmer.py --region ankara\n\n'
                '2) Custom BBOX (lon/lat order) for one layer:\n'
                '   python src/tile_warmer.py --bbox 28.5 40.8 29.5 41.2 --min-zoom 10 --max-zoom 12 --layers basemap\n\n'
                '3) Override the sub-layers of a layer:\n'
                '   python src/tile_warmer.py --region ankara --layers basemap --filenames "tile.png,tile@2x.png"\n\n'
                '4) List configured regions and layers:\n'
                '   python src/tile_warmer.py --list-regions\n'
                '   python src/tile_warmer.py --list-layers\n\n'
                'Notes:\n'
                '- Tile URLs follow backend.url_template, default {base_url}/{layer}/{z}/{x}/{y}/{filename}.\n'
                '- The first failed request aborts the run.'
            )
        )
        parser.add_argument('--config', default='config.json', help='Path to configuration file (default: config.json)')
        parser.add_argument('--region', help='Region name to warm. Must exist in config.json -> regions.')
        parser.add_argument('--bbox', nargs=4, type=float, metavar=('min_lon', 'min_lat', 'max_lon', 'max_lat'),
                            help='Custom BBOX (lon/lat)')
        parser.add_argument('--layers', help='Comma-separated layer names (config.json -> layers). Default: all layers')
        parser.add_argument('--filenames', help='Comma-separated sub-layer filenames, replaces the configured ones of a single layer')
        parser.add_argument('--min-zoom', type=int, help=f'Minimum zoom level (default: region setting or {DEFAULT_MIN_ZOOM})')
        parser.add_argument('--max-zoom', type=int, help=f'Maximum zoom level (default: region setting or {DEFAULT_MAX_ZOOM})')
        parser.add_argument('--base-url', help='Override backend.base_url')
        parser.add_argument('--list-regions', action='store_true', help='List configured regions with descriptions')
        parser.add_argument('--list-layers', action='store_true', help='List configured layers and their sub-layers')
        parser.add_argument('--quiet', action='store_true', help='Do not show the progress bar')
        parser.add_argument('--log-level', help='Override logging level (DEBUG, INFO, WARNING, ...)')
        return parser

    def run_from_command_line(self, argv: Optional[List[str]] = None) -> bool:
        """Run tile warming command-line interface"""
        parser = self.build_parser()
        args = parser.parse_args(argv)

        self.load_config(args.config)
        LoggingManager.setup_logging(self.config, args.log_level)
        self.quiet = args.quiet

        if args.base_url:
            self.config['backend']['base_url'] = args.base_url

        if args.list_regions:
            self.list_regions()
            return True

        if args.list_layers:
            self.list_layers()
            return True

        layer_names = [s.strip() for s in args.layers.split(',') if s.strip()] if args.layers else None
        filenames = [s.strip() for s in args.filenames.split(',') if s.strip()] if args.filenames else None

        if args.region and args.bbox:
            print("Error: --region cannot be used with --bbox")
            return False

        if args.region:
            results = self.warm_region(args.region, args.min_zoom, args.max_zoom, layer_names, filenames)
        elif args.bbox:
            min_zoom = DEFAULT_MIN_ZOOM if args.min_zoom is None else args.min_zoom
            max_zoom = DEFAULT_MAX_ZOOM if args.max_zoom is None else args.max_zoom
            results = self.warm_bbox(args.bbox, min_zoom, max_zoom, layer_names, filenames)
        else:
            print("Please provide --region or --bbox!")
            print("\nConfigured regions:")
            self.list_regions()
            print("\nCustom area: --bbox min_lon min_lat max_lon max_lat")
            return False

        total = sum(len(tiles) for tiles in results.values())
        logger.info("Warming finished: %d tiles across %d layers", total, len(results))
        print("\nWarming completed successfully!")
        return True
