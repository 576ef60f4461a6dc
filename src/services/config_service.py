import json
import os
from typing import Dict, Any, List, Optional
from interfaces.tile_backend import IConfigLoader
from models.backend_config import BackendConfig
from models.layer import LayerSpec
from models.region import DEFAULT_MAX_ZOOM, DEFAULT_MIN_ZOOM, Region, RegionPreset, ZoomBounds
from services.backend_factory import BackendFactory
from exceptions.tile_warmer_exceptions import ConfigurationError, TileWarmerException, ValidationError


class ConfigService(IConfigLoader):
    """Service for loading and validating configuration"""

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """Load configuration from JSON file"""
        try:
            if not os.path.exists(config_path):
                raise ConfigurationError(f"Config file {config_path} not found!")

            with open(config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)

            if not self.validate_config(config):
                raise ConfigurationError("Invalid configuration format")

            return config

        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e
        except TileWarmerException:
            raise
        except OSError as e:
            raise ConfigurationError(f"Error loading config: {e}") from e

    def validate_config(self, config: Dict[str, Any]) -> bool:
        """Validate configuration structure"""
        if not isinstance(config, dict):
            raise ValidationError("Configuration must be a JSON object")

        required_keys = ['backend', 'layers']

        for key in required_keys:
            if key not in config:
                raise ValidationError(f"Missing required key: {key}")

        if not isinstance(config['backend'], dict):
            raise ValidationError("backend must be a dictionary")

        if not isinstance(config['layers'], dict) or not config['layers']:
            raise ValidationError("layers must be a non-empty dictionary")

        for name, filenames in config['layers'].items():
            if not isinstance(filenames, list):
                raise ValidationError(f"layer '{name}' must map to a list of filenames")

        if not isinstance(config.get('regions', {}), dict):
            raise ValidationError("regions must be a dictionary")

        max_workers = config.get('max_workers')
        if max_workers is not None and (not isinstance(max_workers, int) or max_workers < 1):
            raise ValidationError("max_workers must be a positive integer")

        return True

    def get_backend_config(self, config: Dict[str, Any]) -> BackendConfig:
        """Get backend configuration"""
        return BackendFactory.build_config(config['backend'])

    def get_layer(self, config: Dict[str, Any], layer_name: str,
                  filenames: Optional[List[str]] = None) -> LayerSpec:
        """Get layer by name; filenames replaces the configured sub-layers"""
        layers = config.get('layers', {})
        if layer_name not in layers:
            raise ConfigurationError(f"Layer '{layer_name}' not found")
        return LayerSpec(layer_name, tuple(filenames or layers[layer_name]))

    def get_layers(self, config: Dict[str, Any],
                   layer_names: Optional[List[str]] = None) -> List[LayerSpec]:
        """Get selected layers, or every configured layer"""
        names = layer_names or list(config.get('layers', {}).keys())
        return [self.get_layer(config, name) for name in names]

    def get_region(self, config: Dict[str, Any], region_name: str) -> RegionPreset:
        """Get region configuration by name"""
        regions = config.get('regions', {})
        if region_name not in regions:
            raise ConfigurationError(f"Region '{region_name}' not found")

        region_data = regions[region_name]
        if 'bbox' not in region_data:
            raise ConfigurationError(f"Region '{region_name}' has no bbox")

        return RegionPreset(
            name=region_name,
            region=Region.from_bbox(region_data['bbox']),
            zoom_bounds=ZoomBounds(region_data.get('min_zoom', DEFAULT_MIN_ZOOM),
                                   region_data.get('max_zoom', DEFAULT_MAX_ZOOM)),
            description=region_data.get('description', '')
        )
