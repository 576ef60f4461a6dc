from typing import Dict, Any

from exceptions.tile_warmer_exceptions import ConfigurationError
from interfaces.tile_backend import ITileBackend
from models.backend_config import BackendConfig, DEFAULT_URL_TEMPLATE
from services.http_tile_backend import HttpTileBackend


class BackendFactory:
    """Factory for creating tile backends"""
    
    @staticmethod
    def create_backend(backend_config: BackendConfig) -> ITileBackend:
        """Create a tile backend from its configuration"""
        if backend_config.backend_type == 'http':
            return HttpTileBackend(backend_config)
        raise ConfigurationError(f"Unknown backend type: {backend_config.backend_type}")

    @staticmethod
    def build_config(config: Dict[str, Any]) -> BackendConfig:
        """Build BackendConfig from the 'backend' section of the configuration"""
        if 'base_url' not in config:
            raise ConfigurationError("Backend configuration requires 'base_url'")
        return BackendConfig(
            base_url=config['base_url'],
            backend_type=config.get('type', 'http'),
            url_template=config.get('url_template', DEFAULT_URL_TEMPLATE),
            headers=config.get('headers', {}),
            timeout=config.get('timeout', 30),
            retry_attempts=config.get('retry_attempts', 3),
            pool_size=config.get('pool_size', 20),
            health_path=config.get('health_path')
        )
