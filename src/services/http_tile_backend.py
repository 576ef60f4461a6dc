import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from exceptions.tile_warmer_exceptions import BackendInitError, FetchError
from interfaces.tile_backend import ITileBackend
from models.backend_config import BackendConfig


logger = logging.getLogger(__name__)


class HttpTileBackend(ITileBackend):
    """Warms a remote tile server by requesting tiles over HTTP"""
    
    def __init__(self, config: BackendConfig):
        self.config = config
        self.base_url = config.base_url.rstrip('/')
        self.session: Optional[requests.Session] = None
    
    def create_session(self) -> requests.Session:
        """Create pooled session; retries on throttling and server errors"""
        session = requests.Session()
        
        retry_strategy = Retry(
            total=self.config.retry_attempts,
            backoff_factor=1.0,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False
        )
        
        adapter = HTTPAdapter(
            max_retries=retry_strategy,
            pool_connections=self.config.pool_size,
            pool_maxsize=self.config.pool_size
        )
        
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        
        return session

    def initialize(self) -> None:
        """Open the HTTP session and optionally check the server is up.

        An already open session is reused, so warming several layers with one
        backend opens and checks the server once.
        """
        if self.session is not None:
            return

        self.session = self.create_session()

        if not self.config.health_path:
            return

        health_url = f"{self.base_url}/{self.config.health_path.lstrip('/')}"
        try:
            response = self.session.get(health_url, headers=self.config.get_headers(),
                                        timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            self.close()
            raise BackendInitError(f"Tile server health check failed at {health_url}: {e}") from e
        logger.info("Tile server at %s is healthy", self.base_url)

    def get_tile_url(self, layer_name: str, sub_layer: str, x: int, y: int, z: int) -> str:
        """Generate tile URL for given layer, sub-layer and coordinates"""
        return self.config.url_template.format(
            base_url=self.base_url, layer=layer_name, filename=sub_layer, x=x, y=y, z=z
        )

    def fetch_tile(self, layer_name: str, sub_layer: str, x: int, y: int, z: int) -> bytes:
        """Request a single sub-layer of a tile"""
        tile = f"{z}/{x}/{y}"
        if self.session is None:
            raise FetchError(
                f"Backend not initialized, cannot fetch {layer_name}/{sub_layer} for tile {tile}",
                layer_name=layer_name, sub_layer=sub_layer
            )

        tile_url = self.get_tile_url(layer_name, sub_layer, x, y, z)
        try:
            response = self.session.get(tile_url, headers=self.config.get_headers(),
                                        timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(
                f"Failed to fetch tile {tile} ({layer_name}/{sub_layer}) from {tile_url}: {e}",
                layer_name=layer_name, sub_layer=sub_layer
            ) from e

        return response.content

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None
