from abc import ABC, abstractmethod
from typing import Dict, Any


class ITileBackend(ABC):
    """Interface for tile server backends whose cache is being warmed"""
    
    @abstractmethod
    def initialize(self) -> None:
        """Prepare the backend; raise BackendInitError on failure"""
        pass
    
    @abstractmethod
    def fetch_tile(self, layer_name: str, sub_layer: str, x: int, y: int, z: int) -> bytes:
        """Request one sub-layer of one tile so the server computes and caches it"""
        pass

    def close(self) -> None:
        """Release backend resources"""
        pass


class IConfigLoader(ABC):
    """Interface for configuration loading"""
    
    @abstractmethod
    def load_config(self, config_path: str) -> Dict[str, Any]:
        """Load configuration from file"""
        pass
    
    @abstractmethod
    def validate_config(self, config: Dict[str, Any]) -> bool:
        """Validate configuration"""
        pass
