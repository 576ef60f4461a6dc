from dataclasses import dataclass, field
from typing import Dict, Optional


DEFAULT_URL_TEMPLATE = "{base_url}/{layer}/{z}/{x}/{y}/{filename}"


@dataclass
class BackendConfig:
    """Data model for tile backend configuration"""
    base_url: str
    backend_type: str = 'http'
    url_template: str = DEFAULT_URL_TEMPLATE
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: int = 30
    retry_attempts: int = 3
    pool_size: int = 20
    health_path: Optional[str] = None

    def get_headers(self) -> Dict[str, str]:
        """Get request headers"""
        return self.headers.copy()
