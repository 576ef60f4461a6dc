"""Logging configuration"""
import logging
import sys
from typing import Dict, Any, Optional


class LoggingManager:
    """Manages application logging configuration"""
    
    @staticmethod
    def setup_logging(config: Dict[str, Any], level: Optional[str] = None) -> None:
        """Setup logging based on configuration; level overrides the configured one"""
        logging_config = config.get('logging', {})
        
        level_name = (level or logging_config.get('level', 'INFO')).upper()
        format_str = logging_config.get('format', 
                                       '%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        
        logging.basicConfig(
            level=getattr(logging, level_name, logging.INFO),
            format=format_str,
            stream=sys.stdout,
            force=True
        )
        
        # Set specific loggers
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('requests').setLevel(logging.WARNING)
