class TileWarmerException(Exception):
    """Base exception for tile warmer"""
    pass


class ConfigurationError(TileWarmerException):
    """Configuration related errors"""
    pass


class ValidationError(TileWarmerException):
    """Validation related errors"""
    pass


class InvalidRegionError(ValidationError):
    """Bounding box cannot be turned into a start tile or polygon"""
    pass


class InvalidZoomBoundsError(ValidationError):
    """Zoom range is negative or inverted"""
    pass


class BackendInitError(TileWarmerException):
    """Tile backend setup failed"""
    pass


class FetchError(TileWarmerException):
    """A sub-layer fetch for some tile failed"""

    def __init__(self, message: str, layer_name=None, sub_layer=None, tile=None):
        super().__init__(message)
        self.layer_name = layer_name
        self.sub_layer = sub_layer
        self.tile = tile


class WarmerStateError(TileWarmerException):
    """Warmer operation called out of order"""
    pass
