from dataclasses import dataclass
from typing import Tuple

from exceptions.tile_warmer_exceptions import ValidationError


@dataclass(frozen=True)
class LayerSpec:
    """Layer name plus the sub-layers (filenames) requested for every tile"""
    layer_name: str
    sub_layers: Tuple[str, ...]

    def __post_init__(self):
        if not isinstance(self.layer_name, str) or not self.layer_name:
            raise ValidationError("Layer name must be a non-empty string")
        # Accept any sequence but keep the stored value immutable
        object.__setattr__(self, 'sub_layers', tuple(self.sub_layers))
        if not self.sub_layers:
            raise ValidationError(f"Layer '{self.layer_name}' has no sub-layers to warm")
        for sub_layer in self.sub_layers:
            if not isinstance(sub_layer, str) or not sub_layer:
                raise ValidationError(f"Invalid sub-layer {sub_layer!r} for layer '{self.layer_name}'")
