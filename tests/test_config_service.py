import json
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from exceptions.tile_warmer_exceptions import ConfigurationError, InvalidRegionError, ValidationError
from models.region import DEFAULT_MAX_ZOOM, DEFAULT_MIN_ZOOM, Region, ZoomBounds
from services.config_service import ConfigService


SAMPLE_CONFIG = {
    "backend": {"type": "http", "base_url": "http://localhost:8080", "health_path": "/health"},
    "layers": {"basemap": ["tile.png", "tile@2x.png"], "roads": ["tile.pbf"]},
    "regions": {
        "istanbul": {"bbox": [28.5, 40.8, 29.5, 41.2], "min_zoom": 8, "max_zoom": 11,
                     "description": "Istanbul metropolitan area"},
        "broken": {"bbox": [29.5, 40.8, 28.5, 41.2]}
    },
    "max_workers": 4
}


def write_config(tmp_path, config):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return str(path)


def test_load_config(tmp_path):
    config = ConfigService().load_config(write_config(tmp_path, SAMPLE_CONFIG))
    assert config["layers"]["roads"] == ["tile.pbf"]


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        ConfigService().load_config(str(tmp_path / "nope.json"))


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigService().load_config(str(path))


@pytest.mark.parametrize("config", [
    {"layers": {"a": ["x"]}},
    {"backend": {"base_url": "x"}},
    {"backend": [], "layers": {"a": ["x"]}},
    {"backend": {"base_url": "x"}, "layers": {}},
    {"backend": {"base_url": "x"}, "layers": {"a": "x"}},
    {"backend": {"base_url": "x"}, "layers": {"a": ["x"]}, "regions": []},
    {"backend": {"base_url": "x"}, "layers": {"a": ["x"]}, "max_workers": 0},
])
def test_validation_errors(tmp_path, config):
    with pytest.raises(ValidationError):
        ConfigService().load_config(write_config(tmp_path, config))


def test_get_region():
    preset = ConfigService().get_region(SAMPLE_CONFIG, "istanbul")

    assert preset.region == Region(28.5, 40.8, 29.5, 41.2)
    assert (preset.zoom_bounds.min_zoom, preset.zoom_bounds.max_zoom) == (8, 11)
    assert preset.description == "Istanbul metropolitan area"


def test_get_region_default_zooms():
    config = dict(SAMPLE_CONFIG, regions={"plain": {"bbox": [28.5, 40.8, 29.5, 41.2]}})

    preset = ConfigService().get_region(config, "plain")

    assert preset.zoom_bounds == ZoomBounds(DEFAULT_MIN_ZOOM, DEFAULT_MAX_ZOOM)


def test_get_region_unknown():
    with pytest.raises(ConfigurationError):
        ConfigService().get_region(SAMPLE_CONFIG, "atlantis")


def test_get_region_malformed_bbox():
    with pytest.raises(InvalidRegionError):
        ConfigService().get_region(SAMPLE_CONFIG, "broken")


def test_get_layers():
    service = ConfigService()

    layers = service.get_layers(SAMPLE_CONFIG)
    assert [layer.layer_name for layer in layers] == ["basemap", "roads"]
    assert layers[0].sub_layers == ("tile.png", "tile@2x.png")

    assert [layer.layer_name for layer in service.get_layers(SAMPLE_CONFIG, ["roads"])] == ["roads"]


def test_get_layer_with_filename_override():
    layer = ConfigService().get_layer(SAMPLE_CONFIG, "basemap", ["tile.webp"])
    assert layer.sub_layers == ("tile.webp",)


def test_get_layer_unknown():
    with pytest.raises(ConfigurationError):
        ConfigService().get_layer(SAMPLE_CONFIG, "satellite")


def test_get_backend_config():
    backend_config = ConfigService().get_backend_config(SAMPLE_CONFIG)

    assert backend_config.base_url == "http://localhost:8080"
    assert backend_config.health_path == "/health"
    assert backend_config.backend_type == "http"
