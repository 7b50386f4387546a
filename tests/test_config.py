"""Tests for geometry model configuration."""

import pydantic
import pytest

from spatial_tiler.constants import GEO_MODEL_OPTION, WRAP_LONGITUDE_OPTION
from spatial_tiler.data_model.geo_config import GeoConfig
from spatial_tiler.utils.config import read_json_config, read_yaml_config


class TestApply:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("true", True),
            ("TRUE", True),
            (" True ", True),
            (True, True),
            ("false", False),
            ("yes", False),
            ("1", False),
            (False, False),
        ],
    )
    def test_flag_parsing(self, value, expected):
        assert GeoConfig.apply({GEO_MODEL_OPTION: value}).geo_model is expected

    def test_defaults(self):
        config = GeoConfig.apply(None)
        assert config == GeoConfig(geo_model=False, wrap_longitude=False)
        assert GeoConfig.apply({}) == config

    def test_unknown_keys_are_ignored(self):
        config = GeoConfig.apply({"ksql.functions._global_.spatial4j.other": "true", "geo": "true"})
        assert config == GeoConfig()

    def test_field_names_are_accepted(self):
        config = GeoConfig.apply({"geo_model": "true", "wrap_longitude": True})
        assert config.geo_model is True
        assert config.wrap_longitude is True

    def test_namespaced_key_wins(self):
        config = GeoConfig.apply({GEO_MODEL_OPTION: "false", "geo_model": "true"})
        assert config.geo_model is False

    def test_none_values_keep_defaults(self):
        assert GeoConfig.apply({GEO_MODEL_OPTION: None}).geo_model is False

    def test_round_trip_through_dump(self):
        config = GeoConfig.apply({GEO_MODEL_OPTION: "true", WRAP_LONGITUDE_OPTION: "true"})
        assert GeoConfig.apply(config.model_dump()) == config

    def test_frozen(self):
        config = GeoConfig()
        with pytest.raises(pydantic.ValidationError):
            config.geo_model = True


class TestConfigFiles:
    def test_yaml(self, tmp_path):
        path = tmp_path / "geo.yaml"
        path.write_text(f'"{GEO_MODEL_OPTION}": "true"\n"{WRAP_LONGITUDE_OPTION}": false\n')

        config = read_yaml_config(path)
        assert config.geo_model is True
        assert config.wrap_longitude is False

    def test_yaml_from_string_path(self, tmp_path):
        path = tmp_path / "geo.yaml"
        path.write_text("wrap_longitude: true\n")
        assert read_yaml_config(str(path)).wrap_longitude is True

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert read_yaml_config(path) == GeoConfig()

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_yaml_config(tmp_path / "missing.yaml")

    def test_json(self):
        assert read_json_config({GEO_MODEL_OPTION: "true"}).geo_model is True

    def test_streaming_option_keys(self):
        config = read_json_config(
            {
                "ksql.functions._global_.spatial4j.geo": "true",
                "ksql.functions._global_.spatial4j.normWrapLongitude": "true",
            }
        )
        assert config.geo_model is True
        assert config.wrap_longitude is True
