"""Config file utilities."""

from pathlib import Path
from typing import Union

import yaml

from spatial_tiler.data_model.geo_config import GeoConfig


def read_yaml_config(config_path: Union[str, Path]) -> GeoConfig:
    """
    Read geometry model options from a YAML file.

    An empty file keeps every default.

    :param config_path: Path to the YAML file.
    :return: A GeoConfig model instance.
    :raises FileNotFoundError: If the config file doesn't exist.
    """
    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    return GeoConfig.apply(yaml.safe_load(path.read_text()))


def read_json_config(json_input: dict) -> GeoConfig:
    """
    Read a JSON dict into a GeoConfig model.

    :param json_input: Parsed JSON dict.
    :return: A GeoConfig model instance.
    """
    return GeoConfig.apply(json_input)
