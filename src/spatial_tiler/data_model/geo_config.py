"""Geometry model configuration definition."""

import logging
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, field_validator

from spatial_tiler.constants import GEO_MODEL_OPTION, WRAP_LONGITUDE_OPTION

T = TypeVar("T", bound="GeoConfig")

# option keys accepted for each field, namespaced key first
OPTION_KEYS = {
    "geo_model": (GEO_MODEL_OPTION, "geo_model"),
    "wrap_longitude": (WRAP_LONGITUDE_OPTION, "wrap_longitude"),
}


class GeoConfig(BaseModel):
    """
    Geometry model configuration.

    Instances are immutable. A new configuration is built with ``apply`` and
    replaces the old one wholesale.

    :param geo_model: True to interpret coordinates on a sphere, False for a plane.
    :param wrap_longitude: True to normalize longitudes into [-180, 180] on decode.
    """

    geo_model: bool = False
    wrap_longitude: bool = False

    class Config:
        """Config class."""

        frozen = True

    @field_validator("geo_model", "wrap_longitude", mode="before")
    @classmethod
    def parse_flag(cls: Type[T], v: Any) -> bool:
        """
        Parse a flag the way option strings are written.

        Strings are true only when they read "true", ignoring case and whitespace.

        :param v: The raw option value.
        :return: The parsed flag.
        """
        if isinstance(v, bool):
            return v
        if v is None:
            return False
        return str(v).strip().lower() == "true"

    @classmethod
    def apply(cls: Type[T], options: Optional[Mapping[str, Any]] = None) -> T:
        """
        Build a configuration from an options mapping.

        Unrecognized keys are ignored and missing keys keep their defaults.

        :param options: Option keys and values, or None for the defaults.
        :return: A new GeoConfig instance.
        """
        values = {}
        for field_name, keys in OPTION_KEYS.items():
            for key in keys:
                if options and options.get(key) is not None:
                    values[field_name] = options[key]
                    break

        config = cls(**values)
        for field_name, keys in OPTION_KEYS.items():
            if field_name in values:
                logging.info(f"{keys[0]} = {getattr(config, field_name)}")
        return config
