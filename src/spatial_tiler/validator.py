"""Parameter validation functions."""

import math
from typing import Any

from spatial_tiler.constants import (
    MAX_GEOHASH_PRECISION,
    MAX_H3_RES,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_GEOHASH_PRECISION,
    MIN_H3_RES,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from spatial_tiler.errors import ValidationError


def _validate_int_range(name: str, v: Any, low: int, high: int) -> int:
    # bool is an int subclass but never a valid level
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValidationError(f"{name} must be an integer between {low} and {high}: {v!r}")
    if not low <= v <= high:
        raise ValidationError(f"{name} must be between {low} and {high}: {v}")
    return v


def validate_precision(precision: Any) -> int:
    """
    Validate a geohash precision.

    :param precision: Geohash length.
    :return: The validated precision.
    :raises ValidationError: If precision is not an integer in [1, 12].
    """
    return _validate_int_range(
        "Precision", precision, MIN_GEOHASH_PRECISION, MAX_GEOHASH_PRECISION
    )


def validate_resolution(resolution: Any) -> int:
    """
    Validate an H3 resolution.

    :param resolution: H3 resolution.
    :return: The validated resolution.
    :raises ValidationError: If resolution is not an integer in [0, 15].
    """
    return _validate_int_range("H3 resolution", resolution, MIN_H3_RES, MAX_H3_RES)


def validate_lat_lon(lat: Any, lon: Any) -> tuple:
    """
    Validate a latitude/longitude pair.

    :param lat: Latitude in degrees.
    :param lon: Longitude in degrees.
    :return: Tuple of (lat, lon) as floats.
    :raises ValidationError: If either value is missing, not a number, or out of bounds.
    """
    try:
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        raise ValidationError(f"lat and lon must be numbers: ({lat!r}, {lon!r})")

    if math.isnan(lat) or math.isnan(lon):
        raise ValidationError(f"lat and lon must be numbers: ({lat}, {lon})")

    if not (MIN_LATITUDE <= lat <= MAX_LATITUDE and MIN_LONGITUDE <= lon <= MAX_LONGITUDE):
        raise ValidationError(
            f"lat or lon are out of boundaries for -90 to 90 and -180 to 180: ({lat}, {lon})"
        )
    return lat, lon
