"""Shared fixtures for spatial tiler tests."""

import pytest

from spatial_tiler.constants import GEO_MODEL_OPTION, WRAP_LONGITUDE_OPTION
from spatial_tiler.data_model.geo_config import GeoConfig
from spatial_tiler.decoder import ShapeDecoder
from spatial_tiler.engine import GeoEngine

UNIT_SQUARE_WKT = "POLYGON((0 0, 0 1, 1 1, 1 0, 0 0))"
UNIT_SQUARE_GEOJSON = '{"type":"Polygon","coordinates":[[[0,0],[0,1],[1,1],[1,0],[0,0]]]}'
TRIANGLE_WKT = "POLYGON((0.1 0.1, 0.9 0.1, 0.5 0.9, 0.1 0.1))"
SF_POLYGON_WKT = (
    "POLYGON((-122.42 37.77, -122.42 37.78, -122.41 37.78, -122.41 37.77, -122.42 37.77))"
)
SF_POLYGON_GEOJSON = (
    '{"type":"Polygon","coordinates":[[[-122.42,37.77],[-122.42,37.78],'
    '[-122.41,37.78],[-122.41,37.77],[-122.42,37.77]]]}'
)
SF_TRIANGLE_WKT = "POLYGON((-122.42 37.77, -122.40 37.77, -122.41 37.79, -122.42 37.77))"


@pytest.fixture
def engine() -> GeoEngine:
    """Engine with the default planar configuration."""
    return GeoEngine()


@pytest.fixture
def spherical_engine() -> GeoEngine:
    """Engine configured for the spherical model."""
    return GeoEngine({GEO_MODEL_OPTION: "true"})


@pytest.fixture
def decoder() -> ShapeDecoder:
    return ShapeDecoder(GeoConfig())


@pytest.fixture
def spherical_decoder() -> ShapeDecoder:
    return ShapeDecoder(GeoConfig(geo_model=True))


@pytest.fixture
def wrapping_decoder() -> ShapeDecoder:
    return ShapeDecoder(GeoConfig.apply({WRAP_LONGITUDE_OPTION: True}))
