"""Public operation surface of the spatial tiler."""

import logging
from typing import Any, List, Mapping, NamedTuple, Optional, Tuple

from spatial_tiler.constants import (
    DEFAULT_GEOHASH_PRECISION,
    DEFAULT_H3_RES,
    DEFAULT_POINT_GEOHASH_PRECISION,
)
from spatial_tiler.data_model.geo_config import GeoConfig
from spatial_tiler.data_model.shape import Shape
from spatial_tiler.decoder import ShapeDecoder
from spatial_tiler.geohash_coverer import RectangularGridCoverer
from spatial_tiler.h3_coverer import HexagonalGridCoverer
from spatial_tiler.relations import SpatialQueryEngine
from spatial_tiler.validator import validate_precision, validate_resolution


class EngineState(NamedTuple):
    """Configuration and the components built from it, swapped as one value."""

    config: GeoConfig
    decoder: ShapeDecoder
    query_engine: SpatialQueryEngine


def build_state(config: GeoConfig) -> EngineState:
    """
    Build the decoder and query engine for a configuration.

    :param config: Geometry model configuration.
    :return: EngineState
    """
    return EngineState(
        config=config,
        decoder=ShapeDecoder(config),
        query_engine=SpatialQueryEngine(config),
    )


def _is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


class GeoEngine:
    """
    Geometry decoding, relation, area and grid covering operations.

    Operations take WKT or GeoJSON text and plain numbers and return plain
    values. Missing geometry text yields a neutral result (None, False or an
    empty list) instead of an error.

    Reads may run concurrently. ``configure`` is single-writer: it builds a
    complete new state and publishes it with one assignment.

    :param options: Configuration options, see ``GeoConfig.apply``.
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None) -> None:
        self._state = build_state(GeoConfig.apply(options))
        self._geohash_coverer = RectangularGridCoverer()
        self._h3_coverer = HexagonalGridCoverer()

    @property
    def config(self) -> GeoConfig:
        return self._state.config

    def configure(self, options: Optional[Mapping[str, Any]]) -> GeoConfig:
        """
        Replace the configuration and rebuild the components that depend on it.

        :param options: Configuration options.
        :return: The new GeoConfig.
        """
        state = build_state(GeoConfig.apply(options))
        self._state = state
        logging.info(
            f"Geometry model configured: geo_model={state.config.geo_model}, "
            f"wrap_longitude={state.config.wrap_longitude}"
        )
        return state.config

    def decode(self, text: Optional[str]) -> Optional[Shape]:
        """
        Decode WKT or GeoJSON text into a Shape.

        :param text: Encoded geometry.
        :return: Shape, or None for missing text.
        :raises ParseError: If the text matches neither encoding.
        :raises UnsupportedShapeError: If the geometry model rejects the shape.
        """
        if _is_blank(text):
            return None
        return self._state.decoder.decode(text)

    def intersects(self, text_a: Optional[str], text_b: Optional[str]) -> bool:
        """True if the two geometries touch or overlap in any way."""
        if _is_blank(text_a) or _is_blank(text_b):
            return False
        state = self._state
        return state.query_engine.intersects(state.decoder.decode(text_a), state.decoder.decode(text_b))

    def contains(self, text_a: Optional[str], text_b: Optional[str]) -> bool:
        """True if geometry A strictly contains geometry B. Equal geometries do not."""
        if _is_blank(text_a) or _is_blank(text_b):
            return False
        state = self._state
        return state.query_engine.contains(state.decoder.decode(text_a), state.decoder.decode(text_b))

    def contains_point(self, text: Optional[str], lat: Optional[float], lon: Optional[float]) -> bool:
        """
        True if the geometry contains the point.

        :param text: Encoded geometry.
        :param lat: Latitude of the point.
        :param lon: Longitude of the point.
        :return: Containment result, False if any argument is missing.
        :raises ValidationError: If lat or lon are out of bounds.
        """
        if _is_blank(text) or lat is None or lon is None:
            return False
        state = self._state
        point = state.query_engine.make_point(lat, lon)
        return state.query_engine.contains(state.decoder.decode(text), point)

    def area(self, text: Optional[str]) -> Optional[float]:
        """
        Area of the geometry in square degrees of the active geometry model.

        :param text: Encoded geometry.
        :return: Area, or None for missing text.
        """
        if _is_blank(text):
            return None
        state = self._state
        return state.query_engine.area(state.decoder.decode(text))

    def cover_with_rectangular_grid(
        self, text: Optional[str], precision: int = DEFAULT_GEOHASH_PRECISION
    ) -> List[str]:
        """
        Geohashes covering the geometry's bounding box.

        :param text: Encoded geometry.
        :param precision: Geohash length, 1 to 12.
        :return: Geohash codes, empty for missing text.
        :raises ValidationError: If precision is out of range.
        """
        precision = validate_precision(precision)
        if _is_blank(text):
            return []
        return self._geohash_coverer.cover(self._state.decoder.decode(text), precision)

    def cover_with_hexagonal_grid(self, text: Optional[str], resolution: int = DEFAULT_H3_RES) -> List[str]:
        """
        H3 cells covering the geometry.

        :param text: Encoded geometry.
        :param resolution: H3 resolution, 0 to 15.
        :return: H3 cells, empty for missing text.
        :raises ValidationError: If resolution is out of range.
        """
        resolution = validate_resolution(resolution)
        if _is_blank(text):
            return []
        return self._h3_coverer.cover(self._state.decoder.decode(text), resolution)

    def cover_bounding_box_with_hexagonal_grid(
        self,
        min_lat: float,
        min_lon: float,
        max_lat: float,
        max_lon: float,
        resolution: int = DEFAULT_H3_RES,
    ) -> List[str]:
        """H3 cells covering a latitude/longitude box."""
        return self._h3_coverer.cover_bounding_box(min_lat, min_lon, max_lat, max_lon, resolution)

    def point_to_geohash(
        self, lat: float, lon: float, precision: int = DEFAULT_POINT_GEOHASH_PRECISION
    ) -> str:
        """Geohash of a point."""
        return self._geohash_coverer.encode_point(lat, lon, precision)

    def point_to_h3_cell(self, lat: float, lon: float, resolution: int = DEFAULT_H3_RES) -> str:
        """H3 cell of a point."""
        return self._h3_coverer.point_to_cell(lat, lon, resolution)

    def cell_center(self, h3_index: str) -> Tuple[float, float]:
        return self._h3_coverer.cell_center(h3_index)

    def cell_resolution(self, h3_index: str) -> int:
        return self._h3_coverer.cell_resolution(h3_index)

    def is_valid_cell(self, h3_index: Optional[str]) -> bool:
        return self._h3_coverer.is_valid_cell(h3_index)
