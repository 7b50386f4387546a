"""Shape decoder for GeoJSON and WKT text."""

import json
import logging
import re
from typing import NamedTuple, Optional

import shapely
from shapely import wkt
from shapely.errors import ShapelyError
from shapely.geometry import MultiPolygon, box, shape
from shapely.geometry.base import BaseGeometry

from spatial_tiler.constants import MAX_LONGITUDE, MIN_LONGITUDE
from spatial_tiler.data_model.geo_config import GeoConfig
from spatial_tiler.data_model.shape import Shape
from spatial_tiler.data_model.shared import DecodeOutcomeEnum, GeoEncodingEnum, ShapeKindEnum
from spatial_tiler.errors import ParseError, UnsupportedShapeError
from spatial_tiler.utils.geospatial import (
    classify_geometry,
    split_at_antimeridian,
    within_world_bounds,
    wrap_longitude,
    wrap_longitudes,
)

# ENVELOPE(minX, maxX, maxY, minY)
ENVELOPE_PATTERN = re.compile(
    r"^\s*ENVELOPE\s*\(([^,()]+),([^,()]+),([^,()]+),([^,()]+)\)\s*$", re.IGNORECASE
)
# BUFFER(<wkt>, distance)
BUFFER_PATTERN = re.compile(r"^\s*BUFFER\s*\((.*),([^,()]+)\)\s*$", re.IGNORECASE | re.DOTALL)

LINEAR_TYPES = ("LineString", "LinearRing", "MultiLineString")


class DecodeAttempt(NamedTuple):
    """
    Result of decoding text under a single encoding.

    :param encoding: The encoding that was attempted.
    :param outcome: Whether the attempt decoded, was rejected by the model, or failed to parse.
    :param shape: The decoded shape, set only when outcome is DECODED.
    :param reason: Failure description, set when outcome is not DECODED.
    """

    encoding: GeoEncodingEnum
    outcome: DecodeOutcomeEnum
    shape: Optional[Shape] = None
    reason: Optional[str] = None


def _has_linear_part(geometry: BaseGeometry) -> bool:
    if geometry.geom_type in LINEAR_TYPES:
        return True
    if geometry.geom_type == "GeometryCollection":
        return any(_has_linear_part(part) for part in geometry.geoms)
    return False


class ShapeDecoder:
    """
    Decode text into a Shape, trying GeoJSON first and WKT second.

    WKT is only consulted when GeoJSON fails for a reason other than the
    geometry model rejecting the shape.

    :param config: Geometry model configuration the decoder is bound to.
    """

    def __init__(self, config: GeoConfig) -> None:
        self.config = config

    def decode(self, text: str) -> Shape:
        """
        Decode text into a Shape.

        :param text: GeoJSON or WKT encoded geometry.
        :return: The decoded Shape.
        :raises UnsupportedShapeError: If an encoding parsed a shape the geometry model rejects.
        :raises ParseError: If neither encoding can decode the text.
        """
        if text is None or not text.strip():
            raise ParseError(text, "empty input")

        attempt = self.read_geojson(text)
        if attempt.outcome == DecodeOutcomeEnum.DECODED:
            return attempt.shape
        if attempt.outcome == DecodeOutcomeEnum.UNSUPPORTED:
            raise UnsupportedShapeError(text, attempt.reason)

        logging.debug(f"GeoJSON decode failed ({attempt.reason}), trying WKT")

        attempt = self.read_wkt(text)
        if attempt.outcome == DecodeOutcomeEnum.DECODED:
            return attempt.shape
        if attempt.outcome == DecodeOutcomeEnum.UNSUPPORTED:
            raise UnsupportedShapeError(text, attempt.reason)

        raise ParseError(text, attempt.reason)

    def read_geojson(self, text: str) -> DecodeAttempt:
        """
        Attempt to decode GeoJSON text.

        :param text: Candidate GeoJSON geometry or Feature.
        :return: DecodeAttempt for the GEOJSON encoding.
        """
        encoding = GeoEncodingEnum.GEOJSON

        if not text.lstrip().startswith("{"):
            return self._failed(encoding, "not a JSON object")

        try:
            geojson = json.loads(text)
            geometry = shape(geojson)
        except (ValueError, TypeError, KeyError, IndexError, AttributeError, ShapelyError) as e:
            return self._failed(encoding, f"invalid GeoJSON: {e}")

        return self._build_shape(encoding, geometry)

    def read_wkt(self, text: str) -> DecodeAttempt:
        """
        Attempt to decode WKT text, including the ENVELOPE and BUFFER extensions.

        :param text: Candidate WKT.
        :return: DecodeAttempt for the WKT encoding.
        """
        encoding = GeoEncodingEnum.WKT

        try:
            geometry = self._parse_wkt_geometry(text)
        except (ValueError, TypeError, ShapelyError) as e:
            return self._failed(encoding, f"invalid WKT: {e}")

        return self._build_shape(encoding, geometry)

    def _parse_wkt_geometry(self, text: str) -> BaseGeometry:
        buffer_match = BUFFER_PATTERN.match(text)
        if buffer_match:
            inner, distance = buffer_match.groups()
            return self._parse_wkt_geometry(inner).buffer(float(distance))

        envelope_match = ENVELOPE_PATTERN.match(text)
        if envelope_match:
            return self._envelope_geometry(*envelope_match.groups())

        return wkt.loads(text)

    def _envelope_geometry(self, min_x: str, max_x: str, max_y: str, min_y: str) -> BaseGeometry:
        min_x, max_x, max_y, min_y = (float(v) for v in (min_x, max_x, max_y, min_y))

        if self.config.wrap_longitude:
            min_x, max_x = wrap_longitude(min_x), wrap_longitude(max_x)

        if min_y > max_y:
            raise ValueError(f"ENVELOPE minY {min_y} is greater than maxY {max_y}")

        if min_x <= max_x:
            return box(min_x, min_y, max_x, max_y)
        elif self.config.geo_model:
            # crosses the antimeridian, split into the two halves
            return MultiPolygon(
                [box(min_x, min_y, 180.0, max_y), box(-180.0, min_y, max_x, max_y)]
            )
        else:
            raise ValueError(f"ENVELOPE minX {min_x} is greater than maxX {max_x}")

    def _build_shape(self, encoding: GeoEncodingEnum, geometry: BaseGeometry) -> DecodeAttempt:
        if geometry is None or geometry.is_empty:
            return self._failed(encoding, "empty geometry")

        geometry = shapely.force_2d(geometry)

        if self.config.wrap_longitude:
            min_x, _, max_x, _ = geometry.bounds
            if self.config.geo_model and (min_x < MIN_LONGITUDE or max_x > MAX_LONGITUDE):
                geometry = split_at_antimeridian(geometry)
            else:
                geometry = wrap_longitudes(geometry)

        # fix invalid geometries so relation predicates stay well-defined
        if not geometry.is_valid:
            logging.info(f"Repairing invalid {geometry.geom_type} decoded from {encoding.value}")
            geometry = shapely.make_valid(geometry)
            if geometry.is_empty:
                return self._failed(encoding, "geometry is empty after repair")

        if self.config.geo_model:
            if not within_world_bounds(geometry):
                return self._failed(encoding, f"coordinates out of bounds: {geometry.bounds}")
            if _has_linear_part(geometry):
                return DecodeAttempt(
                    encoding=encoding,
                    outcome=DecodeOutcomeEnum.UNSUPPORTED,
                    reason=f"Unsupported shape {geometry.geom_type} in spherical model",
                )

        kind = classify_geometry(geometry)
        if kind == ShapeKindEnum.RECTANGLE:
            geometry = box(*geometry.bounds)

        return DecodeAttempt(
            encoding=encoding,
            outcome=DecodeOutcomeEnum.DECODED,
            shape=Shape(kind=kind, geometry=geometry, geo_model=self.config.geo_model),
        )

    @staticmethod
    def _failed(encoding: GeoEncodingEnum, reason: str) -> DecodeAttempt:
        return DecodeAttempt(encoding=encoding, outcome=DecodeOutcomeEnum.UNPARSEABLE, reason=reason)
