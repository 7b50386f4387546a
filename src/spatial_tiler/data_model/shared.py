"""Shared model definition."""

from enum import Enum


class ShapeKindEnum(str, Enum):
    """Enum class containing all shape variants."""

    POINT = "POINT"
    RECTANGLE = "RECTANGLE"
    POLYGON = "POLYGON"
    LINE = "LINE"
    MULTI = "MULTI"


class GeoEncodingEnum(str, Enum):
    """Enum class containing the supported text encodings, in decode order."""

    GEOJSON = "GEOJSON"
    WKT = "WKT"


class DecodeOutcomeEnum(str, Enum):
    """Enum class containing the outcomes of a single decode attempt."""

    DECODED = "DECODED"
    UNSUPPORTED = "UNSUPPORTED"
    UNPARSEABLE = "UNPARSEABLE"


class SpatialRelationEnum(str, Enum):
    """Enum class containing the relation of shape A to shape B."""

    DISJOINT = "DISJOINT"
    INTERSECTS = "INTERSECTS"
    WITHIN = "WITHIN"
    CONTAINS = "CONTAINS"
    EQUALS = "EQUALS"
