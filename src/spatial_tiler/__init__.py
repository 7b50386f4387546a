"""Spatial-Tiler: geometry decoding, spatial predicates and geohash/H3 covering."""

__version__ = "1.0.0"

from .engine import (
    GeoEngine,
)

from .decoder import (
    DecodeAttempt,
    ShapeDecoder,
)

from .relations import (
    SpatialQueryEngine,
)

from .geohash_coverer import (
    RectangularGridCoverer,
)

from .h3_coverer import (
    HexagonalGridCoverer,
)

from .errors import (
    GeoError,
    ParseError,
    UnsupportedShapeError,
    ValidationError,
)

from .constants import (
    DEFAULT_GEOHASH_PRECISION,
    DEFAULT_H3_RES,
    DEFAULT_POINT_GEOHASH_PRECISION,
    GEO_MODEL_OPTION,
    WRAP_LONGITUDE_OPTION,
)

# Make submodules available
from . import data_model
from . import utils
