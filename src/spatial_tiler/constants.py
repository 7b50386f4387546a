"""Constants for easy management."""

# option key selecting the spherical geometry model
GEO_MODEL_OPTION = "ksql.functions._global_.spatial4j.geo"
# option key enabling longitude normalization on decode
WRAP_LONGITUDE_OPTION = "ksql.functions._global_.spatial4j.normWrapLongitude"

# geohash precision used when covering a shape
DEFAULT_GEOHASH_PRECISION = 7
# geohash precision used when encoding a single point
DEFAULT_POINT_GEOHASH_PRECISION = 12
MIN_GEOHASH_PRECISION = 1
MAX_GEOHASH_PRECISION = 12
GEOHASH_ALPHABET = "0123456789bcdefghjkmnpqrstuvwxyz"

DEFAULT_H3_RES = 7
MIN_H3_RES = 0
MAX_H3_RES = 15

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
