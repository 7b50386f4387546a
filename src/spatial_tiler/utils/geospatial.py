"""Geospatial utility functions."""

import math
from typing import List, Sequence, Tuple

import h3
import numpy as np
import pygeohash as pgh
import shapely
from shapely.affinity import translate
from shapely.geometry import GeometryCollection, LineString, MultiPolygon, Point, Polygon, box
from shapely.geometry.base import BaseGeometry

from spatial_tiler.constants import MAX_LONGITUDE, MIN_LONGITUDE
from spatial_tiler.data_model.shape import BoundingBox
from spatial_tiler.data_model.shared import ShapeKindEnum

# square degrees per steradian
SQ_DEGREES_PER_STERADIAN = (180.0 / math.pi) ** 2


def wrap_longitude(lon: float) -> float:
    """
    Normalize a longitude into [-180, 180].

    Values already in range, including 180 itself, are returned unchanged.

    :param lon: Longitude in degrees.
    :return: Normalized longitude.
    """
    if MIN_LONGITUDE <= lon <= MAX_LONGITUDE:
        return lon
    return ((lon + 180.0) % 360.0) - 180.0


def _wrap_coords(coords: np.ndarray) -> np.ndarray:
    x = coords[:, 0]
    out_of_range = (x < MIN_LONGITUDE) | (x > MAX_LONGITUDE)
    coords[:, 0] = np.where(out_of_range, ((x + 180.0) % 360.0) - 180.0, x)
    return coords


def wrap_longitudes(geometry: BaseGeometry) -> BaseGeometry:
    """
    Normalize every longitude of a geometry into [-180, 180].

    :param geometry: Shapely geometry in (lon, lat) order.
    :return: New geometry with wrapped x coordinates.
    """
    return shapely.transform(geometry, _wrap_coords)


def _unwrap_longitudes(coords: Sequence[Tuple[float, float]]) -> List[Tuple[float, float]]:
    # edges longer than 180 degrees take the short way across the antimeridian,
    # except edges running between -180 and 180, which are the same meridian
    unwrapped: List[Tuple[float, float]] = []
    offset = 0.0
    prev_x = None
    for x, y in coords:
        if prev_x is not None and not (abs(x) == MAX_LONGITUDE and abs(prev_x) == MAX_LONGITUDE):
            while x + offset - unwrapped[-1][0] > 180.0:
                offset -= 360.0
            while x + offset - unwrapped[-1][0] < -180.0:
                offset += 360.0
        unwrapped.append((x + offset, y))
        prev_x = x
    return unwrapped


def _unwrap_polygon(polygon: Polygon) -> Polygon:
    shell = _unwrap_longitudes(polygon.exterior.coords)
    shell_min_x = min(x for x, _ in shell)
    shell_max_x = max(x for x, _ in shell)
    shell_mid_x = (shell_min_x + shell_max_x) / 2.0

    holes = []
    for interior in polygon.interiors:
        hole = _unwrap_longitudes(interior.coords)
        # move the hole next to the shell it belongs to
        shift = round((shell_mid_x - hole[0][0]) / 360.0) * 360.0
        holes.append([(x + shift, y) for x, y in hole])
    return Polygon(shell, holes)


def _polygon_parts(geometry: BaseGeometry) -> List[Polygon]:
    if geometry.geom_type == "Polygon":
        return [geometry] if geometry.area > 0 else []
    if geometry.geom_type in ("MultiPolygon", "GeometryCollection"):
        return [part for geom in geometry.geoms for part in _polygon_parts(geom)]
    return []


def _split_polygon(polygon: Polygon) -> List[Polygon]:
    unwrapped = _unwrap_polygon(polygon)
    if not unwrapped.is_valid:
        unwrapped = shapely.make_valid(unwrapped)

    min_x, min_y, max_x, max_y = unwrapped.bounds
    pieces = []
    # one world copy per 360 degrees of longitude the polygon spans
    for k in range(math.floor((min_x + 180.0) / 360.0), math.floor((max_x + 180.0) / 360.0) + 1):
        world = box(MIN_LONGITUDE + 360.0 * k, min_y, MAX_LONGITUDE + 360.0 * k, max_y)
        clipped = unwrapped.intersection(world)
        pieces.extend(translate(part, xoff=-360.0 * k) for part in _polygon_parts(clipped))

    if not pieces:
        return [wrap_longitudes(polygon)]
    return pieces


def split_at_antimeridian(geometry: BaseGeometry) -> BaseGeometry:
    """
    Normalize longitudes into [-180, 180] for the spherical model.

    Polygon edges spanning more than 180 degrees of longitude are taken to
    cross the antimeridian, and polygons that cross it are cut there into a
    MultiPolygon. Other geometries have each longitude wrapped.

    :param geometry: Shapely geometry in (lon, lat) order.
    :return: New geometry with all longitudes in [-180, 180].
    """
    geom_type = geometry.geom_type

    if geom_type == "Polygon":
        pieces = _split_polygon(geometry)
        if len(pieces) == 1:
            return pieces[0]
        return MultiPolygon(pieces)
    elif geom_type == "MultiPolygon":
        return MultiPolygon([piece for part in geometry.geoms for piece in _split_polygon(part)])
    elif geom_type == "GeometryCollection":
        return GeometryCollection([split_at_antimeridian(part) for part in geometry.geoms])
    else:
        return wrap_longitudes(geometry)


def within_world_bounds(geometry: BaseGeometry) -> bool:
    """
    Check that all coordinates are valid longitudes and latitudes.

    :param geometry: Shapely geometry in (lon, lat) order.
    :return: True if the geometry lies in [-180, 180] x [-90, 90].
    """
    min_x, min_y, max_x, max_y = geometry.bounds
    return min_x >= -180.0 and max_x <= 180.0 and min_y >= -90.0 and max_y <= 90.0


def is_rectangle(polygon: Polygon) -> bool:
    """
    Check whether a polygon is an axis-aligned rectangle without holes.

    :param polygon: Shapely polygon.
    :return: True if the polygon equals its own envelope and has area.
    """
    if polygon.interiors or polygon.area == 0:
        return False
    return polygon.equals(box(*polygon.bounds))


def classify_geometry(geometry: BaseGeometry) -> ShapeKindEnum:
    """
    Determine the shape variant of a geometry.

    :param geometry: Shapely geometry.
    :return: ShapeKindEnum
    :raises ValueError: If the geometry type has no shape variant.
    """
    geom_type = geometry.geom_type

    if geom_type == "Point":
        return ShapeKindEnum.POINT
    elif geom_type == "Polygon":
        if is_rectangle(geometry):
            return ShapeKindEnum.RECTANGLE
        return ShapeKindEnum.POLYGON
    elif geom_type in ("LineString", "LinearRing"):
        return ShapeKindEnum.LINE
    elif geom_type in ("MultiPoint", "MultiLineString", "MultiPolygon", "GeometryCollection"):
        return ShapeKindEnum.MULTI
    else:
        raise ValueError(f"Unrecognized geometry type: {geom_type}")


def bounding_box_polygon(bbox: BoundingBox) -> Polygon:
    """
    Build the closed rectangular polygon of a bounding box.

    :param bbox: Bounding box.
    :return: Polygon with corners min-min, min-max, max-max, max-min.
    """
    return Polygon(bbox.closed_ring())


def bounding_box_geometry(bbox: BoundingBox) -> BaseGeometry:
    """
    Build the geometry of a bounding box, collapsing degenerate boxes.

    :param bbox: Bounding box.
    :return: Point for a zero-size box, LineString for a zero-width or
        zero-height box, otherwise the closed rectangular polygon.
    """
    if bbox.width == 0 and bbox.height == 0:
        return Point(bbox.min_x, bbox.min_y)
    if bbox.is_degenerate():
        return LineString([(bbox.min_x, bbox.min_y), (bbox.max_x, bbox.max_y)])
    return bounding_box_polygon(bbox)


def drop_closing_vertex(coords: Sequence[Tuple[float, float]]) -> List[Tuple[float, float]]:
    """
    Drop the repeated last vertex of a closed ring.

    :param coords: Ring coordinates.
    :return: Ring coordinates without the closing duplicate.
    """
    coords = list(coords)
    if len(coords) > 1 and coords[0] == coords[-1]:
        return coords[:-1]
    return coords


def geohash_to_polygon(geohash: str) -> Polygon:
    """
    Convert a geohash to its cell rectangle.

    :param geohash: Geohash code.
    :return: Polygon of the cell in (lon, lat) order.
    """
    lat, lon, lat_err, lon_err = pgh.decode_exactly(geohash)
    return box(lon - lon_err, lat - lat_err, lon + lon_err, lat + lat_err)


def h3_to_polygon(h3_index: str) -> Polygon:
    """
    Convert an H3 index to its cell boundary polygon.

    :param h3_index: H3 cell index as string.
    :return: Polygon of the cell boundary in (lon, lat) order.
    """
    # Get the boundary coordinates
    coords = h3.cell_to_boundary(h3_index)

    # H3 returns [lat, lng] but Shapely expects [lng, lat]
    # Also need to close the polygon by repeating first point
    boundary = [[coord[1], coord[0]] for coord in coords]
    boundary.append(boundary[0])

    return Polygon(boundary)


def spherical_rectangle_area(bbox: BoundingBox) -> float:
    """
    Area of a latitude/longitude rectangle on the unit sphere.

    :param bbox: Bounding box in degrees.
    :return: Area in square degrees.
    """
    lat1 = math.radians(bbox.min_y)
    lat2 = math.radians(bbox.max_y)
    width = math.radians(bbox.width)

    steradians = abs(math.sin(lat2) - math.sin(lat1)) * width
    return steradians * SQ_DEGREES_PER_STERADIAN


def _spherical_ring_area(coords: Sequence[Tuple[float, float]]) -> float:
    coords = list(coords)
    total = 0.0
    for (lon1, lat1), (lon2, lat2) in zip(coords, coords[1:] + coords[:1]):
        total += math.radians(lon2 - lon1) * (
            2 + math.sin(math.radians(lat1)) + math.sin(math.radians(lat2))
        )
    return abs(total) / 2.0


def spherical_polygon_area(polygon: Polygon) -> float:
    """
    Area of a polygon on the unit sphere, holes subtracted.

    Edges follow parallels exactly and meridians exactly; other edges are
    approximated, which is accurate for the small polygons typically indexed.

    :param polygon: Shapely polygon in (lon, lat) degrees.
    :return: Area in square degrees.
    """
    steradians = _spherical_ring_area(drop_closing_vertex(polygon.exterior.coords))
    for interior in polygon.interiors:
        steradians -= _spherical_ring_area(drop_closing_vertex(interior.coords))
    return steradians * SQ_DEGREES_PER_STERADIAN
