"""Geohash covering functions."""

import logging
from itertools import product
from typing import List, Set

import pygeohash as pgh
from shapely.geometry.base import BaseGeometry

from spatial_tiler.constants import DEFAULT_GEOHASH_PRECISION, DEFAULT_POINT_GEOHASH_PRECISION, GEOHASH_ALPHABET
from spatial_tiler.data_model.shape import Shape
from spatial_tiler.errors import ValidationError
from spatial_tiler.utils.geospatial import bounding_box_geometry, geohash_to_polygon, within_world_bounds
from spatial_tiler.validator import validate_lat_lon, validate_precision


class RectangularGridCoverer:
    """
    Cover shapes with geohash cells.

    Covering works on the shape's bounding box, not its exact outline, so
    non-rectangular shapes are over-covered.
    """

    def cover(self, shape: Shape, precision: int = DEFAULT_GEOHASH_PRECISION) -> List[str]:
        """
        Compute the geohashes covering a shape's bounding box.

        :param shape: Shape to cover.
        :param precision: Geohash length, 1 to 12.
        :return: Sorted, duplicate-free geohash codes of length ``precision``.
        :raises ValidationError: If precision is out of range or the shape has
            coordinates outside valid latitudes and longitudes.
        """
        precision = validate_precision(precision)

        if not within_world_bounds(shape.geometry):
            raise ValidationError(
                f"Shape coordinates are out of boundaries for -90 to 90 and -180 to 180: {shape.geometry.bounds}"
            )

        bbox = shape.bounding_box
        target = bounding_box_geometry(bbox)
        degenerate = bbox.is_degenerate()

        found: Set[str] = set()
        self._subdivide("", precision, target, degenerate, found)

        logging.debug(f"Covered {shape.kind.value} with {len(found)} geohashes at precision {precision}")
        return sorted(found)

    def _subdivide(
        self,
        prefix: str,
        precision: int,
        target: BaseGeometry,
        degenerate: bool,
        found: Set[str],
    ) -> None:
        for char in GEOHASH_ALPHABET:
            geohash = prefix + char
            cell = geohash_to_polygon(geohash)

            if not overlaps(cell, target, degenerate):
                continue

            if len(geohash) == precision:
                found.add(geohash)
            elif not degenerate and target.contains(cell):
                # every descendant is inside the box
                remaining = precision - len(geohash)
                found.update(geohash + "".join(s) for s in product(GEOHASH_ALPHABET, repeat=remaining))
            else:
                self._subdivide(geohash, precision, target, degenerate, found)

    def encode_point(
        self, lat: float, lon: float, precision: int = DEFAULT_POINT_GEOHASH_PRECISION
    ) -> str:
        """
        Compute the geohash of a point.

        :param lat: Latitude.
        :param lon: Longitude.
        :param precision: Geohash length, 1 to 12.
        :return: Geohash code.
        :raises ValidationError: If lat, lon or precision are out of range.
        """
        lat, lon = validate_lat_lon(lat, lon)
        precision = validate_precision(precision)
        return pgh.encode(lat, lon, precision=precision)


def overlaps(cell: BaseGeometry, target: BaseGeometry, degenerate: bool) -> bool:
    """
    Check whether a grid cell belongs in the covering of a target.

    Boxes with area keep cells that share area with them. Degenerate boxes
    have no area to share, so any contact counts.

    :param cell: Grid cell polygon.
    :param target: Bounding box geometry.
    :param degenerate: True if the target is a point or a segment.
    :return: True if the cell belongs in the covering.
    """
    if not cell.intersects(target):
        return False
    return degenerate or not cell.touches(target)
