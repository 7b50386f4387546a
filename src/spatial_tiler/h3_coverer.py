"""H3 covering and cell functions."""

import logging
from collections import deque
from typing import Iterable, List, Sequence, Set, Tuple

import h3
from shapely.geometry import LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry

from spatial_tiler.constants import DEFAULT_H3_RES
from spatial_tiler.data_model.shape import Shape
from spatial_tiler.data_model.shared import ShapeKindEnum
from spatial_tiler.errors import ValidationError
from spatial_tiler.utils.geospatial import (
    classify_geometry,
    drop_closing_vertex,
    h3_to_polygon,
    within_world_bounds,
)
from spatial_tiler.validator import validate_lat_lon, validate_resolution

LatLng = Tuple[float, float]


class HexagonalGridCoverer:
    """
    Cover shapes with H3 cells and inspect H3 cells.

    A covering holds every cell at the requested resolution that intersects
    the shape: the cells whose centre lies inside it, plus the cells crossed
    by its boundary.
    """

    def cover(self, shape: Shape, resolution: int = DEFAULT_H3_RES) -> List[str]:
        """
        Compute the H3 cells covering a shape.

        :param shape: Shape to cover.
        :param resolution: H3 resolution, 0 to 15.
        :return: Sorted, duplicate-free H3 cells.
        :raises ValidationError: If resolution is out of range or the shape has
            coordinates outside valid latitudes and longitudes.
        """
        resolution = validate_resolution(resolution)

        if not within_world_bounds(shape.geometry):
            raise ValidationError(
                f"Shape coordinates are out of boundaries for -90 to 90 and -180 to 180: {shape.geometry.bounds}"
            )

        cells = self._cover_geometry(shape.kind, shape.geometry, resolution)

        logging.debug(f"Covered {shape.kind.value} with {len(cells)} H3 cells at resolution {resolution}")
        return sorted(cells)

    def cover_bounding_box(
        self,
        min_lat: float,
        min_lon: float,
        max_lat: float,
        max_lon: float,
        resolution: int = DEFAULT_H3_RES,
    ) -> List[str]:
        """
        Compute the H3 cells covering a latitude/longitude box.

        :param min_lat: Minimum latitude.
        :param min_lon: Minimum longitude.
        :param max_lat: Maximum latitude.
        :param max_lon: Maximum longitude.
        :param resolution: H3 resolution, 0 to 15.
        :return: Sorted, duplicate-free H3 cells.
        :raises ValidationError: If a coordinate or the resolution is out of range,
            or a minimum exceeds its maximum.
        """
        min_lat, min_lon = validate_lat_lon(min_lat, min_lon)
        max_lat, max_lon = validate_lat_lon(max_lat, max_lon)
        resolution = validate_resolution(resolution)

        if min_lat > max_lat or min_lon > max_lon:
            raise ValidationError(
                f"Bounding box minimums exceed maximums: ({min_lat}, {min_lon}), ({max_lat}, {max_lon})"
            )

        # open loop, no closing vertex
        outer = [
            (min_lat, min_lon),
            (min_lat, max_lon),
            (max_lat, max_lon),
            (max_lat, min_lon),
        ]
        return sorted(self._cover_loops(outer, [], resolution))

    def _cover_geometry(self, kind: ShapeKindEnum, geometry: BaseGeometry, resolution: int) -> Set[str]:
        if kind == ShapeKindEnum.POINT:
            return {h3.latlng_to_cell(geometry.y, geometry.x, resolution)}
        elif kind in (ShapeKindEnum.RECTANGLE, ShapeKindEnum.POLYGON):
            return self._cover_polygon(geometry, resolution)
        elif kind == ShapeKindEnum.LINE:
            seeds = {h3.latlng_to_cell(y, x, resolution) for x, y in geometry.coords}
            return walk_cells(seeds, geometry)
        elif kind == ShapeKindEnum.MULTI:
            cells = set()
            for part in geometry.geoms:
                cells |= self._cover_geometry(classify_geometry(part), part, resolution)
            return cells
        else:
            raise ValueError(f"shape kind: {kind} doesn't have an associated H3 covering function.")

    def _cover_polygon(self, polygon: Polygon, resolution: int) -> Set[str]:
        # H3 wants (lat, lng) loops without the repeated closing vertex
        outer = [(y, x) for x, y in drop_closing_vertex(polygon.exterior.coords)]
        holes = [
            [(y, x) for x, y in drop_closing_vertex(interior.coords)]
            for interior in polygon.interiors
        ]
        return self._cover_loops(outer, holes, resolution)

    def _cover_loops(
        self, outer: Sequence[LatLng], holes: Sequence[Sequence[LatLng]], resolution: int
    ) -> Set[str]:
        footprint = _loop_geometry(outer, holes)

        cells: Set[str] = set()
        if footprint.area > 0:
            cells.update(h3.polygon_to_cells(h3.LatLngPoly(outer, *holes), resolution))

        # cells crossed by a ring but whose centre is outside the polygon
        for loop in [outer, *holes]:
            seeds = {h3.latlng_to_cell(lat, lng, resolution) for lat, lng in loop}
            cells |= walk_cells(seeds, _loop_boundary(loop))

        return cells

    def point_to_cell(self, lat: float, lon: float, resolution: int = DEFAULT_H3_RES) -> str:
        """
        Get the H3 cell containing a point.

        :param lat: Latitude.
        :param lon: Longitude.
        :param resolution: H3 resolution, 0 to 15.
        :return: H3 cell.
        :raises ValidationError: If lat, lon or resolution are out of range.
        """
        lat, lon = validate_lat_lon(lat, lon)
        resolution = validate_resolution(resolution)
        return h3.latlng_to_cell(lat, lon, resolution)

    def cell_center(self, h3_index: str) -> Tuple[float, float]:
        """
        Get the centre of an H3 cell.

        :param h3_index: H3 cell.
        :return: Tuple of (lat, lon).
        :raises ValidationError: If the cell is not valid.
        """
        self._require_valid(h3_index)
        return h3.cell_to_latlng(h3_index)

    def cell_resolution(self, h3_index: str) -> int:
        """
        Get the resolution of an H3 cell.

        :param h3_index: H3 cell.
        :return: Resolution, 0 to 15.
        :raises ValidationError: If the cell is not valid.
        """
        self._require_valid(h3_index)
        return h3.get_resolution(h3_index)

    def is_valid_cell(self, h3_index: str) -> bool:
        """
        Check if an H3 cell is valid. Never raises.

        :param h3_index: Candidate H3 cell.
        :return: True if valid, False for None, empty, or malformed input.
        """
        if not isinstance(h3_index, str) or not h3_index:
            return False

        try:
            return bool(h3.is_valid_cell(h3_index))
        except Exception as e:
            # any fault inside the H3 library means the input is not a cell
            logging.debug(f"H3 validation of {h3_index!r} failed: {e}")
            return False

    def _require_valid(self, h3_index: str) -> None:
        if not self.is_valid_cell(h3_index):
            raise ValidationError(f"Invalid H3 cell: {h3_index!r}")


def walk_cells(seeds: Iterable[str], curve: BaseGeometry) -> Set[str]:
    """
    Find the cells crossed by a connected curve.

    Starting from cells known to touch the curve, neighbours are visited
    outward and kept while their boundary intersects the curve.

    :param seeds: Cells containing points of the curve.
    :param curve: Connected geometry in (lon, lat) order.
    :return: Cells intersecting the curve, seeds included.
    """
    found = set(seeds)
    seen = set(found)
    frontier = deque(found)

    while frontier:
        cell = frontier.popleft()
        for neighbor in h3.grid_disk(cell, 1):
            if neighbor in seen:
                continue
            seen.add(neighbor)
            if h3_to_polygon(neighbor).intersects(curve):
                found.add(neighbor)
                frontier.append(neighbor)

    return found


def _loop_geometry(outer: Sequence[LatLng], holes: Sequence[Sequence[LatLng]]) -> BaseGeometry:
    shell = [(lng, lat) for lat, lng in outer]
    if len(set(shell)) < 3:
        return _loop_boundary(outer)
    return Polygon(shell, [[(lng, lat) for lat, lng in hole] for hole in holes])


def _loop_boundary(loop: Sequence[LatLng]) -> BaseGeometry:
    coords = [(lng, lat) for lat, lng in loop]
    if len(set(coords)) == 1:
        return Point(coords[0])
    return LineString(coords + coords[:1])
