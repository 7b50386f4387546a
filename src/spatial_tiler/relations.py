"""Spatial relation and area queries over decoded shapes."""

import logging

from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from spatial_tiler.data_model.geo_config import GeoConfig
from spatial_tiler.data_model.shape import BoundingBox, Shape
from spatial_tiler.data_model.shared import ShapeKindEnum, SpatialRelationEnum
from spatial_tiler.utils.geospatial import spherical_polygon_area, spherical_rectangle_area
from spatial_tiler.validator import validate_lat_lon


class SpatialQueryEngine:
    """
    Evaluate relations and area for shapes.

    :param config: Geometry model configuration used for shapes built by the engine.
    """

    def __init__(self, config: GeoConfig) -> None:
        self.config = config

    def relate(self, shape_a: Shape, shape_b: Shape) -> SpatialRelationEnum:
        """
        Compute the relation of shape A to shape B.

        :param shape_a: Shape A.
        :param shape_b: Shape B.
        :return: SpatialRelationEnum, where CONTAINS means A strictly contains B.
        """
        if shape_a.geo_model != shape_b.geo_model:
            logging.debug("Relating shapes decoded under different geometry models")

        if shape_a.kind == ShapeKindEnum.RECTANGLE and shape_b.kind == ShapeKindEnum.RECTANGLE:
            return relate_rectangles(shape_a.bounding_box, shape_b.bounding_box)
        elif shape_b.kind == ShapeKindEnum.POINT:
            return relate_point(shape_a.geometry, shape_b.geometry)
        else:
            return relate_geometries(shape_a.geometry, shape_b.geometry)

    def intersects(self, shape_a: Shape, shape_b: Shape) -> bool:
        """True if the shapes touch, overlap, or one contains the other."""
        return self.relate(shape_a, shape_b) != SpatialRelationEnum.DISJOINT

    def contains(self, shape_a: Shape, shape_b: Shape) -> bool:
        """
        True only if shape A contains shape B.

        Equal shapes, and B containing A, are not containment.
        """
        return self.relate(shape_a, shape_b) == SpatialRelationEnum.CONTAINS

    def make_point(self, lat: float, lon: float) -> Shape:
        """
        Build a point shape.

        :param lat: Latitude.
        :param lon: Longitude.
        :return: POINT Shape at (x=lon, y=lat).
        :raises ValidationError: If lat or lon are out of bounds.
        """
        lat, lon = validate_lat_lon(lat, lon)
        return Shape(kind=ShapeKindEnum.POINT, geometry=Point(lon, lat), geo_model=self.config.geo_model)

    def contains_point(self, shape: Shape, lat: float, lon: float) -> bool:
        """
        True if the shape contains the point. Points on the boundary are not contained.

        :raises ValidationError: If lat or lon are out of bounds.
        """
        return self.contains(shape, self.make_point(lat, lon))

    def area(self, shape: Shape) -> float:
        """
        Area of a shape in square degrees.

        The shape is measured under the geometry model it was decoded with:
        planar shapes use Euclidean area over (lon, lat), spherical shapes use
        the area on the unit sphere.

        :param shape: Shape.
        :return: Area in square degrees.
        """
        return _area(shape.kind, shape.geometry, shape.geo_model)


def relate_rectangles(a: BoundingBox, b: BoundingBox) -> SpatialRelationEnum:
    """
    Relate two non-degenerate rectangles with box arithmetic.

    :param a: Rectangle A.
    :param b: Rectangle B.
    :return: SpatialRelationEnum
    """
    if a.max_x < b.min_x or b.max_x < a.min_x or a.max_y < b.min_y or b.max_y < a.min_y:
        return SpatialRelationEnum.DISJOINT
    if a == b:
        return SpatialRelationEnum.EQUALS
    if a.min_x <= b.min_x and b.max_x <= a.max_x and a.min_y <= b.min_y and b.max_y <= a.max_y:
        return SpatialRelationEnum.CONTAINS
    if b.min_x <= a.min_x and a.max_x <= b.max_x and b.min_y <= a.min_y and a.max_y <= b.max_y:
        return SpatialRelationEnum.WITHIN
    return SpatialRelationEnum.INTERSECTS


def relate_point(geometry: BaseGeometry, point: Point) -> SpatialRelationEnum:
    """
    Relate a geometry to a point.

    :param geometry: Geometry A.
    :param point: Point B.
    :return: SpatialRelationEnum
    """
    if not geometry.intersects(point):
        return SpatialRelationEnum.DISJOINT
    if geometry.equals(point):
        return SpatialRelationEnum.EQUALS
    if geometry.contains(point):
        return SpatialRelationEnum.CONTAINS
    # on the boundary
    return SpatialRelationEnum.INTERSECTS


def relate_geometries(a: BaseGeometry, b: BaseGeometry) -> SpatialRelationEnum:
    """
    Relate two geometries with DE-9IM predicates.

    :param a: Geometry A.
    :param b: Geometry B.
    :return: SpatialRelationEnum
    """
    if a.disjoint(b):
        return SpatialRelationEnum.DISJOINT
    if a.equals(b):
        return SpatialRelationEnum.EQUALS
    if a.contains(b):
        return SpatialRelationEnum.CONTAINS
    if a.within(b):
        return SpatialRelationEnum.WITHIN
    return SpatialRelationEnum.INTERSECTS


def _area(kind: ShapeKindEnum, geometry: BaseGeometry, geo_model: bool) -> float:
    if kind in (ShapeKindEnum.POINT, ShapeKindEnum.LINE):
        return 0.0
    elif kind == ShapeKindEnum.RECTANGLE:
        min_x, min_y, max_x, max_y = geometry.bounds
        bbox = BoundingBox(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)
        if geo_model:
            return spherical_rectangle_area(bbox)
        return bbox.width * bbox.height
    elif kind == ShapeKindEnum.POLYGON:
        if geo_model:
            return spherical_polygon_area(geometry)
        return geometry.area
    elif kind == ShapeKindEnum.MULTI:
        if not geo_model:
            return geometry.area
        total = 0.0
        for part in geometry.geoms:
            if part.geom_type == "Polygon":
                total += spherical_polygon_area(part)
            elif part.geom_type in ("MultiPolygon", "GeometryCollection"):
                total += _area(ShapeKindEnum.MULTI, part, geo_model)
        return total
    else:
        raise ValueError(f"shape kind: {kind} doesn't have an associated area function.")
