"""Shape base model definition."""

from typing import List, Tuple

from pydantic import BaseModel, model_validator
from shapely.geometry.base import BaseGeometry

from spatial_tiler.data_model.shared import ShapeKindEnum


class BoundingBox(BaseModel):
    """
    Axis-aligned bounding box in (longitude, latitude) order.

    :param min_x: Minimum longitude.
    :param min_y: Minimum latitude.
    :param max_x: Maximum longitude.
    :param max_y: Maximum latitude.
    :raises ValueError: If a minimum is greater than its maximum.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    class Config:
        """Config class."""

        frozen = True

    @model_validator(mode="after")
    def validate_ordering(self: "BoundingBox") -> "BoundingBox":
        """
        Validate that the minimums do not exceed the maximums.

        :return: The validated BoundingBox instance.
        :raises ValueError: If min_x > max_x or min_y > max_y.
        """
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(
                f"Invalid bounding box: ({self.min_x}, {self.min_y}, {self.max_x}, {self.max_y})"
            )
        return self

    @property
    def width(self: "BoundingBox") -> float:
        return self.max_x - self.min_x

    @property
    def height(self: "BoundingBox") -> float:
        return self.max_y - self.min_y

    def is_degenerate(self: "BoundingBox") -> bool:
        """Zero-area boxes are a point or a segment."""
        return self.width == 0 or self.height == 0

    def closed_ring(self: "BoundingBox") -> List[Tuple[float, float]]:
        """
        Corners of the box as a closed ring.

        :return: min-min, min-max, max-max, max-min, min-min in (x, y) order.
        """
        return [
            (self.min_x, self.min_y),
            (self.min_x, self.max_y),
            (self.max_x, self.max_y),
            (self.max_x, self.min_y),
            (self.min_x, self.min_y),
        ]


class Shape(BaseModel):
    """
    Canonical decoded geometry.

    :param kind: Shape variant tag.
    :param geometry: Shapely geometry in (longitude, latitude) order.
    :param geo_model: True if the shape was decoded under the spherical model.
    :raises ValueError: If the geometry is empty.
    """

    kind: ShapeKindEnum
    geometry: BaseGeometry
    geo_model: bool = False

    class Config:
        """Config class to allow storing Shapely geometries as attributes."""

        arbitrary_types_allowed = True
        frozen = True

    @model_validator(mode="after")
    def validate_geometry(self: "Shape") -> "Shape":
        """
        Validate that the geometry is not empty.

        :return: The validated Shape instance.
        :raises ValueError: If the geometry is empty.
        """
        if self.geometry.is_empty:
            raise ValueError(f"{self.kind.value} shape must not be empty")
        return self

    @property
    def bounding_box(self: "Shape") -> BoundingBox:
        min_x, min_y, max_x, max_y = self.geometry.bounds
        return BoundingBox(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)
