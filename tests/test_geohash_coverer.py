"""Tests for geohash covering."""

import pytest
from shapely.geometry import LineString, box
from shapely.ops import unary_union

from conftest import SF_POLYGON_WKT, SF_TRIANGLE_WKT
from spatial_tiler.errors import ValidationError
from spatial_tiler.geohash_coverer import RectangularGridCoverer, overlaps
from spatial_tiler.utils.geospatial import geohash_to_polygon


@pytest.fixture
def coverer() -> RectangularGridCoverer:
    return RectangularGridCoverer()


class TestPrecision:
    @pytest.mark.parametrize("precision", [0, 13, -1, None, 2.5, True])
    def test_invalid_precision(self, coverer, decoder, precision):
        with pytest.raises(ValidationError):
            coverer.cover(decoder.decode(SF_POLYGON_WKT), precision)

    @pytest.mark.parametrize("precision", [1, 12])
    def test_precision_limits_are_accepted(self, coverer, decoder, precision):
        cells = coverer.cover(decoder.decode("POINT(-122.4194 37.7749)"), precision)
        assert len(cells) == 1
        assert len(cells[0]) == precision


class TestCover:
    """Coverings span the bounding box with cells of the requested length."""

    def test_out_of_bounds_shape(self, coverer, decoder):
        with pytest.raises(ValidationError):
            coverer.cover(decoder.decode("POLYGON((190 0, 190 1, 191 1, 191 0, 190 0))"), 3)
        with pytest.raises(ValidationError):
            coverer.cover(decoder.decode("POINT(0 95)"), 3)

    @pytest.mark.parametrize("precision", range(1, 7))
    def test_cells_cover_bounding_box(self, coverer, decoder, precision):
        shape = decoder.decode(SF_POLYGON_WKT)
        cells = coverer.cover(shape, precision)

        assert cells
        assert all(len(cell) == precision for cell in cells)

        bbox = box(*shape.geometry.bounds)
        polygons = [geohash_to_polygon(cell) for cell in cells]
        assert all(polygon.intersects(bbox) for polygon in polygons)
        assert unary_union(polygons).covers(bbox)

    def test_sorted_and_unique(self, coverer, decoder):
        cells = coverer.cover(decoder.decode(SF_POLYGON_WKT), 6)
        assert cells == sorted(set(cells))

    def test_deterministic(self, coverer, decoder):
        shape = decoder.decode(SF_TRIANGLE_WKT)
        assert coverer.cover(shape, 6) == coverer.cover(shape, 6)

    def test_point(self, coverer, decoder):
        assert coverer.cover(decoder.decode("POINT(-122.4194 37.7749)"), 5) == ["9q8yy"]

    def test_whole_world(self, coverer, decoder):
        shape = decoder.decode("ENVELOPE(-180, 180, 90, -90)")
        assert len(coverer.cover(shape, 1)) == 32
        assert len(coverer.cover(shape, 2)) == 32 * 32

    def test_cell_aligned_box(self, coverer, decoder):
        shape = decoder.decode("POLYGON((0 0, 0 45, 45 45, 45 0, 0 0))")
        assert coverer.cover(shape, 1) == ["s"]

        cells = coverer.cover(shape, 2)
        assert len(cells) == 32
        assert all(cell.startswith("s") for cell in cells)

    def test_polygon_uses_bounding_box(self, coverer, decoder):
        triangle = decoder.decode(SF_TRIANGLE_WKT)
        envelope = decoder.decode("ENVELOPE(-122.42, -122.40, 37.79, 37.77)")
        assert coverer.cover(triangle, 5) == coverer.cover(envelope, 5)

    def test_horizontal_line(self, coverer, decoder):
        cells = coverer.cover(decoder.decode("LINESTRING(-122.42 37.775, -122.41 37.775)"), 6)
        line = LineString([(-122.42, 37.775), (-122.41, 37.775)])
        assert cells
        assert all(geohash_to_polygon(cell).intersects(line) for cell in cells)


class TestOverlaps:
    def test_touching_cell_is_excluded(self):
        cell = box(0, 0, 1, 1)
        assert not overlaps(cell, box(1, 0, 2, 1), degenerate=False)

    def test_touching_cell_counts_for_degenerate_target(self):
        cell = box(0, 0, 1, 1)
        assert overlaps(cell, box(1, 0, 2, 1).exterior, degenerate=True)

    def test_overlapping_cell(self):
        assert overlaps(box(0, 0, 1, 1), box(0.5, 0.5, 2, 2), degenerate=False)


class TestEncodePoint:
    def test_default_precision(self, coverer):
        geohash = coverer.encode_point(37.7749, -122.4194)
        assert len(geohash) == 12
        assert geohash.startswith("9q8yy")

    def test_explicit_precision(self, coverer):
        assert coverer.encode_point(37.7749, -122.4194, 5) == "9q8yy"

    def test_invalid_coordinates(self, coverer):
        with pytest.raises(ValidationError):
            coverer.encode_point(95.0, 0.0)

    def test_invalid_precision(self, coverer):
        with pytest.raises(ValidationError):
            coverer.encode_point(0.0, 0.0, 13)
