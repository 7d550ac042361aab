"""
Unit tests for the transform engine.

Tests:
- Affine construction and composition
- Pivoted rotate/scale on every geometry variant
- Full-turn rotation returns the original bounds
"""

import math
import pytest

from models.errors import InvalidGeometryError
from models.geometry import Circle, GeometryKind, Path, Rectangle
from models.transform import (
    Affine, pivot_of, pivoted, rotate_around, scale_around, translate
)
from tests.conftest import assert_box_close, sample_points


SQUARE = Path(((0, 0), (50, 0), (50, 50), (0, 50)))


class TestAffine:
    """Tests for the Affine value type."""

    def test_identity_maps_point_to_itself(self):
        assert Affine.identity().map(3, 4) == (3, 4)

    def test_translation(self):
        assert Affine.translation(5, -2).map(1, 1) == (6, -1)

    def test_rotation_is_clockwise_on_screen(self):
        """With y down, +90 degrees takes +x to +y."""
        x, y = Affine.rotation(90).map(1, 0)
        assert x == pytest.approx(0, abs=1e-12)
        assert y == pytest.approx(1)

    def test_then_applies_argument_first(self):
        move_then_double = Affine.scaling(2).then(Affine.translation(1, 0))
        assert move_then_double.map(1, 1) == (4, 2)

    def test_pivoted_keeps_center_fixed(self):
        affine = pivoted((10, 20), Affine.rotation(37))
        x, y = affine.map(10, 20)
        assert x == pytest.approx(10)
        assert y == pytest.approx(20)

    def test_scale_and_rotation_readback(self):
        affine = Affine.rotation(30).then(Affine.scaling(3))
        assert affine.scale == pytest.approx(3)
        assert affine.rotation_degrees == pytest.approx(30)
        assert affine.is_similarity

    def test_reflection_is_not_similarity(self):
        mirror = Affine(a=-1, d=1)
        assert not mirror.is_similarity
        with pytest.raises(InvalidGeometryError):
            Circle(0, 0, 1).transformed(mirror)

    def test_non_uniform_scale_rejected_for_rectangle(self):
        with pytest.raises(InvalidGeometryError):
            Rectangle(0, 0, 10, 10).transformed(Affine(a=2, d=1))

    def test_path_accepts_any_affine(self):
        sheared = SQUARE.transformed(Affine(c=1))
        assert sheared.vertices[2] == (100, 50)


class TestTranslate:
    """Tests for translate()."""

    def test_circle(self):
        assert translate(Circle(100, 100, 50), 5, -5) == Circle(105, 95, 50)

    def test_rectangle(self):
        moved = translate(Rectangle(10, 20, 30, 5), 1, 2)
        assert (moved.x, moved.y, moved.width, moved.height) == (11, 22, 30, 5)

    def test_path(self):
        moved = translate(SQUARE, 10, 10)
        assert moved.vertices[0] == (10, 10)
        assert moved.vertices[2] == (60, 60)

    def test_tag_preserved(self):
        for geometry in (Circle(0, 0, 1), Rectangle(0, 0, 1, 1), SQUARE):
            assert translate(geometry, 1, 1).kind is geometry.kind


class TestRotateAround:
    """Tests for rotate_around()."""

    def test_rectangle_stays_rectangle(self):
        rotated = rotate_around(Rectangle(0, 0, 100, 20), (50, 10), 30)
        assert rotated.kind is GeometryKind.RECTANGLE
        assert rotated.angle == pytest.approx(30)

    def test_circle_about_own_center_unchanged(self):
        circle = Circle(100, 100, 50)
        rotated = rotate_around(circle, circle.center, 45)
        assert rotated.cx == pytest.approx(100)
        assert rotated.cy == pytest.approx(100)
        assert rotated.radius == pytest.approx(50)

    def test_circle_about_external_pivot_moves_center(self):
        rotated = rotate_around(Circle(10, 0, 2), (0, 0), 90)
        assert rotated.cx == pytest.approx(0, abs=1e-9)
        assert rotated.cy == pytest.approx(10)

    def test_path_quarter_turn(self):
        rotated = rotate_around(SQUARE, (25, 25), 90)
        assert_box_close(rotated.bounding_box(), (0, 0, 50, 50))
        first = rotated.vertices[0]
        assert first.x == pytest.approx(50)
        assert first.y == pytest.approx(0, abs=1e-9)

    @pytest.mark.parametrize("geometry", [
        Circle(100, 100, 50),
        Rectangle(10, 20, 30, 5),
        Path(((0, 0), (80, 10), (30, 60))),
    ], ids=["circle", "rectangle", "path"])
    def test_full_turn_in_steps_restores_bounds(self, geometry):
        """24 rotations of 15 degrees about a fixed center add up to 360."""
        center = pivot_of(geometry)
        original = geometry.bounding_box()
        for _ in range(24):
            geometry = rotate_around(geometry, center, 15)
        assert_box_close(geometry.bounding_box(), original, tol=1e-6)

    def test_full_turn_restores_containment(self):
        shape = Path(((0, 0), (80, 10), (30, 60)))
        turned = shape
        for _ in range(24):
            turned = rotate_around(turned, (40, 30), 15)
        for point in sample_points(shape.bounding_box()):
            assert turned.contains_point(point) == shape.contains_point(point)

    def test_rectangle_full_turn_angle_snaps_to_zero(self):
        rect = Rectangle(10, 20, 30, 5)
        for _ in range(24):
            rect = rotate_around(rect, rect.center, 15)
        assert not rect.is_rotated


class TestScaleAround:
    """Tests for scale_around()."""

    def test_circle_radius_scales(self):
        scaled = scale_around(Circle(100, 100, 50), (100, 100), 2)
        assert scaled == Circle(100, 100, 100)

    def test_rectangle_about_center(self):
        scaled = scale_around(Rectangle(0, 0, 10, 20), (5, 10), 0.5)
        assert_box_close(scaled.bounding_box(), (2.5, 5, 5, 10))

    def test_path_about_center(self):
        scaled = scale_around(SQUARE, (25, 25), 2)
        assert_box_close(scaled.bounding_box(), (-25, -25, 100, 100))

    def test_repeated_factors_multiply(self):
        circle = Circle(0, 0, 10)
        for _ in range(3):
            circle = scale_around(circle, (0, 0), 1.1)
        assert circle.radius == pytest.approx(10 * 1.1 ** 3)

    @pytest.mark.parametrize("factor", [0, -1, float("nan"), float("inf")])
    def test_bad_factor_rejected(self, factor):
        with pytest.raises(InvalidGeometryError):
            scale_around(Circle(0, 0, 1), (0, 0), factor)

    def test_shrink_then_grow_restores(self):
        rect = Rectangle(10, 20, 30, 5)
        back = scale_around(scale_around(rect, rect.center, 1 / 1.1), rect.center, 1.1)
        assert_box_close(back.bounding_box(), rect.bounding_box())
        assert math.isclose(back.width, 30)
