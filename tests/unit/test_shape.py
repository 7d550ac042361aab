"""
Unit tests for ShapeStyle and DrawableShape.

Tests:
- Style validation and partial updates
- Selection flag
- Destructive transforms pivoting on the bounding-box center
- Record conversion
"""

import pytest

from models.codec import ShapeRecord
from models.errors import ShapeParseError
from models.geometry import Circle, GeometryKind, Path, Rectangle
from models.shape import DrawableShape
from models.style import STROKE_WIDTHS, ShapeStyle, color_to_hex
from tests.conftest import assert_box_close, sample_points


class TestShapeStyle:
    """Tests for ShapeStyle."""

    def test_defaults(self):
        style = ShapeStyle()
        assert style.outline_color == "#000000"
        assert style.fill_color == "#ffffff"
        assert style.filled is False
        assert style.stroke_width == 2

    def test_colors_lowercased(self):
        style = ShapeStyle(outline_color="#FF00AA", fill_color="#ABCDEF")
        assert style.outline_color == "#ff00aa"
        assert style.fill_color == "#abcdef"

    def test_stroke_width_must_be_positive_int(self):
        with pytest.raises(ValueError):
            ShapeStyle(stroke_width=0)
        with pytest.raises(ValueError):
            ShapeStyle(stroke_width=2.5)
        with pytest.raises(ValueError):
            ShapeStyle(stroke_width=True)

    def test_with_changes_is_partial(self):
        style = ShapeStyle(outline_color="#123456", stroke_width=4)
        changed = style.with_changes(filled=True)
        assert changed.filled is True
        assert changed.outline_color == "#123456"
        assert changed.stroke_width == 4
        # Original untouched
        assert style.filled is False

    def test_immutable(self):
        style = ShapeStyle()
        with pytest.raises(AttributeError):
            style.filled = True

    def test_menu_widths(self):
        assert STROKE_WIDTHS == (1, 2, 4, 6, 8, 10)

    def test_color_to_hex(self):
        assert color_to_hex(255, 0, 170) == "#ff00aa"
        assert color_to_hex(1, 2, 3) == "#010203"


class TestDrawableShape:
    """Tests for DrawableShape."""

    def test_kind_follows_geometry(self):
        assert DrawableShape(Circle(0, 0, 1)).kind is GeometryKind.CIRCLE
        assert DrawableShape(Rectangle(0, 0, 1, 1)).kind is GeometryKind.RECTANGLE

    def test_unique_ids(self):
        a = DrawableShape(Circle(0, 0, 1))
        b = DrawableShape(Circle(0, 0, 1))
        assert a.id != b.id
        assert a != b

    def test_selection_flag(self):
        shape = DrawableShape(Circle(0, 0, 1))
        assert not shape.selected
        shape.set_selected(True)
        assert shape.selected

    def test_set_style_updates_only_given_fields(self, red_style):
        shape = DrawableShape(Circle(0, 0, 1), red_style)
        shape.set_style(stroke_width=10)
        assert shape.style.stroke_width == 10
        assert shape.style.outline_color == "#ff0000"
        assert shape.style.fill_color == "#00ff00"
        assert shape.style.filled is True

    def test_set_style_rejects_bad_width_and_keeps_old(self, red_style):
        shape = DrawableShape(Circle(0, 0, 1), red_style)
        with pytest.raises(ValueError):
            shape.set_style(outline_color="#0000ff", stroke_width=-3)
        assert shape.style == red_style

    def test_apply_style_replaces_whole_style(self, red_style):
        shape = DrawableShape(Circle(0, 0, 1))
        shape.apply_style(red_style)
        assert shape.style is red_style

    def test_styles_not_shared(self):
        a = DrawableShape(Circle(0, 0, 1))
        b = DrawableShape(Circle(0, 0, 1), a.style)
        a.set_style(filled=True)
        assert b.style.filled is False

    def test_translate(self):
        shape = DrawableShape(Rectangle(10, 20, 30, 5))
        shape.translate(5, 5)
        assert_box_close(shape.bounds(), (15, 25, 30, 5))

    def test_rotate_pivots_on_bounds_center(self):
        shape = DrawableShape(Path(((0, 0), (100, 0), (100, 20), (0, 20))))
        shape.rotate(90)
        assert_box_close(shape.bounds(), (40, -40, 20, 100))

    def test_rotate_rectangle_keeps_center(self):
        shape = DrawableShape(Rectangle(0, 0, 100, 20))
        shape.rotate(15)
        center = shape.bounds().center
        assert center.x == pytest.approx(50)
        assert center.y == pytest.approx(10)

    def test_scale_pivots_on_bounds_center(self):
        shape = DrawableShape(Circle(100, 100, 50))
        shape.scale(0.5)
        assert_box_close(shape.bounds(), (75, 75, 50, 50))

    def test_contains(self):
        shape = DrawableShape(Circle(100, 100, 50))
        assert shape.contains((100, 100))
        assert not shape.contains((0, 0))

    def test_draw_passes_geometry_style_and_selection(self, red_style):
        calls = []
        shape = DrawableShape(Circle(1, 2, 3), red_style, selected=True)
        shape.draw(lambda geometry, style, selected: calls.append((geometry, style, selected)))
        assert calls == [(Circle(1, 2, 3), red_style, True)]


class TestShapeRecords:
    """Tests for DrawableShape <-> ShapeRecord."""

    def test_circle_record(self):
        record = DrawableShape(Circle(100, 100, 50)).to_record()
        assert record.type == "CIRCLE"
        assert record.params == (100, 100, 50)

    def test_record_round_trip_keeps_style(self, red_style):
        shape = DrawableShape(Rectangle(10, 20, 30, 5), red_style)
        restored = DrawableShape.from_record(shape.to_record())
        assert restored.style == red_style
        assert not restored.selected

    @pytest.mark.parametrize("geometry", [
        Circle(100, 100, 50),
        Rectangle(10, 20, 30, 5),
        Rectangle(10, 20, 30, 5, angle=30),
        Path(((0, 0), (100, 0), (50, 80))),
    ], ids=["circle", "rectangle", "rotated-rectangle", "path"])
    def test_round_trip_containment(self, geometry):
        shape = DrawableShape(geometry)
        restored = DrawableShape.from_record(shape.to_record())
        assert restored.kind is shape.kind
        for point in sample_points(shape.bounds()):
            assert restored.contains(point) == shape.contains(point)

    def test_from_dict(self):
        shape = DrawableShape.from_record({
            "type": "PATH", "params": [0, 0, 50, 0, 50, 50, 0, 50],
            "outlineColor": "#000000", "fillColor": "#FFFFFF",
            "filled": True, "strokeWidth": 4,
        })
        assert shape.kind is GeometryKind.PATH
        assert len(shape.geometry.vertices) == 4
        assert shape.style.fill_color == "#ffffff"

    def test_from_bad_record(self):
        record = ShapeRecord("TRIANGLE", (0, 0, 1), "#000000", "#ffffff", False, 2)
        with pytest.raises(ShapeParseError):
            DrawableShape.from_record(record)
