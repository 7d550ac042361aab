"""
Drawable shape entity.

Pairs a geometry with a style and a selection flag. Transforms are
destructive: the new geometry replaces the old one, pivoting on the
center of the shape's current bounding box.
"""

import uuid
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from .codec import ShapeRecord
from .geometry import BoundingBox, Geometry, GeometryKind, PointLike
from .style import ShapeStyle
from .transform import pivot_of, rotate_around, scale_around, translate


# paint(geometry, style, selected) supplied by the host graphics surface
PaintFn = Callable[[Geometry, ShapeStyle, bool], None]


def _generate_id() -> str:
    """Generate a short unique ID."""
    return str(uuid.uuid4())[:8]


@dataclass(eq=False)
class DrawableShape:
    """
    A shape on the canvas.

    Attributes:
        geometry: Current geometry (Circle, Rectangle or Path)
        style: Current style, replaced wholesale on edit
        selected: Selection flag
        id: Short identifier, not persisted
    """
    geometry: Geometry
    style: ShapeStyle = field(default_factory=ShapeStyle)
    selected: bool = False
    id: str = field(default_factory=_generate_id)

    @property
    def kind(self) -> GeometryKind:
        return self.geometry.kind

    def set_selected(self, selected: bool):
        self.selected = bool(selected)

    def set_style(self,
                  outline_color: Optional[str] = None,
                  fill_color: Optional[str] = None,
                  filled: Optional[bool] = None,
                  stroke_width: Optional[int] = None):
        """Update any subset of style fields; omitted fields keep their value."""
        self.style = self.style.with_changes(
            outline_color=outline_color,
            fill_color=fill_color,
            filled=filled,
            stroke_width=stroke_width,
        )

    def apply_style(self, style: ShapeStyle):
        """Replace the whole style at once."""
        self.style = style

    def contains(self, point: PointLike) -> bool:
        return self.geometry.contains_point(point)

    def bounds(self) -> BoundingBox:
        return self.geometry.bounding_box()

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------

    def translate(self, dx: float, dy: float):
        self.geometry = translate(self.geometry, dx, dy)

    def rotate(self, angle_degrees: float):
        """Rotate about the bounding-box center; positive is clockwise on screen."""
        self.geometry = rotate_around(self.geometry, pivot_of(self.geometry), angle_degrees)

    def scale(self, factor: float):
        """Scale about the bounding-box center."""
        self.geometry = scale_around(self.geometry, pivot_of(self.geometry), factor)

    def draw(self, paint: PaintFn):
        paint(self.geometry, self.style, self.selected)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_record(self) -> ShapeRecord:
        return ShapeRecord.from_shape_parts(self.geometry, self.style)

    @classmethod
    def from_record(cls, record: Union[ShapeRecord, dict]) -> 'DrawableShape':
        """
        Build a shape from a record or its dictionary form.

        Raises:
            ShapeParseError: The record is malformed
        """
        if not isinstance(record, ShapeRecord):
            record = ShapeRecord.from_dict(record)
        return cls(geometry=record.to_geometry(), style=record.to_style())


__all__ = [
    "PaintFn",
    "DrawableShape",
]
