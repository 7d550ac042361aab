"""
Shape style.

A ShapeStyle is an immutable value: editing a shape's style replaces
the whole value, so two shapes never alias one mutable style.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple


# Stroke widths offered by the settings menu; any positive int is valid.
STROKE_WIDTHS: Tuple[int, ...] = (1, 2, 4, 6, 8, 10)

DEFAULT_OUTLINE_COLOR = "#000000"
DEFAULT_FILL_COLOR = "#ffffff"
DEFAULT_STROKE_WIDTH = 2


def color_to_hex(red: int, green: int, blue: int) -> str:
    """Format 8-bit RGB components as '#rrggbb'."""
    return f"#{red & 0xFF:02x}{green & 0xFF:02x}{blue & 0xFF:02x}"


@dataclass(frozen=True)
class ShapeStyle:
    """
    Visual styling for a shape.

    Attributes:
        outline_color: Stroke color as '#rrggbb'
        fill_color: Fill color as '#rrggbb'
        filled: Whether the interior is painted with fill_color
        stroke_width: Stroke width in pixels, a positive integer
    """
    outline_color: str = DEFAULT_OUTLINE_COLOR
    fill_color: str = DEFAULT_FILL_COLOR
    filled: bool = False
    stroke_width: int = DEFAULT_STROKE_WIDTH

    def __post_init__(self):
        """Lowercase colors and validate the stroke width."""
        object.__setattr__(self, "outline_color", str(self.outline_color).lower())
        object.__setattr__(self, "fill_color", str(self.fill_color).lower())
        object.__setattr__(self, "filled", bool(self.filled))
        if isinstance(self.stroke_width, bool) or not isinstance(self.stroke_width, int):
            raise ValueError(f"stroke width must be an integer, got {self.stroke_width!r}")
        if self.stroke_width <= 0:
            raise ValueError(f"stroke width must be positive, got {self.stroke_width}")

    def with_changes(self,
                     outline_color: Optional[str] = None,
                     fill_color: Optional[str] = None,
                     filled: Optional[bool] = None,
                     stroke_width: Optional[int] = None) -> 'ShapeStyle':
        """Return a copy with the given fields replaced; None leaves a field as is."""
        changes = {}
        if outline_color is not None:
            changes["outline_color"] = outline_color
        if fill_color is not None:
            changes["fill_color"] = fill_color
        if filled is not None:
            changes["filled"] = filled
        if stroke_width is not None:
            changes["stroke_width"] = stroke_width
        return replace(self, **changes)


__all__ = [
    "STROKE_WIDTHS",
    "DEFAULT_OUTLINE_COLOR",
    "DEFAULT_FILL_COLOR",
    "DEFAULT_STROKE_WIDTH",
    "color_to_hex",
    "ShapeStyle",
]
