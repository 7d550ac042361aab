"""
Serialization codec for shapes.

A ShapeRecord is the flat, type-tagged form of a shape used only at the
save/load boundary:

    {"type": "CIRCLE", "params": [cx, cy, r],
     "outlineColor": "#000000", "fillColor": "#ffffff",
     "filled": false, "strokeWidth": 2}

Params per type:
- CIRCLE: [centerX, centerY, radius]
- RECTANGLE: [x, y, width, height], plus a trailing angle in degrees
  when the rectangle is rotated
- PATH: [x0, y0, x1, y1, ...], the closed outline without a repeated
  closing vertex

A document is a JSON array of records in z-order. Decoding a document
never fails because of one bad record; see decode_document().
"""

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple, Union

from .errors import DocumentError, InvalidGeometryError, ShapeParseError
from .geometry import Circle, Geometry, GeometryKind, Path, Point, Rectangle
from .style import ShapeStyle


_HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")

# Allowed param counts for fixed-arity types
_FIXED_ARITY = {
    GeometryKind.CIRCLE: (3,),
    GeometryKind.RECTANGLE: (4, 5),
}


def normalize_color(value: Any, field_name: str = "color") -> str:
    """Validate a '#rrggbb' color and return it lowercased."""
    if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value):
        raise ShapeParseError(f"{field_name} must be a '#rrggbb' string, got {value!r}")
    return value.lower()


def _as_number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ShapeParseError(f"{what} must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise ShapeParseError(f"{what} is too large") from None
    if not math.isfinite(number):
        raise ShapeParseError(f"{what} must be finite, got {value!r}")
    return number


# =============================================================================
# Geometry <-> (type, params)
# =============================================================================

def encode_geometry(geometry: Geometry) -> Tuple[str, List[float]]:
    """Flatten a geometry into its type tag and parameter list."""
    kind = geometry.kind
    if kind is GeometryKind.CIRCLE:
        params = [geometry.cx, geometry.cy, geometry.radius]
    elif kind is GeometryKind.RECTANGLE:
        params = [geometry.x, geometry.y, geometry.width, geometry.height]
        if geometry.is_rotated:
            params.append(geometry.angle)
    elif kind is GeometryKind.PATH:
        vertices = geometry.closed_vertices()
        if len(vertices) == 1:
            # A single point closes onto itself
            vertices = vertices * 2
        params = [coord for vertex in vertices for coord in vertex]
    else:
        raise ShapeParseError(f"cannot encode geometry kind {kind!r}")
    return kind.value, [float(p) for p in params]


def decode_geometry(type_name: Any, params: Sequence[Any]) -> Geometry:
    """Rebuild a geometry from a type tag and parameter list."""
    try:
        kind = GeometryKind(type_name)
    except ValueError:
        raise ShapeParseError(f"unknown shape type {type_name!r}") from None

    values = [_as_number(p, f"param {i}") for i, p in enumerate(params)]
    count = len(values)

    if kind in _FIXED_ARITY and count not in _FIXED_ARITY[kind]:
        expected = " or ".join(str(n) for n in _FIXED_ARITY[kind])
        raise ShapeParseError(f"{kind.value} expects {expected} params, got {count}")
    if kind is GeometryKind.PATH and (count < 4 or count % 2):
        raise ShapeParseError(f"PATH expects an even number of params >= 4, got {count}")

    try:
        if kind is GeometryKind.CIRCLE:
            return Circle(*values)
        if kind is GeometryKind.RECTANGLE:
            return Rectangle(*values)
        return Path(tuple(Point(values[i], values[i + 1]) for i in range(0, count, 2)))
    except InvalidGeometryError as e:
        raise ShapeParseError(str(e)) from e


# =============================================================================
# Record
# =============================================================================

@dataclass(frozen=True)
class ShapeRecord:
    """
    Serialized form of one shape.

    Attributes:
        type: "CIRCLE", "RECTANGLE" or "PATH"
        params: Numeric parameters, layout depends on type
        outline_color: '#rrggbb'
        fill_color: '#rrggbb'
        filled: Fill flag
        stroke_width: Positive integer stroke width
    """
    type: str
    params: Tuple[float, ...]
    outline_color: str
    fill_color: str
    filled: bool
    stroke_width: int

    @classmethod
    def from_shape_parts(cls, geometry: Geometry, style: ShapeStyle) -> 'ShapeRecord':
        type_name, params = encode_geometry(geometry)
        return cls(
            type=type_name,
            params=tuple(params),
            outline_color=normalize_color(style.outline_color, "outlineColor"),
            fill_color=normalize_color(style.fill_color, "fillColor"),
            filled=style.filled,
            stroke_width=style.stroke_width,
        )

    def to_geometry(self) -> Geometry:
        return decode_geometry(self.type, self.params)

    def to_style(self) -> ShapeStyle:
        try:
            return ShapeStyle(
                outline_color=normalize_color(self.outline_color, "outlineColor"),
                fill_color=normalize_color(self.fill_color, "fillColor"),
                filled=self.filled,
                stroke_width=self.stroke_width,
            )
        except ValueError as e:
            raise ShapeParseError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.type,
            "params": list(self.params),
            "outlineColor": self.outline_color,
            "fillColor": self.fill_color,
            "filled": self.filled,
            "strokeWidth": self.stroke_width,
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'ShapeRecord':
        """Create from dictionary, checking field presence and types."""
        if not isinstance(data, dict):
            raise ShapeParseError(f"record must be an object, got {type(data).__name__}")

        missing = [k for k in ("type", "params", "outlineColor", "fillColor", "filled", "strokeWidth")
                   if k not in data]
        if missing:
            raise ShapeParseError(f"record is missing {', '.join(missing)}")

        params = data["params"]
        if not isinstance(params, list):
            raise ShapeParseError("params must be a list")
        filled = data["filled"]
        if not isinstance(filled, bool):
            raise ShapeParseError(f"filled must be a boolean, got {filled!r}")
        stroke_width = data["strokeWidth"]
        if isinstance(stroke_width, bool) or not isinstance(stroke_width, int):
            raise ShapeParseError(f"strokeWidth must be an integer, got {stroke_width!r}")
        if not isinstance(data["type"], str):
            raise ShapeParseError(f"type must be a string, got {data['type']!r}")

        return cls(
            type=data["type"],
            params=tuple(_as_number(p, f"param {i}") for i, p in enumerate(params)),
            outline_color=normalize_color(data["outlineColor"], "outlineColor"),
            fill_color=normalize_color(data["fillColor"], "fillColor"),
            filled=filled,
            stroke_width=stroke_width,
        )


# =============================================================================
# Documents
# =============================================================================

def encode_document(records: Sequence[ShapeRecord], indent: int = 2) -> str:
    """Serialize records to a JSON array string."""
    return json.dumps([r.to_dict() for r in records], indent=indent)


def decode_document(text: Union[str, bytes]) -> List[Union[ShapeRecord, ShapeParseError]]:
    """
    Parse a JSON document into records.

    Returns one entry per array element, in order: a ShapeRecord, or the
    ShapeParseError describing why that element was rejected.

    Raises:
        DocumentError: The text is not JSON or its top level is not an array
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise DocumentError(f"document is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise DocumentError(f"document must be a JSON array, got {type(data).__name__}")

    results: List[Union[ShapeRecord, ShapeParseError]] = []
    for index, item in enumerate(data):
        try:
            record = ShapeRecord.from_dict(item)
            # Reject geometry and style problems here so callers see one error type
            record.to_geometry()
            record.to_style()
            results.append(record)
        except ShapeParseError as e:
            e.index = index
            results.append(e)
    return results


__all__ = [
    "normalize_color",
    "encode_geometry",
    "decode_geometry",
    "ShapeRecord",
    "encode_document",
    "decode_document",
]
