"""
Models package.

This package contains the data model of the shape editor:
- Geometry variants (Circle, Rectangle, Path) and their queries
- Pivoted transforms (translate, rotate_around, scale_around)
- Shape style and the DrawableShape entity
- Serialization records and documents
- The ordered ShapeCollection
"""

from .errors import (
    ShapeError,
    InvalidGeometryError,
    ShapeParseError,
    DocumentError,
    DocumentIOError,
)
from .geometry import (
    GeometryKind,
    Point,
    BoundingBox,
    Circle,
    Rectangle,
    Path,
    Geometry,
    winding_number,
)
from .transform import (
    Affine,
    pivoted,
    pivot_of,
    translate,
    rotate_around,
    scale_around,
)
from .style import (
    STROKE_WIDTHS,
    color_to_hex,
    ShapeStyle,
)
from .codec import (
    normalize_color,
    encode_geometry,
    decode_geometry,
    ShapeRecord,
    encode_document,
    decode_document,
)
from .shape import DrawableShape
from .shape_collection import LoadReport, ShapeCollection


__all__ = [
    # Errors
    "ShapeError",
    "InvalidGeometryError",
    "ShapeParseError",
    "DocumentError",
    "DocumentIOError",
    # Geometry
    "GeometryKind",
    "Point",
    "BoundingBox",
    "Circle",
    "Rectangle",
    "Path",
    "Geometry",
    "winding_number",
    # Transforms
    "Affine",
    "pivoted",
    "pivot_of",
    "translate",
    "rotate_around",
    "scale_around",
    # Style
    "STROKE_WIDTHS",
    "color_to_hex",
    "ShapeStyle",
    # Serialization
    "normalize_color",
    "encode_geometry",
    "decode_geometry",
    "ShapeRecord",
    "encode_document",
    "decode_document",
    # Shapes
    "DrawableShape",
    "LoadReport",
    "ShapeCollection",
]
