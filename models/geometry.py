"""
Geometry primitives for drawable shapes.

Three variants make up the closed set of geometries the editor can hold:

- Circle: center and radius
- Rectangle: origin, size and an optional rotation about its own center
- Path: an ordered vertex list, implicitly closed for fill and hit-testing

Every variant carries a GeometryKind tag and answers the same queries:
contains_point(), bounding_box() and transformed(). A transform never
changes the tag, only the numeric parameters. Geometries are immutable;
a transform returns a new instance that replaces the old one.

Path containment uses the nonzero winding rule over the closed vertex
polygon, so the center of a self-intersecting star counts as inside.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterable, List, NamedTuple, Sequence, Tuple, Union, TYPE_CHECKING

from .errors import InvalidGeometryError

if TYPE_CHECKING:
    from .transform import Affine


# =============================================================================
# Basic value types
# =============================================================================

class GeometryKind(Enum):
    """Tag identifying a geometry variant."""
    CIRCLE = "CIRCLE"
    RECTANGLE = "RECTANGLE"
    PATH = "PATH"


class Point(NamedTuple):
    """A point in canvas coordinates (y grows downward)."""
    x: float
    y: float


class BoundingBox(NamedTuple):
    """Axis-aligned rectangle (x, y, width, height)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @classmethod
    def from_points(cls, points: Iterable[Tuple[float, float]]) -> 'BoundingBox':
        """Smallest box enclosing the given points."""
        xs: List[float] = []
        ys: List[float] = []
        for px, py in points:
            xs.append(px)
            ys.append(py)
        if not xs:
            raise InvalidGeometryError("cannot bound an empty point set")
        min_x, min_y = min(xs), min(ys)
        return cls(min_x, min_y, max(xs) - min_x, max(ys) - min_y)


PointLike = Union[Point, Tuple[float, float]]


# =============================================================================
# Helper Functions
# =============================================================================

def _check_finite(*values: float):
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidGeometryError(f"coordinate must be a number, got {value!r}")
        try:
            value = float(value)
        except OverflowError:
            raise InvalidGeometryError("coordinate is too large") from None
        if not math.isfinite(value):
            raise InvalidGeometryError(f"coordinate must be finite, got {value!r}")


def _normalize_angle(angle: float) -> float:
    """Fold an angle in degrees into [0, 360), snapping full turns to 0."""
    angle = math.fmod(angle, 360.0)
    if angle < 0.0:
        angle += 360.0
    if math.isclose(angle, 360.0, abs_tol=1e-9) or math.isclose(angle, 0.0, abs_tol=1e-9):
        return 0.0
    return angle


def _rotate(x: float, y: float, cx: float, cy: float, cos_a: float, sin_a: float) -> Point:
    """Rotate (x, y) about (cx, cy); positive sine turns clockwise on screen."""
    dx = x - cx
    dy = y - cy
    return Point(cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a)


def _is_left(a: Point, b: Point, p: PointLike) -> float:
    """Cross product sign of p relative to the directed edge a -> b."""
    return (b.x - a.x) * (p[1] - a.y) - (p[0] - a.x) * (b.y - a.y)


def winding_number(vertices: Sequence[Point], point: PointLike) -> int:
    """
    Winding number of a closed polygon around a point.

    The polygon is closed implicitly: the last vertex connects back to
    the first.
    """
    count = len(vertices)
    if count < 3:
        return 0
    wn = 0
    py = point[1]
    for i in range(count):
        a = vertices[i]
        b = vertices[(i + 1) % count]
        if a.y <= py:
            if b.y > py and _is_left(a, b, point) > 0:
                wn += 1
        elif b.y <= py and _is_left(a, b, point) < 0:
            wn -= 1
    return wn


# =============================================================================
# Geometry variants
# =============================================================================

@dataclass(frozen=True)
class Circle:
    """
    A true circle.

    Attributes:
        cx: Center X coordinate
        cy: Center Y coordinate
        radius: Radius, never negative
    """
    cx: float
    cy: float
    radius: float

    kind: ClassVar[GeometryKind] = GeometryKind.CIRCLE

    def __post_init__(self):
        _check_finite(self.cx, self.cy, self.radius)
        if self.radius < 0:
            raise InvalidGeometryError(f"circle radius must not be negative, got {self.radius}")

    @property
    def center(self) -> Point:
        return Point(self.cx, self.cy)

    def contains_point(self, point: PointLike) -> bool:
        dx = point[0] - self.cx
        dy = point[1] - self.cy
        return dx * dx + dy * dy < self.radius * self.radius

    def bounding_box(self) -> BoundingBox:
        return BoundingBox(self.cx - self.radius, self.cy - self.radius,
                           self.radius * 2.0, self.radius * 2.0)

    def transformed(self, affine: 'Affine') -> 'Circle':
        affine.require_similarity()
        cx, cy = affine.map(self.cx, self.cy)
        return Circle(cx, cy, self.radius * affine.scale)


@dataclass(frozen=True)
class Rectangle:
    """
    A rectangle, optionally rotated about its own center.

    Containment is half-open: [x, x + width) x [y, y + height) in the
    rectangle's own (unrotated) frame.

    Attributes:
        x: Left edge before rotation
        y: Top edge before rotation
        width: Width, never negative
        height: Height, never negative
        angle: Clockwise rotation in degrees about the center, in [0, 360)
    """
    x: float
    y: float
    width: float
    height: float
    angle: float = 0.0

    kind: ClassVar[GeometryKind] = GeometryKind.RECTANGLE

    def __post_init__(self):
        _check_finite(self.x, self.y, self.width, self.height, self.angle)
        if self.width < 0 or self.height < 0:
            raise InvalidGeometryError(
                f"rectangle size must not be negative, got {self.width}x{self.height}"
            )
        object.__setattr__(self, "angle", _normalize_angle(self.angle))

    @classmethod
    def from_corners(cls, first: PointLike, second: PointLike) -> 'Rectangle':
        """Normalize two opposite corners into min corner and absolute size."""
        return cls(
            min(first[0], second[0]),
            min(first[1], second[1]),
            abs(second[0] - first[0]),
            abs(second[1] - first[1]),
        )

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)

    @property
    def is_rotated(self) -> bool:
        return self.angle != 0.0

    def corners(self) -> List[Point]:
        """Corners in drawing order (top-left, top-right, bottom-right, bottom-left)."""
        raw = [
            Point(self.x, self.y),
            Point(self.x + self.width, self.y),
            Point(self.x + self.width, self.y + self.height),
            Point(self.x, self.y + self.height),
        ]
        if not self.is_rotated:
            return raw
        rad = math.radians(self.angle)
        cos_a, sin_a = math.cos(rad), math.sin(rad)
        cx, cy = self.center
        return [_rotate(px, py, cx, cy, cos_a, sin_a) for px, py in raw]

    def contains_point(self, point: PointLike) -> bool:
        px, py = point[0], point[1]
        if self.is_rotated:
            rad = math.radians(self.angle)
            cx, cy = self.center
            px, py = _rotate(px, py, cx, cy, math.cos(rad), -math.sin(rad))
        return (self.x <= px < self.x + self.width
                and self.y <= py < self.y + self.height)

    def bounding_box(self) -> BoundingBox:
        if not self.is_rotated:
            return BoundingBox(self.x, self.y, self.width, self.height)
        return BoundingBox.from_points(self.corners())

    def transformed(self, affine: 'Affine') -> 'Rectangle':
        affine.require_similarity()
        cx, cy = affine.map(*self.center)
        scale = affine.scale
        width = self.width * scale
        height = self.height * scale
        return Rectangle(
            cx - width / 2.0,
            cy - height / 2.0,
            width,
            height,
            self.angle + affine.rotation_degrees,
        )


@dataclass(frozen=True)
class Path:
    """
    A polyline path of one or more vertices.

    The vertex list is stored open; the path is always treated as closed
    (last vertex joins the first) for fill and hit-testing.

    Attributes:
        vertices: Ordered vertices
        closed: Always True for shapes held by the editor
    """
    vertices: Tuple[Point, ...]
    closed: bool = field(default=True)

    kind: ClassVar[GeometryKind] = GeometryKind.PATH

    def __post_init__(self):
        points = []
        for vertex in self.vertices:
            if len(vertex) != 2:
                raise InvalidGeometryError(f"vertex must be an (x, y) pair, got {vertex!r}")
            _check_finite(vertex[0], vertex[1])
            points.append(Point(float(vertex[0]), float(vertex[1])))
        if not points:
            raise InvalidGeometryError("path needs at least one vertex")
        object.__setattr__(self, "vertices", tuple(points))

    def closed_vertices(self) -> List[Point]:
        """
        Vertices of the closed outline, without a repeated closing vertex.

        A path whose last vertex equals its first yields the same list as
        one closed implicitly.
        """
        points = list(self.vertices)
        while len(points) > 1 and points[-1] == points[0]:
            points.pop()
        return points

    def contains_point(self, point: PointLike) -> bool:
        return winding_number(self.closed_vertices(), point) != 0

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points(self.vertices)

    def transformed(self, affine: 'Affine') -> 'Path':
        return Path(tuple(Point(*affine.map(v.x, v.y)) for v in self.vertices), self.closed)


Geometry = Union[Circle, Rectangle, Path]


__all__ = [
    "GeometryKind",
    "Point",
    "PointLike",
    "BoundingBox",
    "Circle",
    "Rectangle",
    "Path",
    "Geometry",
    "winding_number",
]
