"""
Transform engine.

Builds 2D affine transforms and applies them to geometries. Every
operation recomputes the full geometry and returns a new instance;
there is no retained transform stack, so repeated small transforms
accumulate floating point drift over a shape's lifetime.

Rotation and scale are pivoted: the transform is composed as
translate(center) -> rotate/scale -> translate(-center), the same order
a graphics surface concatenates them.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidGeometryError
from .geometry import Geometry, PointLike


@dataclass(frozen=True)
class Affine:
    """
    2D affine transform.

    Maps (x, y) to (a*x + c*y + e, b*x + d*y + f).
    """
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> 'Affine':
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> 'Affine':
        return cls(e=dx, f=dy)

    @classmethod
    def rotation(cls, angle_degrees: float) -> 'Affine':
        """Rotation about the origin; positive angles turn clockwise on screen."""
        rad = math.radians(angle_degrees)
        cos_a = math.cos(rad)
        sin_a = math.sin(rad)
        return cls(a=cos_a, b=sin_a, c=-sin_a, d=cos_a)

    @classmethod
    def scaling(cls, factor: float) -> 'Affine':
        return cls(a=factor, d=factor)

    def then(self, other: 'Affine') -> 'Affine':
        """
        Concatenate `other` onto this transform.

        The result applies `other` first and then this transform, matching
        how a graphics surface concatenates successive calls.
        """
        return Affine(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def map(self, x: float, y: float) -> Tuple[float, float]:
        return (self.a * x + self.c * y + self.e,
                self.b * x + self.d * y + self.f)

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def scale(self) -> float:
        """Uniform scale factor of a similarity transform."""
        return math.sqrt(abs(self.determinant))

    @property
    def rotation_degrees(self) -> float:
        return math.degrees(math.atan2(self.b, self.a))

    @property
    def is_similarity(self) -> bool:
        """True for rotation + uniform scale + translation, without reflection."""
        tol = 1e-9 * max(1.0, abs(self.a), abs(self.b))
        return (abs(self.a - self.d) <= tol
                and abs(self.b + self.c) <= tol
                and self.determinant > 0)

    def require_similarity(self):
        if not self.is_similarity:
            raise InvalidGeometryError(
                "only uniform, non-reflecting transforms keep circles and rectangles intact"
            )


# =============================================================================
# Pivoted operations
# =============================================================================

def pivoted(center: PointLike, inner: Affine) -> Affine:
    """Compose translate(center) -> inner -> translate(-center)."""
    cx, cy = center[0], center[1]
    return (Affine.translation(cx, cy)
            .then(inner)
            .then(Affine.translation(-cx, -cy)))


def pivot_of(geometry: Geometry):
    """Center of a geometry's current bounding box."""
    return geometry.bounding_box().center


def translate(geometry: Geometry, dx: float, dy: float) -> Geometry:
    """Shift every point of the geometry by (dx, dy)."""
    return geometry.transformed(Affine.translation(dx, dy))


def rotate_around(geometry: Geometry, center: PointLike, angle_degrees: float) -> Geometry:
    """Rotate the geometry about `center`; positive angles turn clockwise on screen."""
    return geometry.transformed(pivoted(center, Affine.rotation(angle_degrees)))


def scale_around(geometry: Geometry, center: PointLike, factor: float) -> Geometry:
    """Uniformly scale the geometry about `center`; factor > 1 enlarges."""
    if not (isinstance(factor, (int, float)) and math.isfinite(factor) and factor > 0):
        raise InvalidGeometryError(f"scale factor must be a positive number, got {factor!r}")
    return geometry.transformed(pivoted(center, Affine.scaling(factor)))


__all__ = [
    "Affine",
    "pivoted",
    "pivot_of",
    "translate",
    "rotate_around",
    "scale_around",
]
