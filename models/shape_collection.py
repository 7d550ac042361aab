"""
Shape collection.

Ordered registry of DrawableShape objects. Order is z-order: later
shapes are drawn on top and hit-tested first. The collection owns the
save/load round trip; loading replaces the whole collection only after
the replacement has been built, so a failed load leaves it untouched.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path as FilePath
from typing import IO, Iterable, Iterator, List, Optional, Tuple, Union

from .codec import ShapeRecord, decode_document, encode_document
from .errors import DocumentError, DocumentIOError
from .geometry import Circle, Path, PointLike, Rectangle
from .shape import DrawableShape, PaintFn
from .style import ShapeStyle

logger = logging.getLogger(__name__)

Sink = Union[str, FilePath, IO[str]]
Source = Union[str, FilePath, IO[str]]


@dataclass
class LoadReport:
    """
    Outcome of a load.

    Attributes:
        loaded: Number of shapes now in the collection
        skipped: (index, reason) for each rejected record
    """
    loaded: int = 0
    skipped: List[Tuple[int, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.skipped


class ShapeCollection:
    """
    Ordered collection of shapes.

    Iteration order is z-order, bottom first.
    """

    def __init__(self, shapes: Optional[Iterable[DrawableShape]] = None):
        self._shapes: List[DrawableShape] = list(shapes or [])

    # =========================================================================
    # Adding shapes
    # =========================================================================

    def add(self, shape: DrawableShape) -> DrawableShape:
        """Append a shape on top of the z-order."""
        self._shapes.append(shape)
        return shape

    def add_circle(self, cx: float, cy: float, radius: float,
                   style: Optional[ShapeStyle] = None) -> DrawableShape:
        return self.add(DrawableShape(Circle(cx, cy, radius), style or ShapeStyle()))

    def add_rectangle(self, x: float, y: float, width: float, height: float,
                      style: Optional[ShapeStyle] = None) -> DrawableShape:
        return self.add(DrawableShape(Rectangle(x, y, width, height), style or ShapeStyle()))

    def add_path(self, vertices: Iterable[PointLike],
                 style: Optional[ShapeStyle] = None) -> DrawableShape:
        return self.add(DrawableShape(Path(tuple(vertices)), style or ShapeStyle()))

    # =========================================================================
    # Queries
    # =========================================================================

    def all(self) -> Tuple[DrawableShape, ...]:
        """Read-only view in z-order (bottom first)."""
        return tuple(self._shapes)

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[DrawableShape]:
        return iter(tuple(self._shapes))

    def __contains__(self, shape: object) -> bool:
        return shape in self._shapes

    def selected(self) -> List[DrawableShape]:
        return [s for s in self._shapes if s.selected]

    def hits_at(self, point: PointLike) -> List[DrawableShape]:
        """Shapes containing the point, topmost first."""
        return [s for s in reversed(self._shapes) if s.contains(point)]

    def topmost_at(self, point: PointLike) -> Optional[DrawableShape]:
        for shape in reversed(self._shapes):
            if shape.contains(point):
                return shape
        return None

    # =========================================================================
    # Selection and removal
    # =========================================================================

    def deselect_all(self):
        for shape in self._shapes:
            shape.set_selected(False)

    def select_only(self, shape: DrawableShape):
        self.deselect_all()
        shape.set_selected(True)

    def select_all(self):
        for shape in self._shapes:
            shape.set_selected(True)

    def delete_selected(self) -> int:
        """Remove every selected shape, keeping survivors in order."""
        before = len(self._shapes)
        self._shapes = [s for s in self._shapes if not s.selected]
        removed = before - len(self._shapes)
        if removed:
            logger.debug(f"Deleted {removed} selected shape(s)")
        return removed

    def clear(self):
        self._shapes.clear()

    def paint(self, paint: PaintFn):
        """Hand every shape to the painter in z-order."""
        for shape in self._shapes:
            shape.draw(paint)

    # =========================================================================
    # Persistence
    # =========================================================================

    def to_records(self) -> List[ShapeRecord]:
        return [s.to_record() for s in self._shapes]

    def to_json(self, indent: int = 2) -> str:
        return encode_document(self.to_records(), indent=indent)

    def save_to(self, sink: Sink):
        """
        Write the collection as a JSON array.

        Args:
            sink: File path or writable text stream

        Raises:
            DocumentIOError: The file could not be written
        """
        text = self.to_json()
        if hasattr(sink, "write"):
            try:
                sink.write(text)
            except OSError as e:
                raise DocumentIOError(f"Error writing shapes: {e}") from e
            return

        path = FilePath(sink)
        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(text)
        except OSError as e:
            raise DocumentIOError(f"Error saving shapes to {path}: {e}") from e
        logger.info(f"Saved {len(self._shapes)} shape(s) to {path}")

    def load_from(self, source: Source) -> LoadReport:
        """
        Replace the collection with the shapes in a JSON document.

        Malformed records are skipped and reported; the rest are loaded.
        The collection is only replaced once the whole document is parsed.

        Args:
            source: File path or readable text stream

        Returns:
            LoadReport listing loaded and skipped records

        Raises:
            DocumentIOError: The file could not be read
            DocumentError: The document is not a JSON array
        """
        if hasattr(source, "read"):
            try:
                text = source.read()
            except OSError as e:
                raise DocumentIOError(f"Error reading shapes: {e}") from e
        else:
            path = FilePath(source)
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    text = f.read()
            except OSError as e:
                raise DocumentIOError(f"Error loading shapes from {path}: {e}") from e
            except UnicodeDecodeError as e:
                raise DocumentError(f"{path} is not a UTF-8 text document") from e

        report = LoadReport()
        scratch: List[DrawableShape] = []
        for entry in decode_document(text):
            if isinstance(entry, ShapeRecord):
                scratch.append(DrawableShape.from_record(entry))
            else:
                logger.warning(f"Skipping shape {entry}")
                report.skipped.append((entry.index, str(entry)))

        self._shapes = scratch
        report.loaded = len(scratch)
        logger.info(f"Loaded {report.loaded} shape(s), skipped {len(report.skipped)}")
        return report


__all__ = [
    "LoadReport",
    "ShapeCollection",
]
