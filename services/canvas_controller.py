"""
Canvas interaction controller.

Turns pointer, key and wheel signals into changes on a ShapeCollection:

- Selection: a click selects the topmost shape under the pointer.
  Clicking again at exactly the same point cycles down through every
  shape stacked there, topmost first.
- Dragging: pressing on a selected shape starts a drag session; each
  pointer move translates the shape by the delta since the last move.
- Tools: CIRCLE and RECTANGLE take two clicks; PATH takes one click per
  vertex and is committed with the COMMIT key. CANCEL drops anything
  staged. After one committed shape the tool reverts to NONE.
- Rotate/scale/delete act on every selected shape, each pivoting on its
  own bounding-box center.

The controller holds no Qt objects, so the whole state machine runs
headless in tests. The canvas widget forwards events and repaints.
"""

import logging
import math
from enum import Enum
from typing import Callable, List, Optional, Tuple

from models.geometry import Point, PointLike, Rectangle
from models.shape import DrawableShape, PaintFn
from models.shape_collection import ShapeCollection
from models.style import ShapeStyle

logger = logging.getLogger(__name__)


# Receives the current style; returns the edited style, or None on cancel
StyleEditor = Callable[[ShapeStyle], Optional[ShapeStyle]]


class Tool(Enum):
    """Drawing tools."""
    NONE = "none"
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
    PATH = "path"


class InteractionState(Enum):
    """States of the tool state machine."""
    IDLE = "idle"                   # No tool armed
    STAGING = "staging"             # Circle/rectangle waiting for clicks
    PATH_BUILDING = "path_building" # Path collecting vertices


class EditorKey(Enum):
    """Discrete key signals understood by the controller."""
    CANCEL = "cancel"
    COMMIT = "commit"
    DELETE = "delete"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"


DEFAULT_ROTATION_STEP = 15.0
DEFAULT_WHEEL_SCALE_FACTOR = 1.1


class CanvasController:
    """
    Interaction state machine for the drawing canvas.

    Attributes:
        collection: The shapes being edited
        rotation_step: Degrees per ROTATE_CW / ROTATE_CCW signal
        wheel_scale_factor: Scale per wheel notch toward the user's "up"
    """

    def __init__(self,
                 collection: Optional[ShapeCollection] = None,
                 rotation_step: float = DEFAULT_ROTATION_STEP,
                 wheel_scale_factor: float = DEFAULT_WHEEL_SCALE_FACTOR,
                 style: Optional[ShapeStyle] = None):
        if wheel_scale_factor <= 0:
            raise ValueError(f"wheel scale factor must be positive, got {wheel_scale_factor}")
        self.collection = collection if collection is not None else ShapeCollection()
        self.rotation_step = rotation_step
        self.wheel_scale_factor = wheel_scale_factor

        # Style applied to newly committed shapes
        self._style = style or ShapeStyle()

        # Tool staging
        self._tool = Tool.NONE
        self._first_point: Optional[Point] = None
        self._path_vertices: List[Point] = []

        # Selection cycling
        self._last_click_point: Optional[Point] = None
        self._cycle_index = 0

        # Drag session
        self._drag_shape: Optional[DrawableShape] = None
        self._drag_anchor: Optional[Point] = None

    # =========================================================================
    # State inspection
    # =========================================================================

    @property
    def active_tool(self) -> Tool:
        return self._tool

    @property
    def state(self) -> InteractionState:
        if self._tool is Tool.NONE:
            return InteractionState.IDLE
        if self._tool is Tool.PATH:
            return InteractionState.PATH_BUILDING
        return InteractionState.STAGING

    @property
    def staged_point(self) -> Optional[Point]:
        """First click of a circle/rectangle in progress."""
        return self._first_point

    @property
    def staged_vertices(self) -> Tuple[Point, ...]:
        """Vertices of a path in progress."""
        return tuple(self._path_vertices)

    @property
    def cycle_index(self) -> int:
        return self._cycle_index

    @property
    def is_dragging(self) -> bool:
        return self._drag_shape is not None

    @property
    def current_style(self) -> ShapeStyle:
        return self._style

    # =========================================================================
    # Setters for UI chrome
    # =========================================================================

    def set_active_tool(self, tool: Tool):
        """Arm a tool, dropping any staged geometry and the current selection."""
        self._tool = Tool(tool)
        self._reset_staging()
        self.collection.deselect_all()
        logger.debug(f"Active tool: {self._tool.value}")

    def set_outline_color(self, color: str):
        self._style = self._style.with_changes(outline_color=color)

    def set_fill_color(self, color: str):
        self._style = self._style.with_changes(fill_color=color)

    def set_stroke_width(self, width: int):
        self._style = self._style.with_changes(stroke_width=width)

    def set_fill_enabled(self, enabled: bool):
        self._style = self._style.with_changes(filled=enabled)

    # =========================================================================
    # Pointer signals
    # =========================================================================

    def pointer_down(self, point: PointLike):
        """Handle a primary-button press at `point`."""
        p = Point(point[0], point[1])
        self.pointer_up()

        if self._tool is not Tool.NONE:
            self._handle_tool_click(p)
            return

        if not self._resolve_selection(p):
            self.collection.deselect_all()
            return

        for shape in self.collection.hits_at(p):
            if shape.selected:
                self._drag_shape = shape
                self._drag_anchor = p
                break

    def pointer_move(self, point: PointLike) -> bool:
        """Drag the anchored shape; returns True if anything moved."""
        if self._drag_shape is None or self._drag_anchor is None:
            return False
        p = Point(point[0], point[1])
        dx = p.x - self._drag_anchor.x
        dy = p.y - self._drag_anchor.y
        self._drag_shape.translate(dx, dy)
        self._drag_anchor = p
        return True

    def pointer_up(self, point: Optional[PointLike] = None):
        self._drag_shape = None
        self._drag_anchor = None

    def _resolve_selection(self, p: Point) -> bool:
        if p == self._last_click_point:
            hits = self.collection.hits_at(p)
            if not hits:
                return False
            self._cycle_index = (self._cycle_index + 1) % len(hits)
            self.collection.select_only(hits[self._cycle_index])
            logger.debug(f"Cycled selection to {self._cycle_index + 1} of {len(hits)}")
            return True

        self._last_click_point = p
        self._cycle_index = 0
        top = self.collection.topmost_at(p)
        if top is None:
            return False
        self.collection.select_only(top)
        return True

    def _handle_tool_click(self, p: Point):
        if self._tool is Tool.CIRCLE:
            if self._first_point is None:
                self._first_point = p
                return
            center = self._first_point
            radius = int(math.hypot(p.x - center.x, p.y - center.y))
            self.collection.add_circle(center.x, center.y, radius, self._style)
            logger.debug(f"Committed circle at {center} r={radius}")
            self._finish_tool()

        elif self._tool is Tool.RECTANGLE:
            if self._first_point is None:
                self._first_point = p
                return
            rect = Rectangle.from_corners(self._first_point, p)
            self.collection.add_rectangle(rect.x, rect.y, rect.width, rect.height, self._style)
            logger.debug(f"Committed rectangle {rect}")
            self._finish_tool()

        elif self._tool is Tool.PATH:
            self._path_vertices.append(p)

    # =========================================================================
    # Key and wheel signals
    # =========================================================================

    def handle_key(self, key: EditorKey) -> bool:
        """Dispatch a key signal; returns True if the canvas needs a repaint."""
        if key is EditorKey.CANCEL:
            self.cancel()
            return True
        if key is EditorKey.DELETE:
            return self.delete_selected() > 0
        if key is EditorKey.COMMIT:
            return self.commit_path()
        if key is EditorKey.ROTATE_CW:
            return self.rotate_selected(self.rotation_step) > 0
        if key is EditorKey.ROTATE_CCW:
            return self.rotate_selected(-self.rotation_step) > 0
        return False

    def cancel(self):
        """Drop any staged geometry and disarm the tool."""
        self.set_active_tool(Tool.NONE)

    def commit_path(self) -> bool:
        """Close the staged path and add it to the collection."""
        if self._tool is not Tool.PATH or not self._path_vertices:
            return False
        self.collection.add_path(self._path_vertices, self._style)
        logger.debug(f"Committed path with {len(self._path_vertices)} vertices")
        self._finish_tool()
        return True

    def delete_selected(self) -> int:
        if self._drag_shape is not None and self._drag_shape.selected:
            self.pointer_up()
        return self.collection.delete_selected()

    def rotate_selected(self, angle_degrees: float) -> int:
        """Rotate every selected shape about its own center; returns the count."""
        selected = self.collection.selected()
        for shape in selected:
            shape.rotate(angle_degrees)
        return len(selected)

    def scale_selected(self, factor: float) -> int:
        """Scale every selected shape about its own center; returns the count."""
        selected = self.collection.selected()
        for shape in selected:
            shape.scale(factor)
        return len(selected)

    def wheel(self, notches: float) -> int:
        """
        Scale selected shapes by wheel input.

        Positive notches enlarge by wheel_scale_factor each, negative
        notches shrink by its reciprocal; n notches scale by factor ** n.
        """
        if not notches:
            return 0
        return self.scale_selected(self.wheel_scale_factor ** notches)

    # =========================================================================
    # Style editing
    # =========================================================================

    def first_selected(self) -> Optional[DrawableShape]:
        for shape in self.collection:
            if shape.selected:
                return shape
        return None

    def edit_selected_style(self, editor: StyleEditor) -> bool:
        """
        Ask `editor` for a new style for the first selected shape.

        The returned style replaces the old one in full; None discards.
        """
        shape = self.first_selected()
        if shape is None:
            return False
        updated = editor(shape.style)
        if updated is None:
            return False
        shape.apply_style(updated)
        return True

    # =========================================================================
    # Rendering and document resets
    # =========================================================================

    def paint(self, paint: PaintFn):
        self.collection.paint(paint)

    def reset(self):
        """Forget all interaction state, e.g. after the collection was replaced."""
        self._tool = Tool.NONE
        self._reset_staging()
        self._last_click_point = None
        self._cycle_index = 0
        self.pointer_up()

    def _finish_tool(self):
        self._tool = Tool.NONE
        self._reset_staging()

    def _reset_staging(self):
        self._first_point = None
        self._path_vertices = []


__all__ = [
    "Tool",
    "InteractionState",
    "EditorKey",
    "StyleEditor",
    "CanvasController",
    "DEFAULT_ROTATION_STEP",
    "DEFAULT_WHEEL_SCALE_FACTOR",
]
