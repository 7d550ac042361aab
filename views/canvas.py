"""
Drawing canvas widget.

Forwards mouse, key and wheel events to a CanvasController and paints
the collection with ShapeRenderer. A fixed-interval timer triggers
repaints; it only reads state, and runs on the GUI thread like every
mutation.
"""

import logging
from typing import Optional

from PyQt6.QtCore import Qt, QTimer, pyqtSignal, QPoint
from PyQt6.QtGui import QPainter, QColor, QKeyEvent, QMouseEvent, QWheelEvent
from PyQt6.QtWidgets import QWidget

from models.geometry import Point
from services.canvas_controller import CanvasController, EditorKey, InteractionState

from .shape_renderer import ShapeRenderer

logger = logging.getLogger(__name__)


KEY_BINDINGS = {
    Qt.Key.Key_Escape: EditorKey.CANCEL,
    Qt.Key.Key_Delete: EditorKey.DELETE,
    Qt.Key.Key_Return: EditorKey.COMMIT,
    Qt.Key.Key_Enter: EditorKey.COMMIT,
    Qt.Key.Key_R: EditorKey.ROTATE_CW,
    Qt.Key.Key_E: EditorKey.ROTATE_CCW,
}

# One wheel notch in angleDelta units
WHEEL_NOTCH = 120


class PaintCanvas(QWidget):
    """
    Drawing surface.

    Signals:
        styleEditRequested(QPoint): Right click with a shape selected
        shapesChanged(): Shapes were added, moved, restyled or removed
    """

    styleEditRequested = pyqtSignal(QPoint)
    shapesChanged = pyqtSignal()

    def __init__(self, controller: CanvasController, redraw_interval_ms: int = 16, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAutoFillBackground(True)
        palette = self.palette()
        palette.setColor(self.backgroundRole(), QColor("#FFFFFF"))
        self.setPalette(palette)

        self._redraw_timer = QTimer(self)
        self._redraw_timer.timeout.connect(self.update)
        if redraw_interval_ms > 0:
            self._redraw_timer.start(redraw_interval_ms)

    @staticmethod
    def _event_point(event) -> Point:
        pos = event.position()
        return Point(int(pos.x()), int(pos.y()))

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.RightButton:
            if self.controller.first_selected() is not None:
                self.styleEditRequested.emit(event.globalPosition().toPoint())
            event.accept()
            return
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return

        count_before = len(self.controller.collection)
        self.controller.pointer_down(self._event_point(event))
        if len(self.controller.collection) != count_before:
            self.shapesChanged.emit()
        self.update()
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):
        if self.controller.pointer_move(self._event_point(event)):
            self.shapesChanged.emit()
            self.update()
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent):
        self.controller.pointer_up(self._event_point(event))
        event.accept()

    def keyPressEvent(self, event: QKeyEvent):
        key = KEY_BINDINGS.get(event.key())
        if key is None:
            super().keyPressEvent(event)
            return
        if self.controller.handle_key(key):
            if key is not EditorKey.CANCEL:
                self.shapesChanged.emit()
            self.update()
        event.accept()

    def wheelEvent(self, event: QWheelEvent):
        notches = event.angleDelta().y() / WHEEL_NOTCH
        if self.controller.wheel(notches):
            self.shapesChanged.emit()
            self.update()
        event.accept()

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            self.controller.paint(ShapeRenderer(painter))
            if self.controller.state is InteractionState.PATH_BUILDING:
                ShapeRenderer.render_preview(
                    painter,
                    self.controller.staged_vertices,
                    self.controller.current_style.stroke_width,
                )
        finally:
            painter.end()

    def set_redraw_interval(self, interval_ms: Optional[int]):
        """Restart the redraw timer; 0 or None stops it."""
        self._redraw_timer.stop()
        if interval_ms:
            self._redraw_timer.start(interval_ms)
