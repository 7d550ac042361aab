"""Views package."""

from .shape_renderer import ShapeRenderer
from .canvas import PaintCanvas
from .style_dialog import ColorButton, ShapeStyleDialog
from .main_window import MainWindow

__all__ = [
    "ShapeRenderer",
    "PaintCanvas",
    "ColorButton",
    "ShapeStyleDialog",
    "MainWindow",
]
