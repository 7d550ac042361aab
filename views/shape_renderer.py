"""
Shape Renderer.

Paints model geometries with QPainter. This is the paint(geometry,
style, selected) collaborator the controller hands every shape to, in
z-order, on each redraw.
"""

from typing import Sequence

from PyQt6.QtCore import Qt, QRectF, QPointF
from PyQt6.QtGui import QPainter, QColor, QPen, QBrush, QPainterPath, QPolygonF

from models.geometry import Geometry, GeometryKind, Point
from models.style import ShapeStyle


class ShapeRenderer:
    """
    Paints shapes onto one QPainter.

    An instance is the paint(geometry, style, selected) callable handed to
    the controller for each redraw; the static methods can also be used
    directly with any painter.

    Paths are built with the winding fill rule so what is painted matches
    what hit-testing reports as inside.
    """

    SELECTION_COLOR = QColor("#FF0000")
    PREVIEW_COLOR = QColor("#808080")

    def __init__(self, painter: QPainter):
        self._painter = painter

    def __call__(self, geometry: Geometry, style: ShapeStyle, selected: bool):
        ShapeRenderer.render(self._painter, geometry, style, selected)

    @staticmethod
    def build_path(geometry: Geometry) -> QPainterPath:
        """Convert a geometry into a closed QPainterPath."""
        path = QPainterPath()
        path.setFillRule(Qt.FillRule.WindingFill)

        if geometry.kind is GeometryKind.CIRCLE:
            path.addEllipse(QPointF(geometry.cx, geometry.cy), geometry.radius, geometry.radius)
        elif geometry.kind is GeometryKind.RECTANGLE:
            if geometry.is_rotated:
                path.addPolygon(QPolygonF([QPointF(x, y) for x, y in geometry.corners()]))
                path.closeSubpath()
            else:
                path.addRect(QRectF(geometry.x, geometry.y, geometry.width, geometry.height))
        else:
            vertices = geometry.closed_vertices()
            path.moveTo(vertices[0].x, vertices[0].y)
            for vertex in vertices[1:]:
                path.lineTo(vertex.x, vertex.y)
            path.closeSubpath()

        return path

    @staticmethod
    def render(painter: QPainter, geometry: Geometry, style: ShapeStyle, selected: bool = False):
        """
        Paint one shape.

        Args:
            painter: QPainter to render to
            geometry: Shape geometry
            style: Fill/stroke style
            selected: Draw the bounding box highlight
        """
        painter.save()
        path = ShapeRenderer.build_path(geometry)

        if style.filled:
            painter.fillPath(path, QBrush(QColor(style.fill_color)))

        pen = QPen(QColor(style.outline_color), style.stroke_width)
        pen.setJoinStyle(Qt.PenJoinStyle.MiterJoin)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(path)

        if selected:
            box = geometry.bounding_box()
            painter.setPen(QPen(ShapeRenderer.SELECTION_COLOR, 1))
            painter.drawRect(QRectF(box.x, box.y, box.width, box.height))

        painter.restore()

    @staticmethod
    def render_preview(painter: QPainter, vertices: Sequence[Point], stroke_width: int):
        """Draw the outline of a path still being built."""
        if not vertices:
            return
        painter.save()
        path = QPainterPath()
        path.moveTo(vertices[0].x, vertices[0].y)
        for vertex in vertices[1:]:
            path.lineTo(vertex.x, vertex.y)
        painter.setPen(QPen(ShapeRenderer.PREVIEW_COLOR, stroke_width))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(path)
        painter.restore()
