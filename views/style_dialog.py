"""
Shape Style Dialog.

Edits the style of one shape. Nothing is applied until OK: the dialog
returns a whole new ShapeStyle, or None when cancelled.
"""

from typing import Optional, Sequence

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QCheckBox, QComboBox,
    QPushButton, QColorDialog, QDialogButtonBox
)

from models.style import STROKE_WIDTHS, ShapeStyle


class ColorButton(QPushButton):
    """A button that displays a color and opens a color picker when clicked."""

    colorChanged = pyqtSignal(QColor)

    def __init__(self, color: str = "#000000", title: str = "Choose Color", parent=None):
        super().__init__(parent)
        self._color = QColor(color)
        self._title = title
        self.setFixedSize(60, 25)
        self.clicked.connect(self._pick_color)
        self._update_style()

    def _update_style(self):
        """Update button appearance to show current color."""
        self.setStyleSheet(
            f"background-color: {self._color.name()}; "
            f"border: 2px solid #555; "
            f"border-radius: 3px;"
        )

    def _pick_color(self):
        """Open color picker dialog."""
        color = QColorDialog.getColor(self._color, self, self._title)
        if color.isValid():
            self._color = color
            self._update_style()
            self.colorChanged.emit(color)

    def color_name(self) -> str:
        """Current color as '#rrggbb'."""
        return self._color.name()


class ShapeStyleDialog(QDialog):
    """Fill toggle, fill color, outline color and stroke width for one shape."""

    def __init__(self, style: ShapeStyle, stroke_widths: Sequence[int] = STROKE_WIDTHS, parent=None):
        super().__init__(parent)
        self._style = style
        self.setWindowTitle("Shape Options")

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self._fill_check = QCheckBox("Fill shape")
        self._fill_check.setChecked(style.filled)
        form.addRow(self._fill_check)

        self._fill_button = ColorButton(style.fill_color, "Choose Fill Color")
        form.addRow("Fill color:", self._fill_button)

        self._outline_button = ColorButton(style.outline_color, "Choose Outline Color")
        form.addRow("Outline color:", self._outline_button)

        self._width_combo = QComboBox()
        widths = list(stroke_widths)
        if style.stroke_width not in widths:
            widths = sorted(widths + [style.stroke_width])
        for width in widths:
            self._width_combo.addItem(str(width), width)
        self._width_combo.setCurrentIndex(widths.index(style.stroke_width))
        form.addRow("Stroke width:", self._width_combo)

        layout.addLayout(form)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def edited_style(self) -> ShapeStyle:
        return ShapeStyle(
            outline_color=self._outline_button.color_name(),
            fill_color=self._fill_button.color_name(),
            filled=self._fill_check.isChecked(),
            stroke_width=self._width_combo.currentData(),
        )

    @classmethod
    def get_style(cls, style: ShapeStyle,
                  stroke_widths: Sequence[int] = STROKE_WIDTHS,
                  parent=None) -> Optional[ShapeStyle]:
        """Show the dialog; returns the edited style, or None if cancelled."""
        dialog = cls(style, stroke_widths, parent)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            return dialog.edited_style()
        return None
