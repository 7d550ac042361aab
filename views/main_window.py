"""
Main application window.

Assembles the canvas, menus and dialogs around the canvas controller.
"""

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import Qt, QPoint
from PyQt6.QtGui import QAction, QActionGroup, QColor, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QMessageBox, QFileDialog, QColorDialog

from models import DocumentError, DocumentIOError, ShapeCollection, ShapeError
from services import (
    CanvasController, DocumentManager, Tool, FILE_FILTER,
    SettingsManager, get_settings,
)

from .canvas import PaintCanvas
from .style_dialog import ShapeStyleDialog

logger = logging.getLogger(__name__)


HELP_TEXT = (
    "Instructions:\n"
    "- Choose Circle, Rectangle or Path from the Tools menu.\n"
    "- Circle and Rectangle: click twice (center/corner, then radius/opposite corner).\n"
    "- Path: click each vertex, press Enter to close it.\n"
    "- Escape cancels the current tool.\n"
    "- Click a shape to select it; click the same spot again to reach shapes underneath.\n"
    "- Drag a selected shape to move it.\n"
    "- Press R / E to rotate, use the mouse wheel to scale, Delete to remove.\n"
    "- Right-click to edit the selected shape's colors and stroke."
)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, settings: Optional[SettingsManager] = None):
        super().__init__()
        self.settings = settings or get_settings()
        editor = self.settings.editor

        self.collection = ShapeCollection()
        self.controller = CanvasController(
            self.collection,
            rotation_step=editor.rotation_step,
            wheel_scale_factor=editor.wheel_scale_factor,
            style=editor.shape_style(),
        )
        self.document = DocumentManager(self.collection)
        self._modified = False

        self.canvas = PaintCanvas(self.controller, self.settings.ui.redraw_interval_ms)
        self.canvas.styleEditRequested.connect(self._on_edit_style)
        self.canvas.shapesChanged.connect(self._on_shapes_changed)
        self.setCentralWidget(self.canvas)

        self._setup_menu()
        self.resize(self.settings.ui.window_width, self.settings.ui.window_height)
        self._update_window_title()
        self.statusBar().showMessage("Ready", 2000)

    # =========================================================================
    # Menus
    # =========================================================================

    def _setup_menu(self):
        """Create menu bar."""
        menubar = self.menuBar()

        # Info menu
        info_menu = menubar.addMenu("&Info")

        about_action = QAction("&About", self)
        about_action.triggered.connect(self._on_about)
        info_menu.addAction(about_action)

        help_action = QAction("&Help", self)
        help_action.setShortcut(QKeySequence.StandardKey.HelpContents)
        help_action.triggered.connect(self._on_help)
        info_menu.addAction(help_action)

        # File menu
        file_menu = menubar.addMenu("&File")

        new_action = QAction("&New", self)
        new_action.setShortcut(QKeySequence.StandardKey.New)
        new_action.triggered.connect(self._on_new)
        file_menu.addAction(new_action)

        open_action = QAction("&Open...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_open_file)
        file_menu.addAction(open_action)

        self._recent_menu = file_menu.addMenu("Open &Recent")
        self._rebuild_recent_menu()

        save_action = QAction("&Save", self)
        save_action.setShortcut(QKeySequence.StandardKey.Save)
        save_action.triggered.connect(self._on_save_file)
        file_menu.addAction(save_action)

        save_as_action = QAction("Save &As...", self)
        save_as_action.setShortcut(QKeySequence.StandardKey.SaveAs)
        save_as_action.triggered.connect(self._on_save_file_as)
        file_menu.addAction(save_as_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Edit menu
        edit_menu = menubar.addMenu("&Edit")

        select_all_action = QAction("Select &All", self)
        select_all_action.setShortcut(QKeySequence.StandardKey.SelectAll)
        select_all_action.triggered.connect(self._on_select_all)
        edit_menu.addAction(select_all_action)

        delete_action = QAction("&Delete Selected", self)
        delete_action.triggered.connect(self._on_delete_selected)
        edit_menu.addAction(delete_action)

        style_action = QAction("Shape &Options...", self)
        style_action.triggered.connect(lambda: self._on_edit_style(None))
        edit_menu.addAction(style_action)

        # Tools menu
        tools_menu = menubar.addMenu("&Tools")
        for label, tool in (("&Circle", Tool.CIRCLE),
                            ("&Rectangle", Tool.RECTANGLE),
                            ("&Path", Tool.PATH)):
            action = QAction(label, self)
            action.triggered.connect(lambda checked=False, t=tool: self._on_select_tool(t))
            tools_menu.addAction(action)

        # Settings menu
        settings_menu = menubar.addMenu("&Settings")

        outline_action = QAction("Select &Outline Color...", self)
        outline_action.triggered.connect(self._on_pick_outline_color)
        settings_menu.addAction(outline_action)

        fill_action = QAction("Select &Fill Color...", self)
        fill_action.triggered.connect(self._on_pick_fill_color)
        settings_menu.addAction(fill_action)

        self._fill_toggle = QAction("Fill &New Shapes", self)
        self._fill_toggle.setCheckable(True)
        self._fill_toggle.setChecked(self.controller.current_style.filled)
        self._fill_toggle.toggled.connect(self._on_toggle_fill)
        settings_menu.addAction(self._fill_toggle)

        width_menu = settings_menu.addMenu("&Stroke Width")
        width_group = QActionGroup(self)
        width_group.setExclusive(True)
        for width in self.settings.editor.stroke_widths:
            action = QAction(f"{width} px", self)
            action.setCheckable(True)
            action.setChecked(width == self.controller.current_style.stroke_width)
            action.triggered.connect(lambda checked=False, w=width: self._on_stroke_width(w))
            width_group.addAction(action)
            width_menu.addAction(action)

    def _rebuild_recent_menu(self):
        self._recent_menu.clear()
        recent = self.settings.get_recent_files()
        for filepath in recent:
            action = QAction(Path(filepath).name, self)
            action.setToolTip(filepath)
            action.triggered.connect(lambda checked=False, p=filepath: self._open_path(Path(p)))
            self._recent_menu.addAction(action)
        self._recent_menu.setEnabled(bool(recent))

    def _update_window_title(self):
        base_title = "Paint"
        name = self.document.current_file.name if self.document.has_file else "Untitled"
        marker = "*" if self._modified else ""
        self.setWindowTitle(f"{name}{marker} - {base_title}")

    def _on_shapes_changed(self):
        self._modified = True
        self._update_window_title()

    # =========================================================================
    # File actions
    # =========================================================================

    def _on_new(self):
        if self.settings.ui.confirm_new and len(self.collection) > 0:
            reply = QMessageBox.question(
                self,
                "New Canvas",
                "Are you sure you want to create a new canvas? Unsaved changes will be lost.",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
            )
            if reply != QMessageBox.StandardButton.Yes:
                return

        self.document.new_document()
        self.controller.reset()
        self._modified = False
        self._update_window_title()
        self.canvas.update()
        self.statusBar().showMessage("New canvas created", 2000)

    def _on_open_file(self):
        filepath, _ = QFileDialog.getOpenFileName(
            self,
            "Open Drawing",
            self.settings.get_open_directory(),
            FILE_FILTER
        )
        if filepath:
            self._open_path(Path(filepath))

    def _open_path(self, filepath: Path):
        try:
            report = self.document.open(filepath)
        except (DocumentIOError, DocumentError) as e:
            logger.error(f"Failed to open {filepath}: {e}")
            QMessageBox.critical(self, "Load Error", f"Error loading file:\n{e}")
            return

        self.controller.reset()
        self.settings.set_open_directory(str(filepath))
        self.settings.add_recent_file(str(filepath))
        self._rebuild_recent_menu()
        self._modified = False
        self._update_window_title()
        self.canvas.update()

        if report.skipped:
            QMessageBox.warning(
                self,
                "Load Warning",
                f"Loaded {report.loaded} shape(s); skipped {len(report.skipped)} malformed record(s):\n"
                + "\n".join(reason for _, reason in report.skipped[:10])
            )
        self.statusBar().showMessage(f"Opened {filepath.name} ({report.loaded} shapes)", 2000)

    def _on_save_file(self):
        if self.document.has_file:
            self._save_to_file(self.document.current_file)
        else:
            self._on_save_file_as()

    def _on_save_file_as(self):
        filepath, _ = QFileDialog.getSaveFileName(
            self,
            "Save Drawing",
            str(Path(self.settings.get_save_directory() or ".") / "drawing.json"),
            FILE_FILTER
        )
        if filepath:
            self._save_to_file(Path(filepath))

    def _save_to_file(self, filepath: Path) -> bool:
        try:
            written = self.document.save(filepath)
        except ShapeError as e:
            logger.error(f"Failed to save {filepath}: {e}")
            QMessageBox.critical(self, "Save Error", f"Error saving file:\n{e}")
            return False

        self.settings.set_save_directory(str(written))
        self.settings.add_recent_file(str(written))
        self._rebuild_recent_menu()
        self._modified = False
        self._update_window_title()
        self.statusBar().showMessage(f"Saved to {written.name}", 2000)
        return True

    def closeEvent(self, event):
        if self.settings.ui.confirm_exit:
            reply = QMessageBox.question(
                self,
                "Exit",
                "Are you sure you want to exit?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
            )
            if reply != QMessageBox.StandardButton.Yes:
                event.ignore()
                return
        event.accept()

    # =========================================================================
    # Edit / tool / settings actions
    # =========================================================================

    def _on_select_all(self):
        self.collection.select_all()
        self.canvas.update()

    def _on_delete_selected(self):
        if self.controller.delete_selected():
            self._on_shapes_changed()
            self.canvas.update()

    def _on_edit_style(self, pos: Optional[QPoint]):
        stroke_widths = self.settings.editor.stroke_widths
        changed = self.controller.edit_selected_style(
            lambda style: ShapeStyleDialog.get_style(style, stroke_widths, self)
        )
        if changed:
            self._on_shapes_changed()
            self.canvas.update()

    def _on_select_tool(self, tool: Tool):
        self.controller.set_active_tool(tool)
        self.canvas.setFocus(Qt.FocusReason.OtherFocusReason)
        self.canvas.update()
        self.statusBar().showMessage(f"Tool: {tool.value}", 2000)

    def _pick_color(self, title: str, current: str) -> Optional[str]:
        color = QColorDialog.getColor(QColor(current), self, title)
        if color.isValid():
            return color.name()
        return None

    def _on_pick_outline_color(self):
        color = self._pick_color("Choose Outline Color", self.controller.current_style.outline_color)
        if color:
            self.controller.set_outline_color(color)
            self.settings.outline_color = color

    def _on_pick_fill_color(self):
        color = self._pick_color("Choose Fill Color", self.controller.current_style.fill_color)
        if color:
            self.controller.set_fill_color(color)
            self.settings.fill_color = color

    def _on_toggle_fill(self, checked: bool):
        self.controller.set_fill_enabled(checked)
        self.settings.fill_enabled = checked

    def _on_stroke_width(self, width: int):
        self.controller.set_stroke_width(width)
        self.settings.stroke_width = width

    # =========================================================================
    # Info
    # =========================================================================

    def _on_about(self):
        QMessageBox.about(
            self,
            "About",
            "Paint\nVersion 1.0\n\nSimple paint program to draw and manipulate shapes."
        )

    def _on_help(self):
        QMessageBox.information(self, "Help", HELP_TEXT)
