"""
Settings Manager.

Handles application settings with JSON file storage.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict, fields
from typing import Optional, List
from pathlib import Path

from models.codec import normalize_color
from models.errors import ShapeParseError
from models.style import (
    STROKE_WIDTHS, DEFAULT_FILL_COLOR, DEFAULT_OUTLINE_COLOR, DEFAULT_STROKE_WIDTH, ShapeStyle
)

logger = logging.getLogger(__name__)


def _valid_color(value, default: str) -> str:
    try:
        return normalize_color(value)
    except ShapeParseError:
        logger.warning(f"Invalid color in settings: {value!r}, using {default}")
        return default


@dataclass
class EditorSettings:
    """Drawing and transform defaults."""
    rotation_step: float = 15.0          # degrees per R/E key press
    wheel_scale_factor: float = 1.1      # per wheel notch, reciprocal when shrinking
    outline_color: str = DEFAULT_OUTLINE_COLOR
    fill_color: str = DEFAULT_FILL_COLOR
    fill_enabled: bool = False
    stroke_width: int = DEFAULT_STROKE_WIDTH
    stroke_widths: List[int] = field(default_factory=lambda: list(STROKE_WIDTHS))

    def shape_style(self) -> ShapeStyle:
        """Style for new shapes; invalid hand-edited values fall back to defaults."""
        stroke_width = self.stroke_width
        if isinstance(stroke_width, bool) or not isinstance(stroke_width, int) or stroke_width <= 0:
            logger.warning(f"Invalid stroke width in settings: {stroke_width!r}, using default")
            stroke_width = DEFAULT_STROKE_WIDTH
        return ShapeStyle(
            outline_color=_valid_color(self.outline_color, DEFAULT_OUTLINE_COLOR),
            fill_color=_valid_color(self.fill_color, DEFAULT_FILL_COLOR),
            filled=bool(self.fill_enabled),
            stroke_width=stroke_width,
        )


@dataclass
class UISettings:
    """User interface settings."""
    redraw_interval_ms: int = 16
    window_width: int = 1280
    window_height: int = 720
    confirm_new: bool = True
    confirm_exit: bool = True
    recent_files_max: int = 10


@dataclass
class PathSettings:
    """Last used directories for file dialogs."""
    last_open_dir: str = ""
    last_save_dir: str = ""


def _known_fields(cls, data: dict) -> dict:
    """Drop keys the dataclass does not define."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass
class AppSettings:
    """Complete application settings."""
    editor: EditorSettings = field(default_factory=EditorSettings)
    ui: UISettings = field(default_factory=UISettings)
    paths: PathSettings = field(default_factory=PathSettings)
    recent_files: list = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "editor": asdict(self.editor),
            "ui": asdict(self.ui),
            "paths": asdict(self.paths),
            "recent_files": self.recent_files,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        """Create from dictionary, ignoring unknown keys."""
        settings = cls()

        if "editor" in data:
            settings.editor = EditorSettings(**_known_fields(EditorSettings, data["editor"]))
        if "ui" in data:
            settings.ui = UISettings(**_known_fields(UISettings, data["ui"]))
        if "paths" in data:
            settings.paths = PathSettings(**_known_fields(PathSettings, data["paths"]))
        if "recent_files" in data:
            settings.recent_files = list(data["recent_files"])

        return settings


class SettingsManager:
    """
    Manages application settings with JSON file storage.

    Settings file location:
    - Windows: %APPDATA%/ShapePaint/settings.json
    - Linux: ~/.config/ShapePaint/settings.json
    - macOS: ~/Library/Application Support/ShapePaint/settings.json
    """

    APP_NAME = "ShapePaint"
    SETTINGS_FILE = "settings.json"

    def __init__(self, config_override: Optional[str] = None):
        """
        Initialize settings manager.

        Args:
            config_override: Optional path to override config file location.
                            Useful for testing.
        """
        self._settings = AppSettings()
        self._config_override = config_override
        self._settings_path = self._get_settings_path()
        self._ensure_settings_dir()
        self.load()

    @property
    def settings(self) -> AppSettings:
        """Get current settings."""
        return self._settings

    @property
    def settings_path(self) -> str:
        """Get the settings file path."""
        return str(self._settings_path)

    @property
    def editor(self) -> EditorSettings:
        return self._settings.editor

    @property
    def ui(self) -> UISettings:
        return self._settings.ui

    # Convenience properties for drawing defaults
    @property
    def outline_color(self) -> str:
        return self._settings.editor.outline_color

    @outline_color.setter
    def outline_color(self, value: str):
        self._settings.editor.outline_color = value
        self.save()

    @property
    def fill_color(self) -> str:
        return self._settings.editor.fill_color

    @fill_color.setter
    def fill_color(self, value: str):
        self._settings.editor.fill_color = value
        self.save()

    @property
    def fill_enabled(self) -> bool:
        return self._settings.editor.fill_enabled

    @fill_enabled.setter
    def fill_enabled(self, value: bool):
        self._settings.editor.fill_enabled = value
        self.save()

    @property
    def stroke_width(self) -> int:
        return self._settings.editor.stroke_width

    @stroke_width.setter
    def stroke_width(self, value: int):
        self._settings.editor.stroke_width = value
        self.save()

    def get_open_directory(self) -> str:
        """Get the directory to use for Open dialogs."""
        if self._settings.paths.last_open_dir and os.path.isdir(self._settings.paths.last_open_dir):
            return self._settings.paths.last_open_dir
        return ""

    def set_open_directory(self, path: str):
        """Set the last used Open directory."""
        if os.path.isfile(path):
            path = os.path.dirname(path)
        self._settings.paths.last_open_dir = path
        self.save()

    def get_save_directory(self) -> str:
        """Get the directory to use for Save dialogs."""
        if self._settings.paths.last_save_dir and os.path.isdir(self._settings.paths.last_save_dir):
            return self._settings.paths.last_save_dir
        return self.get_open_directory()

    def set_save_directory(self, path: str):
        """Set the last used Save directory."""
        if os.path.isfile(path):
            path = os.path.dirname(path)
        self._settings.paths.last_save_dir = path
        self.save()

    def _get_settings_path(self) -> Path:
        """Get platform-specific settings directory."""
        if self._config_override:
            return Path(self._config_override)

        import platform
        system = platform.system()

        if system == "Windows":
            base = os.environ.get("APPDATA", os.path.expanduser("~"))
            config_dir = Path(base) / self.APP_NAME
        elif system == "Darwin":  # macOS
            config_dir = Path.home() / "Library" / "Application Support" / self.APP_NAME
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
            config_dir = Path(xdg_config) / self.APP_NAME

        return config_dir / self.SETTINGS_FILE

    def _ensure_settings_dir(self):
        """Create settings directory if it doesn't exist."""
        self._settings_path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> bool:
        """Load settings from file."""
        if not self._settings_path.exists():
            return False

        try:
            with open(self._settings_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._settings = AppSettings.from_dict(data)
            return True
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error loading settings: {e}")
            return False

    def save(self) -> bool:
        """Save settings to file."""
        try:
            self._ensure_settings_dir()
            with open(self._settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings.to_dict(), f, indent=2)
            return True
        except OSError as e:
            logger.error(f"Error saving settings: {e}")
            return False

    def reset(self):
        """Reset settings to defaults."""
        self._settings = AppSettings()
        self.save()

    def add_recent_file(self, file_path: str):
        """Add a file to recent files list."""
        # Remove if already exists
        if file_path in self._settings.recent_files:
            self._settings.recent_files.remove(file_path)

        # Add to front
        self._settings.recent_files.insert(0, file_path)

        # Trim to max
        max_files = self._settings.ui.recent_files_max
        self._settings.recent_files = self._settings.recent_files[:max_files]

        self.save()

    def get_recent_files(self) -> list:
        """Get recent files list, filtered to existing files."""
        existing = [f for f in self._settings.recent_files if os.path.exists(f)]
        if len(existing) != len(self._settings.recent_files):
            self._settings.recent_files = existing
            self.save()
        return existing


# Global settings instance
_settings_manager: Optional[SettingsManager] = None


def get_settings(config_override: Optional[str] = None) -> SettingsManager:
    """
    Get the global settings manager instance.

    Args:
        config_override: Optional path to override config location.
                        Only used on first call to initialize.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager(config_override)
    return _settings_manager


def reset_settings_manager():
    """Reset the global settings manager (useful for testing)."""
    global _settings_manager
    _settings_manager = None
