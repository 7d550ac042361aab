"""Services package."""

from .canvas_controller import (
    Tool,
    InteractionState,
    EditorKey,
    CanvasController,
    DEFAULT_ROTATION_STEP,
    DEFAULT_WHEEL_SCALE_FACTOR,
)
from .document_manager import (
    DOCUMENT_SUFFIX,
    FILE_FILTER,
    ensure_json_suffix,
    DocumentManager,
)
from .settings_manager import (
    SettingsManager,
    AppSettings,
    EditorSettings,
    UISettings,
    PathSettings,
    get_settings,
    reset_settings_manager,
)

__all__ = [
    "Tool",
    "InteractionState",
    "EditorKey",
    "CanvasController",
    "DEFAULT_ROTATION_STEP",
    "DEFAULT_WHEEL_SCALE_FACTOR",
    "DOCUMENT_SUFFIX",
    "FILE_FILTER",
    "ensure_json_suffix",
    "DocumentManager",
    "SettingsManager",
    "AppSettings",
    "EditorSettings",
    "UISettings",
    "PathSettings",
    "get_settings",
    "reset_settings_manager",
]
