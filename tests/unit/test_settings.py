"""
Unit tests for the settings manager.
"""

import json

from services.settings_manager import (
    AppSettings, EditorSettings, SettingsManager, get_settings, reset_settings_manager
)


class TestAppSettings:
    """Tests for AppSettings serialization."""

    def test_defaults(self):
        settings = AppSettings()
        assert settings.editor.rotation_step == 15.0
        assert settings.editor.wheel_scale_factor == 1.1
        assert settings.editor.stroke_widths == [1, 2, 4, 6, 8, 10]
        assert settings.ui.redraw_interval_ms == 16
        assert (settings.ui.window_width, settings.ui.window_height) == (1280, 720)

    def test_round_trip(self):
        settings = AppSettings()
        settings.editor.stroke_width = 8
        settings.recent_files = ["/tmp/a.json"]
        restored = AppSettings.from_dict(settings.to_dict())
        assert restored == settings

    def test_unknown_keys_ignored(self):
        restored = AppSettings.from_dict({
            "editor": {"rotation_step": 5.0, "obsolete": True},
            "something_else": {},
        })
        assert restored.editor.rotation_step == 5.0
        assert restored.ui.window_width == 1280

    def test_stroke_width_lists_independent(self):
        assert EditorSettings().stroke_widths is not EditorSettings().stroke_widths


class TestSettingsManager:
    """Tests for SettingsManager persistence."""

    def test_creates_config_dir(self, settings_manager, temp_dir):
        assert (temp_dir / "config").is_dir()

    def test_setter_persists(self, settings_manager):
        settings_manager.stroke_width = 6
        settings_manager.fill_enabled = True
        data = json.loads(open(settings_manager.settings_path, encoding="utf-8").read())
        assert data["editor"]["stroke_width"] == 6
        assert data["editor"]["fill_enabled"] is True

    def test_reload(self, settings_manager):
        settings_manager.outline_color = "#336699"
        reloaded = SettingsManager(settings_manager.settings_path)
        assert reloaded.outline_color == "#336699"

    def test_corrupt_file_falls_back_to_defaults(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        manager = SettingsManager(str(path))
        assert manager.editor.rotation_step == 15.0

    def test_reset(self, settings_manager):
        settings_manager.stroke_width = 10
        settings_manager.reset()
        assert settings_manager.stroke_width == 2

    def test_recent_files_most_recent_first(self, settings_manager, temp_dir):
        paths = []
        for name in ("a.json", "b.json", "a.json"):
            path = temp_dir / name
            path.write_text("[]", encoding="utf-8")
            settings_manager.add_recent_file(str(path))
            paths.append(str(path))
        assert settings_manager.get_recent_files() == [paths[0], paths[1]]

    def test_recent_files_trimmed(self, settings_manager, temp_dir):
        settings_manager.ui.recent_files_max = 2
        for i in range(4):
            path = temp_dir / f"{i}.json"
            path.write_text("[]", encoding="utf-8")
            settings_manager.add_recent_file(str(path))
        assert len(settings_manager.get_recent_files()) == 2

    def test_missing_recent_files_dropped(self, settings_manager, temp_dir):
        settings_manager.add_recent_file(str(temp_dir / "gone.json"))
        assert settings_manager.get_recent_files() == []

    def test_directories(self, settings_manager, temp_dir):
        drawing = temp_dir / "drawing.json"
        drawing.write_text("[]", encoding="utf-8")
        settings_manager.set_open_directory(str(drawing))
        assert settings_manager.get_open_directory() == str(temp_dir)
        # Save falls back to the open directory
        assert settings_manager.get_save_directory() == str(temp_dir)


class TestEditorShapeStyle:
    """Tests for EditorSettings.shape_style()."""

    def test_matches_configured_values(self):
        editor = EditorSettings(outline_color="#112233", fill_color="#AABBCC",
                                fill_enabled=True, stroke_width=6)
        style = editor.shape_style()
        assert style.outline_color == "#112233"
        assert style.fill_color == "#aabbcc"
        assert style.filled
        assert style.stroke_width == 6

    def test_invalid_stroke_width_falls_back(self):
        for bad in (0, -3, "wide", True, 2.5):
            assert EditorSettings(stroke_width=bad).shape_style().stroke_width == 2

    def test_invalid_colors_fall_back(self):
        style = EditorSettings(outline_color="red", fill_color="#abcdef\n").shape_style()
        assert style.outline_color == "#000000"
        assert style.fill_color == "#ffffff"

    def test_hand_edited_file_still_gives_style(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text(json.dumps({"editor": {"stroke_width": 0, "outline_color": 5}}))
        manager = SettingsManager(str(path))
        style = manager.editor.shape_style()
        assert style.stroke_width == 2
        assert style.outline_color == "#000000"


class TestGlobalSettings:
    """Tests for the shared settings instance."""

    def test_singleton(self, temp_dir):
        reset_settings_manager()
        try:
            first = get_settings(str(temp_dir / "settings.json"))
            assert get_settings() is first
        finally:
            reset_settings_manager()
