"""Test settings persistence."""

import json

from ledit.core.models import Language
from ledit.services.settings import ApplicationSettings, EditorSettings, SettingsManager


class TestLoad:
    def test_missing_file_gives_defaults(self, settings_path):
        settings = SettingsManager(settings_path).load()
        assert settings == ApplicationSettings()

    def test_corrupt_file_gives_defaults(self, settings_path, caplog):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("{not json", encoding="utf-8")

        settings = SettingsManager(settings_path).load()

        assert settings == ApplicationSettings()
        assert "using defaults" in caplog.text

    def test_non_object_gives_defaults(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("[1, 2]", encoding="utf-8")
        assert SettingsManager(settings_path).load() == ApplicationSettings()

    def test_missing_keys_use_defaults(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({"editor": {"font_size": 20}}), encoding="utf-8")

        settings = SettingsManager(settings_path).load()

        assert settings.editor.font_size == 20
        assert settings.editor.theme == EditorSettings().theme
        assert settings.recent_files == []

    def test_wrong_types_use_defaults(self, settings_path, caplog):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({
            "editor": {
                "font_size": "big",
                "theme": 3,
                "font_family": None,
                "show_line_numbers": "yes",
                "recent_files_limit": True,
            },
            "recent_files": "/a.swift",
            "last_directory": 5,
        }), encoding="utf-8")

        settings = SettingsManager(settings_path).load()

        assert settings == ApplicationSettings()
        assert "Ignoring invalid font_size 'big'" in caplog.text

    def test_valid_fields_kept_beside_invalid_ones(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(
            json.dumps({"editor": {"font_size": "big", "theme": "Light"}}), encoding="utf-8"
        )

        editor = SettingsManager(settings_path).load().editor

        assert editor.font_size == EditorSettings().font_size
        assert editor.theme == "Light"

    def test_language_by_name_or_value(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        manager = SettingsManager(settings_path)

        settings_path.write_text(json.dumps({"editor": {"default_language": "PYTHON"}}), encoding="utf-8")
        assert manager.load().editor.default_language is Language.PYTHON

        settings_path.write_text(json.dumps({"editor": {"default_language": "markdown"}}), encoding="utf-8")
        assert manager.load().editor.default_language is Language.MARKDOWN


class TestSave:
    def test_round_trip(self, settings_path):
        manager = SettingsManager(settings_path)
        settings = ApplicationSettings(
            editor=EditorSettings(theme="Monokai", font_size=16, default_language=Language.SWIFT),
            recent_files=["/a.swift"],
        )

        assert manager.save(settings)
        assert SettingsManager(settings_path).load() == settings

    def test_enums_stored_by_name(self, settings_path):
        manager = SettingsManager(settings_path)
        manager.save(ApplicationSettings(editor=EditorSettings(default_language=Language.JSON)))

        data = json.loads(settings_path.read_text(encoding="utf-8"))
        assert data["editor"]["default_language"] == "JSON"

    def test_nothing_to_save(self, settings_path):
        assert not SettingsManager(settings_path).save()

    def test_failed_save_returns_false(self, tmp_path, caplog):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        manager = SettingsManager(blocker / "settings.json")

        assert not manager.save(ApplicationSettings())
        assert "Failed to save" in caplog.text

    def test_observers_are_notified(self, settings_path):
        manager = SettingsManager(settings_path)
        seen = []
        manager.add_observer(seen.append)

        manager.save(ApplicationSettings())
        manager.remove_observer(seen.append)
        manager.save(ApplicationSettings())

        assert len(seen) == 1

    def test_failing_observer_does_not_break_save(self, settings_path):
        manager = SettingsManager(settings_path)

        def broken(settings):
            raise RuntimeError("boom")

        manager.add_observer(broken)
        assert manager.save(ApplicationSettings())

    def test_reset(self, settings_path):
        manager = SettingsManager(settings_path)
        manager.save(ApplicationSettings(editor=EditorSettings(font_size=30)))

        assert manager.reset() == ApplicationSettings()
        assert SettingsManager(settings_path).load().editor.font_size == EditorSettings().font_size


class TestRecentFiles:
    def test_most_recent_first(self, settings_path):
        manager = SettingsManager(settings_path)
        manager.add_recent_file("/p/a.py")
        manager.add_recent_file("/p/b.py")
        manager.add_recent_file("/p/a.py")

        assert manager.settings.recent_files == ["/p/a.py", "/p/b.py"]
        assert manager.settings.last_directory == "/p"

    def test_limit(self, settings_path):
        manager = SettingsManager(settings_path)
        manager.settings.editor.recent_files_limit = 2
        for name in ("a", "b", "c"):
            manager.add_recent_file(f"/{name}.md")

        assert manager.settings.recent_files == ["/c.md", "/b.md"]

    def test_persisted(self, settings_path):
        SettingsManager(settings_path).add_recent_file("/x.json")
        assert SettingsManager(settings_path).load().recent_files == ["/x.json"]
