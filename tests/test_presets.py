"""Tests for YAML layout presets and feature flags."""

import pytest

from stacklayout.config import settings
from stacklayout.layout.presets import (
    PresetLoadError,
    PresetNotFoundError,
    clear_cache,
    get_preset,
    load_presets,
)


@pytest.fixture(autouse=True)
def fresh_presets():
    clear_cache()
    yield
    clear_cache()


class TestPackagedPresets:
    """Test the presets shipped with the package."""

    def test_all_presets_load(self):
        presets = load_presets()
        assert {"list", "toolbar", "table_row", "flow"} <= set(presets)

    def test_list_preset(self):
        config = get_preset("list")
        assert config.orientation == "vertical"
        assert config.fill is True
        assert config.resize_parent is True

    def test_flow_preset(self):
        config = get_preset("flow")
        assert config.allow_gaps is True
        assert config.grid_size == 10

    def test_get_preset_returns_copy(self):
        """Changing a returned preset does not leak into later lookups."""
        config = get_preset("toolbar")
        config.spacing = 99
        assert get_preset("toolbar").spacing == 4

    def test_unknown_preset(self):
        with pytest.raises(PresetNotFoundError) as exc_info:
            get_preset("nope")
        assert "nope" in str(exc_info.value)
        assert "list" in exc_info.value.available


class TestCustomPresetFiles:
    """Test loading host-provided preset files."""

    def test_custom_file(self, tmp_path):
        path = tmp_path / "presets.yaml"
        path.write_text("presets:\n  tight:\n    spacing: 1\n    wrap: 300\n")

        config = get_preset("tight", path)
        assert config.spacing == 1
        assert config.wrap == 300

    def test_empty_preset_uses_defaults(self, tmp_path):
        path = tmp_path / "presets.yaml"
        path.write_text("presets:\n  plain:\n")

        assert get_preset("plain", path).spacing == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_presets(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "presets.yaml"
        path.write_text("presets: [unclosed\n")

        with pytest.raises(PresetLoadError):
            load_presets(path)

    def test_missing_presets_mapping(self, tmp_path):
        path = tmp_path / "presets.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(PresetLoadError):
            load_presets(path)

    def test_unknown_field(self, tmp_path):
        path = tmp_path / "presets.yaml"
        path.write_text("presets:\n  bad:\n    spaceing: 3\n")

        with pytest.raises(PresetLoadError) as exc_info:
            load_presets(path)
        assert "bad" in str(exc_info.value)


class TestFeatureFlags:
    """Test environment feature flags."""

    def test_unknown_flag(self):
        with pytest.raises(KeyError) as exc_info:
            settings.is_enabled("no_such_flag")
        assert "viewport_fallback" in str(exc_info.value)

    def test_set_flag(self, monkeypatch):
        monkeypatch.setitem(settings.FEATURE_FLAGS, "viewport_fallback", True)
        settings.set_flag("viewport_fallback", False)
        assert settings.is_enabled("viewport_fallback") is False

    def test_get_all_flags_is_copy(self):
        flags = settings.get_all_flags()
        flags["viewport_fallback"] = "changed"
        assert settings.FEATURE_FLAGS["viewport_fallback"] != "changed"

    def test_set_unknown_flag(self):
        with pytest.raises(KeyError):
            settings.set_flag("no_such_flag", True)

    def test_configure_logging_reads_env(self, monkeypatch):
        calls = []
        monkeypatch.setattr(settings.logging, "basicConfig", lambda **kw: calls.append(kw))
        monkeypatch.setenv("STACKLAYOUT_LOG_LEVEL", "debug")

        settings.configure_logging()
        settings.configure_logging("info")
        settings.configure_logging("nonsense")

        assert [kw["level"] for kw in calls] == [
            settings.logging.DEBUG,
            settings.logging.INFO,
            settings.logging.WARNING,
        ]
