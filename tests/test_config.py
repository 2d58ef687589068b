"""
Tests for storeupdate.config.loader module.

Tests settings loading including:
- Built-in defaults
- YAML overlay with deep merge
- Validation errors
"""

from __future__ import annotations

import pytest

from storeupdate.config import DEFAULT_LOOKUP_ENDPOINT, CheckerSettings, load_settings
from storeupdate.config.loader import _deep_merge_dicts
from storeupdate.exceptions import ConfigError, StoreUpdateError


class TestDefaults:
    """Tests for default settings."""

    def test_defaults_without_file(self):
        """Test that no file gives the built-in defaults."""
        settings = load_settings()
        assert settings == CheckerSettings()
        assert settings.endpoint == DEFAULT_LOOKUP_ENDPOINT
        assert settings.timeout is None
        assert settings.prompt_title == "App needs update"
        assert settings.prompt_message == "A new update is available now."

    def test_settings_are_immutable(self):
        """Test that CheckerSettings is frozen."""
        with pytest.raises(AttributeError):
            CheckerSettings().timeout = 3  # type: ignore[misc]


class TestSettingsFile:
    """Tests for loading a YAML settings file."""

    def test_partial_override_keeps_other_defaults(self, create_yaml_file):
        """Test that dicts are deep-merged over the defaults."""
        path = create_yaml_file("settings.yaml", {"lookup": {"timeout": 10}})

        settings = load_settings(path)

        assert settings.timeout == 10.0
        assert settings.endpoint == DEFAULT_LOOKUP_ENDPOINT
        assert settings.user_agent == CheckerSettings().user_agent

    def test_full_override(self, create_yaml_file):
        """Test overriding every key."""
        path = create_yaml_file(
            "settings.yaml",
            {
                "lookup": {
                    "endpoint": "https://catalog.example/lookup?app={identifier}",
                    "timeout": 2.5,
                    "user_agent": "host/3.0",
                },
                "prompt": {"title": "Update", "message": "Please update."},
            },
        )

        settings = load_settings(path)

        assert settings == CheckerSettings(
            endpoint="https://catalog.example/lookup?app={identifier}",
            timeout=2.5,
            user_agent="host/3.0",
            prompt_title="Update",
            prompt_message="Please update.",
        )

    def test_null_timeout_keeps_transport_default(self, tmp_test_dir):
        """Test that an explicit null timeout is accepted."""
        path = tmp_test_dir / "settings.yaml"
        path.write_text("lookup:\n  timeout: null\n")
        assert load_settings(path).timeout is None

    def test_unknown_keys_are_ignored(self, create_yaml_file):
        """Test that unrelated keys do not break loading."""
        path = create_yaml_file("settings.yaml", {"extra": {"a": 1}})
        assert load_settings(path) == CheckerSettings()

    def test_load_is_logged(self, create_yaml_file, recording_logger):
        """Test that loading reports the file through the logger."""
        path = create_yaml_file("settings.yaml", {"lookup": {"timeout": 1}})
        load_settings(path, logger=recording_logger)
        assert any("Loading settings" in m for m in recording_logger.messages("verbose"))


class TestSettingsErrors:
    """Tests for invalid settings files."""

    def test_missing_file(self, tmp_test_dir):
        """Test that a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_test_dir / "nope.yaml")

    def test_invalid_yaml(self, tmp_test_dir):
        """Test that a YAML syntax error raises a chained ConfigError."""
        path = tmp_test_dir / "bad.yaml"
        path.write_text("lookup: [unclosed\n")

        with pytest.raises(ConfigError, match="Error parsing YAML") as exc_info:
            load_settings(path)
        assert exc_info.value.__cause__ is not None

    def test_empty_file(self, tmp_test_dir):
        """Test that an empty file raises ConfigError."""
        path = tmp_test_dir / "empty.yaml"
        path.write_text("")
        with pytest.raises(ConfigError, match="empty"):
            load_settings(path)

    def test_top_level_list(self, create_yaml_file):
        """Test that a non-mapping document raises ConfigError."""
        path = create_yaml_file("list.yaml", ["a", "b"])
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)

    @pytest.mark.parametrize(
        "lookup, message",
        [
            ({"endpoint": "https://itunes.apple.com/lookup"}, "identifier"),
            ({"endpoint": ""}, "non-empty string"),
            ({"timeout": "fast"}, "number"),
            ({"timeout": True}, "number"),
            ({"timeout": 0}, "positive"),
            ({"user_agent": 5}, "non-empty string"),
        ],
    )
    def test_invalid_lookup_values(self, create_yaml_file, lookup, message):
        """Test validation of lookup values."""
        path = create_yaml_file("settings.yaml", {"lookup": lookup})
        with pytest.raises(ConfigError, match=message):
            load_settings(path)

    def test_section_must_be_mapping(self, create_yaml_file):
        """Test that a scalar section raises ConfigError."""
        path = create_yaml_file("settings.yaml", {"prompt": "hello"})
        with pytest.raises(ConfigError, match="'prompt' must be a mapping"):
            load_settings(path)

    def test_config_error_is_store_update_error(self, tmp_test_dir):
        """Test that ConfigError can be caught through the base class."""
        with pytest.raises(StoreUpdateError):
            load_settings(tmp_test_dir / "nope.yaml")


class TestDeepMerge:
    """Tests for _deep_merge_dicts."""

    def test_dicts_merge_lists_replace(self):
        """Test the merge rules."""
        base = {"a": {"x": 1, "y": [1, 2]}, "b": 1}
        overlay = {"a": {"y": [3]}, "c": 2}

        merged = _deep_merge_dicts(base, overlay)

        assert merged == {"a": {"x": 1, "y": [3]}, "b": 1, "c": 2}
        assert base == {"a": {"x": 1, "y": [1, 2]}, "b": 1}  # not mutated
