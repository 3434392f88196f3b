"""
Tests for configuration management functions.
"""

import argparse
import json

import pytest

from claude_notify.config.settings import (
    CONFIG_FILE,
    DEFAULT_CONFIG,
    NotifyConfig,
    get_config_path,
    load_config,
    validate_config,
)
from claude_notify.errors import ConfigError


class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_default_when_no_file(self, tmp_path):
        """Test returns default config when file doesn't exist."""
        result = load_config(config_file=tmp_path / "nonexistent.json")
        assert result == DEFAULT_CONFIG

    def test_merges_with_defaults(self, tmp_path):
        """Test that loaded config is merged with defaults."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"app_id": "My Hooks"}))

        result = load_config(config_file=config_file)
        assert result["app_id"] == "My Hooks"
        assert result["balloon_timeout_ms"] == 5000
        assert result["backends"] is None

    def test_invalid_json_raises(self, tmp_path):
        """Test a corrupt config file is a config error."""
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json")

        with pytest.raises(ConfigError) as exc_info:
            load_config(config_file=config_file)
        assert "not valid JSON" in exc_info.value.message

    def test_non_object_raises(self, tmp_path):
        """Test a JSON array is rejected."""
        config_file = tmp_path / "config.json"
        config_file.write_text("[]")

        with pytest.raises(ConfigError):
            load_config(config_file=config_file)

    def test_schema_errors_raise(self, tmp_path):
        """Test validation errors are reported in the exception details."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"backends": ["fax"], "colour": "blue"}))

        with pytest.raises(ConfigError) as exc_info:
            load_config(config_file=config_file)
        assert "fax" in exc_info.value.details
        assert "colour" in exc_info.value.details


class TestGetConfigPath:
    """Tests for locating the config file."""

    def test_default_location(self, monkeypatch):
        """Test the default lives under ~/.claude."""
        monkeypatch.delenv("CLAUDE_NOTIFY_CONFIG", raising=False)
        assert get_config_path() == CONFIG_FILE

    def test_env_override(self, monkeypatch, tmp_path):
        """Test CLAUDE_NOTIFY_CONFIG overrides the location."""
        monkeypatch.setenv("CLAUDE_NOTIFY_CONFIG", str(tmp_path / "c.json"))
        assert get_config_path() == tmp_path / "c.json"


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_defaults_are_valid(self):
        """Test the default config passes validation."""
        assert validate_config(DEFAULT_CONFIG) == []

    def test_empty_app_id(self):
        """Test a blank application identity is rejected."""
        errors = validate_config({"app_id": "  "})
        assert any("app_id" in e for e in errors)

    def test_backend_list(self):
        """Test known backend names are accepted."""
        assert validate_config({"backends": ["windows-balloon", "plyer"]}) == []

    def test_empty_backend_list(self):
        """Test an empty backend list is rejected."""
        assert validate_config({"backends": []}) != []

    def test_timeout_range(self):
        """Test the backend timeout must be 1-120 seconds."""
        assert validate_config({"backend_timeout_seconds": 0}) != []
        assert validate_config({"backend_timeout_seconds": 2.5}) == []

    def test_bool_is_not_a_number(self):
        """Test true is not accepted as a timeout."""
        errors = validate_config({"balloon_timeout_ms": True})
        assert any("invalid type" in e for e in errors)

    def test_wrong_type(self):
        """Test wrong types are reported."""
        errors = validate_config({"log_path": 5})
        assert errors == ["'log_path' has invalid type: expected str or NoneType, got int"]


class TestNotifyConfig:
    """Tests for merging CLI arguments over file config."""

    def _args(self, **overrides):
        values = {
            "payload": None,
            "title": None,
            "message": None,
            "log_path": None,
            "backend": None,
            "quiet": False,
            "dry_run": False,
        }
        values.update(overrides)
        return argparse.Namespace(**values)

    def test_defaults(self):
        """Test no arguments and no file gives empty overrides."""
        config = NotifyConfig.from_sources(self._args())
        assert config.title == ""
        assert config.message == ""
        assert config.payload == ""
        assert config.log_path is None
        assert config.app_id == "Claude Code"
        assert config.backends is None

    def test_cli_values(self):
        """Test CLI values are carried through."""
        config = NotifyConfig.from_sources(
            self._args(title="T", message="M", payload="{}", quiet=True, dry_run=True)
        )
        assert (config.title, config.message, config.payload) == ("T", "M", "{}")
        assert config.quiet is True
        assert config.dry_run is True

    def test_file_values(self):
        """Test file values are used when the CLI is silent."""
        file_config = {**DEFAULT_CONFIG, "log_path": "/tmp/n.log", "backends": ["plyer"], "app_id": "X"}
        config = NotifyConfig.from_sources(self._args(), file_config)
        assert config.log_path == "/tmp/n.log"
        assert config.backends == ["plyer"]
        assert config.app_id == "X"

    def test_cli_wins_over_file(self):
        """Test CLI log path and backends override the file."""
        file_config = {**DEFAULT_CONFIG, "log_path": "/tmp/file.log", "backends": ["plyer"]}
        config = NotifyConfig.from_sources(
            self._args(log_path="/tmp/cli.log", backend=["windows-balloon"]), file_config
        )
        assert config.log_path == "/tmp/cli.log"
        assert config.backends == ["windows-balloon"]
