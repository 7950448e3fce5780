"""Tests for configuration loading."""

import pytest

from claudecode.config import (
    CONFIG_ENV_VAR,
    EXTENSION_MAP,
    PluginConfig,
    get_config_path,
    load_config,
)
from claudecode.errors import ConfigError


@pytest.fixture(autouse=True)
def no_user_config(tmp_path, monkeypatch):
    """Keep a real ~/.config/claudecode/config.yaml out of the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


class TestDefaults:
    def test_default_values(self):
        config = PluginConfig()

        assert config.claude_cmd == "claude"
        assert config.window.width == 0.8
        assert config.window.height == 0.8
        assert config.window.border == "rounded"
        assert config.window.title == " Claude Code Response "
        assert config.temp_file_extension == ".py"
        assert config.auto_detect_filetype is True
        assert config.content_via_stdin is False

    def test_extension_map_is_a_copy(self):
        config = PluginConfig()
        config.extension_map["python"] = ".changed"

        assert EXTENSION_MAP["python"] == ".py"
        assert PluginConfig().extension_map["python"] == ".py"


class TestFromDict:
    """Test merging user options over defaults."""

    def test_empty_options(self):
        assert PluginConfig.from_dict(None) == PluginConfig()
        assert PluginConfig.from_dict({}) == PluginConfig()

    def test_partial_window_keeps_other_fields(self):
        config = PluginConfig.from_dict({"window": {"width": 0.5}})

        assert config.window.width == 0.5
        assert config.window.height == 0.8
        assert config.window.border == "rounded"

    def test_extension_map_entries_merged(self):
        config = PluginConfig.from_dict({"extension_map": {"nix": ".nix"}})

        assert config.extension_map["nix"] == ".nix"
        assert config.extension_map["go"] == ".go"

    def test_scalar_options(self):
        config = PluginConfig.from_dict({
            "claude_cmd": "/opt/bin/claude",
            "content_via_stdin": True,
            "temp_cleanup_delay_ms": 50,
        })

        assert config.claude_cmd == "/opt/bin/claude"
        assert config.content_via_stdin is True
        assert config.temp_cleanup_delay_ms == 50

    def test_integer_window_fraction_accepted(self):
        config = PluginConfig.from_dict({"window": {"width": 1, "height": 0.5}})

        assert config.window.width == 1.0
        assert isinstance(config.window.width, float)

    def test_unknown_option_rejected(self):
        with pytest.raises(ConfigError, match="claude_command"):
            PluginConfig.from_dict({"claude_command": "x"})

    def test_unknown_window_option_rejected(self):
        with pytest.raises(ConfigError, match="colour"):
            PluginConfig.from_dict({"window": {"colour": "red"}})

    @pytest.mark.parametrize("opts", [
        {"window": "big"},
        {"extension_map": [".py"]},
        {"claude_cmd": 5},
        {"temp_cleanup_delay_ms": "1000"},
        {"temp_cleanup_delay_ms": True},
        {"auto_detect_filetype": "yes"},
        {"content_via_stdin": 1},
        {"window": {"width": "x"}},
        {"window": {"border": None}},
    ])
    def test_wrong_shapes_rejected(self, opts):
        with pytest.raises(ConfigError):
            PluginConfig.from_dict(opts)


class TestLoadConfig:
    """Test YAML config discovery and parsing."""

    def test_no_file_gives_defaults(self):
        assert get_config_path() is None
        assert load_config() == PluginConfig()

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("claude_cmd: my-claude\nwindow:\n  border: double\n")

        config = load_config(path)

        assert config.claude_cmd == "my-claude"
        assert config.window.border == "double"

    def test_env_var_path(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("temp_file_extension: .txt\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert get_config_path() == path
        assert load_config().temp_file_extension == ".txt"

    def test_default_location(self, tmp_path):
        path = tmp_path / "home" / ".config" / "claudecode" / "config.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("auto_detect_filetype: false\n")

        assert load_config().auto_detect_filetype is False

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path) == PluginConfig()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("window: [unclosed\n")

        with pytest.raises(ConfigError, match="Failed to parse config YAML"):
            load_config(path)

    def test_wrong_value_type_in_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("claude_cmd: 5\n")

        with pytest.raises(ConfigError, match="claude_cmd must be str, got int"):
            load_config(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(path)

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read config"):
            load_config(tmp_path / "missing.yaml")
