"""Configuration for claudecode."""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

# External assistant executable (may include extra arguments)
DEFAULT_CLAUDE_CMD = "claude"

# Response panel size as a fraction of the editor screen
DEFAULT_WINDOW_WIDTH = 0.8
DEFAULT_WINDOW_HEIGHT = 0.8
DEFAULT_WINDOW_BORDER = "rounded"
DEFAULT_WINDOW_TITLE = " Claude Code Response "

# Extension for temp files when the filetype is unknown
DEFAULT_TEMP_EXTENSION = ".py"

# Delay before a temp file is removed if its consumer never released it
TEMP_CLEANUP_DELAY_MS = 1000

# Where to look for a user config file
CONFIG_ENV_VAR = "CLAUDECODE_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/claudecode/config.yaml")

# Editor filetype label -> file extension
EXTENSION_MAP = {
    "python": ".py",
    "javascript": ".js",
    "typescript": ".ts",
    "lua": ".lua",
    "go": ".go",
    "rust": ".rs",
    "java": ".java",
    "cpp": ".cpp",
    "c": ".c",
    "sh": ".sh",
    "bash": ".sh",
    "zsh": ".sh",
    "fish": ".fish",
    "sql": ".sql",
    "html": ".html",
    "css": ".css",
    "json": ".json",
    "yaml": ".yaml",
    "yml": ".yml",
    "xml": ".xml",
    "markdown": ".md",
    "vim": ".vim",
    "php": ".php",
    "ruby": ".rb",
    "perl": ".pl",
    "r": ".r",
    "matlab": ".m",
    "scala": ".scala",
    "kotlin": ".kt",
    "swift": ".swift",
    "dart": ".dart",
    "elixir": ".ex",
    "erlang": ".erl",
    "haskell": ".hs",
    "clojure": ".clj",
    "scheme": ".scm",
    "terraform": ".tf",
    "dockerfile": ".dockerfile",
    "makefile": ".mk",
}


@dataclass
class WindowConfig:
    """Floating response panel settings."""

    width: float = DEFAULT_WINDOW_WIDTH
    height: float = DEFAULT_WINDOW_HEIGHT
    border: str = DEFAULT_WINDOW_BORDER
    title: str = DEFAULT_WINDOW_TITLE


@dataclass
class PluginConfig:
    """All user-tunable settings."""

    claude_cmd: str = DEFAULT_CLAUDE_CMD
    window: WindowConfig = field(default_factory=WindowConfig)
    temp_file_extension: str = DEFAULT_TEMP_EXTENSION
    auto_detect_filetype: bool = True
    extension_map: dict[str, str] = field(default_factory=lambda: dict(EXTENSION_MAP))
    temp_cleanup_delay_ms: int = TEMP_CLEANUP_DELAY_MS
    content_via_stdin: bool = False

    @classmethod
    def from_dict(cls, opts: dict[str, Any] | None) -> "PluginConfig":
        """Build a config by merging ``opts`` over the defaults."""
        config = cls()
        if not opts:
            return config

        types = {f.name: f.type for f in fields(cls)}
        known = set(types)
        unknown = sorted(set(opts) - known)
        if unknown:
            raise ConfigError(f"Unknown config option(s): {', '.join(unknown)}")

        for key, value in opts.items():
            if key == "window":
                config.window = _merge_window(config.window, value)
            elif key == "extension_map":
                if not isinstance(value, dict):
                    raise ConfigError("extension_map must be a mapping")
                config.extension_map.update({str(k): str(v) for k, v in value.items()})
            else:
                setattr(config, key, _checked(key, value, types[key]))
        return config


def _merge_window(window: WindowConfig, value: Any) -> WindowConfig:
    if not isinstance(value, dict):
        raise ConfigError("window must be a mapping")
    types = {f.name: f.type for f in fields(WindowConfig)}
    known = set(types)
    unknown = sorted(set(value) - known)
    if unknown:
        raise ConfigError(f"Unknown window option(s): {', '.join(unknown)}")
    for key, item in value.items():
        setattr(window, key, _checked(f"window.{key}", item, types[key]))
    return window


def _checked(name: str, value: Any, expected: type) -> Any:
    """Reject a scalar option whose YAML type does not match the field."""
    if expected is float:
        valid = isinstance(value, (int, float)) and not isinstance(value, bool)
        if valid:
            value = float(value)
    elif expected is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, expected)
    if not valid:
        raise ConfigError(f"{name} must be {expected.__name__}, got {type(value).__name__}")
    return value


def get_config_path(explicit: Path | None = None) -> Path | None:
    """
    Find the config file to load.

    Order:
    1. Explicit path
    2. $CLAUDECODE_CONFIG
    3. ~/.config/claudecode/config.yaml (only if it exists)
    """
    if explicit is not None:
        return explicit

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    default = DEFAULT_CONFIG_PATH.expanduser()
    return default if default.exists() else None


def load_config(path: Path | None = None) -> PluginConfig:
    """Load configuration from YAML, falling back to defaults."""
    config_path = get_config_path(path)
    if config_path is None:
        return PluginConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config YAML {config_path}: {e}") from e

    if data is None:
        return PluginConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping")
    return PluginConfig.from_dict(data)
