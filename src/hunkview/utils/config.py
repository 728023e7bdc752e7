from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Final

from .error_handling import log_config_error, log_file_error
from .logger import log


class ConfigError(Exception):
    """Configuration validation error."""

    pass


def default_config_path() -> Path:
    """~/.config/hunkview/config.json"""
    return Path.home() / ".config" / "hunkview" / "config.json"


class Config:
    """User preferences with JSON persistence, environment overrides and validation."""

    # Default values
    _DEFAULT_THEME: Final[str] = "dark"
    _DEFAULT_TAB_WIDTH: Final[int] = 4
    _DEFAULT_SPLIT_DIFF: Final[bool] = False
    _DEFAULT_MAX_DIFF_LINES: Final[int] = 10000
    _DEFAULT_MIN_SPLIT_WIDTH: Final[int] = 80

    # Validation bounds
    _MIN_TAB_WIDTH: Final[int] = 1
    _MAX_TAB_WIDTH: Final[int] = 16
    _MIN_MAX_DIFF_LINES: Final[int] = 100
    _MAX_MAX_DIFF_LINES: Final[int] = 1_000_000
    _MIN_MIN_SPLIT_WIDTH: Final[int] = 20
    _MAX_MIN_SPLIT_WIDTH: Final[int] = 1000

    _TRUE_VALUES: Final[frozenset] = frozenset({"1", "true", "yes", "on"})
    _FALSE_VALUES: Final[frozenset] = frozenset({"0", "false", "no", "off"})

    def __init__(
        self,
        theme: str = _DEFAULT_THEME,
        tab_width: int = _DEFAULT_TAB_WIDTH,
        split_diff: bool = _DEFAULT_SPLIT_DIFF,
        max_diff_lines: int = _DEFAULT_MAX_DIFF_LINES,
        min_split_width: int = _DEFAULT_MIN_SPLIT_WIDTH,
    ):
        self.theme = theme
        self.tab_width = tab_width
        self.split_diff = split_diff
        self.max_diff_lines = max_diff_lines
        self.min_split_width = min_split_width

        self.validate()

    # Persistence

    @classmethod
    def load(cls) -> Config:
        """Load from the default path, then apply environment overrides."""
        return cls.load_from(default_config_path()).apply_env()

    @classmethod
    def load_from(cls, path: str | os.PathLike) -> Config:
        """Read config from ``path``. Missing or unreadable files give defaults."""
        config = cls()
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return config
        except (OSError, ValueError) as e:
            log_file_error(str(path), "loading config from", e)
            return config

        if not isinstance(data, dict):
            log.warning(f"[CONFIG] Ignoring {path}: expected a JSON object")
            return config

        config._update_from_dict(data)
        return config

    def save(self) -> None:
        self.save_to(default_config_path())

    def save_to(self, path: str | os.PathLike) -> None:
        """Write config as indented JSON, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")

    def to_dict(self) -> dict[str, Any]:
        return {
            "theme": self.theme,
            "tab_width": self.tab_width,
            "split_diff": self.split_diff,
            "max_diff_lines": self.max_diff_lines,
            "min_split_width": self.min_split_width,
        }

    def _update_from_dict(self, data: dict[str, Any]) -> None:
        """Take known keys one by one; a bad value keeps the current one."""
        for key in self.to_dict():
            if key not in data:
                continue
            previous = getattr(self, key)
            setattr(self, key, data[key])
            try:
                self.validate()
            except ConfigError as e:
                log_config_error(key, data[key], e)
                setattr(self, key, previous)

    # Environment

    def apply_env(self) -> Config:
        """Override values from HUNKVIEW_* environment variables.

        Unparseable or out-of-range values are logged and ignored.
        """
        self._update_from_dict({
            "theme": os.environ.get("HUNKVIEW_THEME") or self.theme,
            "tab_width": self._get_int_env("HUNKVIEW_TAB_WIDTH", self.tab_width),
            "split_diff": self._get_bool_env("HUNKVIEW_SPLIT", self.split_diff),
            "max_diff_lines": self._get_int_env("HUNKVIEW_MAX_DIFF_LINES", self.max_diff_lines),
            "min_split_width": self._get_int_env("HUNKVIEW_MIN_SPLIT_WIDTH", self.min_split_width),
        })
        return self

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer environment variable with fallback to default."""
        value = os.environ.get(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError as e:
            log.warning(f"Invalid integer value for {key}='{value}', using {default}: {e}")
            return default

    def _get_bool_env(self, key: str, default: bool) -> bool:
        value = os.environ.get(key)
        if value is None:
            return default

        lowered = value.strip().lower()
        if lowered in self._TRUE_VALUES:
            return True
        if lowered in self._FALSE_VALUES:
            return False
        log.warning(f"Invalid boolean value for {key}='{value}', using {default}")
        return default

    # Validation

    def validate(self) -> None:
        """Validate all configuration values."""
        if not isinstance(self.theme, str) or not self.theme.strip():
            raise ConfigError(f"theme must be a non-empty string, got {self.theme!r}")
        if not isinstance(self.split_diff, bool):
            raise ConfigError(f"split_diff must be a boolean, got {type(self.split_diff).__name__}")
        self._validate_int("tab_width", self.tab_width, self._MIN_TAB_WIDTH, self._MAX_TAB_WIDTH)
        self._validate_int(
            "max_diff_lines", self.max_diff_lines, self._MIN_MAX_DIFF_LINES, self._MAX_MAX_DIFF_LINES
        )
        self._validate_int(
            "min_split_width", self.min_split_width, self._MIN_MIN_SPLIT_WIDTH, self._MAX_MIN_SPLIT_WIDTH
        )

    def _validate_int(self, name: str, value: int, min_val: int, max_val: int) -> None:
        """Validate integer configuration value."""
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(f"{name} must be an integer, got {type(value).__name__}")
        if not (min_val <= value <= max_val):
            raise ConfigError(f"{name} must be between {min_val} and {max_val}, got {value}")

    def __repr__(self) -> str:
        """String representation of configuration."""
        return (
            f"Config(theme={self.theme!r}, "
            f"tab_width={self.tab_width}, "
            f"split_diff={self.split_diff}, "
            f"max_diff_lines={self.max_diff_lines}, "
            f"min_split_width={self.min_split_width})"
        )
