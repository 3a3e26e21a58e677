"""Configuration management for deptui."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

log = logging.getLogger(__name__)

DEFAULT_THEME = "deptui-dark"


def get_config_dir() -> Path:
    """Get the deptui configuration directory."""
    if env_dir := os.environ.get("DEPTUI_DIR"):
        return Path(env_dir)
    return Path.home() / ".deptui"


def ensure_config_dir() -> Path:
    """Ensure the configuration directory exists."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_log_path() -> Path:
    """Default log file used while the TUI owns the terminal."""
    return get_config_dir() / "deptui.log"


@dataclass
class Config:
    """deptui configuration."""

    theme: str = DEFAULT_THEME
    default_mode: Literal["tui", "show"] = "tui"
    include_extras: bool = False

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file."""
        config_path = get_config_dir() / "config.json"
        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                default_mode = data.get("defaultMode", "tui")
                return cls(
                    theme=data.get("theme", DEFAULT_THEME),
                    default_mode=default_mode if default_mode in ("tui", "show") else "tui",
                    include_extras=bool(data.get("includeExtras", False)),
                )
            except (json.JSONDecodeError, AttributeError, IOError) as e:
                log.warning("Ignoring unreadable config %s: %s", config_path, e)
        return cls()

    def save(self) -> None:
        """Save configuration to file."""
        config_path = ensure_config_dir() / "config.json"
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump({
                "theme": self.theme,
                "defaultMode": self.default_mode,
                "includeExtras": self.include_extras,
            }, f, indent=2)
