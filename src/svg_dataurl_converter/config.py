"""Configuration persistence for svg-dataurl-converter.

Settings live in a JSON file under the platform's generic config location
(`~/.config/SvgDataUrlConverter/config.json` on Linux, `%LOCALAPPDATA%` on Windows).
Only preferences are stored here, never conversion history.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from PySide6.QtCore import QStandardPaths

APP_DIR_NAME: Final[str] = "SvgDataUrlConverter"
CONFIG_FILE_NAME: Final[str] = "config.json"


def _default_config_dir() -> Path:
    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericConfigLocation)
    if location:
        return Path(location)
    return Path.home() / ".config"


def get_config_path() -> Path:
    return _default_config_dir() / APP_DIR_NAME / CONFIG_FILE_NAME


@dataclass
class AppConfig:
    """User-configurable settings.

    Notes:
    - `debounce_ms` is the quiet period after the last keystroke before decoding.
    - `max_input_chars` guards the UI thread; longer input is rejected without decoding.
    """

    debounce_ms: int = 150
    copied_feedback_ms: int = 2000

    load_example_on_start: bool = True
    initial_convert_delay_ms: int = 300

    last_save_dir: str = ""

    max_input_chars: int = 50_000_000

    def to_dict(self) -> dict[str, Any]:
        return {
            "debounce_ms": self.debounce_ms,
            "copied_feedback_ms": self.copied_feedback_ms,
            "load_example_on_start": self.load_example_on_start,
            "initial_convert_delay_ms": self.initial_convert_delay_ms,
            "last_save_dir": self.last_save_dir,
            "max_input_chars": self.max_input_chars,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "AppConfig":
        cfg = cls()
        for k, v in raw.items():
            if hasattr(cfg, k):
                setattr(cfg, k, v)
        return cfg

    @classmethod
    def load(cls, path: Path | None = None) -> "AppConfig":
        path = path or get_config_path()
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls.from_dict(data)

    def save(self, path: Path | None = None) -> None:
        path = path or get_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
