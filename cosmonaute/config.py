"""Persistent application configuration."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import ClassVar

APP_ID = "com.github.genericconfluent.cosmonaute"


@dataclass
class Config:
    """Settings that persist between application runs."""

    VERSION: ClassVar[int] = 1

    demo: str = ""


def default_config_path() -> Path:
    """Location of the configuration file for the current config version."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "cosmic" / APP_ID / f"v{Config.VERSION}" / "config.json"


def load_config(path: str | os.PathLike[str] | None = None) -> Config:
    """Read the configuration, falling back to defaults for anything unusable."""
    target = Path(path) if path is not None else default_config_path()
    try:
        data = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return Config()
    if not isinstance(data, dict):
        return Config()

    values = {}
    for field in fields(Config):
        value = data.get(field.name)
        if isinstance(value, str):
            values[field.name] = value
    return Config(**values)


def save_config(config: Config, path: str | os.PathLike[str] | None = None) -> None:
    """Write the configuration, creating parent directories as needed."""
    target = Path(path) if path is not None else default_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(asdict(config), indent=2), encoding="utf-8")