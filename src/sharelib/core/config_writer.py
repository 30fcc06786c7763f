"""Config writing utilities for sharectl.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from sharelib.models.config import Config

# Keys accepted by update_settings, mapped to their location in the TOML document.
SETTABLE_KEYS = {
    "config_dir": ("sharectl",),
    "allowed_root": ("sharectl",),
    "log_level": ("sharectl",),
    "retention": ("sharectl", "backup"),
    "on_save": ("sharectl", "backup"),
}


def write_config(path: Path, config: Config) -> None:
    """Write ``config`` to ``path`` as TOML, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomli_w.dumps(config.model_dump(mode="json")))


def update_settings(path: Path, **values: Any) -> Config:
    """Update individual settings in an existing config file.

    Args:
        path: Path to the sharectl.toml file.
        **values: Setting name to new value; see SETTABLE_KEYS.

    Returns:
        The validated configuration that was written.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        KeyError: If a setting name is unknown.
        ValueError: If the TOML is invalid or the result fails validation.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML: {e}") from e

    for key, value in values.items():
        if key not in SETTABLE_KEYS:
            raise KeyError(f"Unknown setting: {key}")
        section = data
        for part in SETTABLE_KEYS[key]:
            section = section.setdefault(part, {})
        section[key] = str(value) if isinstance(value, Path) else value

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Config validation failed:\n{e}") from e

    # Note: tomli_w doesn't preserve comments
    path.write_text(tomli_w.dumps(data))
    return config
