"""Config loading and validation for sharectl."""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import ValidationError

from sharelib.models.config import Config


def load_config(path: Path) -> Config:
    """Load and validate config from a TOML file.

    Relative ``config_dir`` and ``allowed_root`` values are resolved against
    the config file's directory.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the TOML is invalid or fails validation.
    """
    if not path.is_file():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    config_dir = path.resolve().parent
    text = path.read_text()

    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ValueError(msg) from e

    try:
        config = Config.model_validate(raw)
    except ValidationError as e:
        msg = f"Config validation failed:\n{e}"
        raise ValueError(msg) from e

    for attr in ("config_dir", "allowed_root"):
        value = getattr(config.sharectl, attr).expanduser()
        if not value.is_absolute():
            value = config_dir / value
        setattr(config.sharectl, attr, value.resolve())

    return config

