"""Pydantic models for sharectl configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_DIR = Path("/boot/config/plugins/custom.smb.shares")
DEFAULT_ALLOWED_ROOT = Path("/mnt")


class BackupConfig(BaseModel):
    # 0 keeps nothing; every new backup is pruned straight away.
    retention: int = Field(default=10, ge=0, le=1000)
    on_save: bool = True


class SharectlSettings(BaseModel):
    config_dir: Path = DEFAULT_CONFIG_DIR
    allowed_root: Path = DEFAULT_ALLOWED_ROOT
    log_level: str = Field(default="info", pattern=r"^(debug|info|warning|error)$")
    backup: BackupConfig = BackupConfig()

    @field_validator("allowed_root")
    @classmethod
    def validate_allowed_root(cls, v: Path) -> Path:
        if v == Path("/"):
            msg = "allowed_root must be a directory below the filesystem root"
            raise ValueError(msg)
        return v


class Config(BaseModel):
    sharectl: SharectlSettings
