"""Shared test fixtures for sharectl."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sharelib.core.backup_manager import BackupManager
from sharelib.core.paths import Paths
from sharelib.core.store import ShareStore
from sharelib.models.config import BackupConfig, Config, SharectlSettings


@pytest.fixture
def tmp_config_dir(tmp_path: Path) -> Path:
    """A temporary share configuration directory."""
    root = tmp_path / "custom.smb.shares"
    root.mkdir()
    return root


@pytest.fixture
def mnt_root(tmp_path: Path) -> Path:
    """A stand-in for /mnt with a user/ tree to share from."""
    root = tmp_path / "mnt"
    (root / "user" / "testshare").mkdir(parents=True)
    return root


@pytest.fixture
def paths(tmp_config_dir: Path) -> Paths:
    return Paths(tmp_config_dir)


@pytest.fixture
def store(paths: Paths) -> ShareStore:
    return ShareStore(paths)


@pytest.fixture
def backups(paths: Paths) -> BackupManager:
    return BackupManager(paths, retention=10)


@pytest.fixture
def sample_shares_json(paths: Paths) -> Path:
    """Two shares written the way another tool would write them."""
    shares = [
        {"name": "TestShare1", "path": "/mnt/user/test1", "comment": "Test 1"},
        {"name": "TestShare2", "path": "/mnt/user/test2", "comment": "Test 2"},
    ]
    paths.shares_file.write_text(json.dumps(shares, indent=4))
    return paths.shares_file


@pytest.fixture
def sample_config(tmp_config_dir: Path, mnt_root: Path) -> Config:
    """A sample full configuration."""
    return Config(
        sharectl=SharectlSettings(
            config_dir=tmp_config_dir,
            allowed_root=mnt_root,
            backup=BackupConfig(retention=5, on_save=True),
        )
    )


@pytest.fixture
def sample_config_toml(tmp_config_dir: Path, mnt_root: Path) -> str:
    """Sample config as TOML string."""
    return f"""\
[sharectl]
config_dir = "{tmp_config_dir}"
allowed_root = "{mnt_root}"
log_level = "info"

[sharectl.backup]
retention = 5
on_save = true
"""
