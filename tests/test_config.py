"""Tests for config loading, validation and writing."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from sharelib.core.config import load_config
from sharelib.core.config_writer import update_settings, write_config
from sharelib.models.config import BackupConfig, Config, SharectlSettings


class TestConfigModels:
    def test_defaults(self):
        settings = SharectlSettings()
        assert settings.config_dir == Path("/boot/config/plugins/custom.smb.shares")
        assert settings.allowed_root == Path("/mnt")
        assert settings.backup.retention == 10
        assert settings.backup.on_save is True

    def test_retention_bounds(self):
        with pytest.raises(ValueError):
            BackupConfig(retention=-1)
        with pytest.raises(ValueError):
            BackupConfig(retention=1001)

    def test_zero_retention_allowed(self):
        assert BackupConfig(retention=0).retention == 0

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            SharectlSettings(log_level="verbose")

    def test_filesystem_root_rejected_as_allowed_root(self):
        with pytest.raises(ValueError, match="allowed_root"):
            SharectlSettings(allowed_root="/")


class TestConfigLoading:
    def test_load_valid_toml(self, tmp_path: Path, sample_config_toml: str, tmp_config_dir: Path, mnt_root: Path):
        config_file = tmp_path / "sharectl.toml"
        config_file.write_text(sample_config_toml)
        cfg = load_config(config_file)
        assert cfg.sharectl.config_dir == tmp_config_dir.resolve()
        assert cfg.sharectl.allowed_root == mnt_root.resolve()
        assert cfg.sharectl.backup.retention == 5

    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_load_invalid_toml(self, tmp_path: Path):
        config_file = tmp_path / "bad.toml"
        config_file.write_text("this is not [valid toml")
        with pytest.raises(ValueError, match="Invalid TOML"):
            load_config(config_file)

    def test_load_missing_sharectl_section(self, tmp_path: Path):
        config_file = tmp_path / "incomplete.toml"
        config_file.write_text("# no [sharectl] section at all\n")
        with pytest.raises(ValueError, match="validation failed"):
            load_config(config_file)

    def test_relative_paths_resolved(self, tmp_path: Path):
        """Relative config_dir and allowed_root resolve against the config file's directory."""
        config_file = tmp_path / "sharectl.toml"
        config_file.write_text("""\
[sharectl]
config_dir = "config"
allowed_root = "mnt"
""")
        cfg = load_config(config_file)
        assert cfg.sharectl.config_dir == tmp_path.resolve() / "config"
        assert cfg.sharectl.allowed_root == tmp_path.resolve() / "mnt"
        assert cfg.sharectl.config_dir.is_absolute()


class TestConfigWriter:
    def test_write_then_load(self, tmp_path: Path, sample_config: Config):
        config_file = tmp_path / "out" / "sharectl.toml"
        write_config(config_file, sample_config)
        cfg = load_config(config_file)
        assert cfg.sharectl.config_dir == sample_config.sharectl.config_dir.resolve()
        assert cfg.sharectl.backup.retention == 5

    def test_update_retention(self, tmp_path: Path, sample_config_toml: str):
        config_file = tmp_path / "sharectl.toml"
        config_file.write_text(sample_config_toml)
        update_settings(config_file, retention=3, on_save=False)
        data = tomllib.loads(config_file.read_text())
        assert data["sharectl"]["backup"]["retention"] == 3
        assert data["sharectl"]["backup"]["on_save"] is False

    def test_update_rejects_invalid_value(self, tmp_path: Path, sample_config_toml: str):
        config_file = tmp_path / "sharectl.toml"
        config_file.write_text(sample_config_toml)
        with pytest.raises(ValueError, match="validation failed"):
            update_settings(config_file, log_level="loud")
        # File left untouched
        assert config_file.read_text() == sample_config_toml

    def test_update_unknown_key(self, tmp_path: Path, sample_config_toml: str):
        config_file = tmp_path / "sharectl.toml"
        config_file.write_text(sample_config_toml)
        with pytest.raises(KeyError):
            update_settings(config_file, colour="blue")

    def test_update_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            update_settings(tmp_path / "missing.toml", retention=1)
