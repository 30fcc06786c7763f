"""Path resolution for the sharectl on-disk layout."""

from __future__ import annotations

from pathlib import Path

SHARES_FILENAME = "shares.json"


class Paths:
    """Resolves all host-side paths for a share configuration directory.

    Layout:
        <config_dir>/
        ├── shares.json     # the live share list
        ├── backups/        # shares_YYYY-MM-DD_HH-MM-SS.json snapshots
        └── logs/
    """

    def __init__(self, config_dir: Path) -> None:
        self.config_dir = Path(config_dir).resolve()

    @property
    def shares_file(self) -> Path:
        return self.config_dir / SHARES_FILENAME

    @property
    def backups_dir(self) -> Path:
        return self.config_dir / "backups"

    @property
    def logs_dir(self) -> Path:
        return self.config_dir / "logs"

    def backup_file(self, filename: str) -> Path:
        return self.backups_dir / filename

    def ensure_base_dirs(self) -> None:
        """Create base directory structure."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.backups_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
