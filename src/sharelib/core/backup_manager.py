"""Timestamped snapshots of shares.json with retention-based pruning."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from pathlib import Path

from sharelib.core.fileio import atomic_write_bytes
from sharelib.core.paths import Paths
from sharelib.core.store import ShareStoreError, parse_shares
from sharelib.models.share import BackupEntry, ShareRecord

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
# A numeric suffix only appears when two backups land in the same second.
BACKUP_NAME_RE = re.compile(
    r"^shares_(?P<ts>\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2})(?:_(?P<seq>\d+))?\.json$"
)


def _sort_key(filename: str) -> tuple[datetime, int, str] | None:
    match = BACKUP_NAME_RE.match(filename)
    if match is None:
        return None
    try:
        ts = datetime.strptime(match["ts"], TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return ts, int(match["seq"] or 0), filename


def _sorted_backups(backup_dir: Path) -> list[tuple[datetime, int, str]]:
    """All backup files in ``backup_dir``, newest first."""
    if not backup_dir.is_dir():
        return []
    keys = []
    for path in backup_dir.iterdir():
        if not path.is_file():
            continue
        key = _sort_key(path.name)
        if key is not None:
            keys.append(key)
    keys.sort(reverse=True)
    return keys


def prune_backups(backup_dir: Path, keep: int) -> list[str]:
    """Delete all but the ``keep`` newest backups in ``backup_dir``.

    Ordering is by the timestamp encoded in the filename, then by the
    same-second suffix. ``keep <= 0`` removes every backup.

    Returns:
        Filenames that were deleted.
    """
    keep = max(keep, 0)
    deleted: list[str] = []
    for _, _, filename in _sorted_backups(backup_dir)[keep:]:
        try:
            (backup_dir / filename).unlink()
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.error("Error deleting backup %s: %s", filename, e)
            continue
        deleted.append(filename)

    if deleted:
        logger.info("Pruned %d old backup(s) from %s", len(deleted), backup_dir)
    return deleted


class BackupManager:
    """Creates, lists, restores and prunes snapshots of the shares document.

    Backups are byte-for-byte copies stored as
    ``<config_dir>/backups/shares_YYYY-MM-DD_HH-MM-SS.json`` and are never
    modified after creation.
    """

    def __init__(self, paths: Paths, retention: int = 10) -> None:
        self.paths = paths
        self.retention = retention

    @property
    def backup_dir(self) -> Path:
        return self.paths.backups_dir

    def create(self, source: Path | None = None, *, prune: bool = True) -> Path | None:
        """Snapshot ``source`` (the live shares file by default), then prune unless told not to.

        Returns:
            Path to the new backup, or None if the source is missing or the
            backup could not be written.
        """
        source = source or self.paths.shares_file
        try:
            data = source.read_bytes()
        except FileNotFoundError:
            logger.warning("Nothing to back up: %s does not exist", source)
            return None
        except OSError as e:
            logger.error("Cannot read %s: %s", source, e)
            return None

        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            backup_path = self._write_new(data)
        except OSError as e:
            logger.error("Failed to create backup in %s: %s", self.backup_dir, e)
            return None

        logger.info("Created backup %s", backup_path.name)
        if prune:
            self.prune()
        return backup_path

    def _write_new(self, data: bytes) -> Path:
        stem = f"shares_{datetime.now().strftime(TIMESTAMP_FORMAT)}"
        seq = 0
        while True:
            filename = f"{stem}.json" if seq == 0 else f"{stem}_{seq}.json"
            path = self.backup_dir / filename
            try:
                f = path.open("xb")
            except FileExistsError:
                seq += 1
                continue
            try:
                with f:
                    f.write(data)
            except BaseException:
                # A truncated file must not be mistaken for a backup
                path.unlink(missing_ok=True)
                raise
            return path

    def list_backups(self) -> list[BackupEntry]:
        """Return metadata for every backup, newest first."""
        entries: list[BackupEntry] = []
        for ts, _, filename in _sorted_backups(self.backup_dir):
            path = self.backup_dir / filename
            try:
                data = path.read_bytes()
            except OSError as e:
                logger.warning("Skipping unreadable backup %s: %s", filename, e)
                continue
            entries.append(
                BackupEntry(
                    filename=filename,
                    timestamp=ts,
                    size_bytes=len(data),
                    record_count=self._count_records(filename, data),
                )
            )
        return entries

    @staticmethod
    def _count_records(filename: str, data: bytes) -> int:
        try:
            raw = json.loads(data)
        except ValueError:
            logger.warning("Backup %s is not valid JSON", filename)
            return 0
        if isinstance(raw, (list, dict)):
            return len(raw)
        return 0

    def _locate(self, filename: str) -> Path | None:
        """Map a user-supplied backup name to a file inside the backup dir, or None."""
        if not filename or "/" in filename or "\\" in filename or ".." in filename:
            logger.warning("Rejected backup name %r", filename)
            return None
        if BACKUP_NAME_RE.match(filename) is None:
            return None
        path = self.paths.backup_file(filename)
        if not path.is_file():
            return None
        return path

    def view(self, filename: str) -> list[ShareRecord] | None:
        """Return the shares stored in a backup, or None if it is missing or unreadable."""
        path = self._locate(filename)
        if path is None:
            return None
        try:
            return parse_shares(path.read_bytes(), path)
        except (OSError, ShareStoreError) as e:
            logger.error("Cannot read backup %s: %s", filename, e)
            return None

    def restore(self, filename: str) -> bool:
        """Atomically replace the live shares file with a backup's content.

        Does not snapshot the current state first; callers that want a
        safety copy call :meth:`create` beforehand.
        """
        path = self._locate(filename)
        if path is None:
            return False
        try:
            data = path.read_bytes()
            parse_shares(data, path)
            atomic_write_bytes(self.paths.shares_file, data)
        except (OSError, ShareStoreError) as e:
            logger.error("Failed to restore backup %s: %s", filename, e)
            return False
        logger.info("Restored %s from backup %s", self.paths.shares_file, filename)
        return True

    def delete(self, filename: str) -> bool:
        path = self._locate(filename)
        if path is None:
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error("Failed to delete backup %s: %s", filename, e)
            return False
        logger.info("Deleted backup %s", filename)
        return True

    def prune(self, keep: int | None = None) -> list[str]:
        """Apply the retention count (or ``keep``) to the backup directory."""
        return prune_backups(self.backup_dir, self.retention if keep is None else keep)
