"""Share editing orchestration: validate, snapshot, save."""

from __future__ import annotations

import logging

from sharelib.core.backup_manager import BackupManager
from sharelib.core.paths import Paths
from sharelib.core.store import ShareStore, find_share_index
from sharelib.core.validator import ShareValidator
from sharelib.models.config import Config
from sharelib.models.share import ShareRecord

logger = logging.getLogger(__name__)


class ShareManager:
    """Applies share edits to the live document.

    Each mutating call loads the current list, applies one change, takes a
    backup of the previous document (when ``backup.on_save`` is set) and
    saves. Name uniqueness is enforced here; the store does not check it.
    Errors are returned as lists of user-facing messages.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.paths = Paths(config.sharectl.config_dir)
        self.store = ShareStore(self.paths)
        self.validator = ShareValidator(config.sharectl.allowed_root)
        self.backups = BackupManager(self.paths, config.sharectl.backup.retention)

    def list_shares(self) -> list[ShareRecord]:
        return self.store.load()

    def get_share(self, name: str) -> ShareRecord | None:
        shares = self.store.load()
        index = find_share_index(shares, name)
        return shares[index] if index >= 0 else None

    def add_share(self, share: ShareRecord) -> list[str]:
        """Validate and append a new share."""
        shares = self.store.load()
        errors = self.validator.validate(share)
        if share.name and find_share_index(shares, share.name) >= 0:
            errors.append(f"Share '{share.name}' already exists")
        if errors:
            return errors

        shares.append(share)
        return self._commit(shares, f"Added share {share.name}")

    def update_share(self, name: str, share: ShareRecord) -> list[str]:
        """Replace the share called ``name`` with ``share``, keeping its position."""
        shares = self.store.load()
        index = find_share_index(shares, name)
        if index < 0:
            return [f"Share '{name}' not found"]

        errors = self.validator.validate(share)
        if share.name != name and find_share_index(shares, share.name) >= 0:
            errors.append(f"Share '{share.name}' already exists")
        if errors:
            return errors

        shares[index] = share
        return self._commit(shares, f"Updated share {name}")

    def clone_share(self, source: str, new_name: str, path: str | None = None) -> list[str]:
        """Append a copy of ``source`` under ``new_name``.

        Every stored field is copied, unknown keys included. ``path``
        replaces the copied path when given. The copy is validated like a
        new share.
        """
        shares = self.store.load()
        index = find_share_index(shares, source)
        if index < 0:
            return [f"Share '{source}' not found"]

        document = shares[index].to_document()
        document["name"] = new_name
        if path is not None:
            document["path"] = path
        clone = ShareRecord.model_validate(document)

        errors = self.validator.validate(clone)
        if new_name and find_share_index(shares, new_name) >= 0:
            errors.append(f"Share '{new_name}' already exists")
        if errors:
            return errors

        shares.append(clone)
        return self._commit(shares, f"Cloned share {source} as {new_name}")

    def remove_share(self, name: str) -> bool:
        shares = self.store.load()
        index = find_share_index(shares, name)
        if index < 0:
            return False
        del shares[index]
        return not self._commit(shares, f"Removed share {name}")

    def set_enabled(self, name: str, enabled: bool) -> bool:
        """Toggle a share on or off without revalidating it."""
        shares = self.store.load()
        index = find_share_index(shares, name)
        if index < 0:
            return False
        if shares[index].enabled == enabled:
            return True
        shares[index].enabled = enabled
        action = "Enabled" if enabled else "Disabled"
        return not self._commit(shares, f"{action} share {name}")

    def validate_all(self) -> dict[str, list[str]]:
        """Validate every stored share without saving. Maps share name to errors."""
        results: dict[str, list[str]] = {}
        for i, share in enumerate(self.store.load()):
            key = share.name or f"#{i + 1}"
            results[key] = self.validator.validate(share)
        return results

    def _commit(self, shares: list[ShareRecord], description: str) -> list[str]:
        if self.config.sharectl.backup.on_save and self.paths.shares_file.is_file():
            if self.backups.create() is None:
                return ["Could not back up the current shares file; nothing was changed"]

        if not self.store.save(shares):
            return [f"Failed to write {self.paths.shares_file}"]

        logger.info(description)
        return []
