"""Load and save the ordered share list (shares.json)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from sharelib.core.fileio import atomic_write_bytes
from sharelib.core.paths import Paths
from sharelib.models.share import ShareRecord

logger = logging.getLogger(__name__)


class ShareStoreError(ValueError):
    """The shares document exists but cannot be parsed."""


def parse_shares(text: str | bytes, source: Path) -> list[ShareRecord]:
    """Parse a shares document into records, preserving order.

    Raises:
        ShareStoreError: If the content is not a JSON array of objects.
    """
    try:
        raw = json.loads(text)
    except ValueError as e:
        # JSONDecodeError, or UnicodeDecodeError for non-UTF-8 bytes
        msg = f"Invalid JSON in {source}: {e}"
        raise ShareStoreError(msg) from e

    if not isinstance(raw, list):
        msg = f"Invalid shares document {source}: expected a JSON array, got {type(raw).__name__}"
        raise ShareStoreError(msg)

    shares: list[ShareRecord] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            msg = f"Invalid shares document {source}: entry {i} is not an object"
            raise ShareStoreError(msg)
        try:
            shares.append(ShareRecord.model_validate(item))
        except ValidationError as e:
            msg = f"Invalid share at entry {i} in {source}:\n{e}"
            raise ShareStoreError(msg) from e
    return shares


def dump_shares(shares: list[ShareRecord]) -> bytes:
    """Serialize shares as pretty-printed UTF-8 JSON."""
    data = [share.to_document() for share in shares]
    return (json.dumps(data, indent=2, ensure_ascii=False) + "\n").encode("utf-8")


def find_share_index(shares: list[ShareRecord], name: str) -> int:
    """Return the position of the first share called ``name``, or -1."""
    for i, share in enumerate(shares):
        if share.name == name:
            return i
    return -1


class ShareStore:
    """Owns the live shares document at ``<config_dir>/shares.json``."""

    def __init__(self, paths: Paths) -> None:
        self.paths = paths

    @property
    def path(self) -> Path:
        return self.paths.shares_file

    def load(self) -> list[ShareRecord]:
        """Load all shares. A missing document means no shares yet.

        Raises:
            ShareStoreError: If the document exists but is corrupt.
            OSError: If the document exists but cannot be read.
        """
        if not self.path.is_file():
            return []
        return parse_shares(self.path.read_bytes(), self.path)

    def save(self, shares: list[ShareRecord]) -> bool:
        """Atomically write ``shares`` in order. Returns False if the write failed."""
        try:
            atomic_write_bytes(self.path, dump_shares(shares))
        except OSError as e:
            logger.error("Failed to write %s: %s", self.path, e)
            return False
        logger.info("Saved %d share(s) to %s", len(shares), self.path)
        return True

    def find_index(self, shares: list[ShareRecord], name: str) -> int:
        return find_share_index(shares, name)
