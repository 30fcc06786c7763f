"""Tests for ShareStore load/save and index lookup."""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from sharelib.core.paths import Paths
from sharelib.core.store import ShareStore, ShareStoreError, find_share_index
from sharelib.models.share import ShareRecord


def _share(name: str, path: str = "/mnt/user/x", **kwargs) -> ShareRecord:
    return ShareRecord(name=name, path=path, **kwargs)


class TestPaths:
    def test_layout(self, tmp_config_dir: Path):
        paths = Paths(tmp_config_dir)
        assert paths.config_dir == tmp_config_dir.resolve()
        assert paths.shares_file == tmp_config_dir.resolve() / "shares.json"
        assert paths.backups_dir == tmp_config_dir.resolve() / "backups"
        assert paths.backup_file("b.json") == tmp_config_dir.resolve() / "backups" / "b.json"

    def test_ensure_base_dirs(self, tmp_path: Path):
        paths = Paths(tmp_path / "new")
        paths.ensure_base_dirs()
        assert paths.config_dir.is_dir()
        assert paths.backups_dir.is_dir()
        assert paths.logs_dir.is_dir()


class TestShareStore:
    def test_load_missing_file_is_empty(self, store: ShareStore):
        assert not store.path.exists()
        assert store.load() == []

    def test_save_and_load_preserves_order(self, store: ShareStore):
        shares = [_share(f"Share{i}", enabled=True) for i in range(10)]
        assert store.save(shares) is True
        loaded = store.load()
        assert [s.name for s in loaded] == [f"Share{i}" for i in range(10)]

    def test_empty_collection(self, store: ShareStore):
        assert store.save([]) is True
        assert json.loads(store.path.read_text()) == []
        loaded = store.load()
        assert loaded == []
        assert find_share_index(loaded, "NonExistent") == -1

    def test_rapid_sequential_saves(self, store: ShareStore):
        shares = []
        for i in range(10):
            shares.append(_share(f"Share{i}"))
            assert store.save(shares)
        assert len(store.load()) == 10

    def test_save_load_save_cycle(self, store: ShareStore):
        store.save([_share("Original", comment="Original comment", enabled=True)])
        loaded = store.load()
        loaded[0].comment = "Modified comment"
        store.save(loaded)

        final = store.load()
        assert len(final) == 1
        assert final[0].name == "Original"
        assert final[0].comment == "Modified comment"

    def test_special_characters_preserved(self, store: ShareStore):
        comment = "Comment with \"quotes\" and 'apostrophes' and <brackets> and ünïcödé"
        store.save([_share("SpecialShare", comment=comment, hosts_allow="192.168.1.0/24 10.0.0.0/8")])
        loaded = store.load()
        assert loaded[0].comment == comment
        assert loaded[0].hosts_allow == "192.168.1.0/24 10.0.0.0/8"

    def test_round_trip_keeps_document_content(self, store: ShareStore):
        """Only keys present in the document are written back, unknown keys included."""
        original = [
            {"name": "TestShare1", "path": "/mnt/user/test1", "comment": "Test 1"},
            {"name": "MacShare", "path": "/mnt/user/mac", "fruit": "yes", "case_sensitive": "auto"},
        ]
        store.path.write_text(json.dumps(original))
        assert store.save(store.load())
        assert json.loads(store.path.read_text()) == original

    def test_validator_rewrite_is_persisted(self, store: ShareStore):
        share = ShareRecord.model_validate({"name": "A", "path": "/mnt/user/link"})
        share.path = "/mnt/user/real"
        store.save([share])
        assert json.loads(store.path.read_text()) == [{"name": "A", "path": "/mnt/user/real"}]

    def test_saved_document_is_pretty_printed(self, store: ShareStore):
        store.save([_share("A")])
        text = store.path.read_text()
        assert text.startswith("[\n  {")
        assert text.endswith("]\n")

    def test_concurrent_reads_identical(self, store: ShareStore):
        store.save([_share("TestShare")])
        results = [store.load() for _ in range(5)]
        assert all(r[0].name == "TestShare" for r in results)

    def test_corrupt_document_raises(self, store: ShareStore):
        store.path.write_text("{not json")
        with pytest.raises(ShareStoreError, match="Invalid JSON"):
            store.load()

    def test_non_utf8_document_raises(self, store: ShareStore):
        store.path.write_bytes(b'[{"name": "\xff"}]')
        with pytest.raises(ShareStoreError, match="Invalid JSON"):
            store.load()

    def test_non_array_document_raises(self, store: ShareStore):
        store.path.write_text('{"name": "A"}')
        with pytest.raises(ShareStoreError, match="expected a JSON array"):
            store.load()

    def test_non_object_entry_raises(self, store: ShareStore):
        store.path.write_text('[{"name": "A"}, "B"]')
        with pytest.raises(ShareStoreError, match="entry 1"):
            store.load()

    def test_save_leaves_no_temp_files(self, store: ShareStore):
        store.save([_share("A")])
        store.save([_share("B")])
        assert sorted(p.name for p in store.path.parent.iterdir()) == ["shares.json"]

    def test_save_keeps_file_mode(self, store: ShareStore):
        store.save([_share("A")])
        os.chmod(store.path, 0o600)
        store.save([_share("B")])
        assert os.stat(store.path).st_mode & 0o777 == 0o600

    def test_failed_write_keeps_old_document(self, store: ShareStore):
        store.save([_share("Old")])
        with patch("sharelib.core.fileio.os.replace", side_effect=OSError("disk full")):
            assert store.save([_share("New")]) is False
        assert [s.name for s in store.load()] == ["Old"]
        assert sorted(p.name for p in store.path.parent.iterdir()) == ["shares.json"]


class TestFindShareIndex:
    def test_finds_position(self):
        shares = [_share("Alpha"), _share("Beta"), _share("Gamma")]
        assert find_share_index(shares, "Beta") == 1

    def test_not_found(self):
        assert find_share_index([_share("Alpha")], "Delta") == -1

    def test_first_match_wins(self):
        shares = [_share("Dup", comment="first"), _share("Dup", comment="second")]
        assert find_share_index(shares, "Dup") == 0

    def test_case_sensitive(self):
        assert find_share_index([_share("Alpha")], "alpha") == -1

    def test_index_after_removal(self, store: ShareStore):
        store.save([_share("Alpha"), _share("Beta"), _share("Gamma")])
        loaded = store.load()
        assert store.find_index(loaded, "Beta") == 1

        loaded.pop(0)
        store.save(loaded)
        assert store.find_index(store.load(), "Beta") == 0
