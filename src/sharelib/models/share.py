"""Pydantic models for share definitions and backup metadata."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

# Export mode tokens: e = exported, h = hidden, t = Time Machine, "-" = not exported.
EXPORT_MODES = frozenset({"-", "e", "eh", "et", "eth"})
SECURITY_MODES = frozenset({"public", "private", "secure"})
FRUIT_VALUES = frozenset({"yes", "no"})


class ShareRecord(BaseModel):
    """A single SMB share definition as stored in shares.json.

    Keys that this model does not know about are kept as extra fields so a
    document written by another tool survives a load/save cycle untouched.
    Serialise with :meth:`to_document` to emit only the keys that were read
    or explicitly set.
    """

    model_config = {"extra": "allow"}

    name: str = ""
    path: str = ""
    comment: str = ""
    enabled: bool = True
    export: str = "e"
    security: str = "public"
    create_mask: str | None = None
    directory_mask: str | None = None
    hosts_allow: str | None = None
    hosts_deny: str | None = None
    fruit: str | None = None  # macOS compatibility ("yes"/"no")

    def to_document(self) -> dict:
        data = self.model_dump(mode="json", exclude_unset=True)
        for key, value in (self.model_extra or {}).items():
            data.setdefault(key, value)
        return data

    @property
    def is_hidden(self) -> bool:
        return "h" in self.export

    @property
    def is_time_machine(self) -> bool:
        return "t" in self.export

    @property
    def is_exported(self) -> bool:
        return self.export != "-"


class BackupEntry(BaseModel):
    filename: str
    timestamp: datetime
    size_bytes: int
    record_count: int
