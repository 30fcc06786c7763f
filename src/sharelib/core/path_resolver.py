"""Canonical path resolution confined to an allowed root."""

from __future__ import annotations

import os
from pathlib import Path


class PathResolutionError(ValueError):
    pass


class PathNotFoundError(PathResolutionError):
    pass


class PathEscapeError(PathResolutionError):
    pass


def resolve_path(raw_path: str | os.PathLike[str], allowed_root: str | os.PathLike[str]) -> Path:
    """Resolve ``raw_path`` to its canonical form and confirm it lies under ``allowed_root``.

    Symlinks and ``..`` segments are resolved first and the containment check
    is made on the result, so a symlink planted anywhere in the path cannot
    redirect it outside the root. Use the returned path from here on, never
    the raw input.

    Args:
        raw_path: User-supplied path.
        allowed_root: Directory the canonical path must be strictly below.

    Returns:
        The absolute canonical path.

    Raises:
        PathNotFoundError: If the path or any of its components does not exist.
        PathResolutionError: If the path cannot be looked up at all (a null byte).
        PathEscapeError: If the canonical path is not below the allowed root.
    """
    try:
        canonical = Path(raw_path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        # RuntimeError: symlink loop on Python < 3.13
        msg = f"Path does not exist: {raw_path}"
        raise PathNotFoundError(msg) from e
    except ValueError as e:
        # e.g. an embedded null byte
        msg = f"Invalid path {raw_path!r}: {e}"
        raise PathResolutionError(msg) from e

    root = Path(allowed_root).resolve()
    if root not in canonical.parents:
        msg = f"Path {raw_path} resolves to {canonical}, which is outside {root}"
        raise PathEscapeError(msg)

    return canonical
