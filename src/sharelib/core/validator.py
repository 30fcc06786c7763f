"""Validation of share definitions before they are saved."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from sharelib.core.path_resolver import (
    PathEscapeError,
    PathNotFoundError,
    PathResolutionError,
    resolve_path,
)
from sharelib.models.config import DEFAULT_ALLOWED_ROOT
from sharelib.models.share import EXPORT_MODES, FRUIT_VALUES, SECURITY_MODES, ShareRecord

logger = logging.getLogger(__name__)

SHARE_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9._-]{0,79}$")
MASK_RE = re.compile(r"^[0-7]{3,4}$")
CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


class ShareValidator:
    """Checks a share definition and canonicalizes its path.

    Every check runs regardless of earlier failures so the caller can show
    all problems at once. ``validate`` never raises.
    """

    def __init__(self, allowed_root: Path = DEFAULT_ALLOWED_ROOT) -> None:
        self.allowed_root = Path(allowed_root)

    def validate(self, share: ShareRecord) -> list[str]:
        """Validate ``share`` and return a list of user-facing error messages.

        On a valid path, ``share.path`` is replaced with its canonical form.
        Callers must persist the mutated record rather than the original
        input.
        """
        errors: list[str] = []
        errors.extend(self._check_name(share.name))
        errors.extend(self._check_path(share))
        for field, label in (("create_mask", "create mask"), ("directory_mask", "directory mask")):
            value = getattr(share, field)
            if value is not None and not MASK_RE.match(value):
                errors.append(f"Invalid {label} '{value}': must be 3 or 4 octal digits (0-7)")
        if share.export not in EXPORT_MODES:
            errors.append(
                f"Invalid export mode '{share.export}': expected one of {', '.join(sorted(EXPORT_MODES))}"
            )
        if share.security not in SECURITY_MODES:
            errors.append(
                f"Invalid security mode '{share.security}': expected one of {', '.join(sorted(SECURITY_MODES))}"
            )
        if share.fruit is not None and share.fruit not in FRUIT_VALUES:
            errors.append(f"Invalid macOS compatibility value '{share.fruit}': expected 'yes' or 'no'")
        for field, label in (("hosts_allow", "hosts allow"), ("hosts_deny", "hosts deny")):
            value = getattr(share, field)
            if value is not None and CONTROL_CHARS_RE.search(value):
                errors.append(f"Invalid {label} list: control characters are not allowed")

        if errors:
            logger.debug("Share %r failed validation: %s", share.name, errors)
        return errors

    def _check_name(self, name: str) -> list[str]:
        if not name:
            return ["Share name is required"]
        if not SHARE_NAME_RE.match(name):
            return [
                f"Invalid share name '{name}': use up to 80 letters, digits, '.', '_' or '-', "
                "starting with a letter, digit or '_'"
            ]
        return []

    def _check_path(self, share: ShareRecord) -> list[str]:
        if not share.path:
            return ["Path is required"]
        try:
            canonical = resolve_path(share.path, self.allowed_root)
        except PathNotFoundError:
            return [f"Path '{share.path}' does not exist"]
        except PathEscapeError:
            return [f"Path '{share.path}' must be inside {self.allowed_root}"]
        except PathResolutionError:
            return [f"Path {share.path!r} is not a valid path"]
        if not canonical.is_dir():
            return [f"Path '{share.path}' is not a directory"]

        share.path = str(canonical)
        return []


def validate_share(share: ShareRecord, allowed_root: Path = DEFAULT_ALLOWED_ROOT) -> list[str]:
    """Validate a single share against ``allowed_root``. See :class:`ShareValidator`."""
    return ShareValidator(allowed_root).validate(share)
