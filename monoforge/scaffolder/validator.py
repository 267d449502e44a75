"""Application identifier validation and collision detection.

``validate_app_name`` and ``check_name_available`` are pure functions; only
``list_existing_apps`` touches the filesystem.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path
from typing import NamedTuple

APP_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")

_KEBAB_HINT = "App name must be kebab-case (lowercase letters, numbers, hyphens)"


class AppNameError(ValueError):
    """Raised when an application name is invalid or already taken."""


class NameCheck(NamedTuple):
    """Outcome of a name check. ``reason`` is empty when ``valid`` is true."""

    valid: bool
    reason: str = ""


def validate_app_name(name: str) -> NameCheck:
    """Accept *name* iff it matches ``^[a-z][a-z0-9-]*$``."""
    if APP_NAME_PATTERN.fullmatch(name):
        return NameCheck(True)
    if not name:
        return NameCheck(False, f"{_KEBAB_HINT}; got an empty name")
    if not ("a" <= name[0] <= "z"):
        return NameCheck(
            False, f"{_KEBAB_HINT}; it must start with a lowercase letter, got {name[0]!r}"
        )
    bad = sorted({ch for ch in name[1:] if not re.fullmatch(r"[a-z0-9-]", ch)})
    return NameCheck(
        False, f"{_KEBAB_HINT}; invalid character(s): {', '.join(repr(ch) for ch in bad)}"
    )


def check_name_available(name: str, existing: Iterable[str]) -> NameCheck:
    """Reject *name* if it is already present in *existing*."""
    if name in set(existing):
        return NameCheck(False, f"App already exists: {name}")
    return NameCheck(True)


def ensure_valid_app_name(name: str, existing: Iterable[str] = ()) -> str:
    """Raise :class:`AppNameError` unless *name* is valid and unused."""
    for check in (validate_app_name(name), check_name_available(name, existing)):
        if not check.valid:
            raise AppNameError(check.reason)
    return name


def list_existing_apps(apps_root: Path) -> list[str]:
    """Return the sorted directory names under *apps_root* (empty if absent)."""
    if not apps_root.is_dir():
        return []
    return sorted(entry.name for entry in apps_root.iterdir() if entry.is_dir())
