"""Markdown document discovery and classification.

Walks a document root, drops non-content files (``README.md``,
``EXAMPLE-*`` and ``.gitkeep``) and tags each remaining file with a
:class:`DocumentCategory` taken purely from its directory path.  Content is
read but never used for classification.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from monoforge.utils import display_path

from .models import ClassificationResult, DocumentCategory, DocumentRecord

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

README_NAME = "README.md"
EXAMPLE_PREFIX = "EXAMPLE-"
PLACEHOLDER_NAME = ".gitkeep"

# Checked in this order; the first directory marker found wins.
CATEGORY_MARKERS: tuple[DocumentCategory, ...] = (
    DocumentCategory.REQUIREMENTS,
    DocumentCategory.ARCHITECTURE,
    DocumentCategory.DESIGN,
    DocumentCategory.INFRASTRUCTURE,
)


class DocumentRootNotFoundError(FileNotFoundError):
    """Raised when the document root is missing or not a directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(f"Document root not found: {root}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def is_content_file(path: Path) -> bool:
    """Return ``False`` for README, ``EXAMPLE-*`` and placeholder files."""
    name = path.name
    return not (
        name == README_NAME
        or name.startswith(EXAMPLE_PREFIX)
        or name == PLACEHOLDER_NAME
    )


def classify_path(path: Path, root: Path) -> DocumentCategory:
    """Category of *path* from the directory segments below *root*."""
    try:
        rel = path.relative_to(root)
    except ValueError:
        rel = path
    segments = set(rel.parts[:-1])
    for category in CATEGORY_MARKERS:
        if category.value in segments:
            return category
    return DocumentCategory.UNCLASSIFIED


def find_markdown_files(root: Path) -> list[Path]:
    """Recursively list ``*.md`` files under *root*, sorted.

    Directory symlinks are not descended into and file symlinks that resolve
    outside *root* are skipped.
    """
    resolved_root = root.resolve()
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames.sort()
        for filename in sorted(filenames):
            if not filename.endswith(".md"):
                continue
            path = Path(dirpath) / filename
            if path.is_symlink() and not path.resolve().is_relative_to(resolved_root):
                continue
            if path.is_file():
                found.append(path)
    return sorted(found)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify_documents_sync(
    root: str | Path, display_base: str | Path | None = None
) -> ClassificationResult:
    """Classify every content markdown file under *root*.

    Args:
        root: Document root to scan.
        display_base: Base for ``DocumentRecord.display_path``; defaults to
            *root* itself.

    Raises:
        DocumentRootNotFoundError: If *root* does not exist or is not a
            directory.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise DocumentRootNotFoundError(root_path)
    base = Path(display_base) if display_base is not None else root_path

    all_files = find_markdown_files(root_path)
    records = [
        DocumentRecord(
            path=path,
            display_path=display_path(path, base),
            content=path.read_text(encoding="utf-8", errors="replace"),
            category=classify_path(path, root_path),
        )
        for path in all_files
        if is_content_file(path)
    ]
    return ClassificationResult(root=root_path, all_files=all_files, records=records)


async def classify_documents(
    root: str | Path, display_base: str | Path | None = None
) -> ClassificationResult:
    """Async wrapper around :func:`classify_documents_sync`."""
    return await asyncio.to_thread(classify_documents_sync, root, display_base)
