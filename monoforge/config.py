"""Monoforge workspace configuration.

Centralised, typed configuration for both pipelines (scaffolding and
project-context synthesis). Settings use a Pydantic v2 model so they are
validated at construction time and can be serialised to/from JSON or read
from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Config(BaseModel):
    """Global workspace configuration.

    All directory settings are relative to ``root`` (the monorepo root).
    Instances are typically created once by the CLI and then passed to
    :class:`monoforge.pipeline.Workspace`.
    """

    root: Path = Field(default=Path("."))
    apps_dir: str = Field(default="apps", min_length=1)
    materials_dir: str = Field(default="docs/project-materials", min_length=1)
    context_file: str = Field(default="docs/project-context.md", min_length=1)
    stories_dir: str = Field(default="docs/stories", min_length=1)
    manifest_file: str = Field(default="package.json", min_length=1)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def apps_path(self) -> Path:
        """Directory holding one subdirectory per generated application."""
        return self.root / self.apps_dir

    @property
    def materials_path(self) -> Path:
        """Document root scanned by ``monoforge init``."""
        return self.root / self.materials_dir

    @property
    def context_path(self) -> Path:
        """Path to the rendered ``project-context.md``."""
        return self.root / self.context_file

    @property
    def stories_path(self) -> Path:
        """Directory for workspace-wide story documents."""
        return self.root / self.stories_dir

    @property
    def manifest_path(self) -> Path:
        """Path to the shared root manifest (``package.json``)."""
        return self.root / self.manifest_file

    def app_path(self, name: str) -> Path:
        """Directory of a single application."""
        return self.apps_path / name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<root>/monoforge.json``.

        Returns:
            The path where the file was written.
        """
        target = path or (self.root / "monoforge.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            MONOFORGE_ROOT, MONOFORGE_APPS_DIR, MONOFORGE_MATERIALS_DIR,
            MONOFORGE_CONTEXT_FILE, MONOFORGE_STORIES_DIR, MONOFORGE_MANIFEST.
        """
        env_map = {
            "apps_dir": "MONOFORGE_APPS_DIR",
            "materials_dir": "MONOFORGE_MATERIALS_DIR",
            "context_file": "MONOFORGE_CONTEXT_FILE",
            "stories_dir": "MONOFORGE_STORIES_DIR",
            "manifest_file": "MONOFORGE_MANIFEST",
        }
        kwargs: dict[str, Any] = {}
        for field_name, var in env_map.items():
            if os.environ.get(var):
                kwargs[field_name] = os.environ[var]

        return cls(root=Path(os.environ.get("MONOFORGE_ROOT", ".")), **kwargs)
