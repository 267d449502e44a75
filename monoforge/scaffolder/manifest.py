"""Shared root manifest merging.

The root ``package.json`` carries one ``<verb>:<app>`` script per generated
app.  Merging is modelled as a read-modify-write transaction around a pure
upsert:

* keys already present keep their position,
* keys owned by the app are overwritten in place,
* new keys are appended in verb order.

Running the merge twice for the same app and archetype therefore leaves the
manifest unchanged.
"""

from __future__ import annotations

import asyncio
import copy
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from monoforge.utils import load_json, save_json

from .models import AppRequest, Archetype
from .registry import DEFAULT_PORTS

VERB_ORDER = ("dev", "build", "test", "typecheck")


class ManifestFormatError(ValueError):
    """Raised when the manifest is not a JSON object with an object ``scripts``."""


class MergeReport(BaseModel):
    """What a merge did to the ``scripts`` table."""

    added: list[str] = Field(default_factory=list)
    updated: list[str] = Field(default_factory=list)
    unchanged: list[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.updated)


# ---------------------------------------------------------------------------
# Script entries
# ---------------------------------------------------------------------------

def script_entries(request: AppRequest, apps_dir: str = "apps") -> dict[str, str]:
    """Return the ``<verb>:<name>`` scripts for *request*, in verb order.

    Node and custom apps run through ``pnpm --filter``; a typecheck entry is
    only produced for TypeScript Node apps.  Python apps run from their own
    directory.
    """
    name = request.name
    archetype = request.archetype

    if archetype is Archetype.BACKEND_PYTHON:
        cd = f"cd {apps_dir}/{name} &&"
        port = request.options.port or DEFAULT_PORTS[request.framework]
        if request.framework == "fastapi":
            dev = f"{cd} uvicorn src.app:app --reload --port {port}"
        else:
            dev = f"{cd} flask --app src.app run --debug --port {port}"
        commands = {
            "dev": dev,
            "build": f"{cd} python -m compileall -q src",
            "test": f"{cd} python -m pytest",
        }
    else:
        verbs = ["dev", "build", "test"]
        if archetype is Archetype.BACKEND_NODE and request.typescript:
            verbs.append("typecheck")
        commands = {verb: f"pnpm --filter {name} {verb}" for verb in verbs}

    return {f"{verb}:{name}": commands[verb] for verb in VERB_ORDER if verb in commands}


# ---------------------------------------------------------------------------
# Pure merge
# ---------------------------------------------------------------------------

def merge_scripts(
    manifest: dict[str, Any], entries: dict[str, str]
) -> tuple[dict[str, Any], MergeReport]:
    """Upsert *entries* into ``manifest["scripts"]``.

    The input is not mutated.  All other keys, and the order of existing
    scripts, are preserved.

    Raises:
        ManifestFormatError: If *manifest* or its ``scripts`` is not a dict.
    """
    if not isinstance(manifest, dict):
        raise ManifestFormatError(
            f"Manifest root must be a JSON object, got {type(manifest).__name__}"
        )
    scripts = manifest.get("scripts", {})
    if not isinstance(scripts, dict):
        raise ManifestFormatError(
            f"Manifest 'scripts' must be a JSON object, got {type(scripts).__name__}"
        )

    merged = copy.deepcopy(manifest)
    new_scripts = dict(scripts)
    report = MergeReport()
    for key, command in entries.items():
        if key not in new_scripts:
            report.added.append(key)
        elif new_scripts[key] != command:
            report.updated.append(key)
        else:
            report.unchanged.append(key)
        new_scripts[key] = command

    merged["scripts"] = new_scripts
    return merged, report


# ---------------------------------------------------------------------------
# Read-modify-write
# ---------------------------------------------------------------------------

class ManifestMerger:
    """Applies :func:`merge_scripts` to the manifest file on disk.

    :meth:`prepare` reads and validates without writing, so callers can
    reject a malformed manifest before touching anything else.
    """

    def __init__(self, manifest_path: str | Path, apps_dir: str = "apps") -> None:
        self.manifest_path = Path(manifest_path)
        self.apps_dir = apps_dir

    async def read(self) -> dict[str, Any]:
        """Load the manifest; a missing file reads as an empty object.

        Raises:
            ManifestFormatError: If the file is not valid JSON.
        """
        if not await asyncio.to_thread(self.manifest_path.exists):
            return {}
        try:
            return await asyncio.to_thread(load_json, self.manifest_path)
        except json.JSONDecodeError as exc:
            raise ManifestFormatError(
                f"{self.manifest_path.name} is not valid JSON: {exc}"
            ) from exc

    async def prepare(self, request: AppRequest) -> tuple[dict[str, Any], MergeReport]:
        """Compute the merged manifest for *request* without writing it."""
        manifest = await self.read()
        return merge_scripts(manifest, script_entries(request, self.apps_dir))

    async def write(self, merged: dict[str, Any], report: MergeReport) -> None:
        """Persist a prepared merge; skipped when nothing changed."""
        if report.changed or not self.manifest_path.exists():
            await save_json(merged, self.manifest_path)

    async def merge(self, request: AppRequest) -> MergeReport:
        """Add (or refresh) the scripts for *request* and write the manifest back.

        The file is only rewritten when something changed.
        """
        merged, report = await self.prepare(request)
        await self.write(merged, report)
        return report
