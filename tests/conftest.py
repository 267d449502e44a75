"""Shared pytest fixtures for the Monoforge test suite.

Provides reusable fixtures for:
- Temporary monorepo workspaces (config + directory layout)
- Project-materials trees with classified markdown documents
- Ready-made app requests for each implemented archetype
"""

from __future__ import annotations

import json
import textwrap
from datetime import date
from pathlib import Path

import pytest

from monoforge.config import Config
from monoforge.pipeline import Workspace
from monoforge.scaffolder.models import AppRequest


FIXED_DATE = date(2026, 10, 19)


def write_doc(root: Path, rel: str, text: str) -> Path:
    """Write a dedented markdown document under *root*."""
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------

@pytest.fixture
def fixed_date() -> date:
    return FIXED_DATE


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Empty monorepo root with a minimal root ``package.json``."""
    root = tmp_path / "monorepo"
    root.mkdir()
    (root / "package.json").write_text(
        json.dumps(
            {
                "name": "monorepo",
                "private": True,
                "scripts": {"lint": "eslint .", "dev:web": "pnpm --filter web dev"},
            },
            indent=2,
        )
        + "\n",
        encoding="utf-8",
    )
    yield root


@pytest.fixture
def config(workspace_root: Path) -> Config:
    return Config(root=workspace_root)


@pytest.fixture
def workspace(config: Config) -> Workspace:
    return Workspace(config)


@pytest.fixture
def initialised_workspace(workspace: Workspace, config: Config) -> Workspace:
    """Workspace whose project context already exists."""
    config.context_path.parent.mkdir(parents=True, exist_ok=True)
    config.context_path.write_text("# Project Context\n", encoding="utf-8")
    return workspace


# ---------------------------------------------------------------------------
# Project materials
# ---------------------------------------------------------------------------

@pytest.fixture
def materials_root(config: Config) -> Path:
    """Project-materials tree with one document per category plus noise."""
    root = config.materials_path
    write_doc(root, "requirements/prd.md", """
        # Product Requirements

        Teams sign up for a subscription and get an isolated tenant.
        Each tenant has its own dashboard.
    """)
    write_doc(root, "architecture/tech-stack.md", """
        # Tech Stack

        Backend services run on Node with Express. Data lives in Postgres.
    """)
    write_doc(root, "design/ui.md", "# UI\n\nCards and tables.\n")
    write_doc(root, "infrastructure/deploy.md", "# Deploy\n\nContainers on Fly.\n")
    write_doc(root, "notes/misc.md", "# Misc\n\nLoose notes.\n")
    write_doc(root, "README.md", "# How to use this folder\n\npayment wallet react\n")
    write_doc(root, "requirements/EXAMPLE-prd.md", "payment wallet banking\n")
    (root / "requirements" / ".gitkeep").write_text("", encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

@pytest.fixture
def node_request() -> AppRequest:
    return AppRequest.build("billing-api", "backend-node", framework="express")


@pytest.fixture
def python_request() -> AppRequest:
    return AppRequest.build("reports", "backend-python", framework="fastapi")
