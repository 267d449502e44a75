"""Story documents.

Two kinds of story are produced:

* the *app story* written after ``monoforge add``, describing the generated
  tree and the follow-up work, and
* a *generic story* skeleton created by ``monoforge story``.

Both start with a YAML front matter block (``id``, ``title``, ``app``,
``status``, ``created``).
"""

from __future__ import annotations

import asyncio
import re
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from monoforge.scaffolder.models import AppRequest, Archetype

SHARED_APP = "shared"
DEFAULT_STATUS = "draft"

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")


class StoryTitleError(ValueError):
    """Raised when a story title yields an empty slug."""


class StoryExistsError(FileExistsError):
    """Raised instead of overwriting an existing story file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Story already exists: {path}")


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------

def story_slug(title: str) -> str:
    """``"Add Login Flow!"`` -> ``"add-login-flow"``."""
    slug = _SLUG_INVALID.sub("-", title.lower()).strip("-")
    if not slug:
        raise StoryTitleError(f"Story title {title!r} does not produce a usable id")
    return slug


def app_story_id(app_name: str) -> str:
    return f"add-{app_name}-app"


def story_dir(
    app: str | None,
    apps_dir: str = "apps",
    stories_dir: str = "docs/stories",
) -> Path:
    """Relative directory for a story scoped to *app* (shared stories live at the root)."""
    if not app or app == SHARED_APP:
        return Path(stories_dir)
    return Path(apps_dir) / app / stories_dir


def front_matter(fields: dict[str, Any]) -> str:
    """YAML front matter block, keys in insertion order."""
    body = yaml.safe_dump(fields, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return f"---\n{body}---\n"


# ---------------------------------------------------------------------------
# App story
# ---------------------------------------------------------------------------

def _tree_lines(app_dir: str, files: list[str]) -> list[str]:
    lines = [f"{app_dir}/"]
    for idx, rel in enumerate(files):
        branch = "└──" if idx == len(files) - 1 else "├──"
        lines.append(f"{branch} {rel}")
    return lines


def render_app_story(
    request: AppRequest,
    files: list[str],
    created: date,
    apps_dir: str = "apps",
    context_file: str = "docs/project-context.md",
) -> str:
    """Render the story that accompanies a freshly generated app.

    Args:
        request: The request the app was generated from.
        files: Generated file paths relative to the app root, forward slashes.
        created: Date written to the front matter.
    """
    name = request.name
    label = request.label
    framework = request.framework or "none"
    app_dir = f"{apps_dir}/{name}"
    is_python = request.archetype is Archetype.BACKEND_PYTHON
    if is_python:
        language = "Python"
    else:
        language = "TypeScript" if request.typescript else "JavaScript"
    port = request.options.port
    port_text = str(port) if port is not None else "default"
    run_dev = f"pnpm dev:{name}"

    sections: list[str] = [
        front_matter(
            {
                "id": app_story_id(name),
                "title": f"Add {name} {label}",
                "app": name,
                "status": DEFAULT_STATUS,
                "created": created,
            }
        ).rstrip("\n"),
        "",
        f"# Add {name} {label}",
        "",
        "## Overview",
        "",
        f'Create a new {label} application called "{name}" in the monorepo '
        "with a modular layout.",
        "",
        "**Requirements:**",
        f"- **Type**: {label}",
        f"- **Framework**: {framework}",
        f"- **Port**: {port_text}",
        f"- **Language**: {language}",
        "",
        "## User Story",
        "",
        "As a developer,",
        f'I want to scaffold a new {label} app called "{name}",',
        "So that I can start building features following project conventions.",
        "",
        "## Acceptance Criteria",
        "",
        f"- [x] App created in `{app_dir}/` following `{context_file}`",
        f"- [x] Root package.json updated with `dev:{name}`, `build:{name}`, `test:{name}` scripts",
        "- [x] Health check endpoint scaffolded",
        "- [x] README.md with setup instructions",
        "- [ ] Dependencies installed",
        "- [ ] App starts without errors",
        "- [ ] Tests pass",
        "",
        "## Technical Design",
        "",
        "### Structure",
        "```",
        *_tree_lines(app_dir, files),
        "```",
        "",
        "## Tasks",
        "",
        "**Phase 1: Review**",
        "- [ ] Review generated dependency versions",
        f"- [ ] Align configuration with `{context_file}`",
        "",
        "**Phase 2: Integration**",
        "- [ ] Install dependencies",
        f"- [ ] Verify app starts: `{run_dev}`",
        "",
        "**Phase 3: Validation**",
        f"- [ ] Run tests: `pnpm test:{name}`",
        "- [ ] Call the health endpoint",
        "",
        "## Testing",
        "",
        "- [ ] App starts without errors",
        "- [ ] Health endpoint returns 200 OK",
        "- [ ] All dependencies installed",
        "",
        "## Notes",
        "",
        f"- Follow conventions from `{context_file}`",
        "- Generated dependency versions are pinned; bump them deliberately",
        "",
    ]
    return "\n".join(sections)


# ---------------------------------------------------------------------------
# Generic story
# ---------------------------------------------------------------------------

def render_story(
    title: str,
    created: date,
    app: str | None = None,
    overview: str | None = None,
) -> str:
    """Render a blank story skeleton for *title*."""
    sections = [
        front_matter(
            {
                "id": story_slug(title),
                "title": title,
                "app": app or SHARED_APP,
                "status": DEFAULT_STATUS,
                "created": created,
            }
        ).rstrip("\n"),
        "",
        f"# {title}",
        "",
        "## Overview",
        "",
        overview or "Brief description of what this story accomplishes.",
        "",
        "## User Story",
        "",
        "As a [user role],",
        "I want to [action],",
        "So that [benefit].",
        "",
        "## Acceptance Criteria",
        "",
        "- [ ] Criterion 1",
        "- [ ] Criterion 2",
        "- [ ] Criterion 3",
        "",
        "## Technical Design",
        "",
        "### Approach",
        "",
        "Describe the technical approach here.",
        "",
        "### Implementation Details",
        "",
        "- **Files to create/modify**:",
        "- **Dependencies**:",
        "- **API endpoints** (if applicable):",
        "- **Database changes** (if applicable):",
        "",
        "## Tasks",
        "",
        "- [ ] Task 1: Setup",
        "- [ ] Task 2: Implementation",
        "- [ ] Task 3: Testing",
        "- [ ] Task 4: Documentation",
        "",
        "## Testing",
        "",
        "### Manual Testing",
        "",
        "- [ ] Test case 1",
        "- [ ] Test case 2",
        "",
        "### Automated Testing",
        "",
        "- [ ] Unit tests",
        "- [ ] Integration tests",
        "",
        "## Dependencies",
        "",
        "List any prerequisite stories or external dependencies.",
        "",
        "## Notes",
        "",
        "Additional context, edge cases, or considerations.",
        "",
        "## References",
        "",
        "- Link to PRD",
        "- Link to design",
        "- Link to related stories",
        "",
    ]
    return "\n".join(sections)


def parse_front_matter(text: str) -> dict[str, Any]:
    """Return the front matter of a story document (``{}`` if there is none)."""
    if not text.startswith("---\n"):
        return {}
    end = text.find("\n---\n", 4)
    if end == -1:
        return {}
    data = yaml.safe_load(text[4:end + 1])
    return data if isinstance(data, dict) else {}


async def write_story(path: str | Path, content: str) -> Path:
    """Write a story without overwriting an existing one.

    Raises:
        StoryExistsError: If *path* already exists.
    """
    target = Path(path)

    def _write() -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            with target.open("x", encoding="utf-8", newline="\n") as fh:
                fh.write(content)
        except FileExistsError as exc:
            raise StoryExistsError(target) from exc

    await asyncio.to_thread(_write)
    return target
