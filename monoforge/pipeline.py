"""Monoforge workspace orchestrator.

Drives the two independent pipelines over one monorepo:

* analyze path -- ``init_project``: Classifier -> Extractor -> Renderer, writes
  ``docs/project-context.md``;
* write path -- ``add_app``: Validator -> Generator -> Manifest Merger, then
  the app story and an optional dependency install.

``create_story`` writes a standalone story skeleton.

Usage::

    workspace = Workspace(Config(root=Path(".")))
    await workspace.init_project()
    await workspace.add_app(AppRequest.build("billing-api", "backend-python"))
"""

from __future__ import annotations

import time
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from monoforge.analyzer import AnalysisResult, analyze_documents, classify_documents
from monoforge.config import Config
from monoforge.reporter import (
    ContextReportGenerator,
    app_story_id,
    render_app_story,
    render_story,
    story_dir,
    story_slug,
    write_story,
)
from monoforge.reporter.story import SHARED_APP
from monoforge.scaffolder import (
    AppGenerator,
    AppRequest,
    GeneratedTree,
    ManifestMerger,
    MergeReport,
    TemplateRenderer,
    list_existing_apps,
)
from monoforge.scaffolder.validator import AppNameError, ensure_valid_app_name, validate_app_name
from monoforge.utils import (
    console,
    display_path,
    format_duration,
    print_success,
    print_warning,
    run_command,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ProjectContextMissingError(FileNotFoundError):
    """Raised by ``add_app`` when ``init`` has not produced a context file yet."""

    def __init__(self, context_path: Path) -> None:
        self.context_path = context_path
        super().__init__(
            f"Project context not found: {context_path}. Run 'monoforge init' first."
        )


class DependencyInstallError(RuntimeError):
    """Raised when the dependency install command exits non-zero."""

    def __init__(self, command: list[str], returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr}" if stderr else ""
        super().__init__(
            f"'{' '.join(command)}' failed with exit code {returncode}{detail}"
        )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class InitResult(BaseModel):
    """Outcome of ``init_project``."""

    context_path: Path
    analysis: AnalysisResult
    files_found: int = Field(default=0, description="Markdown files before exclusions")
    documents: int = Field(default=0, description="Content files analysed")
    duration: float = 0.0


class AddAppResult(BaseModel):
    """Outcome of ``add_app``."""

    request: AppRequest
    tree: GeneratedTree
    manifest: MergeReport
    story_path: Optional[Path] = None
    installed: bool = False
    duration: float = 0.0


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------


class Workspace:
    """One monorepo, addressed through its :class:`Config`.

    Attributes:
        config: Workspace configuration (paths are relative to ``config.root``).
        generator: Scaffolding generator for ``config.apps_path``.
        manifest: Merger for the shared root manifest.
        context_writer: Writer for the project context document.
    """

    def __init__(self, config: Config | None = None, renderer: TemplateRenderer | None = None) -> None:
        self.config = config or Config()
        self.generator = AppGenerator(self.config.apps_path, renderer)
        self.manifest = ManifestMerger(self.config.manifest_path, self.config.apps_dir)
        self.context_writer = ContextReportGenerator(
            self.config.context_path, self.config.materials_dir
        )

    # ------------------------------------------------------------------
    # Analyze path
    # ------------------------------------------------------------------

    async def init_project(self, generated_on: date | None = None) -> InitResult:
        """Analyse the project materials and (re)write the context document.

        An empty document root is not an error: the context is still written,
        carrying a warning in every section.

        Raises:
            DocumentRootNotFoundError: The materials directory does not exist.
        """
        start = time.monotonic()
        classification = await classify_documents(
            self.config.materials_path, display_base=self.config.root
        )
        if classification.is_empty:
            print_warning(
                f"No project documentation found in {self.config.materials_dir}/; "
                "the context will only contain warnings"
            )

        analysis = analyze_documents(classification)
        path = await self.context_writer.generate(
            analysis, classification.records, generated_on
        )
        elapsed = time.monotonic() - start
        print_success(f"Generated {self.config.context_file} in {format_duration(elapsed)}")

        return InitResult(
            context_path=path,
            analysis=analysis,
            files_found=len(classification.all_files),
            documents=len(classification.records),
            duration=elapsed,
        )

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    async def add_app(
        self,
        request: AppRequest,
        *,
        require_context: bool = True,
        install: bool = False,
        created: date | None = None,
    ) -> AddAppResult:
        """Scaffold an app, register its scripts and write its story.

        Raises:
            ProjectContextMissingError: *require_context* is set and the
                context document does not exist.
            AppNameError: The name collides with an existing app.
            UnimplementedArchetypeError: The archetype has no templates.
            ManifestFormatError: The root manifest is malformed.
            DependencyInstallError: *install* is set and the install failed.
        """
        start = time.monotonic()
        if require_context and not self.config.context_path.exists():
            raise ProjectContextMissingError(self.config.context_path)

        ensure_valid_app_name(request.name, list_existing_apps(self.config.apps_path))
        merged, report = await self.manifest.prepare(request)

        tree = await self.generator.generate(request)
        print_success(
            f"Created {display_path(tree.app_root, self.config.root)} "
            f"({len(tree.files)} files)"
        )

        await self.manifest.write(merged, report)
        if report.added:
            console.print(f"  [green]+[/green] scripts: {', '.join(report.added)}")
        if report.updated:
            console.print(f"  [yellow]~[/yellow] scripts: {', '.join(report.updated)}")

        story_path = await self._write_app_story(request, tree, created or date.today())

        installed = False
        if install:
            await self._install(request, tree.app_root)
            installed = True

        return AddAppResult(
            request=request,
            tree=tree,
            manifest=report,
            story_path=story_path,
            installed=installed,
            duration=time.monotonic() - start,
        )

    async def _write_app_story(
        self, request: AppRequest, tree: GeneratedTree, created: date
    ) -> Optional[Path]:
        path = (
            self.config.root
            / story_dir(None, self.config.apps_dir, self.config.stories_dir)
            / f"{app_story_id(request.name)}.md"
        )
        if path.exists():
            print_warning(f"Keeping existing story {display_path(path, self.config.root)}")
            return None

        files = [display_path(f, tree.app_root) for f in tree.files]
        content = render_app_story(
            request,
            files,
            created,
            apps_dir=self.config.apps_dir,
            context_file=self.config.context_file,
        )
        await write_story(path, content)
        print_success(f"Story created: {display_path(path, self.config.root)}")
        return path

    async def _install(self, request: AppRequest, app_root: Path) -> None:
        command = list(self.generator.plan(request).install_command)
        console.print(f"[cyan]Installing dependencies: {' '.join(command)}[/cyan]")
        returncode, _stdout, stderr = await run_command(command, cwd=app_root)
        if returncode != 0:
            raise DependencyInstallError(command, returncode, stderr)
        print_success("Dependencies installed")

    # ------------------------------------------------------------------
    # Stories
    # ------------------------------------------------------------------

    async def create_story(
        self,
        title: str,
        app: str | None = None,
        overview: str | None = None,
        created: date | None = None,
    ) -> Path:
        """Write a blank story for *title*, scoped to *app* or shared.

        Raises:
            StoryTitleError: The title has no letters or digits.
            AppNameError: *app* is not a valid app name.
            StoryExistsError: A story with the same id already exists.
        """
        slug = story_slug(title)
        if app and app != SHARED_APP:
            check = validate_app_name(app)
            if not check.valid:
                raise AppNameError(check.reason)

        path = (
            self.config.root
            / story_dir(app, self.config.apps_dir, self.config.stories_dir)
            / f"{slug}.md"
        )
        content = render_story(title, created or date.today(), app=app, overview=overview)
        await write_story(path, content)
        print_success(f"Story created: {display_path(path, self.config.root)}")
        return path
