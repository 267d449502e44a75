"""Application scaffolding generator.

Takes a validated :class:`AppRequest`, resolves its template descriptor and
materialises the application directory under the apps root.  The order of
operations is fixed:

1. resolve the descriptor (unimplemented archetypes fail here),
2. refuse an existing application directory,
3. render every file in memory,
4. create directories, then write files in create-only mode.

Nothing touches the filesystem before step 4, so steps 1-3 failing leave no
trace.  A failure during step 4 is propagated as-is and the partial tree is
left for the caller to remove.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from .models import AppRequest, GeneratedTree, TemplateDescriptor
from .registry import resolve_descriptor
from .templates import TemplateRenderer
from .validator import AppNameError


class AppExistsError(AppNameError):
    """Raised when the target application directory already exists."""

    def __init__(self, app_root: Path) -> None:
        self.app_root = app_root
        super().__init__(f"App already exists: {app_root}")


def render_descriptor(
    descriptor: TemplateDescriptor, renderer: TemplateRenderer | None = None
) -> dict[str, str]:
    """Render every file of *descriptor* to text.

    Returns:
        Mapping of app-relative path to file content, in descriptor order.
    """
    renderer = renderer or TemplateRenderer()
    return {
        spec.path: renderer.render(spec.template, descriptor.context)
        for spec in descriptor.files
    }


class AppGenerator:
    """Scaffolds one application per :meth:`generate` call.

    Attributes:
        apps_root: Directory holding one subdirectory per application.
        renderer: Template renderer shared across calls.
    """

    def __init__(self, apps_root: str | Path, renderer: TemplateRenderer | None = None) -> None:
        self.apps_root = Path(apps_root)
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self, request: AppRequest) -> GeneratedTree:
        """Generate the application tree for *request*.

        Returns:
            The directories and files written, in creation order.

        Raises:
            UnimplementedArchetypeError: Archetype has no templates.
            AppExistsError: ``<apps_root>/<name>`` already exists.
            OSError: Any filesystem failure while writing.
        """
        descriptor = resolve_descriptor(request)
        app_root = self.apps_root / request.name
        if await asyncio.to_thread(app_root.exists):
            raise AppExistsError(app_root)

        rendered = render_descriptor(descriptor, self.renderer)

        directories = await self._create_directories(app_root, descriptor.directories)

        files: list[Path] = []
        for rel_path, content in rendered.items():
            files.append(await self.renderer.write_file(app_root / rel_path, content))

        return GeneratedTree(app_root=app_root, directories=directories, files=files)

    def plan(self, request: AppRequest) -> TemplateDescriptor:
        """Resolve the descriptor for *request* without writing anything."""
        return resolve_descriptor(request)

    # -- Directory structure -----------------------------------------------

    async def _create_directories(self, app_root: Path, dirs: tuple[str, ...]) -> list[Path]:
        """Create the app root and its directories, parents before children."""
        created: list[Path] = []
        for d in ("", *dirs):
            path = app_root / d if d else app_root
            await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
            created.append(path)
        return created
