"""Command-line entry point.

Usage::

    monoforge init
    monoforge add --type backend-node --name billing-api --framework fastify
    monoforge add --type backend-python --name reports --framework fastapi --port 8100
    monoforge story --title "Add login flow" --app web
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from monoforge import __version__
from monoforge.analyzer import DocumentRootNotFoundError
from monoforge.config import Config
from monoforge.pipeline import DependencyInstallError, ProjectContextMissingError, Workspace
from monoforge.reporter import StoryExistsError, StoryTitleError
from monoforge.scaffolder import (
    AppNameError,
    AppRequest,
    Archetype,
    ManifestFormatError,
    UnimplementedArchetypeError,
)
from monoforge.utils import (
    console,
    display_path,
    format_duration,
    print_banner,
    print_error,
    print_summary_table,
)

# Failures reported as a one-line error with exit code 1.
HANDLED_ERRORS: tuple[type[BaseException], ...] = (
    AppNameError,
    UnimplementedArchetypeError,
    ManifestFormatError,
    DocumentRootNotFoundError,
    ProjectContextMissingError,
    DependencyInstallError,
    StoryTitleError,
    StoryExistsError,
    ValidationError,
    OSError,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monoforge",
        description="Monorepo app scaffolding and project-context synthesis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  monoforge init\n"
            "  monoforge add --type backend-node --name billing-api\n"
            "  monoforge story --title 'Add login flow' --app web\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--root",
        default=None,
        help="Monorepo root (default: $MONOFORGE_ROOT or the current directory)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file saved by Config.save()",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Analyse project materials and write the project context")

    add = sub.add_parser("add", help="Scaffold a new app")
    add.add_argument(
        "--type",
        dest="archetype",
        required=True,
        choices=[a.value for a in Archetype],
        help="App archetype",
    )
    add.add_argument("--name", required=True, help="Kebab-case app name")
    add.add_argument("--framework", default=None, help="Framework choice for the archetype")
    add.add_argument("--variant", default=None, help="Mobile variant (frontend-mobile only)")
    add.add_argument("--port", type=int, default=None, help="Dev server port (default: per framework)")
    add.add_argument(
        "--javascript",
        action="store_true",
        help="Generate plain JavaScript instead of TypeScript",
    )
    add.add_argument("--install", action="store_true", help="Install dependencies afterwards")
    add.add_argument(
        "--skip-context-check",
        action="store_true",
        help="Do not require docs/project-context.md to exist",
    )

    story = sub.add_parser("story", help="Create a story document")
    story.add_argument("--title", required=True, help="Story title")
    story.add_argument("--app", default=None, help="App scope (default: shared)")
    story.add_argument("--overview", default=None, help="Short overview paragraph")

    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Resolve configuration: ``--config`` file, else environment; ``--root`` wins."""
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    if args.root:
        config = config.model_copy(update={"root": Path(args.root)})
    return config


def request_from_args(args: argparse.Namespace) -> AppRequest:
    return AppRequest.build(
        args.name,
        args.archetype,
        framework=args.framework,
        variant=args.variant,
        port=args.port,
        typescript=False if args.javascript else None,
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def _cmd_init(workspace: Workspace, args: argparse.Namespace) -> None:
    print_banner("PROJECT INITIALIZATION")
    result = await workspace.init_project()
    counts = result.analysis.counts
    stack = result.analysis.tech_stack.dimensions()
    summary = {
        "Domain": result.analysis.domain.value,
        **{category.value.capitalize(): f"{n} file(s)" for category, n in counts.items()},
        **{dim.capitalize(): ", ".join(labels) or "-" for dim, labels in stack.items()},
        "Output": display_path(result.context_path, workspace.config.root),
    }
    print_summary_table(summary, title="Project Context")


async def _cmd_add(workspace: Workspace, args: argparse.Namespace) -> None:
    request = request_from_args(args)
    print_banner(f"ADD {request.label.upper()}: {request.name}")
    result = await workspace.add_app(
        request,
        require_context=not args.skip_context_check,
        install=args.install,
    )
    root = workspace.config.root
    summary = {
        "App": display_path(result.tree.app_root, root),
        "Archetype": request.archetype.value,
        "Framework": request.framework or "-",
        "Files": str(len(result.tree.files)),
        "Scripts added": ", ".join(result.manifest.added) or "-",
        "Story": display_path(result.story_path, root) if result.story_path else "-",
        "Installed": "yes" if result.installed else "no",
        "Duration": format_duration(result.duration),
    }
    print_summary_table(summary, title="New App")
    if not result.installed:
        console.print(f"Next: install dependencies, then run [bold]pnpm dev:{request.name}[/bold]")


async def _cmd_story(workspace: Workspace, args: argparse.Namespace) -> None:
    await workspace.create_story(args.title, app=args.app, overview=args.overview)


_COMMANDS = {
    "init": _cmd_init,
    "add": _cmd_add,
    "story": _cmd_story,
}


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``monoforge``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        workspace = Workspace(load_config(args))
        asyncio.run(_COMMANDS[args.command](workspace, args))
    except HANDLED_ERRORS as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
