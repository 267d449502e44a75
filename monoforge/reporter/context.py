"""Project context document renderer.

Turns an :class:`AnalysisResult` plus the classified document records into
``project-context.md``.  Every section without contributing documents carries
a ``⚠️ **No ...**`` marker line; downstream tooling scans for these.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

from monoforge.analyzer.models import AnalysisResult, DocumentCategory, DocumentRecord
from monoforge.utils import write_text

WARNING_PREFIX = "⚠️ **No "
DEFAULT_SOURCE = "docs/project-materials"
GENERATOR_LABEL = "monoforge init"

_COVERAGE_LABELS: dict[DocumentCategory, str] = {
    DocumentCategory.REQUIREMENTS: "Requirements",
    DocumentCategory.ARCHITECTURE: "Architecture",
    DocumentCategory.DESIGN: "Design",
    DocumentCategory.INFRASTRUCTURE: "Infrastructure",
    DocumentCategory.UNCLASSIFIED: "Unclassified",
}


def warning(subject: str) -> str:
    """Format a missing-documentation marker line."""
    return f"{WARNING_PREFIX}{subject}**"


def _paths(records: list[DocumentRecord], category: DocumentCategory) -> list[str]:
    return [r.display_path for r in records if r.category == category]


def _bullets(items: list[str]) -> list[str]:
    return [f"- {item}" for item in items]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_project_context(
    analysis: AnalysisResult,
    records: list[DocumentRecord],
    generated_on: date,
    source_label: str = DEFAULT_SOURCE,
) -> str:
    """Render the project context markdown.

    Pure: the output depends only on the arguments, so the generation date is
    passed in rather than read from the clock.
    """
    requirements = _paths(records, DocumentCategory.REQUIREMENTS)
    architecture = _paths(records, DocumentCategory.ARCHITECTURE)
    design = _paths(records, DocumentCategory.DESIGN)
    infrastructure = _paths(records, DocumentCategory.INFRASTRUCTURE)

    sections: list[str] = []

    sections.append("# Project Context")
    sections.append("")
    sections.append(f"> Generated: {generated_on.isoformat()}")
    sections.append(f"> Source: User documentation in {source_label}/")
    sections.append(f"> Generator: {GENERATOR_LABEL}")
    sections.append("")
    sections.append("---")
    sections.append("")

    # Overview
    sections.append("## Project Overview")
    sections.append("")
    if requirements:
        sections.append("### Domain")
        sections.append(analysis.domain.value.capitalize())
        sections.append("")
        if analysis.domain_keywords:
            sections.append(f"Matched keywords: {', '.join(analysis.domain_keywords)}")
            sections.append("")
        sections.append("### Documentation Analyzed")
        sections.extend(_bullets(requirements))
        sections.append("")
    else:
        sections.append(warning("requirements documentation provided"))
        sections.append("")
    sections.append("---")
    sections.append("")

    # Technology stack
    sections.append("## Technology Stack")
    sections.append("")
    for dimension, labels in analysis.tech_stack.dimensions().items():
        title = dimension.capitalize()
        if labels:
            sections.append(f"### {title}")
            sections.extend(_bullets(labels))
        else:
            sections.append(warning(f"{title} technology detected"))
        sections.append("")
    if not architecture:
        sections.append(warning("architecture documentation provided"))
        sections.append("")
        sections.append("Please add technology decisions to:")
        sections.append(f"{source_label}/architecture/tech-stack.md")
        sections.append("")
    sections.append("---")
    sections.append("")

    # Architecture patterns
    sections.append("## Architecture Patterns")
    sections.append("")
    if architecture:
        sections.append("Based on architecture documentation in:")
        sections.extend(_bullets(architecture))
    else:
        sections.append(warning("architecture patterns documented"))
    sections.append("")
    sections.append("---")
    sections.append("")

    sections.extend(_CODING_CONVENTIONS)

    # Infrastructure
    sections.append("## Infrastructure & Deployment")
    sections.append("")
    if infrastructure:
        sections.append("Infrastructure decisions documented in:")
        sections.extend(_bullets(infrastructure))
    else:
        sections.append(warning("infrastructure documentation provided"))
        sections.append("")
        sections.append("Consider adding:")
        sections.append("- Database choice and rationale")
        sections.append("- Hosting and deployment strategy")
        sections.append("- CI/CD approach")
    sections.append("")
    sections.append("---")
    sections.append("")

    sections.extend(_DEVELOPMENT_WORKFLOW)

    # Design
    sections.append("## Design System")
    sections.append("")
    if design:
        sections.append("Design specifications documented in:")
        sections.extend(_bullets(design))
    else:
        sections.append(warning("design documentation provided"))
    sections.append("")
    sections.append("---")
    sections.append("")

    # Notes
    sections.append("## Notes")
    sections.append("")
    sections.append("### Documentation Coverage")
    for category, label in _COVERAGE_LABELS.items():
        sections.append(f"- {label}: {analysis.counts.get(category, 0)} file(s)")
    sections.append("")
    sections.append("### Recommendations")
    sections.append("1. Review this context file and add missing information")
    sections.append("2. Update as the project evolves by re-running `monoforge init`")
    sections.append("3. Treat this file as the reference for all generated stories")
    sections.append("")
    sections.append("### Conventions from Template")
    sections.append("This template enforces:")
    sections.append("- kebab-case app naming")
    sections.append("- PNPM workspace monorepo")
    sections.append("- Domain-agnostic structure")
    sections.append("")
    sections.append("---")
    sections.append("")
    sections.append("**This document guides all generated development work.**")
    sections.append("**Update as your project evolves!**")
    sections.append("")

    return "\n".join(sections)


_CODING_CONVENTIONS: tuple[str, ...] = (
    "## Coding Conventions",
    "",
    "### Naming Conventions",
    "- **Files:** kebab-case (enforced by template)",
    "- **Variables:** camelCase (JavaScript/TypeScript), snake_case (Python)",
    "- **Constants:** UPPER_SNAKE_CASE",
    "- **Components:** kebab-case",
    "",
    "### File Structure",
    "- Monorepo with PNPM workspaces",
    "- Apps in `apps/` directory",
    "- Shared packages in `packages/` directory",
    "",
    "### Code Style",
    "- ESLint configuration: See `.eslintrc.json`",
    "- Prettier configuration: See `.prettierrc`",
    "",
    "---",
    "",
)

_DEVELOPMENT_WORKFLOW: tuple[str, ...] = (
    "## Development Workflow",
    "",
    "### Testing Requirements",
    "- Unit tests for all business logic",
    "- Integration tests for API endpoints",
    "- E2E tests for critical user flows",
    "",
    "### Code Review",
    "- All changes via pull requests",
    "",
    "### Documentation",
    "- Update docs/ as features are built",
    "- Maintain README for each app/package",
    "",
    "---",
    "",
)


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------

class ContextReportGenerator:
    """Writes the rendered project context to disk."""

    def __init__(self, output_path: str | Path, source_label: str = DEFAULT_SOURCE) -> None:
        self.output_path = Path(output_path)
        self.source_label = source_label

    async def generate(
        self,
        analysis: AnalysisResult,
        records: list[DocumentRecord],
        generated_on: date | None = None,
    ) -> Path:
        """Render and write the context file, replacing any previous one.

        Returns:
            The path written.
        """
        content = render_project_context(
            analysis,
            records,
            generated_on or date.today(),
            self.source_label,
        )
        return await write_text(self.output_path, content)
