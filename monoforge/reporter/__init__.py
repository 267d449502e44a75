"""Monoforge reporter -- project context and story documents."""

from monoforge.reporter.context import (
    WARNING_PREFIX,
    ContextReportGenerator,
    render_project_context,
)
from monoforge.reporter.story import (
    StoryExistsError,
    StoryTitleError,
    app_story_id,
    parse_front_matter,
    render_app_story,
    render_story,
    story_dir,
    story_slug,
    write_story,
)

__all__ = [
    "ContextReportGenerator",
    "StoryExistsError",
    "StoryTitleError",
    "WARNING_PREFIX",
    "app_story_id",
    "parse_front_matter",
    "render_app_story",
    "render_project_context",
    "render_story",
    "story_dir",
    "story_slug",
    "write_story",
]
