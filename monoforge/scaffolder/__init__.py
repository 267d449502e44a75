"""Monoforge scaffolder -- generates application trees inside the monorepo.

Quick usage::

    from monoforge.scaffolder import AppGenerator, AppRequest, ManifestMerger

    request = AppRequest.build("billing-api", "backend-node", framework="fastify")
    tree = await AppGenerator("apps").generate(request)
    report = await ManifestMerger("package.json").merge(request)
"""

from monoforge.scaffolder.generator import AppExistsError, AppGenerator, render_descriptor
from monoforge.scaffolder.manifest import (
    ManifestFormatError,
    ManifestMerger,
    MergeReport,
    merge_scripts,
    script_entries,
)
from monoforge.scaffolder.models import (
    AppRequest,
    Archetype,
    GeneratedTree,
    TemplateDescriptor,
)
from monoforge.scaffolder.registry import (
    TEMPLATE_REGISTRY,
    UnimplementedArchetypeError,
    resolve_descriptor,
)
from monoforge.scaffolder.templates import TemplateRenderer
from monoforge.scaffolder.validator import (
    AppNameError,
    check_name_available,
    list_existing_apps,
    validate_app_name,
)

__all__ = [
    "AppExistsError",
    "AppGenerator",
    "AppNameError",
    "AppRequest",
    "Archetype",
    "GeneratedTree",
    "ManifestFormatError",
    "ManifestMerger",
    "MergeReport",
    "TEMPLATE_REGISTRY",
    "TemplateDescriptor",
    "TemplateRenderer",
    "UnimplementedArchetypeError",
    "check_name_available",
    "list_existing_apps",
    "merge_scripts",
    "render_descriptor",
    "resolve_descriptor",
    "script_entries",
    "validate_app_name",
]
