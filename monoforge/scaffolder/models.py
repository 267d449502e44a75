"""Pydantic v2 models for the Monoforge scaffolder.

``AppRequest`` carries a tagged variant of per-archetype options: the
``archetype`` literal on each options model is the discriminator, so every
request resolves to exactly one options type and the template registry can
dispatch on it exhaustively.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .validator import validate_app_name


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Archetype(str, Enum):
    """Application kinds that can be requested."""
    BACKEND_NODE = "backend-node"
    BACKEND_PYTHON = "backend-python"
    FRONTEND_WEB = "frontend-web"
    FRONTEND_MOBILE = "frontend-mobile"
    CUSTOM = "custom"


ARCHETYPE_LABELS: dict[Archetype, str] = {
    Archetype.BACKEND_NODE: "Node.js API",
    Archetype.BACKEND_PYTHON: "Python API",
    Archetype.FRONTEND_WEB: "React Web",
    Archetype.FRONTEND_MOBILE: "React Native Mobile",
    Archetype.CUSTOM: "Custom",
}


# ---------------------------------------------------------------------------
# Options variants
# ---------------------------------------------------------------------------

_Port = Optional[Annotated[int, Field(ge=1, le=65535)]]


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    port: _Port = Field(default=None, description="Listen port; None means the archetype default")


class BackendNodeOptions(_Options):
    """Node.js HTTP service."""
    archetype: Literal["backend-node"] = "backend-node"
    framework: Literal["express", "fastify", "hono"] = "express"
    typescript: bool = True


class BackendPythonOptions(_Options):
    """Python HTTP service."""
    archetype: Literal["backend-python"] = "backend-python"
    framework: Literal["flask", "fastapi"] = "flask"


class FrontendWebOptions(_Options):
    """Browser-rendered React frontend."""
    archetype: Literal["frontend-web"] = "frontend-web"
    framework: Literal["vite", "nextjs", "cra"] = "nextjs"
    typescript: bool = True


class FrontendMobileOptions(_Options):
    """React Native mobile frontend."""
    archetype: Literal["frontend-mobile"] = "frontend-mobile"
    variant: Literal["bare", "expo", "expo-router"] = "expo"


class CustomOptions(_Options):
    """Language-neutral skeleton."""
    archetype: Literal["custom"] = "custom"


AppOptions = Annotated[
    Union[
        BackendNodeOptions,
        BackendPythonOptions,
        FrontendWebOptions,
        FrontendMobileOptions,
        CustomOptions,
    ],
    Field(discriminator="archetype"),
]


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class AppRequest(BaseModel):
    """A validated, immutable request to scaffold one application."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Kebab-case application name")
    options: AppOptions

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        check = validate_app_name(value)
        if not check.valid:
            raise ValueError(check.reason)
        return value

    @property
    def archetype(self) -> Archetype:
        return Archetype(self.options.archetype)

    @property
    def label(self) -> str:
        """Human-readable archetype label, e.g. ``'Node.js API'``."""
        return ARCHETYPE_LABELS[self.archetype]

    @property
    def framework(self) -> str:
        """Framework or variant choice, empty for archetypes without one."""
        return getattr(self.options, "framework", None) or getattr(self.options, "variant", "")

    @property
    def typescript(self) -> bool:
        """Whether the app is generated in a typed language mode."""
        return bool(getattr(self.options, "typescript", False))

    @classmethod
    def build(cls, name: str, archetype: Archetype | str, **options: Any) -> "AppRequest":
        """Construct a request from flat parameters.

        ``None`` option values are dropped so that model defaults apply.

        Example::

            AppRequest.build("api", "backend-node", framework="hono", typescript=False)
        """
        payload = {k: v for k, v in options.items() if v is not None}
        payload["archetype"] = Archetype(archetype).value
        return cls.model_validate({"name": name, "options": payload})


# ---------------------------------------------------------------------------
# Template descriptor & generated tree
# ---------------------------------------------------------------------------

class FileSpec(BaseModel):
    """One file of a descriptor: where it goes and which template produces it."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path relative to the app root, forward slashes")
    template: str = Field(..., description="Template name relative to the template root")


class TemplateDescriptor(BaseModel):
    """Ordered directories and files for one archetype applied to one request."""

    model_config = ConfigDict(frozen=True)

    archetype: Archetype
    directories: tuple[str, ...] = Field(
        default=(), description="Directories to create, parents before children"
    )
    files: tuple[FileSpec, ...] = Field(default=(), description="Files to write, in order")
    context: dict[str, Any] = Field(
        default_factory=dict, description="Template variables shared by every file"
    )
    install_command: tuple[str, ...] = Field(
        default=(), description="Dependency install command, run from the app root"
    )


class GeneratedTree(BaseModel):
    """Result of a successful generation run."""

    app_root: Path
    directories: list[Path] = Field(default_factory=list)
    files: list[Path] = Field(default_factory=list)

    @property
    def paths(self) -> list[Path]:
        """Every path written, directories first."""
        return [*self.directories, *self.files]
