"""Template registry: one descriptor builder per archetype.

Each builder is a pure function from an :class:`AppRequest` to a
:class:`TemplateDescriptor`.  ``TEMPLATE_REGISTRY`` is keyed by every
:class:`Archetype` member; archetypes without templates map to a builder
that raises :class:`UnimplementedArchetypeError`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from .models import (
    AppRequest,
    Archetype,
    BackendNodeOptions,
    BackendPythonOptions,
    FileSpec,
    TemplateDescriptor,
)

_O = TypeVar("_O", BackendNodeOptions, BackendPythonOptions)


class UnimplementedArchetypeError(NotImplementedError):
    """Raised for archetypes that are recognised but have no templates."""

    def __init__(self, archetype: Archetype) -> None:
        self.archetype = archetype
        super().__init__(
            f"Archetype '{archetype.value}' is not implemented yet; nothing was generated"
        )


DescriptorBuilder = Callable[[AppRequest], TemplateDescriptor]


# ---------------------------------------------------------------------------
# Fixed versions and ports
# ---------------------------------------------------------------------------

NODE_VERSIONS: dict[str, str] = {
    "express": "^4.21.2",
    "fastify": "^5.2.1",
    "hono": "^4.6.16",
    "@hono/node-server": "^1.13.7",
    "@types/express": "^5.0.0",
    "@types/node": "^22.10.5",
    "typescript": "^5.7.3",
    "tsx": "^4.19.2",
    "vitest": "^2.1.8",
}

PYTHON_REQUIREMENTS: dict[str, list[str]] = {
    "flask": ["flask==3.1.0", "pytest==8.3.4"],
    "fastapi": ["fastapi==0.115.6", "uvicorn==0.34.0", "httpx==0.28.1", "pytest==8.3.4"],
}

DEFAULT_PORTS: dict[str, int] = {
    "express": 3000,
    "fastify": 3000,
    "hono": 3000,
    "flask": 5000,
    "fastapi": 8000,
}

_NODE_FRAMEWORK_DEPS: dict[str, list[str]] = {
    "express": ["express"],
    "fastify": ["fastify"],
    "hono": ["hono", "@hono/node-server"],
}

_NODE_TYPE_DEPS: dict[str, list[str]] = {
    "express": ["@types/express"],
    "fastify": [],
    "hono": [],
}

_NODE_DIRECTORIES = (
    "src",
    "src/routes",
    "src/controllers",
    "src/services",
    "src/models",
    "src/middleware",
    "src/utils",
    "src/config",
    "tests",
)

_PYTHON_DIRECTORIES = (
    "src",
    "src/routes",
    "src/services",
    "src/models",
    "src/config",
    "tests",
)


# ---------------------------------------------------------------------------
# Backend: Node.js
# ---------------------------------------------------------------------------

def _node_package_json(name: str, framework: str, typescript: bool) -> dict[str, Any]:
    if typescript:
        scripts = {
            "dev": "tsx watch src/index.ts",
            "build": "tsc -p tsconfig.json",
            "start": "node dist/index.js",
            "test": "vitest run",
            "typecheck": "tsc --noEmit",
        }
    else:
        scripts = {
            "dev": "node --watch src/index.js",
            "build": "node --check src/index.js",
            "start": "node src/index.js",
            "test": "vitest run",
        }

    dev_deps = ["vitest"]
    if typescript:
        dev_deps += ["typescript", "tsx", "@types/node", *_NODE_TYPE_DEPS[framework]]

    return {
        "name": name,
        "version": "0.1.0",
        "private": True,
        "type": "module",
        "scripts": scripts,
        "dependencies": {dep: NODE_VERSIONS[dep] for dep in _NODE_FRAMEWORK_DEPS[framework]},
        "devDependencies": {dep: NODE_VERSIONS[dep] for dep in sorted(dev_deps)},
    }


def _options(request: AppRequest, expected: type[_O]) -> _O:
    if not isinstance(request.options, expected):
        raise TypeError(
            f"{expected.__name__} required, got {type(request.options).__name__}"
        )
    return request.options


def backend_node_descriptor(request: AppRequest) -> TemplateDescriptor:
    """Node.js service with a health endpoint and a modular ``src/`` layout."""
    options = _options(request, BackendNodeOptions)
    framework = options.framework
    ext = "ts" if options.typescript else "js"
    fw = f"backend-node/frameworks/{framework}"

    files = [
        FileSpec(path="package.json", template="shared/package.json.j2"),
    ]
    if options.typescript:
        files.append(FileSpec(path="tsconfig.json", template="backend-node/tsconfig.json.j2"))
    files += [
        FileSpec(path=".gitignore", template="backend-node/gitignore.j2"),
        FileSpec(path="README.md", template="backend-node/README.md.j2"),
        FileSpec(path=f"src/index.{ext}", template=f"{fw}/index.j2"),
        FileSpec(path=f"src/app.{ext}", template=f"{fw}/app.j2"),
        FileSpec(path=f"src/config/index.{ext}", template="backend-node/src/config.j2"),
        FileSpec(path=f"src/routes/health.{ext}", template=f"{fw}/health-route.j2"),
        FileSpec(
            path=f"src/controllers/health-controller.{ext}",
            template="backend-node/src/health-controller.j2",
        ),
        FileSpec(
            path=f"src/services/health-service.{ext}",
            template="backend-node/src/health-service.j2",
        ),
        FileSpec(path=f"src/middleware/request-logger.{ext}", template=f"{fw}/request-logger.j2"),
        FileSpec(path=f"tests/health.test.{ext}", template="backend-node/tests/health.test.j2"),
    ]

    context = {
        "app_name": request.name,
        "label": request.label,
        "framework": framework,
        "typescript": options.typescript,
        "ext": ext,
        "port": options.port or DEFAULT_PORTS[framework],
        "package_json": _node_package_json(request.name, framework, options.typescript),
    }
    return TemplateDescriptor(
        archetype=Archetype.BACKEND_NODE,
        directories=_NODE_DIRECTORIES,
        files=tuple(files),
        context=context,
        install_command=("pnpm", "install"),
    )


# ---------------------------------------------------------------------------
# Backend: Python
# ---------------------------------------------------------------------------

def backend_python_descriptor(request: AppRequest) -> TemplateDescriptor:
    """Python service (Flask or FastAPI) with a health endpoint."""
    options = _options(request, BackendPythonOptions)
    framework = options.framework
    fw = f"backend-python/frameworks/{framework}"

    files = (
        FileSpec(path="requirements.txt", template="backend-python/requirements.txt.j2"),
        FileSpec(path=".gitignore", template="backend-python/gitignore.j2"),
        FileSpec(path="README.md", template="backend-python/README.md.j2"),
        FileSpec(path="src/__init__.py", template="backend-python/src/package_init.py.j2"),
        FileSpec(path="src/app.py", template=f"{fw}/app.py.j2"),
        FileSpec(path="src/config/__init__.py", template="backend-python/src/config.py.j2"),
        FileSpec(path="src/routes/__init__.py", template="backend-python/src/package_init.py.j2"),
        FileSpec(path="src/routes/health.py", template=f"{fw}/health.py.j2"),
        FileSpec(path="src/services/__init__.py", template="backend-python/src/package_init.py.j2"),
        FileSpec(
            path="src/services/health_service.py",
            template="backend-python/src/health_service.py.j2",
        ),
        FileSpec(path="tests/test_health.py", template=f"{fw}/test_health.py.j2"),
    )

    context = {
        "app_name": request.name,
        "label": request.label,
        "framework": framework,
        "port": options.port or DEFAULT_PORTS[framework],
        "requirements": PYTHON_REQUIREMENTS[framework],
    }
    return TemplateDescriptor(
        archetype=Archetype.BACKEND_PYTHON,
        directories=_PYTHON_DIRECTORIES,
        files=files,
        context=context,
        install_command=("python", "-m", "pip", "install", "-r", "requirements.txt"),
    )


# ---------------------------------------------------------------------------
# Custom
# ---------------------------------------------------------------------------

def custom_descriptor(request: AppRequest) -> TemplateDescriptor:
    """Language-neutral skeleton with placeholder scripts."""
    placeholder = "echo \"No {verb} step configured for {name}\""
    package_json = {
        "name": request.name,
        "version": "0.1.0",
        "private": True,
        "scripts": {
            verb: placeholder.format(verb=verb, name=request.name)
            for verb in ("dev", "build", "test")
        },
    }
    files = (
        FileSpec(path="package.json", template="shared/package.json.j2"),
        FileSpec(path=".gitignore", template="custom/gitignore.j2"),
        FileSpec(path="README.md", template="custom/README.md.j2"),
    )
    context = {
        "app_name": request.name,
        "label": request.label,
        "port": request.options.port,
        "package_json": package_json,
    }
    return TemplateDescriptor(
        archetype=Archetype.CUSTOM,
        directories=("src", "tests"),
        files=files,
        context=context,
        install_command=("pnpm", "install"),
    )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def _unimplemented(archetype: Archetype) -> DescriptorBuilder:
    def _builder(request: AppRequest) -> TemplateDescriptor:
        raise UnimplementedArchetypeError(archetype)

    return _builder


TEMPLATE_REGISTRY: dict[Archetype, DescriptorBuilder] = {
    Archetype.BACKEND_NODE: backend_node_descriptor,
    Archetype.BACKEND_PYTHON: backend_python_descriptor,
    Archetype.FRONTEND_WEB: _unimplemented(Archetype.FRONTEND_WEB),
    Archetype.FRONTEND_MOBILE: _unimplemented(Archetype.FRONTEND_MOBILE),
    Archetype.CUSTOM: custom_descriptor,
}


def resolve_descriptor(request: AppRequest) -> TemplateDescriptor:
    """Return the descriptor for *request*.

    Raises:
        UnimplementedArchetypeError: For archetypes without templates.
    """
    return TEMPLATE_REGISTRY[request.archetype](request)
