"""Tests for the template registry and per-archetype descriptors."""

from __future__ import annotations

import json

import pytest

from monoforge.scaffolder.generator import render_descriptor
from monoforge.scaffolder.models import AppRequest, Archetype
from monoforge.scaffolder.registry import (
    DEFAULT_PORTS,
    NODE_VERSIONS,
    TEMPLATE_REGISTRY,
    UnimplementedArchetypeError,
    backend_node_descriptor,
    backend_python_descriptor,
    resolve_descriptor,
)

pytestmark = pytest.mark.unit


def _paths(descriptor) -> list[str]:
    return [spec.path for spec in descriptor.files]


class TestRegistry:
    def test_covers_every_archetype(self):
        assert set(TEMPLATE_REGISTRY) == set(Archetype)

    @pytest.mark.parametrize("archetype", ["frontend-web", "frontend-mobile"])
    def test_frontends_are_unimplemented(self, archetype):
        with pytest.raises(UnimplementedArchetypeError) as exc_info:
            resolve_descriptor(AppRequest.build("ui", archetype))
        assert exc_info.value.archetype is Archetype(archetype)
        assert "not implemented" in str(exc_info.value)

    def test_unimplemented_is_a_not_implemented_error(self):
        assert issubclass(UnimplementedArchetypeError, NotImplementedError)

    def test_builder_rejects_other_archetype_options(self):
        with pytest.raises(TypeError, match="BackendNodeOptions required"):
            backend_node_descriptor(AppRequest.build("svc", "backend-python"))
        with pytest.raises(TypeError, match="BackendPythonOptions required"):
            backend_python_descriptor(AppRequest.build("api", "backend-node"))


class TestBackendNode:
    def test_typescript_tree(self):
        descriptor = resolve_descriptor(AppRequest.build("api", "backend-node"))
        assert _paths(descriptor) == [
            "package.json",
            "tsconfig.json",
            ".gitignore",
            "README.md",
            "src/index.ts",
            "src/app.ts",
            "src/config/index.ts",
            "src/routes/health.ts",
            "src/controllers/health-controller.ts",
            "src/services/health-service.ts",
            "src/middleware/request-logger.ts",
            "tests/health.test.ts",
        ]
        assert descriptor.directories[0] == "src"
        assert "src/middleware" in descriptor.directories
        assert descriptor.install_command == ("pnpm", "install")

    def test_javascript_tree_has_no_tsconfig(self):
        descriptor = resolve_descriptor(
            AppRequest.build("api", "backend-node", typescript=False)
        )
        paths = _paths(descriptor)
        assert "tsconfig.json" not in paths
        assert "src/index.js" in paths
        assert all(not p.endswith(".ts") for p in paths)

    def test_directories_parents_first(self):
        descriptor = resolve_descriptor(AppRequest.build("api", "backend-node"))
        seen: set[str] = set()
        for d in descriptor.directories:
            parent = d.rsplit("/", 1)[0] if "/" in d else None
            assert parent is None or parent in seen
            seen.add(d)

    @pytest.mark.parametrize("framework", ["express", "fastify", "hono"])
    def test_package_json(self, framework):
        descriptor = resolve_descriptor(
            AppRequest.build("api", "backend-node", framework=framework)
        )
        package = json.loads(render_descriptor(descriptor)["package.json"])
        assert package["name"] == "api"
        assert package["dependencies"][framework] == NODE_VERSIONS[framework]
        assert package["scripts"]["typecheck"] == "tsc --noEmit"
        assert list(package["devDependencies"]) == sorted(package["devDependencies"])

    def test_hono_pulls_node_server(self):
        descriptor = resolve_descriptor(AppRequest.build("api", "backend-node", framework="hono"))
        package = descriptor.context["package_json"]
        assert "@hono/node-server" in package["dependencies"]

    def test_javascript_scripts_have_no_typecheck(self):
        descriptor = resolve_descriptor(
            AppRequest.build("api", "backend-node", typescript=False)
        )
        scripts = descriptor.context["package_json"]["scripts"]
        assert "typecheck" not in scripts
        assert "typescript" not in descriptor.context["package_json"]["devDependencies"]

    def test_port_defaults_and_override(self):
        default = resolve_descriptor(AppRequest.build("api", "backend-node"))
        custom = resolve_descriptor(AppRequest.build("api", "backend-node", port=4100))
        assert default.context["port"] == DEFAULT_PORTS["express"] == 3000
        assert custom.context["port"] == 4100
        assert "4100" in render_descriptor(custom)["src/config/index.ts"]


class TestBackendPython:
    def test_tree(self):
        descriptor = resolve_descriptor(AppRequest.build("svc", "backend-python"))
        assert _paths(descriptor) == [
            "requirements.txt",
            ".gitignore",
            "README.md",
            "src/__init__.py",
            "src/app.py",
            "src/config/__init__.py",
            "src/routes/__init__.py",
            "src/routes/health.py",
            "src/services/__init__.py",
            "src/services/health_service.py",
            "tests/test_health.py",
        ]
        assert descriptor.install_command[-2:] == ("-r", "requirements.txt")

    @pytest.mark.parametrize(
        "framework,marker,port",
        [("flask", "Flask", 5000), ("fastapi", "FastAPI", 8000)],
    )
    def test_framework_specific_content(self, framework, marker, port):
        descriptor = resolve_descriptor(
            AppRequest.build("svc", "backend-python", framework=framework)
        )
        rendered = render_descriptor(descriptor)
        assert marker in rendered["src/app.py"]
        assert framework in rendered["requirements.txt"]
        assert str(port) in rendered["src/config/__init__.py"]

    def test_rendered_python_compiles(self):
        for framework in ("flask", "fastapi"):
            descriptor = resolve_descriptor(
                AppRequest.build("svc", "backend-python", framework=framework)
            )
            for path, content in render_descriptor(descriptor).items():
                if path.endswith(".py"):
                    compile(content, path, "exec")


class TestCustom:
    def test_minimal_skeleton(self):
        descriptor = resolve_descriptor(AppRequest.build("tools", "custom"))
        assert _paths(descriptor) == ["package.json", ".gitignore", "README.md"]
        assert descriptor.directories == ("src", "tests")
        scripts = descriptor.context["package_json"]["scripts"]
        assert set(scripts) == {"dev", "build", "test"}


class TestDeterminism:
    @pytest.mark.parametrize(
        "archetype,options",
        [
            ("backend-node", {"framework": "fastify", "typescript": False}),
            ("backend-node", {"framework": "hono"}),
            ("backend-python", {"framework": "flask", "port": 5050}),
            ("custom", {}),
        ],
    )
    def test_identical_requests_render_identically(self, archetype, options):
        first = render_descriptor(resolve_descriptor(AppRequest.build("app", archetype, **options)))
        second = render_descriptor(resolve_descriptor(AppRequest.build("app", archetype, **options)))
        assert first == second
