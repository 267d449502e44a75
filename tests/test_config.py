"""Unit tests for the workspace Config model (monoforge.config).

Tests cover:
- Defaults and derived paths
- save/load round-trip
- from_env overrides
- Field validation
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from monoforge.config import Config


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.root == Path(".")
        assert config.apps_dir == "apps"
        assert config.materials_dir == "docs/project-materials"
        assert config.context_file == "docs/project-context.md"
        assert config.stories_dir == "docs/stories"
        assert config.manifest_file == "package.json"

    @pytest.mark.unit
    def test_derived_paths(self, tmp_path: Path):
        config = Config(root=tmp_path)
        assert config.apps_path == tmp_path / "apps"
        assert config.materials_path == tmp_path / "docs" / "project-materials"
        assert config.context_path == tmp_path / "docs" / "project-context.md"
        assert config.stories_path == tmp_path / "docs" / "stories"
        assert config.manifest_path == tmp_path / "package.json"
        assert config.app_path("api") == tmp_path / "apps" / "api"

    @pytest.mark.unit
    def test_empty_directory_rejected(self):
        with pytest.raises(ValidationError):
            Config(apps_dir="")


class TestConfigSerialisation:
    @pytest.mark.unit
    def test_save_default_location(self, tmp_path: Path):
        config = Config(root=tmp_path, apps_dir="services")
        path = config.save()
        assert path == tmp_path / "monoforge.json"
        assert json.loads(path.read_text(encoding="utf-8"))["apps_dir"] == "services"

    @pytest.mark.unit
    def test_round_trip(self, tmp_path: Path):
        original = Config(root=tmp_path, stories_dir="stories", manifest_file="root.json")
        loaded = Config.load(original.save(tmp_path / "conf" / "mf.json"))
        assert loaded == original


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_no_variables(self):
        with patch.dict("os.environ", {}, clear=True):
            assert Config.from_env() == Config()

    @pytest.mark.unit
    def test_overrides(self, tmp_path: Path):
        env = {
            "MONOFORGE_ROOT": str(tmp_path),
            "MONOFORGE_APPS_DIR": "services",
            "MONOFORGE_MATERIALS_DIR": "materials",
            "MONOFORGE_CONTEXT_FILE": "CONTEXT.md",
            "MONOFORGE_STORIES_DIR": "stories",
            "MONOFORGE_MANIFEST": "workspace.json",
        }
        with patch.dict("os.environ", env, clear=True):
            config = Config.from_env()
        assert config.root == tmp_path
        assert config.apps_path == tmp_path / "services"
        assert config.materials_dir == "materials"
        assert config.context_file == "CONTEXT.md"
        assert config.stories_dir == "stories"
        assert config.manifest_file == "workspace.json"

    @pytest.mark.unit
    def test_empty_variable_is_ignored(self):
        with patch.dict("os.environ", {"MONOFORGE_APPS_DIR": ""}, clear=True):
            assert Config.from_env().apps_dir == "apps"
