"""Tests for app name validation and collision detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from monoforge.scaffolder.validator import (
    AppNameError,
    check_name_available,
    ensure_valid_app_name,
    list_existing_apps,
    validate_app_name,
)

pytestmark = pytest.mark.unit


class TestValidateAppName:
    @pytest.mark.parametrize("name", ["a", "api", "billing-api", "web2", "a-1-b", "x--y", "api-"])
    def test_accepts_kebab_case(self, name: str):
        check = validate_app_name(name)
        assert check.valid
        assert check.reason == ""

    @pytest.mark.parametrize(
        "name",
        ["", "Api", "1api", "-api", "billing_api", "billing api", "api.v2", "apí", "API"],
    )
    def test_rejects_everything_else(self, name: str):
        check = validate_app_name(name)
        assert not check.valid
        assert "kebab-case" in check.reason

    def test_empty_name_reason(self):
        assert "empty" in validate_app_name("").reason

    def test_bad_first_character_reason(self):
        reason = validate_app_name("9lives").reason
        assert "start with a lowercase letter" in reason
        assert "'9'" in reason

    def test_bad_remaining_characters_are_listed(self):
        reason = validate_app_name("my_App").reason
        assert "'A'" in reason
        assert "'_'" in reason

    def test_trailing_newline_is_rejected(self):
        assert not validate_app_name("api\n").valid


class TestNameAvailability:
    def test_free_name(self):
        assert check_name_available("api", ["web", "admin"]).valid

    def test_collision(self):
        check = check_name_available("web", ["web", "admin"])
        assert not check.valid
        assert check.reason == "App already exists: web"

    def test_ensure_valid_raises_on_bad_name(self):
        with pytest.raises(AppNameError, match="kebab-case"):
            ensure_valid_app_name("Bad")

    def test_ensure_valid_raises_on_collision(self):
        with pytest.raises(AppNameError, match="already exists"):
            ensure_valid_app_name("web", ["web"])

    def test_ensure_valid_returns_name(self):
        assert ensure_valid_app_name("api", ["web"]) == "api"


class TestListExistingApps:
    def test_missing_root(self, tmp_path: Path):
        assert list_existing_apps(tmp_path / "apps") == []

    def test_lists_directories_only_sorted(self, tmp_path: Path):
        apps = tmp_path / "apps"
        (apps / "web").mkdir(parents=True)
        (apps / "api").mkdir()
        (apps / "notes.txt").write_text("x", encoding="utf-8")
        assert list_existing_apps(apps) == ["api", "web"]
