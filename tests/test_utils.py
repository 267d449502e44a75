"""Unit tests for utility functions (monoforge.utils).

Tests cover:
- run_command (success, failure, cwd, timeout, env, missing executable)
- load_json / dump_json / save_json / write_text
- format_duration, display_path
- Rich output helpers
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from monoforge.utils import (
    console,
    display_path,
    dump_json,
    format_duration,
    load_json,
    print_banner,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    save_json,
    write_text,
)

PY = sys.executable


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command(self):
        returncode, stdout, stderr = await run_command([PY, "-c", "print('hello')"])
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_command(self):
        returncode, _, stderr = await run_command(
            [PY, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        assert returncode == 3
        assert stderr == "boom"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_cwd(self, tmp_path: Path):
        returncode, stdout, _ = await run_command(
            [PY, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_timeout(self):
        returncode, _, stderr = await run_command(
            [PY, "-c", "import time; time.sleep(10)"], timeout=1
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_env(self):
        returncode, stdout, _ = await run_command(
            [PY, "-c", "import os; print(os.environ['MONOFORGE_TEST_VAR'])"],
            env={"MONOFORGE_TEST_VAR": "value"},
        )
        assert returncode == 0
        assert stdout == "value"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_executable(self):
        returncode, _, stderr = await run_command(["nonexistent-binary-12345-xyz"])
        assert returncode == 127
        assert "not found" in stderr


# ---------------------------------------------------------------------------
# JSON and text I/O
# ---------------------------------------------------------------------------


class TestJsonIO:
    @pytest.mark.unit
    def test_dump_json_format(self):
        assert dump_json({"b": 1, "a": "é"}) == '{\n  "b": 1,\n  "a": "é"\n}\n'

    @pytest.mark.unit
    def test_load_json(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text('{"scripts": {}}', encoding="utf-8")
        assert load_json(path) == {"scripts": {}}

    @pytest.mark.unit
    def test_load_json_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "nope.json")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_save_json_creates_parents(self, tmp_path: Path):
        path = tmp_path / "nested" / "out.json"
        await save_json({"x": [1, 2]}, path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"x": [1, 2]}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_write_text_overwrites(self, tmp_path: Path):
        path = tmp_path / "a" / "b.md"
        await write_text(path, "one")
        result = await write_text(path, "two")
        assert result == path
        assert path.read_text(encoding="utf-8") == "two"


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFormatting:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "seconds,expected",
        [(3.7, "3.7s"), (0, "0.0s"), (65.2, "1m 5s"), (-1, "0.0s"), (120, "2m 0s")],
    )
    def test_format_duration(self, seconds, expected):
        assert format_duration(seconds) == expected

    @pytest.mark.unit
    def test_display_path_relative(self, tmp_path: Path):
        assert display_path(tmp_path / "apps" / "api", tmp_path) == "apps/api"

    @pytest.mark.unit
    def test_display_path_outside_base(self, tmp_path: Path):
        other = Path("/elsewhere/file.md")
        assert display_path(other, tmp_path) == "/elsewhere/file.md"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    @pytest.mark.unit
    def test_messages_are_not_parsed_as_markup(self):
        with console.capture() as capture:
            print_success("created [bold]x[/bold]")
            print_warning("careful [red]")
            print_error("failed [/]")
        output = capture.get()
        assert "created [bold]x[/bold]" in output
        assert "careful [red]" in output
        assert "failed [/]" in output

    @pytest.mark.unit
    def test_banner_and_table(self):
        with console.capture() as capture:
            print_banner("PROJECT INITIALIZATION")
            print_summary_table({"Domain": "saas"}, title="Project Context")
        output = capture.get()
        assert "PROJECT INITIALIZATION" in output
        assert "saas" in output
