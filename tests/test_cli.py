"""Tests for `thoughts init`, `thoughts metadata` and the command group."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from unittest.mock import patch

from click.testing import CliRunner

from thoughts import __version__
from thoughts.cli import main

if TYPE_CHECKING:
    from pathlib import Path

_ENV = {"THOUGHTS_USER": "alice", "THOUGHTS_DEBUG": None}


class TestMainGroup:
    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("init", "sync", "metadata"):
            assert command in result.output
        assert "THOUGHTS_USER" in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_unknown_command(self) -> None:
        result = CliRunner().invoke(main, ["bogus"])
        assert result.exit_code != 0


class TestInitCommand:
    def test_init_creates_structure(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["init", "--project", str(tmp_path)], env=_ENV)

        assert result.exit_code == 0, result.output
        assert "initialized successfully" in result.output
        assert "already exists" not in result.output
        assert "alice/" in result.output
        assert (tmp_path / "thoughts" / "alice" / "tickets").is_dir()
        assert (tmp_path / "thoughts" / "searchable" / ".gitkeep").exists()

    def test_reinit_warns(self, tmp_path: Path) -> None:
        runner = CliRunner()
        runner.invoke(main, ["init", "--project", str(tmp_path)], env=_ENV)

        result = runner.invoke(main, ["init", "--project", str(tmp_path)], env=_ENV)

        assert result.exit_code == 0, result.output
        assert "already exists" in result.output

    def test_init_then_sync(self, tmp_path: Path) -> None:
        runner = CliRunner()
        runner.invoke(main, ["init", "--project", str(tmp_path)], env=_ENV)
        note = tmp_path / "thoughts" / "alice" / "notes" / "n.md"
        note.write_text("note", encoding="utf-8")

        result = runner.invoke(main, ["sync", "--project", str(tmp_path)], env=_ENV)

        assert result.exit_code == 0, result.output
        assert (tmp_path / "thoughts" / "searchable" / "alice" / "notes" / "n.md").exists()
        assert "Total .md files in searchable/: 2" in result.output


class TestMetadataCommand:
    def test_plain_output(self, tmp_path: Path) -> None:
        with patch("thoughts.metadata._is_git_repo", return_value=False):
            result = CliRunner().invoke(
                main, ["metadata", "--project", str(tmp_path)], env=_ENV
            )

        assert result.exit_code == 0, result.output
        assert "Current Git Commit Hash: no-commit" in result.output
        assert "Repository Name: no-repo" in result.output
        assert "Timestamp For Filename:" in result.output

    def test_json_output(self, tmp_path: Path) -> None:
        with patch("thoughts.metadata._is_git_repo", return_value=False):
            result = CliRunner().invoke(
                main, ["metadata", "--json", "--project", str(tmp_path)], env=_ENV
            )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["git_branch"] == "no-branch"
        assert set(data) >= {"iso_date_time", "date_short", "filename_timestamp"}
