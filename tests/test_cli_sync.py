"""Tests for `thoughts sync` CLI command."""

from __future__ import annotations

import errno
import json
import os
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from thoughts.cli import main

if TYPE_CHECKING:
    from pathlib import Path

_ENV = {"THOUGHTS_USER": "alice", "THOUGHTS_DEBUG": None}


def _write_md(root: Path, rel: str, content: str = "# Doc\n") -> Path:
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")
    return p


class TestSyncCommand:
    def test_sync_reports_counts(self, tmp_project: Path) -> None:
        _write_md(tmp_project / "thoughts", "shared/plans/a.md")
        _write_md(tmp_project / "thoughts", "alice/notes/b.md")

        result = CliRunner().invoke(main, ["sync", "--project", str(tmp_project)], env=_ENV)

        assert result.exit_code == 0, result.output
        assert "Synchronizing thoughts/searchable/ hardlinks..." in result.output
        assert "Sync complete!" in result.output
        assert "Links added: 2" in result.output
        assert "Links removed: 0" in result.output
        assert "Links skipped: 0" in result.output
        assert "Orphaned links cleaned: 0" in result.output
        assert "Total .md files in searchable/: 2" in result.output
        assert "Links failed" not in result.output
        assert (tmp_project / "thoughts/searchable/shared/plans/a.md").exists()

    def test_second_sync_skips(self, tmp_project: Path) -> None:
        _write_md(tmp_project / "thoughts", "a.md")
        runner = CliRunner()
        runner.invoke(main, ["sync", "--project", str(tmp_project)], env=_ENV)

        result = runner.invoke(main, ["sync", "--project", str(tmp_project)], env=_ENV)

        assert result.exit_code == 0, result.output
        assert "Links added: 0" in result.output
        assert "Links skipped: 1" in result.output

    def test_empty_tree_shows_advisory(self, tmp_project: Path) -> None:
        result = CliRunner().invoke(main, ["sync", "--project", str(tmp_project)], env=_ENV)

        assert result.exit_code == 0, result.output
        assert "No .md files found" in result.output

    def test_missing_thoughts_dir_fails(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["sync", "--project", str(tmp_path)], env=_ENV)

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "thoughts init" in result.output
        assert not (tmp_path / "thoughts").exists()

    def test_json_output(self, tmp_project: Path) -> None:
        _write_md(tmp_project / "thoughts", "a.md")

        result = CliRunner().invoke(
            main, ["sync", "--json", "--project", str(tmp_project)], env=_ENV
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["added"] == 1
        assert data["total"] == 1
        assert data["failed"] == []

    def test_invalid_config_fails(self, tmp_project: Path) -> None:
        (tmp_project / "thoughts" / "config.yml").write_text(
            "link_mode: copy\n", encoding="utf-8"
        )

        result = CliRunner().invoke(main, ["sync", "--project", str(tmp_project)], env=_ENV)

        assert result.exit_code == 1
        assert "link_mode" in result.output


class TestSyncDegraded:
    def test_symlink_fallback_is_reported_once(
        self, tmp_project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def cross_device(src: object, dst: object) -> None:
            raise OSError(errno.EXDEV, "Invalid cross-device link")

        monkeypatch.setattr(os, "link", cross_device)
        _write_md(tmp_project / "thoughts", "a.md")

        result = CliRunner().invoke(main, ["sync", "--project", str(tmp_project)], env=_ENV)

        assert result.exit_code == 0, result.output
        assert "[WARN] Could not create hardlink for a.md, using symlink" in result.output
        assert result.output.count("using symlink") == 1
        assert "Links added: 1" in result.output
        assert (tmp_project / "thoughts/searchable/a.md").is_symlink()


class TestSyncFailures:
    @pytest.fixture()
    def no_links(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def deny(src: object, dst: object) -> None:
            raise PermissionError(errno.EACCES, "Permission denied")

        monkeypatch.setattr(os, "link", deny)
        monkeypatch.setattr(os, "symlink", deny)

    @pytest.mark.usefixtures("no_links")
    def test_failures_are_reported(self, tmp_project: Path) -> None:
        _write_md(tmp_project / "thoughts", "a.md")

        result = CliRunner().invoke(main, ["sync", "--project", str(tmp_project)], env=_ENV)

        assert result.exit_code == 0, result.output
        assert "Links failed: 1" in result.output
        assert "Could not link a.md" in result.output

    @pytest.mark.usefixtures("no_links")
    def test_strict_exits_nonzero(self, tmp_project: Path) -> None:
        _write_md(tmp_project / "thoughts", "a.md")

        result = CliRunner().invoke(
            main, ["sync", "--strict", "--project", str(tmp_project)], env=_ENV
        )

        assert result.exit_code == 1


class TestSyncHelp:
    def test_help(self) -> None:
        result = CliRunner().invoke(main, ["sync", "--help"])
        assert result.exit_code == 0
        assert "--strict" in result.output
        assert "--project" in result.output
