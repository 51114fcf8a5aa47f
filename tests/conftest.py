"""Shared test fixtures for thoughts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from thoughts.config import ThoughtsConfig

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def tmp_project(tmp_path: Path) -> Path:
    """Create a project with an empty thoughts/ tree."""
    (tmp_path / "thoughts").mkdir()
    return tmp_path


@pytest.fixture()
def config(tmp_project: Path) -> ThoughtsConfig:
    return ThoughtsConfig(project_root=tmp_project, username="alice")
