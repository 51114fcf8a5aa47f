"""Scaffolding: create the thoughts/ directory layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from thoughts.config import ThoughtsConfig

_SHARED_DIRS = ("research", "plans", "prs")
_PERSONAL_DIRS = ("tickets", "notes")

_GITIGNORE = """\
# Ignore {index_dir}/ directory (it contains hardlinks)
{index_dir}/

# But track the structure
!{index_dir}/.gitkeep
"""

_README = """\
# Thoughts Directory

This directory contains research documents, implementation plans, and notes for this project.

## Structure

- `{user}/` - Personal notes and tickets
  - `tickets/` - Ticket documentation and tracking
  - `notes/` - Personal notes and observations
- `shared/` - Team-shared documents
  - `research/` - Research documents
  - `plans/` - Implementation plans
  - `prs/` - PR descriptions and documentation
- `{index_dir}/` - Hardlinks for efficient grep searching (auto-generated)

## Usage

Run `thoughts sync` after adding or modifying files to update the
`{index_dir}/` hardlinks.
"""


@dataclass
class InitResult:
    """Outcome of :func:`init_thoughts`."""

    already_existed: bool
    directories: list[Path] = field(default_factory=list)
    files_written: list[Path] = field(default_factory=list)


def layout_dirs(config: ThoughtsConfig) -> list[Path]:
    """Directories that make up a fresh thoughts/ tree, in creation order."""
    root = config.source_root
    dirs = [root / config.username / name for name in _PERSONAL_DIRS]
    dirs.extend(root / "shared" / name for name in _SHARED_DIRS)
    dirs.append(config.index_root)
    return dirs


def init_thoughts(config: ThoughtsConfig) -> InitResult:
    """Create the thoughts/ tree for *config*.

    Safe to re-run: directories are created with ``exist_ok`` and existing
    ``.gitignore`` / ``README.md`` files are left alone.  The index
    ``.gitkeep`` is always (re)written.
    """
    root = config.source_root
    result = InitResult(already_existed=root.exists())

    for directory in layout_dirs(config):
        directory.mkdir(parents=True, exist_ok=True)
        result.directories.append(directory)

    gitignore = root / ".gitignore"
    if not gitignore.exists():
        gitignore.write_text(_GITIGNORE.format(index_dir=config.index_dir), encoding="utf-8")
        result.files_written.append(gitignore)

    gitkeep = config.index_root / ".gitkeep"
    gitkeep.write_text("", encoding="utf-8")
    result.files_written.append(gitkeep)

    readme = root / "README.md"
    if not readme.exists():
        readme.write_text(
            _README.format(user=config.username, index_dir=config.index_dir),
            encoding="utf-8",
        )
        result.files_written.append(readme)

    return result


def render_layout(config: ThoughtsConfig) -> list[str]:
    """Tree diagram lines describing the scaffolded layout."""
    return [
        f"{config.thoughts_dir}/",
        f"├── {config.username}/",
        "│   ├── tickets/",
        "│   └── notes/",
        "├── shared/",
        "│   ├── research/",
        "│   ├── plans/",
        "│   └── prs/",
        f"└── {config.index_dir}/ (will contain hardlinks)",
    ]
