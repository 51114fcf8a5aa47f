"""Generic directory walk shared by the scanner, orphan cleanup and pruning.

A visitor callback decides, per entry, whether to descend, skip or act.
Entries the visitor acts on are yielded to the caller, which is free to
mutate them: each directory is listed once, before its entries are visited.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


class Visit(enum.Enum):
    """Traversal decision returned by a visitor."""

    DESCEND = "descend"
    SKIP = "skip"
    ACT = "act"


@dataclass(frozen=True)
class TreeEntry:
    """One directory entry, typed without following symlinks."""

    path: Path
    rel: Path
    is_dir: bool
    is_file: bool
    is_symlink: bool


def _list_dir(directory: Path, root: Path) -> list[TreeEntry]:
    """List *directory* sorted by name; a vanished directory lists as empty."""
    try:
        with os.scandir(directory) as it:
            raw = sorted(it, key=lambda e: e.name)
    except (FileNotFoundError, NotADirectoryError):
        return []

    entries: list[TreeEntry] = []
    for item in raw:
        path = Path(item.path)
        try:
            is_dir = item.is_dir(follow_symlinks=False)
            is_file = item.is_file(follow_symlinks=False)
            is_symlink = item.is_symlink()
        except OSError:
            continue
        entries.append(
            TreeEntry(
                path=path,
                rel=path.relative_to(root),
                is_dir=is_dir,
                is_file=is_file,
                is_symlink=is_symlink,
            )
        )
    return entries


def walk_tree(
    root: Path,
    visitor: Callable[[TreeEntry], Visit],
    *,
    yield_dirs: bool = False,
) -> Iterator[TreeEntry]:
    """Walk *root* depth-first, yielding entries the visitor acts on.

    Parameters
    ----------
    root:
        Directory to walk.  A missing root yields nothing.
    visitor:
        Called once per entry.  ``DESCEND`` recurses into directories (and is
        ignored for anything else), ``SKIP`` drops the entry with its
        subtree, ``ACT`` yields it.
    yield_dirs:
        When true, every directory that was descended into is also yielded
        after its children (post-order).  The root is never yielded.
    """
    yield from _walk(root, root, visitor, yield_dirs=yield_dirs)


def _walk(
    directory: Path,
    root: Path,
    visitor: Callable[[TreeEntry], Visit],
    *,
    yield_dirs: bool,
) -> Iterator[TreeEntry]:
    for entry in _list_dir(directory, root):
        decision = visitor(entry)
        if decision is Visit.SKIP:
            continue
        if decision is Visit.ACT:
            yield entry
            continue
        if entry.is_dir:
            yield from _walk(entry.path, root, visitor, yield_dirs=yield_dirs)
            if yield_dirs:
                yield entry
