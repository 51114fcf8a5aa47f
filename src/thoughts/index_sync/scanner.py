"""Document scanner: lists qualifying documents under the thoughts/ tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from thoughts.config import DEFAULT_SUFFIX
from thoughts.index_sync.walker import TreeEntry, Visit, walk_tree

if TYPE_CHECKING:
    from pathlib import Path


def _is_under(rel: Path, prefix: Path) -> bool:
    """Check whether *rel* equals *prefix* or lies inside it (component-wise)."""
    return rel.parts[: len(prefix.parts)] == prefix.parts


def scan_documents(
    root: Path,
    *,
    suffix: str = DEFAULT_SUFFIX,
    exclude: Path | None = None,
) -> list[Path]:
    """Return paths, relative to *root*, of documents ending in *suffix*.

    Only regular files qualify; symlinks are ignored.  The *exclude* subtree
    (relative to *root*, normally the searchable index) is never entered, so
    index entries are never mirrored back into the index.  A missing *root*
    yields an empty list.
    """

    def visit(entry: TreeEntry) -> Visit:
        if exclude is not None and _is_under(entry.rel, exclude):
            return Visit.SKIP
        if entry.is_dir:
            return Visit.DESCEND
        if entry.is_file and entry.path.name.endswith(suffix):
            return Visit.ACT
        return Visit.SKIP

    return [entry.rel for entry in walk_tree(root, visit)]
