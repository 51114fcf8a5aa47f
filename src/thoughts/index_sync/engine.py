"""Index sync engine: reconcile thoughts/searchable/ with the thoughts/ tree.

A sync runs three passes in order:

1. :func:`link_documents` mirrors every scanned document into the index,
   replacing stale entries.
2. :func:`clean_orphans` removes index entries whose source is gone.
3. :func:`prune_empty` removes directories left empty by the first two.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from thoughts.config import DEFAULT_SUFFIX
from thoughts.errors import LinkError, SourceTreeMissingError
from thoughts.index_sync.links import Linker, LinkMode
from thoughts.index_sync.scanner import scan_documents
from thoughts.index_sync.walker import TreeEntry, Visit, walk_tree

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from thoughts.config import ThoughtsConfig

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Summary of a sync run."""

    added: int = 0
    removed: int = 0
    skipped: int = 0
    orphaned: int = 0
    total: int = 0
    failed: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _lexists(path: Path) -> bool:
    """``exists()`` that also reports dangling symlinks."""
    return path.is_symlink() or path.exists()


def _is_document(path: Path) -> bool:
    """Same qualification as the scanner: a regular file, not a symlink."""
    return path.is_file() and not path.is_symlink()


def _clear_blocking_parents(index_root: Path, rel: Path, result: SyncResult) -> None:
    """Remove non-directory entries occupying a parent directory of *rel*.

    Happens when a mirrored document was replaced by a directory of the same
    name in the source tree.
    """
    current = index_root
    for part in rel.parts[:-1]:
        current = current / part
        if current.is_symlink() or (current.exists() and not current.is_dir()):
            logger.debug("Removing stale entry in the way of %s: %s", rel, part)
            current.unlink()
            result.removed += 1


def link_documents(
    documents: Iterable[Path],
    source_root: Path,
    index_root: Path,
    *,
    linker: Linker,
    result: SyncResult,
) -> None:
    """Main pass: make ``index_root / rel`` identity-linked to each document.

    Failures are contained per document: they are logged, recorded in
    ``result.failed`` and the pass moves on.
    """
    for rel in documents:
        source = source_root / rel
        target = index_root / rel

        try:
            _clear_blocking_parents(index_root, rel, result)
            target.parent.mkdir(parents=True, exist_ok=True)

            if _lexists(target):
                if linker.links_to(target, source):
                    logger.debug("Skipping %s (already linked)", rel)
                    result.skipped += 1
                    continue
                logger.debug("Removing old link: %s", rel)
                target.unlink()
                result.removed += 1

            mode = linker.link(source, target)
        except (LinkError, OSError) as exc:
            logger.warning("Could not link %s: %s", rel, exc)
            result.failed.append(str(rel))
            continue

        if mode is LinkMode.SYMLINK and linker.prefer_hardlinks:
            logger.warning("Could not create hardlink for %s, using symlink", rel)
            result.warnings.append(f"Could not create hardlink for {rel}, using symlink")
        else:
            logger.debug("Linked (%s): %s", mode.value, rel)
        result.added += 1


def _index_documents(index_root: Path, suffix: str) -> Iterable[TreeEntry]:
    """Yield every non-directory entry under *index_root* ending in *suffix*."""

    def visit(entry: TreeEntry) -> Visit:
        if entry.is_dir:
            return Visit.DESCEND
        if entry.path.name.endswith(suffix):
            return Visit.ACT
        return Visit.SKIP

    return walk_tree(index_root, visit)


def clean_orphans(
    index_root: Path,
    source_root: Path,
    *,
    suffix: str = DEFAULT_SUFFIX,
) -> int:
    """Remove index entries whose source is no longer a qualifying document.

    A source path that now names a directory or a symlink counts as gone.

    Returns the number of entries removed.
    """
    orphaned = 0
    for entry in _index_documents(index_root, suffix):
        if _is_document(source_root / entry.rel):
            continue
        logger.debug("Removing orphaned link: %s", entry.rel)
        try:
            entry.path.unlink()
        except FileNotFoundError:
            continue
        orphaned += 1
    return orphaned


def prune_empty(index_root: Path) -> None:
    """Remove empty directories under *index_root*, children first.

    The index root itself is kept even when empty.
    """

    def visit(entry: TreeEntry) -> Visit:
        return Visit.DESCEND if entry.is_dir else Visit.SKIP

    for entry in walk_tree(index_root, visit, yield_dirs=True):
        try:
            if any(entry.path.iterdir()):
                continue
        except FileNotFoundError:
            continue
        logger.debug("Removing empty directory: %s", entry.rel)
        try:
            entry.path.rmdir()
        except OSError as exc:
            logger.debug("Could not remove %s: %s", entry.rel, exc)


def count_index_documents(index_root: Path, *, suffix: str = DEFAULT_SUFFIX) -> int:
    """Count qualifying entries (files or symlinks) under *index_root*."""
    return sum(1 for _ in _index_documents(index_root, suffix))


def sync_index(config: ThoughtsConfig, *, linker: Linker | None = None) -> SyncResult:
    """Reconcile the searchable index with the thoughts/ tree.

    Parameters
    ----------
    config:
        Resolved project configuration; supplies both roots and the suffix.
    linker:
        Link capability.  Defaults to one built from
        ``config.prefer_hardlinks``.

    Returns
    -------
    SyncResult
        Counts for the three passes plus the remaining index total.

    Raises
    ------
    SourceTreeMissingError
        If ``thoughts/`` does not exist.  The index is not touched.
    """
    source_root = config.source_root
    index_root = config.index_root

    if not source_root.is_dir():
        raise SourceTreeMissingError(
            f"{config.thoughts_dir}/ directory not found. Run 'thoughts init' first."
        )

    if linker is None:
        linker = Linker(prefer_hardlinks=config.prefer_hardlinks)

    index_root.mkdir(parents=True, exist_ok=True)
    result = SyncResult()

    documents = scan_documents(
        source_root,
        suffix=config.suffix,
        exclude=index_root.relative_to(source_root),
    )
    logger.debug("Scanned %d document(s) under %s", len(documents), source_root)

    link_documents(documents, source_root, index_root, linker=linker, result=result)
    result.orphaned = clean_orphans(index_root, source_root, suffix=config.suffix)
    prune_empty(index_root)
    result.total = count_index_documents(index_root, suffix=config.suffix)

    logger.debug(
        "Sync done: added=%d removed=%d skipped=%d orphaned=%d total=%d failed=%d",
        result.added,
        result.removed,
        result.skipped,
        result.orphaned,
        result.total,
        len(result.failed),
    )
    return result
