"""Link capability: create index entries and test their identity.

The engine only talks to :class:`Linker`, so whether an entry is a hardlink
or a symlink is decided here and nowhere else.
"""

from __future__ import annotations

import enum
import logging
import os
from typing import TYPE_CHECKING

from thoughts.errors import LinkError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class LinkMode(enum.Enum):
    """How an index entry refers to its source document."""

    HARDLINK = "hardlink"
    SYMLINK = "symlink"


class Linker:
    """Creates index entries, hardlinking where the filesystem allows it."""

    def __init__(self, *, prefer_hardlinks: bool = True) -> None:
        self.prefer_hardlinks = prefer_hardlinks

    def links_to(self, entry: Path, source: Path) -> bool:
        """Check whether *entry* refers to the same document as *source*.

        A hardlink matches on device and inode; a symlink matches when its
        target resolves to *source*.  Any stat failure counts as not linked.
        """
        try:
            if entry.is_symlink():
                return entry.resolve(strict=True) == source.resolve(strict=True)
            entry_stat = entry.stat()
            source_stat = source.stat()
        except (OSError, RuntimeError):
            return False
        return (entry_stat.st_dev, entry_stat.st_ino) == (
            source_stat.st_dev,
            source_stat.st_ino,
        )

    def link(self, source: Path, target: Path) -> LinkMode:
        """Create *target* referring to *source*.

        Tries a hardlink first, then a symlink holding the path of *source*
        relative to ``target.parent``.

        Raises
        ------
        LinkError
            If neither kind of link could be created.
        """
        if self.prefer_hardlinks:
            try:
                os.link(source, target)
            except OSError as exc:
                logger.debug("Hardlink %s -> %s failed: %s", target, source, exc)
            else:
                return LinkMode.HARDLINK

        relative_source = os.path.relpath(source, target.parent)
        try:
            os.symlink(relative_source, target)
        except OSError as exc:
            raise LinkError(f"cannot link {target} to {source}: {exc}") from exc
        return LinkMode.SYMLINK
