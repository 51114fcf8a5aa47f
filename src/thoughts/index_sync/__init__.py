"""Index sync domain: scanner, link capability and reconciliation engine."""

from thoughts.index_sync.engine import (
    SyncResult,
    clean_orphans,
    count_index_documents,
    link_documents,
    prune_empty,
    sync_index,
)
from thoughts.index_sync.links import Linker, LinkMode
from thoughts.index_sync.scanner import scan_documents
from thoughts.index_sync.walker import TreeEntry, Visit, walk_tree

__all__ = [
    "LinkMode",
    "Linker",
    "SyncResult",
    "TreeEntry",
    "Visit",
    "clean_orphans",
    "count_index_documents",
    "link_documents",
    "prune_empty",
    "scan_documents",
    "sync_index",
    "walk_tree",
]
