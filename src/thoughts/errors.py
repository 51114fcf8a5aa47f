"""Exception hierarchy shared by the thoughts core and its CLI."""

from __future__ import annotations


class ThoughtsError(Exception):
    """Base class for errors the CLI reports as ``Error: ...``."""


class ConfigError(ThoughtsError):
    """Invalid ``config.yml`` contents or environment."""


class SourceTreeMissingError(ThoughtsError):
    """The thoughts/ source tree does not exist; nothing can be synced."""


class LinkError(ThoughtsError):
    """Neither a hardlink nor a symlink could be created for a document."""
