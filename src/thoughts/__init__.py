"""Thoughts - searchable hardlink index for a nested thoughts/ directory."""

__version__ = "0.3.0"
