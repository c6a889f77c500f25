"""Expose constructed client wrappers."""

from .sqlite_store import EmbeddedDatabase

__all__ = ["EmbeddedDatabase"]
