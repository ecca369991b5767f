from __future__ import annotations

"""
Error Taxonomy.

Defines the exception hierarchy raised by the snapshotter, the rehydrator
and the virtual filesystem. Every error also derives from the closest
builtin so callers written against the real filesystem keep working.
"""


class EmbedFSError(Exception):
    """Base class for all embedfs failures."""


class ConfigError(EmbedFSError, ValueError):
    """Invalid construction or generation parameters."""


class DecodeError(EmbedFSError, ValueError):
    """Corrupt embedded payload or malformed embedded tree."""


class NotFoundError(EmbedFSError, FileNotFoundError):
    """Path absent from the embedded index."""


class NotDirectoryError(EmbedFSError, NotADirectoryError):
    """Directory operation attempted on an embedded file."""


class DirectoryEOF(EmbedFSError, EOFError):
    """Pagination sentinel: the directory cursor is exhausted."""
