from __future__ import annotations

"""
embedfs: embed a directory tree in Python source and serve it back as a
read-only virtual filesystem.
"""

from embedfs.core.codec import decode, encode
from embedfs.core.files import Files
from embedfs.core.snapshot import SnapshotStats, snapshot, snapshot_with_stats
from embedfs.core.vfs import Dir, DirCursor, DiskHandle, EmbeddedHandle, Handle
from embedfs.domain.config import Config
from embedfs.domain.errors import (
    ConfigError,
    DecodeError,
    DirectoryEOF,
    EmbedFSError,
    NotDirectoryError,
    NotFoundError,
)
from embedfs.domain.models import DirFile, FileInfo, FileNode

__version__ = "1.0.0"

__all__ = [
    # Facade
    "Config",
    "Files",
    # Models
    "DirFile",
    "FileInfo",
    "FileNode",
    # Filesystem
    "Dir",
    "DirCursor",
    "Handle",
    "EmbeddedHandle",
    "DiskHandle",
    # Generation
    "snapshot",
    "snapshot_with_stats",
    "SnapshotStats",
    "encode",
    "decode",
    # Errors
    "EmbedFSError",
    "ConfigError",
    "DecodeError",
    "NotFoundError",
    "NotDirectoryError",
    "DirectoryEOF",
]
