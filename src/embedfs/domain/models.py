from __future__ import annotations

"""
Snapshot Tree Data Models.

Provides the node types shared by generation and runtime: the embedded
DirFile record written into generated modules, the rehydrated FileNode
held in the path index, and the FileInfo stat projection handed to
consumers.
"""

import os
import stat as stat_mod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Tuple

# -----------------------------------------------------------------------------
# EMBEDDED RECORD (GENERATION BOUNDARY)
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirFile:
    """
    Embedded representation of a file or directory.

    Instances are produced by the snapshotter and rendered verbatim as
    literals into generated modules.

    Attributes:
        path: Normalized logical path with a leading '/'.
        name: Final path segment.
        size: Uncompressed byte length (0 for directories).
        mode: st_mode bits, directory flag included.
        mod_time: Modification time in whole unix seconds.
        is_dir: Directory flag.
        compressed: Encoded payload ('' for directories).
        files: Children in directory-read order.
    """
    path: str
    name: str
    size: int = 0
    mode: int = 0
    mod_time: int = 0
    is_dir: bool = False
    compressed: str = ""
    files: Tuple["DirFile", ...] = ()

    def count(self) -> int:
        """Total number of nodes in this subtree, self included."""
        return 1 + sum(child.count() for child in self.files)


# -----------------------------------------------------------------------------
# RUNTIME NODE
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class FileNode:
    """
    Rehydrated node registered in the path index.

    Attributes:
        path: Logical path, the index key.
        name: Final path segment.
        size: Uncompressed byte length.
        mode: st_mode bits.
        mod_time: Unix seconds.
        is_dir: Directory flag.
        data: Decoded payload (empty for directories).
        files: Children in original order.
    """
    path: str
    name: str
    size: int
    mode: int
    mod_time: int
    is_dir: bool
    data: bytes = b""
    files: List["FileNode"] = field(default_factory=list)

    def info(self) -> "FileInfo":
        return FileInfo(
            name=self.name,
            size=self.size,
            mode=self.mode,
            mod_time=self.mod_time,
            is_dir=self.is_dir,
        )


# -----------------------------------------------------------------------------
# STAT PROJECTION
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileInfo:
    """
    Metadata returned by stat() and readdir().

    Attributes:
        name: Final path segment.
        size: Byte length.
        mode: st_mode bits.
        mod_time: Unix seconds.
        is_dir: Directory flag.
    """
    name: str
    size: int
    mode: int
    mod_time: int
    is_dir: bool

    @property
    def mod_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.mod_time, tz=timezone.utc)

    @property
    def permissions(self) -> int:
        return stat_mod.S_IMODE(self.mode)

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result) -> "FileInfo":
        """Project an os.stat_result onto the embedded metadata shape."""
        is_dir = stat_mod.S_ISDIR(st.st_mode)
        return cls(
            name=name,
            size=0 if is_dir else st.st_size,
            mode=st.st_mode,
            mod_time=int(st.st_mtime),
            is_dir=is_dir,
        )
