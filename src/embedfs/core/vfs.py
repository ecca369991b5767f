from __future__ import annotations

"""
Virtual Filesystem.

Implements the open/stat/readdir/read/close contract against the path
index, with optional fallback to real disk I/O. Pagination state is
owned by each handle, so two readers of the same directory never
disturb each other.
"""

import errno
import io
import logging
import os
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional

from embedfs.core.rehydrate import PathIndex
from embedfs.domain.errors import DirectoryEOF, NotDirectoryError, NotFoundError
from embedfs.domain.models import FileInfo, FileNode
from embedfs.infra.fs import is_within, normalize_logical

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100

# -----------------------------------------------------------------------------
# PAGINATION
# -----------------------------------------------------------------------------

class DirCursor:
    """
    Incremental reader over a fixed list of directory entries.

    A positive count returns the next page and advances; a non-positive
    count returns everything left and rewinds. Asking for a page once
    the listing is exhausted raises DirectoryEOF and rewinds, so the
    next call starts over.
    """

    def __init__(self, entries: List[FileInfo]):
        self._entries = entries
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def read(self, count: int = -1) -> List[FileInfo]:
        if count <= 0:
            remaining = self._entries[self._pos:]
            self._pos = 0
            return remaining

        if self._pos >= len(self._entries):
            self._pos = 0
            raise DirectoryEOF("end of directory")

        page = self._entries[self._pos:self._pos + count]
        self._pos += len(page)
        return page

    def rewind(self) -> None:
        self._pos = 0


# -----------------------------------------------------------------------------
# HANDLES
# -----------------------------------------------------------------------------

class Handle(ABC):
    """
    Open file or directory, modelled on a regular binary file object.

    Attributes:
        path: The name the handle was opened with (disk handles carry
              the resolved OS path).
    """

    def __init__(self, path: str):
        self.path = path
        self._cursor: Optional[DirCursor] = None
        self.closed = False

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed file")

    @abstractmethod
    def stat(self) -> FileInfo:
        """Metadata of the opened entry."""

    @abstractmethod
    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes (everything when size < 0)."""

    @abstractmethod
    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Reposition the read offset."""

    @abstractmethod
    def tell(self) -> int:
        """Current read offset."""

    @abstractmethod
    def _list_entries(self) -> List[FileInfo]:
        """Directory entries in listing order."""

    def readdir(self, count: int = -1) -> List[FileInfo]:
        """
        Read directory entries through this handle's cursor.

        Args:
            count: Page size. count <= 0 returns all remaining entries and
                   rewinds the cursor.

        Returns:
            List[FileInfo]: Entries in listing order.

        Raises:
            DirectoryEOF: count > 0 and the cursor is exhausted.
            NotADirectoryError: The handle is not a directory.
            ValueError: The handle is closed.
        """
        self._check_open()
        if self._cursor is None:
            self._cursor = DirCursor(self._list_entries())
        return self._cursor.read(count)

    def iterdir(self, page_size: int = DEFAULT_PAGE_SIZE) -> Iterator[FileInfo]:
        """Yield the remaining entries, fetching them page by page."""
        while True:
            try:
                page = self.readdir(page_size)
            except DirectoryEOF:
                return
            yield from page

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "Handle":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class EmbeddedHandle(Handle):
    """Handle over a rehydrated node. Holds no OS resource."""

    def __init__(self, node: FileNode):
        super().__init__(node.path)
        self.node = node
        self._buf = io.BytesIO(node.data)

    def stat(self) -> FileInfo:
        self._check_open()
        return self.node.info()

    def read(self, size: int = -1) -> bytes:
        self._check_open()
        if self.node.is_dir:
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), self.path)
        return self._buf.read(size)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._check_open()
        return self._buf.seek(offset, whence)

    def tell(self) -> int:
        self._check_open()
        return self._buf.tell()

    def _list_entries(self) -> List[FileInfo]:
        if not self.node.is_dir:
            raise NotDirectoryError(errno.ENOTDIR, "not a directory", self.path)
        return [child.info() for child in self.node.files]


class DiskHandle(Handle):
    """
    Handle over a real path. OS errors surface untranslated.

    The OS file is opened on first read, so directories can be opened
    for stat() and readdir().
    """

    def __init__(self, path: str):
        super().__init__(path)
        self._st = os.stat(path)
        self._file: Optional[io.BufferedReader] = None

    def _open(self) -> io.BufferedReader:
        self._check_open()
        if self._file is None:
            self._file = open(self.path, "rb")
        return self._file

    def stat(self) -> FileInfo:
        self._check_open()
        return FileInfo.from_stat(os.path.basename(self.path.rstrip("/\\")), self._st)

    def read(self, size: int = -1) -> bytes:
        return self._open().read(size)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self._open().seek(offset, whence)

    def tell(self) -> int:
        return self._open().tell()

    def _list_entries(self) -> List[FileInfo]:
        entries: List[FileInfo] = []
        with os.scandir(self.path) as it:
            for entry in it:
                try:
                    st = entry.stat()
                except OSError:
                    # Broken symlink: describe the link itself.
                    st = entry.stat(follow_symlinks=False)
                entries.append(FileInfo.from_stat(entry.name, st))
        return entries

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
        super().close()


# -----------------------------------------------------------------------------
# FILESYSTEM
# -----------------------------------------------------------------------------

class Dir:
    """
    Filesystem view over the path index and/or local disk.

    Args:
        index: Path index produced by rehydration.
        use_embedded: Resolve names against the index first.
        fallback_to_disk: On an index miss, retry on disk.
        base_path: Root for disk resolution; requested names are appended
                   to it verbatim and must resolve inside it.
    """

    def __init__(
            self,
            index: PathIndex,
            *,
            use_embedded: bool = True,
            fallback_to_disk: bool = False,
            base_path: str = "",
    ):
        self._index = index
        self.use_embedded = use_embedded
        self.fallback_to_disk = fallback_to_disk
        self.base_path = base_path

    def open(self, name: str) -> Handle:
        """
        Open a file or directory by logical name.

        Args:
            name: Logical path. Cleaned before the index lookup.

        Returns:
            Handle: Embedded or disk handle.

        Raises:
            NotFoundError: Not in the index and disk is not consulted.
            OSError: Disk lookup failures, unchanged.
        """
        if self.use_embedded:
            node = self._index.get(normalize_logical(name))
            if node is not None:
                return EmbeddedHandle(node)
            if not self.fallback_to_disk:
                raise NotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), name)
            logger.debug(f"Index miss for '{name}', falling back to disk.")

        return DiskHandle(self.disk_path(name))

    def disk_path(self, name: str) -> str:
        """
        Resolve a name against base_path by plain concatenation.

        In pure-disk mode a name already carrying the base_path prefix (as
        produced by Files.determine_path) is used as is. In fallback mode
        names are always logical and always get the prefix. Either way the
        result must stay inside base_path once '..' segments are resolved.

        Args:
            name: Logical name, or a resolved path in pure-disk mode.

        Returns:
            str: OS path under base_path.

        Raises:
            NotFoundError: The resolved path leaves base_path.
        """
        if not self.base_path:
            return name

        if self.use_embedded or not name.startswith(self.base_path):
            name = self.base_path + name
        if os.sep != "/":
            name = name.replace("/", os.sep)

        if not is_within(name, self.base_path):
            logger.warning(f"Rejected path outside base directory: '{name}'")
            raise NotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), name)
        return name

    def exists(self, name: str) -> bool:
        return normalize_logical(name) in self._index

    def __len__(self) -> int:
        return len(self._index)
