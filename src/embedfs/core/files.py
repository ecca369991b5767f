from __future__ import annotations

"""
Files Facade.

Convenience layer over the virtual filesystem: whole-file reads, sorted
directory listings and subtree reads, switching between the embedded
snapshot and local disk according to the construction config.
"""

import logging
import os
from typing import Dict, Iterator, List, Optional, Tuple

from embedfs.core.rehydrate import PathIndex, rehydrate
from embedfs.core.vfs import Dir, Handle
from embedfs.domain.config import Config
from embedfs.domain.errors import ConfigError
from embedfs.domain.models import DirFile, FileInfo, FileNode
from embedfs.infra.fs import join_logical

logger = logging.getLogger(__name__)


class Files:
    """
    A complete static file collection.

    Build instances with Files.new(); generated modules do this for you.
    """

    def __init__(self, config: Config, index: PathIndex, root: Optional[FileNode] = None):
        self.config = config
        self.root = root
        self._index = index
        self._dir = Dir(
            index,
            use_embedded=config.use_embedded,
            fallback_to_disk=config.fallback_to_disk,
            base_path=config.base_path,
        )

    @classmethod
    def new(cls, config: Optional[Config], root: Optional[DirFile]) -> "Files":
        """
        Validate the config and rehydrate the embedded tree.

        Args:
            config: Construction options. None means embedded-only.
            root: Embedded tree from a generated module.

        Returns:
            Files: Ready-to-use instance.

        Raises:
            ConfigError: Disk access requested without an absolute base_path.
            DecodeError: Corrupt embedded payload.
        """
        config = config or Config()

        if config.uses_disk and not os.path.isabs(config.base_path or ""):
            raise ConfigError(
                "base_path must be an absolute path when reading from disk, "
                "otherwise local files cannot be located once the package is "
                "used from another working directory"
            )

        if not config.use_embedded:
            logger.debug(f"Serving static files from disk at '{config.base_path}'.")
            return cls(config, {})

        node, index = rehydrate(root)
        return cls(config, index, node)

    # -------------------------------------------------------------------------
    # FILESYSTEM ACCESS
    # -------------------------------------------------------------------------

    @property
    def fs(self) -> Dir:
        """The underlying filesystem, for plugging into serving layers."""
        return self._dir

    def determine_path(self, name: str) -> str:
        """
        Map a caller name to the path handed to the filesystem.

        Embedded mode uses the name verbatim. Disk mode concatenates
        base_path and name without inserting a separator, so one side
        must supply it.
        """
        if self.config.use_embedded:
            return name
        return self.config.base_path + name

    def open(self, name: str) -> Handle:
        return self._dir.open(self.determine_path(name))

    # -------------------------------------------------------------------------
    # READ HELPERS
    # -------------------------------------------------------------------------

    def read_file(self, name: str) -> bytes:
        """Return the full contents of a file."""
        with self.open(name) as handle:
            return handle.read()

    def read_dir(self, name: str) -> List[FileInfo]:
        """
        List a directory sorted by name.

        Args:
            name: Directory path.

        Returns:
            List[FileInfo]: Entries in ascending name order.
        """
        with self.open(name) as handle:
            entries = handle.readdir(-1)
        return sorted(entries, key=lambda fi: fi.name)

    def read_files(self, name: str, recursive: bool = False) -> Dict[str, bytes]:
        """
        Read every file in a directory.

        Args:
            name: Directory path.
            recursive: Descend into subdirectories (symlinked ones included).

        Returns:
            Dict[str, bytes]: Contents keyed by path ('name/child'). Only
                              files appear as keys.
        """
        results: Dict[str, bytes] = {}
        with self.open(name) as handle:
            self._read_files_recursive(name, handle, results, recursive)
        return results

    def _read_files_recursive(
            self,
            dirname: str,
            handle: Handle,
            results: Dict[str, bytes],
            recursive: bool,
    ) -> None:
        for fi in handle.readdir(-1):
            fpath = join_logical(dirname, fi.name)

            if fi.is_dir:
                if not recursive:
                    continue
                with self.open(fpath) as sub:
                    self._read_files_recursive(fpath, sub, results, recursive)
                continue

            with self.open(fpath) as sub:
                results[fpath] = sub.read()

    def walk(self, name: str = "/") -> Iterator[Tuple[str, FileInfo]]:
        """Yield (path, info) for every descendant, depth first."""
        with self.open(name) as handle:
            entries = handle.readdir(-1)

        for fi in entries:
            fpath = join_logical(name, fi.name)
            yield fpath, fi
            if fi.is_dir:
                yield from self.walk(fpath)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._dir.exists(name)

    def __len__(self) -> int:
        return len(self._index)
