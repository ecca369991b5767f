from __future__ import annotations

"""
Directory Snapshotter.

Walks a root directory depth-first and builds the ordered DirFile tree
that generated modules embed. Symlinked directories are read through
their real location while keeping the logical path rooted at the link,
for any depth of nested links.
"""

import logging
import os
import stat as stat_mod
from dataclasses import dataclass, replace
from typing import FrozenSet, List, Optional, Pattern, Tuple

from embedfs.core.codec import encode
from embedfs.core.filters import IgnoreSpec, compile_ignore, is_ignored
from embedfs.domain.errors import ConfigError
from embedfs.domain.models import DirFile
from embedfs.infra.fs import clean_logical, join_logical, strip_prefix

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# WALK STATE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class WalkPath:
    """
    Location of an entry during the walk.

    Attributes:
        physical: OS path used for I/O.
        logical: User-visible slash path, before prefix stripping.
    """
    physical: str
    logical: str

    def child(self, name: str) -> "WalkPath":
        return WalkPath(os.path.join(self.physical, name), join_logical(self.logical, name))

    def through(self, real_path: str) -> "WalkPath":
        """Read from real_path while keeping the current logical path."""
        return WalkPath(real_path, self.logical)


@dataclass
class SnapshotStats:
    """
    Counters collected while snapshotting.

    Attributes:
        directories: Directory nodes emitted, root included.
        files: File nodes emitted.
        raw_bytes: Sum of uncompressed file sizes.
        encoded_bytes: Sum of encoded blob lengths.
        ignored: Entries skipped by the ignore pattern.
        skipped: Special files (sockets, fifos, devices) left out.
    """
    directories: int = 0
    files: int = 0
    raw_bytes: int = 0
    encoded_bytes: int = 0
    ignored: int = 0
    skipped: int = 0


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def snapshot(root_dir: str, ignore: IgnoreSpec = None, prefix: str = "") -> DirFile:
    """
    Snapshot a directory tree.

    Args:
        root_dir: Directory to embed. Its cleaned, slash-separated form is
                  the logical path of the root node.
        ignore: Regex searched against each entry's logical path before
                prefix stripping. Matching entries (and the subtree of a
                matching directory) are left out.
        prefix: Literal text stripped from the front of every stored path.

    Returns:
        DirFile: Root node with its complete ordered subtree.

    Raises:
        ConfigError: Invalid root, invalid ignore regex or a symlink cycle.
        OSError: Unreadable entries and broken symlinks, unchanged.
    """
    tree, _ = snapshot_with_stats(root_dir, ignore=ignore, prefix=prefix)
    return tree


def snapshot_with_stats(
        root_dir: str,
        ignore: IgnoreSpec = None,
        prefix: str = "",
) -> Tuple[DirFile, SnapshotStats]:
    """
    Snapshot a directory tree and report what was collected.

    See snapshot() for the argument contract.

    Returns:
        Tuple[DirFile, SnapshotStats]: Root node and walk counters.
    """
    rx = compile_ignore(ignore)

    logical_root = clean_logical(root_dir or "")
    if logical_root in ("", "."):
        raise ConfigError(f"Invalid static directory {root_dir!r}")

    st = os.stat(root_dir)
    if not stat_mod.S_ISDIR(st.st_mode):
        raise ConfigError(f"Static directory {root_dir!r} is not a directory")

    logger.info(f"Snapshotting directory: {root_dir}")

    stats = SnapshotStats(directories=1)
    root = WalkPath(physical=root_dir, logical=logical_root)
    children = _walk(root, frozenset({os.path.realpath(root_dir)}), rx, stats)

    tree = DirFile(
        path=root.logical,
        name=os.path.basename(os.path.abspath(root_dir)),
        size=0,
        mode=st.st_mode,
        mod_time=int(st.st_mtime),
        is_dir=True,
        files=children,
    )
    tree = _strip_tree(tree, prefix)

    logger.info(
        f"Snapshot complete: {stats.directories} directories, {stats.files} files, "
        f"{stats.raw_bytes} bytes ({stats.encoded_bytes} encoded), {stats.ignored} ignored"
    )
    return tree, stats


# -----------------------------------------------------------------------------
# INTERNAL HELPERS (WALK)
# -----------------------------------------------------------------------------

def _walk(
        here: WalkPath,
        ancestors: FrozenSet[str],
        rx: Optional[Pattern[str]],
        stats: SnapshotStats,
) -> Tuple[DirFile, ...]:
    """Build the children of one directory in directory-read order."""
    with os.scandir(here.physical) as it:
        entries = list(it)

    nodes: List[DirFile] = []
    for entry in entries:
        loc = here.child(entry.name)

        if is_ignored(loc.logical, rx):
            logger.debug(f"Ignoring: {loc.logical}")
            stats.ignored += 1
            continue

        if entry.is_symlink():
            real = os.path.realpath(loc.physical)
            st = os.stat(loc.physical)
            if stat_mod.S_ISDIR(st.st_mode):
                nodes.append(_dir_node(loc.through(real), entry.name, st, ancestors, rx, stats))
                continue
        else:
            st = entry.stat(follow_symlinks=False)
            if stat_mod.S_ISDIR(st.st_mode):
                real = os.path.realpath(loc.physical)
                nodes.append(_dir_node(loc.through(real), entry.name, st, ancestors, rx, stats))
                continue

        if not stat_mod.S_ISREG(st.st_mode):
            logger.warning(f"Skipping special file: {loc.logical}")
            stats.skipped += 1
            continue

        nodes.append(_file_node(loc, entry.name, st, stats))

    return tuple(nodes)


def _dir_node(
        loc: WalkPath,
        name: str,
        st: os.stat_result,
        ancestors: FrozenSet[str],
        rx: Optional[Pattern[str]],
        stats: SnapshotStats,
) -> DirFile:
    """Recurse into a directory whose physical path is already resolved."""
    if loc.physical in ancestors:
        raise ConfigError(f"Symlink cycle at {loc.logical!r} -> {loc.physical!r}")

    stats.directories += 1
    children = _walk(loc, ancestors | {loc.physical}, rx, stats)
    return DirFile(
        path=loc.logical,
        name=name,
        size=0,
        mode=st.st_mode,
        mod_time=int(st.st_mtime),
        is_dir=True,
        files=children,
    )


def _file_node(loc: WalkPath, name: str, st: os.stat_result, stats: SnapshotStats) -> DirFile:
    """Read and encode a regular file (or the target of a file symlink)."""
    with open(loc.physical, "rb") as f:
        data = f.read()

    blob = encode(data)
    stats.files += 1
    stats.raw_bytes += len(data)
    stats.encoded_bytes += len(blob)
    logger.debug(f"Processing: {loc.logical}")

    return DirFile(
        path=loc.logical,
        name=name,
        size=len(data),
        mode=st.st_mode,
        mod_time=int(st.st_mtime),
        is_dir=False,
        compressed=blob,
    )


# -----------------------------------------------------------------------------
# INTERNAL HELPERS (PREFIX)
# -----------------------------------------------------------------------------

def _strip_tree(node: DirFile, prefix: str) -> DirFile:
    """Apply prefix stripping and the leading '/' to every stored path."""
    return replace(
        node,
        path=strip_prefix(node.path, prefix),
        files=tuple(_strip_tree(child, prefix) for child in node.files),
    )
