from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. On-disk asset trees (with chained symlinks) for snapshot tests.
3. Hand-built embedded trees for runtime tests.
"""

import os
import stat
import sys
from pathlib import Path
from typing import Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from embedfs.core.codec import encode  # noqa: E402
from embedfs.domain.models import DirFile  # noqa: E402

DIR_MODE = stat.S_IFDIR | 0o755
FILE_MODE = stat.S_IFREG | 0o644


# -----------------------------------------------------------------------------
# Embedded Tree Builders
# -----------------------------------------------------------------------------
def file_record(path: str, data: bytes, mod_time: int = 1446650128) -> DirFile:
    """Build an embedded leaf record for the given logical path."""
    return DirFile(
        path=path,
        name=path.rsplit("/", 1)[-1],
        size=len(data),
        mode=FILE_MODE,
        mod_time=mod_time,
        is_dir=False,
        compressed=encode(data),
    )


def dir_record(path: str, files: List[DirFile], mod_time: int = 1446650128) -> DirFile:
    """Build an embedded directory record for the given logical path."""
    return DirFile(
        path=path,
        name=path.rsplit("/", 1)[-1],
        size=0,
        mode=DIR_MODE,
        mod_time=mod_time,
        is_dir=True,
        files=tuple(files),
    )


@pytest.fixture
def embedded_tree() -> DirFile:
    """
    Return an embedded tree whose insertion order is deliberately unsorted.

    Structure:
    /static
      zeta.txt         "zeta\\n"
      alpha.txt        "alpha\\n"
      nested/
        deep.txt       "deep\\n"
      empty/
      mid.css          "body{}"
    """
    return dir_record("/static", [
        file_record("/static/zeta.txt", b"zeta\n"),
        file_record("/static/alpha.txt", b"alpha\n"),
        dir_record("/static/nested", [
            file_record("/static/nested/deep.txt", b"deep\n"),
        ]),
        dir_record("/static/empty", []),
        file_record("/static/mid.css", b"body{}"),
    ])


# -----------------------------------------------------------------------------
# On-disk Fixtures
# -----------------------------------------------------------------------------
def _symlink(target: Path, link: Path) -> None:
    try:
        os.symlink(target, link, target_is_directory=target.is_dir())
    except (OSError, NotImplementedError) as e:
        pytest.skip(f"symlinks not supported here: {e}")


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """
    Create an asset directory with a two-level symlink chain.

    Structure (tmp_path):
    static/
      plainfile.txt            "palindata\\n"
      sub/nested.txt           "nested\\n"
      symlinkedfile.txt  ->  outside/data.txt
      symlinkeddir       ->  outside/level1
    outside/
      data.txt                 "data\\n"
      level1/
        one.txt                "one\\n"
        link2  ->  elsewhere/level2
    elsewhere/level2/
      leaf.bin                 b"\\x00\\x01leaf"
    """
    static = tmp_path / "static"
    (static / "sub").mkdir(parents=True)
    (static / "plainfile.txt").write_bytes(b"palindata\n")
    (static / "sub" / "nested.txt").write_bytes(b"nested\n")

    outside = tmp_path / "outside"
    (outside / "level1").mkdir(parents=True)
    (outside / "data.txt").write_bytes(b"data\n")
    (outside / "level1" / "one.txt").write_bytes(b"one\n")

    level2 = tmp_path / "elsewhere" / "level2"
    level2.mkdir(parents=True)
    (level2 / "leaf.bin").write_bytes(b"\x00\x01leaf")

    _symlink(level2, outside / "level1" / "link2")
    _symlink(outside / "data.txt", static / "symlinkedfile.txt")
    _symlink(outside / "level1", static / "symlinkeddir")

    return static


@pytest.fixture
def simple_dir(tmp_path: Path) -> Path:
    """
    Create the minimal example tree.

    Structure (tmp_path):
    a/
      x.txt       "hi\\n"
      b/y.log     "log\\n"
    """
    root = tmp_path / "a"
    (root / "b").mkdir(parents=True)
    (root / "x.txt").write_bytes(b"hi\n")
    (root / "b" / "y.log").write_bytes(b"log\n")
    return root


def collect_paths(node: DirFile) -> Dict[str, DirFile]:
    """Flatten an embedded tree into {path: record}."""
    out = {node.path: node}
    for child in node.files:
        out.update(collect_paths(child))
    return out


@pytest.fixture
def make_file():
    """Factory fixture for embedded leaf records."""
    return file_record


@pytest.fixture
def make_dir():
    """Factory fixture for embedded directory records."""
    return dir_record


@pytest.fixture
def flatten():
    """Return a helper that maps every path of a tree to its record."""
    return collect_paths
