from __future__ import annotations

"""
Tree Rehydrator.

Turns an embedded DirFile tree into runtime FileNodes plus the flat path
index the virtual filesystem resolves against. Runs once, before the
filesystem is handed to readers.
"""

import logging
from typing import Dict, Optional, Tuple

from embedfs.core.codec import decode
from embedfs.domain.errors import DecodeError
from embedfs.domain.models import DirFile, FileNode
from embedfs.infra.fs import normalize_logical

logger = logging.getLogger(__name__)

PathIndex = Dict[str, FileNode]


def rehydrate(root: Optional[DirFile]) -> Tuple[Optional[FileNode], PathIndex]:
    """
    Decode an embedded tree and index it by logical path.

    Args:
        root: Embedded root node, or None for an artifact generated
              without contents.

    Returns:
        Tuple[Optional[FileNode], PathIndex]: Runtime root and path index.

    Raises:
        DecodeError: A payload does not decode, or two nodes share a path.
    """
    index: PathIndex = {}
    if root is None:
        logger.debug("Rehydrating empty tree.")
        return None, index

    node = _rehydrate_node(root, index)
    logger.debug(f"Rehydrated {len(index)} nodes from embedded tree.")
    return node, index


def _rehydrate_node(record: DirFile, index: PathIndex) -> FileNode:
    key = normalize_logical(record.path)
    if key in index:
        raise DecodeError(f"Duplicate path in embedded tree: {key}")

    node = FileNode(
        path=key,
        name=record.name,
        size=record.size,
        mode=record.mode,
        mod_time=record.mod_time,
        is_dir=record.is_dir,
    )
    index[key] = node

    if record.is_dir:
        node.files = [_rehydrate_node(child, index) for child in record.files]
        return node

    try:
        node.data = decode(record.compressed)
    except DecodeError as e:
        raise DecodeError(f"Corrupt payload for {key}: {e}") from e
    return node
