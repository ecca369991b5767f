from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path manipulation for the two path spaces embedfs deals with:
OS paths used for I/O and slash-separated logical paths used as index
keys. Keeps separator handling in one place so Windows and Unix-like
systems produce identical snapshots.
"""

import os
import posixpath
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# LOGICAL PATH API
# -----------------------------------------------------------------------------

def to_slash(path: str) -> str:
    """Convert OS separators to '/'."""
    if os.sep != "/":
        path = path.replace(os.sep, "/")
    if os.altsep and os.altsep != "/":
        path = path.replace(os.altsep, "/")
    return path


def clean_logical(path: str) -> str:
    """
    Clean a slash-separated path without touching the filesystem.

    Collapses duplicate separators, resolves '.' and '..' lexically and
    drops trailing separators. An empty input cleans to '.'.

    Args:
        path: Raw logical path.

    Returns:
        str: Cleaned path.
    """
    cleaned = posixpath.normpath(to_slash(path)) if path else "."
    # POSIX keeps exactly two leading slashes; logical paths never do.
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def normalize_logical(path: str) -> str:
    """
    Produce the canonical index key for a logical path.

    Args:
        path: Raw logical path.

    Returns:
        str: Cleaned path with exactly one leading '/'.
    """
    cleaned = clean_logical(path)
    if cleaned == ".":
        return "/"
    return "/" + cleaned.lstrip("/")


def join_logical(parent: str, name: str) -> str:
    """Append a segment to a logical path."""
    if not parent or parent.endswith("/"):
        return parent + name
    return parent + "/" + name


def strip_prefix(path: str, prefix: str) -> str:
    """
    Remove a literal prefix and enforce a canonical leading '/'.

    Args:
        path: Logical path.
        prefix: Text to remove from the front, if present.

    Returns:
        str: Stripped path starting with '/'.
    """
    if prefix and path.startswith(prefix):
        path = path[len(prefix):]
    return "/" + path.lstrip("/")


# -----------------------------------------------------------------------------
# OS PATH API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def is_within(path: str, base: str) -> bool:
    """
    Verify lexically that path lies inside base.

    Both sides are normalized first, so '..' segments are resolved and a
    sibling sharing a text prefix with base (e.g. 'pub' vs 'pubx') does
    not count as inside. Symlinks are not resolved.

    Args:
        path: OS path to test.
        base: Root directory.

    Returns:
        bool: True if path equals base or is a descendant of it.
    """
    path = os.path.normpath(path)
    base = os.path.normpath(base)
    return path == base or path.startswith(base.rstrip(os.sep) + os.sep)


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
