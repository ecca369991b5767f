from __future__ import annotations

"""
Ignore Pattern Engine.

Implements regex-based exclusion for the snapshotter. Patterns are
evaluated with search semantics against logical paths, so an expression
may target a file name, an extension or a whole directory prefix.
"""

import re
from typing import Optional, Pattern, Union

from embedfs.domain.errors import ConfigError

IgnoreSpec = Union[None, str, Pattern[str]]

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_ignore(pattern: IgnoreSpec) -> Optional[Pattern[str]]:
    """
    Normalize an ignore specification into a compiled pattern.

    A malformed expression is an error, never skipped.

    Args:
        pattern: Raw expression, compiled pattern, or None/'' for no filter.

    Returns:
        Optional[Pattern[str]]: Compiled pattern or None.

    Raises:
        ConfigError: If the expression does not compile.
    """
    if pattern is None:
        return None
    if isinstance(pattern, re.Pattern):
        return pattern
    if not pattern:
        return None

    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"Error compiling ignore regex {pattern!r}: {e}") from e


def is_ignored(logical_path: str, rx: Optional[Pattern[str]]) -> bool:
    """
    Verify if a logical path matches the ignore pattern.

    Args:
        logical_path: Slash-separated path before prefix stripping.
        rx: Compiled ignore pattern, or None.

    Returns:
        bool: True if the entry must be skipped.
    """
    if rx is None:
        return False
    return rx.search(logical_path) is not None
