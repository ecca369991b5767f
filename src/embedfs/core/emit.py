from __future__ import annotations

"""
Generated Module Emitter.

Renders a DirFile tree as a Python module whose factory function rebuilds
the Files collection at import time, and persists it to disk.
"""

import logging
import os
import re
import shlex
from typing import List, Optional

from embedfs.domain.errors import ConfigError
from embedfs.domain.models import DirFile
from embedfs.infra.fs import safe_mkdir

logger = logging.getLogger(__name__)

INDENT = "    "

_MODULE_TEMPLATE = '''\
# Code generated by embedfs. DO NOT EDIT.
# Regenerate with:
#   {command}

from embedfs import Config, DirFile, Files


def {func_name}(config: Config) -> Files:
    """Initialize a new Files instance for the {group} group."""
    return Files.new(config, {tree})
'''

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def factory_name(group: str) -> str:
    """
    Derive the generated factory function name from a group name.

    Args:
        group: Group identifier such as 'Assets' or 'CSSFiles'.

    Returns:
        str: e.g. 'new_static_assets', 'new_static_css_files'.

    Raises:
        ConfigError: If the group is not a valid identifier.
    """
    if not group or not group.isidentifier():
        raise ConfigError(f"Invalid group name {group!r}")
    snake = re.sub(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])", "_", group).lower()
    return f"new_static_{snake}"


def generation_command(
        static_dir: str,
        output_file: str,
        group: str,
        ignore: str = "",
        prefix: str = "",
        init: bool = False,
) -> str:
    """Rebuild the CLI invocation recorded in the module header."""
    args = ["embedfs", "-i", static_dir, "-o", output_file, "--group", group]
    if ignore:
        args += ["--ignore", ignore]
    if prefix:
        args += ["--prefix", prefix]
    if init:
        args.append("--init")
    return " ".join(shlex.quote(a) for a in args)


def emit_module(
        root: Optional[DirFile],
        *,
        static_dir: str,
        output_file: str,
        group: str = "Assets",
        ignore: str = "",
        prefix: str = "",
) -> str:
    """
    Render the generated module source.

    Args:
        root: Snapshot tree, or None to emit an empty 'init' module that
              can be committed before the first real generation.
        static_dir: Snapshotted directory, recorded in the header.
        output_file: Target module path, recorded in the header.
        group: Asset group name used for the factory function.
        ignore: Ignore regex used, recorded in the header.
        prefix: Stripped prefix, recorded in the header.

    Returns:
        str: Python source text.
    """
    command = generation_command(
        static_dir, output_file, group, ignore, prefix, init=root is None
    )
    tree = "None" if root is None else _render_node(root, 1)
    return _MODULE_TEMPLATE.format(
        command=command,
        func_name=factory_name(group),
        group=group,
        tree=tree,
    )


def write_module(path: str, source: str) -> None:
    """
    Persist generated source, replacing any previous file.

    Args:
        path: Destination file.
        source: Module text.

    Raises:
        OSError: If the parent directory cannot be created or the write fails.
    """
    parent = os.path.dirname(os.path.abspath(path))
    ok, err = safe_mkdir(parent)
    if not ok:
        raise OSError(f"Cannot create output directory '{parent}': {err}")

    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(source)
    logger.info(f"Generated module written to: {path}")


# -----------------------------------------------------------------------------
# INTERNAL HELPERS (RENDERING)
# -----------------------------------------------------------------------------

def _render_node(node: DirFile, depth: int) -> str:
    """Render one DirFile constructor call at the given nesting depth."""
    pad = INDENT * (depth + 1)
    lines: List[str] = [
        "DirFile(",
        f"{pad}path={node.path!r},",
        f"{pad}name={node.name!r},",
        f"{pad}size={node.size},",
        f"{pad}mode={node.mode:#o},",
        f"{pad}mod_time={node.mod_time},",
        f"{pad}is_dir={node.is_dir},",
    ]

    if node.compressed:
        # base64 text never contains quotes or backslashes
        lines.append(f'{pad}compressed="""\n{node.compressed}""",')

    if node.files:
        lines.append(f"{pad}files=(")
        for child in node.files:
            lines.append(f"{pad}{INDENT}{_render_node(child, depth + 2)},")
        lines.append(f"{pad}),")

    lines.append(f"{INDENT * depth})")
    return "\n".join(lines)
