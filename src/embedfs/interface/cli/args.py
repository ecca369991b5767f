from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the generator and translates parsed
arguments into overrides for the generation settings.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the embedfs CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="embedfs",
        description="Compile a directory into a Python module that embeds its files.",
    )

    # --- Snapshot Input/Output ---
    p.add_argument(
        "-i", "--input",
        dest="static_dir",
        default=None,
        help="Static file directory to compile (default: static).",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_file",
        default=None,
        help="Python module to write.",
    )
    p.add_argument(
        "--group",
        default=None,
        help="Group name of the files, e.g. Assets, CSS, JS. Names the factory function.",
    )

    # --- Path Rules ---
    p.add_argument(
        "--ignore",
        default=None,
        help=r"Regex of files/dirs to leave out, matched against the path, e.g. \.gitignore",
    )
    p.add_argument(
        "--prefix",
        default=None,
        help="Prefix to strip from stored file paths.",
    )
    p.add_argument(
        "--init",
        action="store_true",
        help="Only write the factory module, without embedding any file contents.",
    )

    # --- Configuration Sources ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with generation settings; flags override it.",
    )
    p.add_argument(
        "--save-config",
        dest="save_config_file",
        default=None,
        help="Write the effective settings to this JSON file.",
    )

    # --- Runtime and Diagnostics ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Snapshot the directory but do not write the module.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the snapshot summary as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into generation setting overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Overrides; None values mean 'not given'.
    """
    overrides: Dict[str, Any] = {
        "static_dir": args.static_dir,
        "output_file": args.output_file,
        "group": args.group,
        "ignore": args.ignore,
        "prefix": args.prefix,
    }
    if args.init:
        overrides["init"] = True
    return overrides
