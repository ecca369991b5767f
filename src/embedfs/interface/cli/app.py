from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the generator run: logging bootstrap, merging of settings
sources (defaults, JSON file, CLI overrides), snapshot, module emission
and result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from embedfs.core.emit import emit_module, factory_name, write_module
from embedfs.core.filters import compile_ignore
from embedfs.core.snapshot import SnapshotStats, snapshot_with_stats
from embedfs.core.validator import validate_config
from embedfs.domain.config import load_config, save_config
from embedfs.domain.errors import ConfigError
from embedfs.infra.fs import clean_logical
from embedfs.infra.logging import LoggingConfig, configure_logging, get_logger
from embedfs.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the generator workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    # 3. Resolve settings: defaults < JSON file < flags
    base_conf = load_config(args.config_file)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config_file:
        save_config(args.save_config_file, conf)

    # 4. Pre-flight checks
    error = _preflight(conf, dry_run=bool(args.dry_run))
    if error:
        return _fail(error, EXIT_USAGE)

    # 5. Snapshot and render
    stats = SnapshotStats()
    try:
        if conf["init"]:
            tree = None
        else:
            tree, stats = snapshot_with_stats(
                conf["static_dir"], ignore=conf["ignore"], prefix=conf["prefix"]
            )
        source = emit_module(
            tree,
            static_dir=conf["static_dir"],
            output_file=conf["output_file"],
            group=conf["group"],
            ignore=conf["ignore"],
            prefix=conf["prefix"],
        )
        if not args.dry_run:
            write_module(conf["output_file"], source)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except ConfigError as e:
        return _fail(str(e), EXIT_USAGE)
    except FileNotFoundError as e:
        return _fail(f"Path does not exist: {e.filename or e}", EXIT_USAGE)
    except OSError as e:
        logger.critical(f"Generation failed: {e}", exc_info=True)
        return _fail(str(e), EXIT_FAILURE)

    # 6. Output rendering
    summary = _build_summary(conf, stats, dry_run=bool(args.dry_run))
    if args.json_output:
        print(json.dumps(summary, ensure_ascii=False, indent=2))
    else:
        _print_human_summary(summary)
    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING AND CHECKS
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge the non-None overrides of known keys into base."""
    out = dict(base)
    for k in ("static_dir", "output_file", "group", "ignore", "prefix", "init"):
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out


def _preflight(conf: Dict[str, Any], *, dry_run: bool) -> Optional[str]:
    """Return a usage error message, or None when the settings are runnable."""
    static_dir = conf["static_dir"]
    if clean_logical(static_dir) in ("", "."):
        return f"Invalid static file directory '{static_dir}'"

    if not conf["output_file"] and not dry_run:
        return "Invalid output file: -o/--output is required"

    try:
        factory_name(conf["group"])
        compile_ignore(conf["ignore"])
    except ConfigError as e:
        return str(e)
    return None


def _fail(message: str, code: int) -> int:
    logger.error(message)
    print(f"ERROR: {message}", file=sys.stderr)
    return code

# -----------------------------------------------------------------------------
# RESULT RENDERING
# -----------------------------------------------------------------------------

def _build_summary(conf: Dict[str, Any], stats: SnapshotStats, *, dry_run: bool) -> Dict[str, Any]:
    summary: Dict[str, Any] = {
        "ok": True,
        "static_dir": conf["static_dir"],
        "output_file": conf["output_file"],
        "function": factory_name(conf["group"]),
        "init": conf["init"],
        "dry_run": dry_run,
    }
    summary.update(asdict(stats))
    return summary


def _print_human_summary(summary: Dict[str, Any]) -> None:
    if summary["dry_run"]:
        print("DRY RUN: no module written.")
    else:
        print(f"Created: {summary['output_file']}")

    if summary["init"]:
        print(f"  {summary['function']}() initialized without contents")
        return

    print(
        f"  {summary['files']} files in {summary['directories']} directories, "
        f"{summary['raw_bytes']:,} bytes ({summary['encoded_bytes']:,} encoded)"
    )
    if summary["ignored"]:
        print(f"  {summary['ignored']} entries ignored")
