from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to generation setting keys.
2. Unset flags map to None so file settings are not overridden.
3. Handling of boolean flags (store_true).
"""

from embedfs.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_path_arguments():
    """Verify input/output path arguments are captured."""
    args = parse_args(["-i", "public", "-o", "pkg/assets.py"])
    overrides = args_to_overrides(args)

    assert overrides["static_dir"] == "public"
    assert overrides["output_file"] == "pkg/assets.py"


def test_cli_long_flags_mapping():
    args = parse_args([
        "--input", "static",
        "--output", "out.py",
        "--group", "CSS",
        "--ignore", r"\.map$",
        "--prefix", "static",
        "--init",
    ])
    overrides = args_to_overrides(args)

    assert overrides == {
        "static_dir": "static",
        "output_file": "out.py",
        "group": "CSS",
        "ignore": r"\.map$",
        "prefix": "static",
        "init": True,
    }


def test_cli_unset_flags_are_none():
    """Flags not given must not override file settings."""
    overrides = args_to_overrides(parse_args([]))
    assert overrides["static_dir"] is None
    assert overrides["group"] is None
    assert "init" not in overrides


def test_cli_runtime_flags():
    args = parse_args(["--dry-run", "--json", "--debug", "--log-file", "x.log", "--config", "c.json"])
    assert args.dry_run is True
    assert args.json_output is True
    assert args.debug is True
    assert args.log_file == "x.log"
    assert args.config_file == "c.json"
    assert args.save_config_file is None
