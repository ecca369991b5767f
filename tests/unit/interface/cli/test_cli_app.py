from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Verifies:
1. Successful generation writes an importable module.
2. Usage errors map to exit code 2 with an 'ERROR:' message.
3. Settings precedence: defaults < JSON file < flags.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from embedfs.infra.logging import shutdown_logging
from embedfs.interface.cli.app import EXIT_FAILURE, EXIT_INTERRUPTED, EXIT_OK, EXIT_USAGE, main


@pytest.fixture(autouse=True)
def release_logging():
    yield
    shutdown_logging()


def test_main_generates_module(simple_dir: Path, tmp_path: Path, capsys):
    out = tmp_path / "gen" / "assets.py"
    code = main(["-i", str(simple_dir), "-o", str(out)])

    assert code == EXIT_OK
    assert out.exists()
    source = out.read_text(encoding="utf-8")
    assert "def new_static_assets(config: Config) -> Files:" in source
    assert f"Created: {out}" in capsys.readouterr().out


def test_main_dry_run_json(simple_dir: Path, capsys):
    code = main(["-i", str(simple_dir), "--dry-run", "--json"])
    assert code == EXIT_OK

    summary = json.loads(capsys.readouterr().out)
    assert summary["ok"] is True
    assert summary["dry_run"] is True
    assert summary["files"] == 2
    assert summary["directories"] == 2
    assert summary["function"] == "new_static_assets"


def test_main_missing_output(simple_dir: Path, capsys):
    code = main(["-i", str(simple_dir)])
    assert code == EXIT_USAGE
    assert "ERROR: Invalid output file" in capsys.readouterr().err


def test_main_missing_input(tmp_path: Path, capsys):
    code = main(["-i", str(tmp_path / "missing"), "-o", str(tmp_path / "o.py")])
    assert code == EXIT_USAGE
    assert "ERROR: Path does not exist" in capsys.readouterr().err
    assert not (tmp_path / "o.py").exists()


def test_main_empty_input(tmp_path: Path, capsys):
    code = main(["-i", "", "-o", str(tmp_path / "o.py")])
    assert code == EXIT_USAGE
    assert "Invalid static file directory" in capsys.readouterr().err


def test_main_invalid_ignore(simple_dir: Path, tmp_path: Path, capsys):
    code = main(["-i", str(simple_dir), "-o", str(tmp_path / "o.py"), "--ignore", "("])
    assert code == EXIT_USAGE
    assert "Error compiling ignore regex" in capsys.readouterr().err


def test_main_invalid_group(simple_dir: Path, tmp_path: Path, capsys):
    code = main(["-i", str(simple_dir), "-o", str(tmp_path / "o.py"), "--group", "not valid"])
    assert code == EXIT_USAGE
    assert "Invalid group name" in capsys.readouterr().err


def test_main_init_skips_snapshot(tmp_path: Path):
    """--init does not require the static directory to exist."""
    out = tmp_path / "assets.py"
    code = main(["-i", str(tmp_path / "not-yet"), "-o", str(out), "--init"])

    assert code == EXIT_OK
    assert "Files.new(config, None)" in out.read_text(encoding="utf-8")


def test_main_config_file_and_flag_precedence(simple_dir: Path, tmp_path: Path, capsys):
    cfg = tmp_path / "embedfs.json"
    cfg.write_text(json.dumps({
        "static_dir": str(simple_dir),
        "group": "CSS",
        "ignore": r"\.log$",
    }), encoding="utf-8")

    code = main(["--config", str(cfg), "--group", "JS", "--dry-run", "--json"])
    assert code == EXIT_OK

    summary = json.loads(capsys.readouterr().out)
    assert summary["function"] == "new_static_js"
    assert summary["files"] == 1
    assert summary["ignored"] == 1


def test_main_save_config(simple_dir: Path, tmp_path: Path):
    saved = tmp_path / "saved.json"
    code = main(["-i", str(simple_dir), "--prefix", "static", "--dry-run", "--save-config", str(saved)])

    assert code == EXIT_OK
    stored = json.loads(saved.read_text(encoding="utf-8"))
    assert stored["static_dir"] == str(simple_dir)
    assert stored["prefix"] == "static"


def test_main_unexpected_os_error(simple_dir: Path, tmp_path: Path, capsys):
    """Failures other than bad input exit with 1."""
    with patch("embedfs.interface.cli.app.write_module", side_effect=PermissionError("denied")):
        code = main(["-i", str(simple_dir), "-o", str(tmp_path / "o.py")])

    assert code == EXIT_FAILURE
    assert "ERROR: denied" in capsys.readouterr().err


def test_main_interrupted(simple_dir: Path, tmp_path: Path):
    with patch("embedfs.interface.cli.app.snapshot_with_stats", side_effect=KeyboardInterrupt):
        code = main(["-i", str(simple_dir), "-o", str(tmp_path / "o.py")])
    assert code == EXIT_INTERRUPTED
