from __future__ import annotations

"""
Unit tests for Configuration Domain Management.

Verifies:
1. Runtime Config defaults and disk detection.
2. Loading generation settings from JSON over the defaults.
3. Persistence with a version stamp.
"""

import dataclasses
import json
from pathlib import Path

import pytest

from embedfs.domain.config import (
    CURRENT_CONFIG_VERSION,
    Config,
    get_default_config,
    load_config,
    save_config,
)


def test_runtime_config_defaults():
    cfg = Config()
    assert cfg.use_embedded is True
    assert cfg.fallback_to_disk is False
    assert cfg.base_path == ""
    assert cfg.uses_disk is False


@pytest.mark.parametrize("cfg, expected", [
    (Config(use_embedded=False), True),
    (Config(use_embedded=True, fallback_to_disk=True), True),
    (Config(use_embedded=True, fallback_to_disk=False), False),
])
def test_runtime_config_uses_disk(cfg, expected):
    assert cfg.uses_disk is expected


def test_runtime_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Config().base_path = "/x"  # type: ignore[misc]


def test_default_generation_settings():
    defaults = get_default_config()
    assert defaults["static_dir"] == "static"
    assert defaults["group"] == "Assets"
    assert defaults["init"] is False


def test_load_config_without_path():
    assert load_config(None) == get_default_config()


def test_load_config_missing_file(tmp_path: Path):
    assert load_config(str(tmp_path / "none.json")) == get_default_config()


def test_load_config_merges_known_keys(tmp_path: Path):
    path = tmp_path / "embedfs.json"
    path.write_text(json.dumps({"group": "CSS", "prefix": "static", "unknown": 1}), encoding="utf-8")

    conf = load_config(str(path))
    assert conf["group"] == "CSS"
    assert conf["prefix"] == "static"
    assert conf["static_dir"] == "static"
    assert "unknown" not in conf


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_load_config_corrupt_file(tmp_path: Path, content):
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    assert load_config(str(path)) == get_default_config()


def test_save_config_roundtrip(tmp_path: Path):
    path = tmp_path / "nested" / "embedfs.json"
    conf = get_default_config()
    conf["group"] = "JS"

    save_config(str(path), conf)

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["version"] == CURRENT_CONFIG_VERSION
    assert load_config(str(path))["group"] == "JS"
