from __future__ import annotations

"""
Unit tests for Generation Settings Validation.

Verifies:
1. Defaults are applied for missing or None fields.
2. Type coercion with warnings in non-strict mode.
3. TypeError in strict mode.
"""

import pytest

from embedfs.core.validator import validate_config
from embedfs.domain.config import get_default_config


def test_validate_empty_dict_returns_defaults():
    conf, warnings = validate_config({})
    assert conf == get_default_config()
    assert warnings == []


def test_validate_non_dict_falls_back():
    conf, warnings = validate_config(["not", "a", "dict"])
    assert conf == get_default_config()
    assert len(warnings) == 1


def test_validate_non_dict_strict():
    with pytest.raises(TypeError):
        validate_config("nope", strict=True)


def test_validate_trims_strings_but_not_ignore():
    """String fields are trimmed; the ignore regex is kept verbatim."""
    conf, _ = validate_config({"static_dir": "  static  ", "group": " CSS ", "ignore": " x "})
    assert conf["static_dir"] == "static"
    assert conf["group"] == "CSS"
    assert conf["ignore"] == " x "


def test_validate_drops_unknown_keys():
    conf, _ = validate_config({"static_dir": "s", "bogus": 1})
    assert "bogus" not in conf


@pytest.mark.parametrize("raw, expected", [
    ("yes", True),
    ("false", False),
    (1, True),
    (0, False),
])
def test_validate_bool_coercion(raw, expected):
    conf, warnings = validate_config({"init": raw})
    assert conf["init"] is expected
    assert warnings


def test_validate_bad_types_fall_back():
    conf, warnings = validate_config({"output_file": 42, "init": "maybe", "ignore": 3})
    assert conf["output_file"] == ""
    assert conf["init"] is False
    assert conf["ignore"] == ""
    assert len(warnings) == 3


def test_validate_strict_rejects_bad_types():
    with pytest.raises(TypeError):
        validate_config({"group": 5}, strict=True)
    with pytest.raises(TypeError):
        validate_config({"init": "yes"}, strict=True)


def test_validate_none_ignore_becomes_empty():
    conf, _ = validate_config({"ignore": None})
    assert conf["ignore"] == ""
