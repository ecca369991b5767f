from __future__ import annotations

"""
Unit tests for the Path Helpers.

Verifies:
1. Lexical cleaning of logical paths.
2. Canonical index keys and prefix stripping.
3. OS path normalization and safe directory creation.
"""

import os

import pytest

from embedfs.infra.fs import (
    clean_logical,
    is_within,
    join_logical,
    normalize_logical,
    normalize_path,
    safe_mkdir,
    strip_prefix,
)


@pytest.mark.parametrize("raw, expected", [
    ("", "."),
    (".", "."),
    ("a//b/", "a/b"),
    ("/a/./b/../c", "/a/c"),
    ("//a", "/a"),
])
def test_clean_logical(raw, expected):
    assert clean_logical(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("", "/"),
    ("/", "/"),
    ("static/x.txt", "/static/x.txt"),
    ("/static//x.txt/", "/static/x.txt"),
])
def test_normalize_logical(raw, expected):
    assert normalize_logical(raw) == expected


def test_join_logical():
    assert join_logical("/static", "x.txt") == "/static/x.txt"
    assert join_logical("/", "x.txt") == "/x.txt"
    assert join_logical("", "x.txt") == "x.txt"


def test_strip_prefix():
    """The prefix is removed literally and a single leading '/' enforced."""
    assert strip_prefix("/tmp/work/a/x.txt", "/tmp/work") == "/a/x.txt"
    assert strip_prefix("static/x.txt", "static") == "/x.txt"
    assert strip_prefix("static", "static") == "/"
    assert strip_prefix("other/x.txt", "static") == "/other/x.txt"
    assert strip_prefix("x.txt", "") == "/x.txt"


def test_normalize_path_fallback(tmp_path):
    assert normalize_path("", str(tmp_path)) == os.path.abspath(str(tmp_path))
    assert os.path.isabs(normalize_path("relative/dir", "."))


def test_safe_mkdir(tmp_path):
    target = tmp_path / "a" / "b"
    ok, err = safe_mkdir(str(target))
    assert ok is True and err is None
    assert target.is_dir()

    blocker = tmp_path / "file"
    blocker.write_text("x")
    ok, err = safe_mkdir(str(blocker / "sub"))
    assert ok is False
    assert err


@pytest.mark.parametrize("path, expected", [
    ("/srv/pub", True),
    ("/srv/pub/", True),
    ("/srv/pub/a/b.txt", True),
    ("/srv/pub/a/../b.txt", True),
    ("/srv/pub/../secret.txt", False),
    ("/srv/pubx.txt", False),
    ("/srv/pubx/a.txt", False),
])
def test_is_within(path, expected):
    assert is_within(os.path.normpath(path), os.path.normpath("/srv/pub")) is expected
