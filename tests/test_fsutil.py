import os
from pathlib import Path

import pytest

from stamp.fsutil import (
    ensure_dir_writable,
    ensure_path_relative_to_root,
    is_sub_dir,
    no_path_exists,
    normalize_path,
    path_exists,
    path_is_dir,
)


def test_no_path_exists(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert no_path_exists("foo.txt") is True
    Path("foo.txt").write_text("")
    assert no_path_exists("foo.txt") is False


def test_path_exists(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert path_exists("foo.txt") is False
    Path("foo.txt").write_text("")
    assert path_exists("foo.txt") is True


def test_path_is_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert path_is_dir("foo") is False
    Path("foo").write_text("")
    assert path_is_dir("foo") is False
    os.remove("foo")
    os.mkdir("foo")
    assert path_is_dir("foo") is True


def test_normalize_path_empty_is_noop():
    assert normalize_path("") == ""


def test_normalize_path_expands_env_vars(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FOO", "aaa")
    monkeypatch.setenv("BAR", "bbb")
    working_dir = os.getcwd()
    actual = normalize_path(os.path.join(".", "${FOO}-dir", "$BAR"))
    assert actual == os.path.join(working_dir, "aaa-dir", "bbb")


def test_normalize_path_expands_tilde(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    home = str(Path.home())
    assert normalize_path("~") == home
    assert normalize_path(os.path.join("~", "foo")) == os.path.join(home, "foo")


def test_normalize_path_returns_absolute_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert normalize_path(".") == os.getcwd()


def test_ensure_dir_writable(tmp_path):
    directory = tmp_path / "foo"
    ensure_dir_writable(directory)
    assert directory.is_dir()
    assert not (directory / ".touch").exists()

    entry = directory / "bar"
    entry.write_text("")
    assert entry.is_file()


def test_ensure_dir_writable_fails_for_file(tmp_path):
    target = tmp_path / "file"
    target.write_text("")
    with pytest.raises(OSError, match="unable to create"):
        ensure_dir_writable(target)


@pytest.fixture
def tree(tmp_path):
    base = tmp_path.resolve()
    root = base / "aaa"
    (root / "bbb").mkdir(parents=True)
    (root / "bbb" / "ccc.txt").write_text("ccc")
    (base / "protected.txt").write_text("protected")
    os.symlink(root / "bbb" / "ccc.txt", root / "bbb" / "ddd.txt")
    os.symlink(base / "protected.txt", root / "bbb" / "eee.txt")
    return base, root


@pytest.mark.parametrize(
    "path, expected_parts",
    [
        ("bbb", ("bbb",)),
        ("bbb/ccc.txt", ("bbb", "ccc.txt")),
        ("bbb/missing.txt", ("bbb", "missing.txt")),
        ("bbb/ddd.txt", ("bbb", "ccc.txt")),
    ],
)
def test_ensure_path_relative_to_root(tree, path, expected_parts):
    _, root = tree
    assert ensure_path_relative_to_root(path, str(root)) == str(root.joinpath(*expected_parts))


def test_ensure_path_relative_to_root_with_relative_root(tree, monkeypatch):
    base, root = tree
    monkeypatch.chdir(base)
    assert ensure_path_relative_to_root("bbb", "./aaa") == str(root / "bbb")


def test_ensure_path_relative_to_root_with_absolute_path(tree):
    _, root = tree
    absolute = str(root / "bbb")
    assert ensure_path_relative_to_root(absolute, str(root)) == absolute


@pytest.mark.parametrize("path", ["../protected.txt", "../missing.txt", "bbb/eee.txt"])
def test_ensure_path_relative_to_root_rejects_traversal(tree, path):
    _, root = tree
    with pytest.raises(ValueError, match="attempted to traverse"):
        ensure_path_relative_to_root(path, str(root))


@pytest.mark.parametrize(
    "path, directory, expected",
    [
        ("/foo/bar/baz", "/foo", True),
        ("/foo/bar/baz", "/", True),
        ("/foo/bar/baz", "/bar", False),
    ],
)
def test_is_sub_dir(path, directory, expected):
    assert is_sub_dir(path, directory) is expected