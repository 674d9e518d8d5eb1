"""Filesystem helpers."""

from __future__ import annotations

import errno
import os
import re
from pathlib import Path

DEFAULT_DIR_MODE = 0o700
DEFAULT_FILE_MODE = 0o600

_ENV_VAR = re.compile(r"\$\{([^}]*)\}|\$([A-Za-z0-9_]+|[*#$@!?\-])")


def no_path_exists(path: str | os.PathLike) -> bool:
    """Return True if nothing exists at path (or the path is invalid)."""
    try:
        os.stat(path)
    except (FileNotFoundError, ValueError):
        return True
    except OSError as exc:
        return exc.errno == errno.EINVAL
    return False


def path_exists(path: str | os.PathLike) -> bool:
    """Return True if something exists at path."""
    return not no_path_exists(path)


def path_is_dir(path: str | os.PathLike) -> bool:
    """Return True if path is an existing directory."""
    return os.path.isdir(path)


def _expand_env(text: str) -> str:
    def substitute(match: re.Match) -> str:
        name = match.group(1) if match.group(1) is not None else match.group(2)
        return os.environ.get(name, "") if name else ""

    return _ENV_VAR.sub(substitute, text)


def normalize_path(name: str) -> str:
    """Return name as an absolute path, expanding env vars and a leading ~.

    An empty (or blank) name yields the empty string.
    """
    normalized = name.strip()
    if not normalized:
        return ""
    normalized = _expand_env(normalized)
    if normalized.startswith("~"):
        try:
            home = str(Path.home())
        except RuntimeError as exc:
            raise ValueError(f"unable to normalize {name}: {exc}") from exc
        normalized = home + normalized[1:]
    return os.path.abspath(normalized)


def ensure_dir_writable(path: str | os.PathLike) -> None:
    """Create path as a directory if needed and check that it is writable."""
    try:
        os.makedirs(path, DEFAULT_DIR_MODE, exist_ok=True)
    except OSError as exc:
        raise OSError(f"unable to create {path}: {exc}") from exc

    touch = os.path.join(path, ".touch")
    try:
        fd = os.open(touch, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, DEFAULT_FILE_MODE)
    except OSError as exc:
        raise OSError(f"unable to write to {path}: {exc}") from exc
    os.close(fd)
    try:
        os.remove(touch)
    except OSError:
        pass


def ensure_path_relative_to_root(path: str, root: str) -> str:
    """Return the absolute path of path inside root.

    Symlinks are resolved for existing paths. Raises ValueError when the
    result lies outside root.
    """
    path = path.replace("/", os.sep)
    abs_root = os.path.abspath(root)

    abs_path = path
    if not os.path.isabs(abs_path):
        abs_path = os.path.abspath(os.path.join(abs_root, path))

    if path_exists(abs_path):
        abs_path = os.path.realpath(abs_path)

    if not is_sub_dir(abs_path, abs_root):
        raise ValueError(f"{path} attempted to traverse outside of {root}")

    return abs_path


def is_sub_dir(path: str, directory: str) -> bool:
    """Return True if directory is a proper ancestor of path."""
    while path != os.sep:
        parent = os.path.dirname(path)
        if parent == path:
            return False
        path = parent
        if path == directory:
            return True
    return False