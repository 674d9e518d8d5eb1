"""Fetching package sources into a local staging directory."""

from __future__ import annotations

import os
import re
import shutil
from collections.abc import Callable
from urllib.parse import unquote, urlparse

from stamp.pkg.errors import PackageError

Getter = Callable[[str, str], None]

_FORCED = re.compile(r"^([A-Za-z0-9]+)::(.+)$")


class GetterError(PackageError):
    """Raised when a package source cannot be fetched."""


def detect(src: str, pwd: str) -> str:
    """Normalize src into a fully qualified source URL.

    Strings that already carry a scheme (or a forced ``getter::`` prefix)
    are returned unchanged; filesystem paths become ``file://`` URLs,
    relative paths being resolved against pwd.
    """
    if not src:
        raise GetterError(f"invalid source string: {src}")
    if "://" in src or _FORCED.match(src):
        return src

    path = src
    if not os.path.isabs(path):
        if not pwd:
            raise GetterError("relative paths require a module with a pwd")
        path = os.path.join(pwd, path)
    return "file://" + os.path.normpath(path)


def copy_dir(src: str, dst: str) -> None:
    """Copy the directory src to dst, skipping symlinks.

    Directories already present at the destination are replaced.
    """
    try:
        info = os.stat(src)
    except OSError as exc:
        raise GetterError(f"source path error: {exc}") from exc
    if not os.path.isdir(src) or not info:
        raise GetterError("source path must be a directory")
    _copy_tree(src, dst)


def _copy_tree(src: str, dst: str) -> None:
    if os.path.isdir(dst) and not os.path.islink(dst):
        shutil.rmtree(dst)
    os.makedirs(dst, exist_ok=True)
    shutil.copymode(src, dst)
    with os.scandir(src) as entries:
        for entry in entries:
            target = os.path.join(dst, entry.name)
            if entry.is_symlink():
                continue
            if entry.is_dir(follow_symlinks=False):
                _copy_tree(entry.path, target)
            else:
                shutil.copy2(entry.path, target)


def default_getter(src: str, dst: str) -> None:
    """Copy the package at src into dst.

    Local paths and ``file://`` URLs are supported; directories are
    copied rather than linked.
    """
    try:
        pwd = os.getcwd()
    except OSError as exc:
        raise GetterError(f"unable to resolve working directory: {exc}") from exc

    try:
        url = detect(src, pwd)
    except GetterError as exc:
        raise GetterError(f"unable to install: {exc}") from exc

    forced = _FORCED.match(url)
    if forced:
        if forced.group(1) != "file":
            raise GetterError(f"unable to install: unsupported source: {url}")
        url = forced.group(2)
        if "://" not in url:
            url = detect(url, pwd)

    parsed = urlparse(url)
    if parsed.scheme != "file":
        raise GetterError(f"unable to install: unsupported source: {url}")

    try:
        copy_dir(unquote(parsed.path), dst)
    except (GetterError, OSError) as exc:
        raise GetterError(f"unable to install: {exc}") from exc


class MockGetter:
    """A getter that records its arguments and delegates to a handler."""

    def __init__(self, handler: Getter) -> None:
        self.called = False
        self.src = ""
        self.dst = ""
        self._handler = handler

    def get(self, src: str, dst: str) -> None:
        """Record the arguments and call the handler."""
        self.called = True
        self.src = src
        self.dst = dst
        self._handler(src, dst)