"""Packages: directories holding a YAML metadata file, possibly nested."""

from __future__ import annotations

import os
import re
import shutil
from dataclasses import dataclass, field
from typing import Any

import yaml

from stamp.pkg.errors import (
    MetadataTypeCastError,
    NotFoundError,
    PackageError,
    PackageExistsError,
    PackageNameError,
)

DEFAULT_META_FILE = "package.yaml"

_PKG_NAME = re.compile(r"^[\w\-.:]+$", re.ASCII)
_WORD_SEPARATORS = re.compile(r"[_\-\s.]+")


def pascalize(key: str) -> str:
    """Return key in PascalCase, e.g. "foo_bar" becomes "FooBar"."""
    parts = [part for part in _WORD_SEPARATORS.split(key) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


@dataclass
class Package:
    """A package directory and its parsed metadata."""

    metadata: dict[str, Any] = field(default_factory=dict)
    path: str = ""
    meta_file: str = DEFAULT_META_FILE

    @property
    def meta_path(self) -> str:
        """Full path to the metadata file."""
        return os.path.join(self.path, self.meta_file)

    @property
    def name(self) -> str:
        """Package name: its path relative to the store, joined with ':'."""
        return self.metadata_string("name")

    @name.setter
    def name(self, value: str) -> None:
        self.metadata["Name"] = value

    @property
    def description(self) -> str:
        """Package description."""
        return self.metadata_string("description")

    @description.setter
    def description(self, value: str) -> None:
        self.metadata["Description"] = value

    @property
    def short_description(self) -> str:
        """First line of the description."""
        return self.description.split("\n")[0]

    @property
    def origin(self) -> str:
        """Path or URL the package was installed from."""
        return self.metadata_string("origin")

    @origin.setter
    def origin(self, value: str) -> None:
        self.metadata["Origin"] = value

    def children(self) -> list[Package]:
        """Return all nested sub-packages ordered by name."""
        return load_packages(self.path, self.meta_file)

    def all(self) -> list[Package]:
        """Return this package followed by all of its children."""
        return [self, *self.children()]

    def parent(self) -> Package | None:
        """Return the package in the enclosing directory, if there is one."""
        parent_path = os.path.dirname(self.path)
        if not parent_path or parent_path == self.path:
            return None
        try:
            return load_package(parent_path, self.meta_file)
        except (PackageError, OSError):
            return None

    def root(self) -> Package:
        """Return the outermost package enclosing this one (or itself)."""
        node = self
        while (parent := node.parent()) is not None:
            node = parent
        return node

    def metadata_map_slice(self, key: str) -> list[dict[str, Any]]:
        """Return the list of mappings stored under key."""
        items = []
        for index, item in enumerate(self.metadata_slice(key)):
            if not isinstance(item, dict):
                raise MetadataTypeCastError(f"{key}[{index}]", item, "dict")
            items.append(item)
        return items

    def metadata_slice(self, key: str) -> list[Any]:
        """Return the list stored under key; a missing key yields []."""
        value = self.metadata_lookup(key)
        if value is None:
            return []
        if isinstance(value, list):
            return value
        raise MetadataTypeCastError(key, value, "list")

    def metadata_string(self, key: str) -> str:
        """Return the string stored under key; a missing key yields ""."""
        value = self.metadata_lookup(key)
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        raise MetadataTypeCastError(key, value, "str")

    def metadata_lookup(self, key: str) -> Any:
        """Return the value for key, falling back to its PascalCase form."""
        if key in self.metadata:
            return self.metadata[key]
        return self.metadata.get(pascalize(key))


def package_path(root: str, name: str) -> str:
    """Return the absolute path of the named package under root.

    Name segments are separated by ':', so "a:b" maps to root/a/b.
    """
    name = name.strip()
    if not _PKG_NAME.match(name):
        raise PackageNameError()
    return os.path.abspath(os.path.join(root, *name.split(":")))


def load_package(pkg_path: str, meta_file: str) -> Package:
    """Parse and return the package at pkg_path."""
    if not os.path.isdir(pkg_path):
        raise NotFoundError(meta_file)
    meta_path = os.path.join(pkg_path, meta_file)
    if not os.path.exists(meta_path):
        raise NotFoundError(meta_file)

    try:
        with open(meta_path, "rb") as handle:
            content = handle.read()
    except OSError as exc:
        raise PackageError(f"load package: {exc}") from exc

    try:
        metadata = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise PackageError(f"load package: {exc}") from exc

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise PackageError(
            "load package: yaml: unmarshal errors: "
            f"cannot unmarshal {type(metadata).__name__} into a mapping"
        )

    return Package(metadata=metadata, path=pkg_path, meta_file=meta_file)


def load_packages(root: str, meta_file: str) -> list[Package]:
    """Return every loadable package below root, sorted by name.

    Directories starting with '_' are skipped, as is a metadata file in
    root itself. Packages that fail to load are silently ignored.
    """
    os.stat(root)
    if os.path.basename(os.path.normpath(root)).startswith("_"):
        return []

    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("_"))
        if dirpath == root or meta_file not in filenames:
            continue
        try:
            found.append(load_package(dirpath, meta_file))
        except (PackageError, OSError):
            continue

    found.sort(key=lambda pkg: pkg.name)
    return found


def move_package(pkg: Package, new_path: str) -> None:
    """Move the package directory to new_path and update pkg.path."""
    if os.path.lexists(new_path):
        raise PackageExistsError()
    os.makedirs(os.path.dirname(new_path) or ".", 0o755, exist_ok=True)
    shutil.move(pkg.path, new_path)
    pkg.path = new_path


def store_package(pkg: Package) -> None:
    """Write the package metadata back to its metadata file."""
    text = yaml.safe_dump(
        pkg.metadata,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=True,
    )
    fd = os.open(pkg.meta_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(text)


def remove_package(pkg: Package) -> None:
    """Delete the package directory from the filesystem."""
    if not os.path.lexists(pkg.path):
        raise NotFoundError(pkg.meta_file)
    if os.path.isdir(pkg.path) and not os.path.islink(pkg.path):
        shutil.rmtree(pkg.path)
    else:
        os.remove(pkg.path)