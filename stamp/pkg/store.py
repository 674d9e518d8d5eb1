"""A directory of installed packages."""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager

from stamp.pkg.errors import NotFoundError, PackageError, PackageExistsError
from stamp.pkg.getter import Getter, default_getter, detect
from stamp.pkg.package import (
    DEFAULT_META_FILE,
    Package,
    load_package,
    load_packages,
    move_package,
    package_path,
    remove_package,
    store_package,
)


class StagingError(PackageError):
    """Raised when a package source cannot be staged for installation."""


class Store:
    """Installs, loads and removes packages kept under a base path."""

    def __init__(
        self,
        base_path: str,
        meta_file: str = DEFAULT_META_FILE,
        getter: Getter = default_getter,
    ) -> None:
        self.base_path = base_path
        self.meta_file = meta_file
        self._getter = getter

    def with_getter(self, getter: Getter) -> Store:
        """Use getter to fetch package sources; returns the store."""
        self._getter = getter
        return self

    def with_meta_file(self, filename: str) -> Store:
        """Use filename as the package metadata file; returns the store."""
        self.meta_file = filename
        return self

    def load(self, name: str) -> Package:
        """Return the named package, or the package at the path name."""
        try:
            return load_package(name, self.meta_file)
        except NotFoundError:
            pass
        return load_package(self._path(name), self.meta_file)

    def load_all(self) -> list[Package]:
        """Return every valid package in the store, ignoring broken ones."""
        return load_packages(self.base_path, self.meta_file)

    @contextmanager
    def stage(self, src: str) -> Iterator[Package]:
        """Copy src into a temporary directory and yield it as a package.

        The package's origin is recorded in its metadata. The staging
        directory is removed when the context exits.
        """
        staging_root = tempfile.mkdtemp(prefix="pkg-")
        try:
            try:
                src = detect(src, os.getcwd())
            except (PackageError, OSError) as exc:
                raise StagingError(f"staging error: {exc}") from exc

            pkg_path = os.path.join(staging_root, "staged")
            try:
                self._getter(src, pkg_path)
            except Exception as exc:
                raise StagingError(f"staging error: {exc}") from exc

            try:
                pkg = load_package(pkg_path, self.meta_file)
                pkg.origin = src
                store_package(pkg)
            except (PackageError, OSError) as exc:
                raise StagingError(f"staging error: {exc}") from exc

            yield pkg
        finally:
            shutil.rmtree(staging_root, ignore_errors=True)

    def install(self, src: str) -> Package:
        """Copy the package at src into the store and return it."""
        with self.stage(src) as pkg:
            try:
                self.load(pkg.name)
            except (PackageError, OSError):
                pass
            else:
                raise PackageExistsError()

            try:
                target = self._path(pkg.name)
                move_package(pkg, target)
            except (PackageError, OSError) as exc:
                if isinstance(exc, PackageExistsError):
                    raise
                raise PackageError(f"install error: {exc}") from exc
        return pkg

    def uninstall(self, name: str) -> Package:
        """Remove the named package from the store and return it."""
        pkg = self.load(name)
        remove_package(pkg)
        return pkg

    def update(self, name: str) -> Package:
        """Re-install the named package from its recorded origin."""
        pkg = self.load(name)
        origin = pkg.origin
        if not origin:
            raise PackageError(f"origin missing: {pkg.name}")
        remove_package(pkg)
        return self.install(origin)

    def _path(self, name: str) -> str:
        return package_path(self.base_path, name)