"""Errors raised while loading, storing and installing packages."""

from __future__ import annotations

import os
from typing import Any


class PackageError(Exception):
    """Base class for package errors."""

    default_message = "unexpected error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class PackageExistsError(PackageError):
    """Raised when a package is already installed at the target location."""

    default_message = "package already installed"


class PackageNameError(PackageError, ValueError):
    """Raised when a package name is empty or contains invalid characters."""

    default_message = "invalid package name"


class MetadataTypeCastError(PackageError, TypeError):
    """Raised when a metadata value does not have the expected type."""

    def __init__(self, key: str, value: Any, expected_type: str) -> None:
        self.key = key
        self.value = value
        self.expected_type = expected_type
        self.actual_type = type(value).__name__
        super().__init__(
            f"metadata invalid: '{key}' should be '{expected_type}', "
            f"is '{self.actual_type}'"
        )


class NotFoundError(PackageError):
    """Raised when a package (or its metadata file) does not exist.

    The kind of package is taken from the metadata file name, so a
    ``widget.yaml`` file yields "widget not found".
    """

    def __init__(self, meta_file: str) -> None:
        self.meta_file = meta_file
        kind = os.path.splitext(meta_file)[0]
        super().__init__(f"{kind} not found")