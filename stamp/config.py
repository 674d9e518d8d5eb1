"""Application configuration loaded from YAML and the environment."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Any

import yaml

from stamp.fsutil import path_exists

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class ConfigError(Exception):
    """Raised when a config file cannot be loaded."""


@dataclass
class Config:
    """User settings for the application."""

    debug: bool = False
    defaults: dict[str, Any] = field(default_factory=dict)
    dry_run: bool = False
    store_path: str = "~/.stamp/packages"


_BOOL_FIELDS = {"debug": "STAMP_DEBUG", "dry_run": "STAMP_DRY_RUN"}
_STR_FIELDS = {"store_path": "STAMP_STORE_PATH"}


def new_default_config() -> Config:
    """Return a config holding the default values."""
    return Config()


def _parse_bool(text: str, name: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"config load: invalid boolean for {name}: {text!r}")


def _apply_file(config: Config, path: str) -> None:
    try:
        with open(path, "rb") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"config load: {exc}") from exc

    if data is None:
        return
    if not isinstance(data, dict):
        raise ConfigError("config load: expected a mapping at the top level")

    for key, value in data.items():
        if value is None:
            continue
        if key in _BOOL_FIELDS:
            if not isinstance(value, bool):
                raise ConfigError(f"config load: '{key}' should be a boolean")
            setattr(config, key, value)
        elif key in _STR_FIELDS:
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise ConfigError(f"config load: '{key}' should be a string")
            setattr(config, key, str(value))
        elif key == "defaults":
            if not isinstance(value, dict):
                raise ConfigError("config load: 'defaults' should be a mapping")
            config.defaults = value


def _apply_env(config: Config) -> None:
    for attr, var in _BOOL_FIELDS.items():
        if var in os.environ:
            setattr(config, attr, _parse_bool(os.environ[var], var))
    for attr, var in _STR_FIELDS.items():
        if var in os.environ:
            setattr(config, attr, os.environ[var])


def new_config(path: str = "") -> Config:
    """Return the config for the file at path.

    With no path, uses ``.stamp.yaml`` in the working directory if present,
    otherwise ``$HOME/.stamp/config.yaml``. When the file exists, its values
    and then the ``STAMP_*`` environment variables override the defaults.
    """
    if not path:
        if path_exists(".stamp.yaml"):
            path = ".stamp.yaml"
        else:
            path = f"{os.environ.get('HOME', '')}/.stamp/config.yaml"

    config = new_default_config()
    if path_exists(path):
        _apply_file(config, path)
        _apply_env(config)

    if config.debug:
        print("Using config file:", path, file=sys.stderr)
        print("Store path:", config.store_path, file=sys.stderr)

    return config