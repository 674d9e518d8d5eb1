"""Encoders that convert data structures to and from bytes."""

from __future__ import annotations

import base64
import json
import math
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

import yaml


class EncodeError(Exception):
    """Raised when data cannot be encoded or decoded."""


class Encoder(ABC):
    """Converts data structures to and from encoded bytes."""

    @abstractmethod
    def decode(self, encoded: bytes) -> Any:
        """Deserialize the given bytes into a data structure."""

    @abstractmethod
    def encode(self, data: Any) -> bytes:
        """Serialize the given data structure into bytes."""


_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"unsupported type: {type(value).__name__}")


class JSONEncoder(Encoder):
    """JSON with sorted keys and four-space indentation."""

    def decode(self, encoded: bytes) -> Any:
        try:
            return json.loads(encoded)
        except (ValueError, UnicodeDecodeError) as exc:
            raise EncodeError(f"json decode: {exc}") from exc

    def encode(self, data: Any) -> bytes:
        try:
            text = json.dumps(
                data,
                indent=4,
                sort_keys=True,
                ensure_ascii=False,
                allow_nan=False,
                default=_json_default,
            )
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"json encode: {exc}") from exc
        for char, escaped in _JSON_ESCAPES.items():
            text = text.replace(char, escaped)
        return text.encode("utf-8")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


class TextEncoder(Encoder):
    """Plain text: decoding copies the bytes, encoding casts scalars to text."""

    def decode(self, encoded: bytes) -> bytes:
        return bytes(encoded)

    def encode(self, data: Any) -> bytes:
        if data is None:
            return b""
        if isinstance(data, (bytes, bytearray)):
            return bytes(data)
        if isinstance(data, str):
            return data.encode("utf-8")
        if isinstance(data, bool):
            return b"true" if data else b"false"
        if isinstance(data, int):
            return str(data).encode("utf-8")
        if isinstance(data, float):
            return _format_float(data).encode("utf-8")
        raise EncodeError(f"text encode: unable to cast: {data!r}")


class _IndentedDumper(yaml.SafeDumper):
    """Indents sequences nested in mappings."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        super().increase_indent(flow, False)


class YAMLEncoder(Encoder):
    """YAML with two-space indentation and sorted keys."""

    def decode(self, encoded: bytes) -> Any:
        try:
            return yaml.safe_load(encoded)
        except yaml.YAMLError as exc:
            raise EncodeError(f"yaml decode: {exc}") from exc

    def encode(self, data: Any) -> bytes:
        try:
            text = yaml.dump(
                data,
                Dumper=_IndentedDumper,
                indent=2,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=True,
            )
        except yaml.YAMLError as exc:
            raise EncodeError(f"yaml encode: {exc}") from exc
        if text.endswith("\n...\n"):
            text = text[: -len("...\n")]
        return text.encode("utf-8")