"""Build callbacks that prepend, append, replace or delete values of any type."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable
from dataclasses import replace
from decimal import Decimal
from typing import Any

from stamp.modify.enums import Action, MergeType, parse_action, parse_merge_type
from stamp.modify.operations import (
    ModifierConf,
    modify_bool,
    modify_bytes,
    modify_float,
    modify_int,
    modify_map,
    modify_slice,
    modify_string,
)

ModifierFunc = Callable[[Any], "tuple[Any, bool]"]
ModifierOpt = Callable[[ModifierConf], ModifierConf]

_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_OCTAL = re.compile(r"^[+-]?0[0-7]+$")
_ZERO_DECIMAL = re.compile(r"\.0*$")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value in _TRUE_STRINGS
    return False


def _to_float(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _to_int(value: Any) -> int:
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return 0 if math.isnan(value) or math.isinf(value) else int(value)
    if isinstance(value, str):
        text = _ZERO_DECIMAL.sub("", value) if "." in value else value
        try:
            return int(text, 0)
        except ValueError:
            if _OCTAL.match(text):
                return int(text, 8)
            return 0
    return 0


def _to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return ""


def _to_string_map(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return {str(key): item for key, item in value.items()}
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            return {}
        return decoded if isinstance(decoded, dict) else {}
    return {}


def modifier(action: Action | str, arg: Any, *args: ModifierOpt) -> ModifierFunc:
    """Return a callback applying action with arg to an element.

    The callback returns the altered element and whether it was changed;
    elements of unsupported types are returned unchanged. The arg is cast
    to the element's type, except for lists, where it may be a list or a
    single item.
    """
    action = parse_action(action)
    conf = ModifierConf()
    for option in args:
        conf = option(conf)

    def modify(element: Any) -> tuple[Any, bool]:
        if isinstance(element, (bytes, bytearray)):
            if isinstance(arg, (bytes, bytearray)):
                return modify_bytes(bytes(element), action, bytes(arg), conf), True
            if isinstance(arg, str):
                return modify_bytes(bytes(element), action, arg.encode("utf-8"), conf), True
            return element, False
        if isinstance(element, bool):
            return modify_bool(element, action, _to_bool(arg), conf), True
        if isinstance(element, float):
            return modify_float(element, action, _to_float(arg), conf), True
        if isinstance(element, int):
            return modify_int(element, action, _to_int(arg), conf), True
        if isinstance(element, dict):
            return modify_map(element, action, _to_string_map(arg), conf), True
        if isinstance(element, list):
            return modify_slice(element, action, arg, conf), True
        if isinstance(element, str):
            return modify_string(element, action, _to_string(arg), conf), True
        return element, False

    return modify


def with_merge_type(value: MergeType | str | None) -> ModifierOpt:
    """Return an option that sets how lists are merged; empty means concat."""
    merge_type = parse_merge_type(value) if value else MergeType.CONCAT

    def apply(conf: ModifierConf) -> ModifierConf:
        return replace(conf, merge_type=merge_type)

    return apply