"""Prepend, append, replace and delete operations for each value type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stamp.modify.enums import Action, MergeType
from stamp.modify.set import OrderedSet


@dataclass(frozen=True)
class ModifierConf:
    """Options shared by all modification operations."""

    merge_type: MergeType = MergeType.CONCAT


_DEFAULT_CONF = ModifierConf()


def modify_bool(dst: bool, action: Action, src: bool, conf: ModifierConf = _DEFAULT_CONF) -> bool:
    """Modify a boolean: prepend and append combine with logical and."""
    if action == Action.PREPEND:
        return src and dst
    if action == Action.APPEND:
        return dst and src
    if action == Action.REPLACE:
        return src
    return False


def modify_bytes(
    dst: bytes, action: Action, src: bytes, conf: ModifierConf = _DEFAULT_CONF
) -> bytes | None:
    """Modify a byte string; delete yields None."""
    if action == Action.PREPEND:
        return prepend_bytes(dst, src, conf)
    if action == Action.APPEND:
        return append_bytes(dst, src, conf)
    if action == Action.REPLACE:
        return bytes(src)
    return None


def prepend_bytes(dst: bytes, src: bytes, conf: ModifierConf = _DEFAULT_CONF) -> bytes:
    """Put src in front of dst according to the merge type."""
    if conf.merge_type == MergeType.REPLACE:
        return bytes(src)
    if conf.merge_type == MergeType.UPSERT and dst.startswith(src):
        return bytes(dst)
    return bytes(src) + bytes(dst)


def append_bytes(dst: bytes, src: bytes, conf: ModifierConf = _DEFAULT_CONF) -> bytes:
    """Put src after dst according to the merge type."""
    if conf.merge_type == MergeType.REPLACE:
        return bytes(src)
    if conf.merge_type == MergeType.UPSERT and dst.endswith(src):
        return bytes(dst)
    return bytes(dst) + bytes(src)


def modify_float(dst: float, action: Action, src: float, conf: ModifierConf = _DEFAULT_CONF) -> float:
    """Modify a float: prepend and append add the numbers."""
    if action in (Action.PREPEND, Action.APPEND):
        return float(dst + src)
    if action == Action.REPLACE:
        return float(src)
    return 0.0


def modify_int(dst: int, action: Action, src: int, conf: ModifierConf = _DEFAULT_CONF) -> int:
    """Modify an integer: prepend and append add the numbers."""
    if action in (Action.PREPEND, Action.APPEND):
        return int(dst + src)
    if action == Action.REPLACE:
        return int(src)
    return 0


def modify_map(
    dst: dict[str, Any], action: Action, src: dict[str, Any], conf: ModifierConf = _DEFAULT_CONF
) -> dict[str, Any] | None:
    """Modify a mapping; prepend and append merge recursively, delete yields None."""
    if action == Action.PREPEND:
        return prepend_map(dst, src, conf)
    if action == Action.APPEND:
        return append_map(dst, src, conf)
    if action == Action.REPLACE:
        return dict(src)
    return None


def prepend_map(
    dst: dict[str, Any], src: dict[str, Any], conf: ModifierConf = _DEFAULT_CONF
) -> dict[str, Any]:
    """Merge dst into a copy of src, so values from dst win."""
    result = dict(src)
    for key, value in dst.items():
        result[key] = _append_value(result.get(key), value, conf)
    return result


def append_map(
    dst: dict[str, Any], src: dict[str, Any], conf: ModifierConf = _DEFAULT_CONF
) -> dict[str, Any]:
    """Merge src into a copy of dst, so values from src win."""
    result = dict(dst)
    for key, value in src.items():
        result[key] = _append_value(result.get(key), value, conf)
    return result


def _append_value(dst: Any, src: Any, conf: ModifierConf) -> Any:
    """Merge src into dst: maps merge, lists append, anything else is replaced."""
    if isinstance(dst, dict) and isinstance(src, dict):
        return append_map(dst, src, conf)
    if isinstance(dst, list) and isinstance(src, list):
        return append_slice(dst, src, conf)
    return src


def modify_slice(
    dst: list[Any], action: Action, src: Any, conf: ModifierConf = _DEFAULT_CONF
) -> list[Any] | None:
    """Modify a list; src may be a list or a single item. Delete yields None."""
    src_items = list(src) if isinstance(src, list) else [src]
    if action == Action.PREPEND:
        return prepend_slice(dst, src_items, conf)
    if action == Action.APPEND:
        return append_slice(dst, src_items, conf)
    if action == Action.REPLACE:
        return src_items
    return None


def prepend_slice(dst: list[Any], src: list[Any], conf: ModifierConf = _DEFAULT_CONF) -> list[Any]:
    """Put the src items in front of dst according to the merge type."""
    if conf.merge_type == MergeType.REPLACE:
        return list(src)
    if conf.merge_type == MergeType.UPSERT:
        present = OrderedSet(*dst)
        return [item for item in src if item not in present] + list(dst)
    return list(src) + list(dst)


def append_slice(dst: list[Any], src: list[Any], conf: ModifierConf = _DEFAULT_CONF) -> list[Any]:
    """Put the src items after dst according to the merge type."""
    if conf.merge_type == MergeType.REPLACE:
        return list(src)
    if conf.merge_type == MergeType.UPSERT:
        present = OrderedSet(*dst)
        return list(dst) + [item for item in src if item not in present]
    return list(dst) + list(src)


def modify_string(dst: str, action: Action, src: str, conf: ModifierConf = _DEFAULT_CONF) -> str:
    """Modify a string; delete yields the empty string."""
    if action == Action.PREPEND:
        return prepend_string(dst, src, conf)
    if action == Action.APPEND:
        return append_string(dst, src, conf)
    if action == Action.REPLACE:
        return src
    return ""


def prepend_string(dst: str, src: str, conf: ModifierConf = _DEFAULT_CONF) -> str:
    """Put src in front of dst according to the merge type."""
    if conf.merge_type == MergeType.REPLACE:
        return src
    if conf.merge_type == MergeType.UPSERT and dst.startswith(src):
        return dst
    return src + dst


def append_string(dst: str, src: str, conf: ModifierConf = _DEFAULT_CONF) -> str:
    """Put src after dst according to the merge type."""
    if conf.merge_type == MergeType.REPLACE:
        return src
    if conf.merge_type == MergeType.UPSERT and dst.endswith(src):
        return dst
    return dst + src