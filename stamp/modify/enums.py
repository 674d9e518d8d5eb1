"""Modification actions and array merge strategies."""

from __future__ import annotations

from enum import Enum

_ACTION_DESCRIPTION = """Determines what type of modification to perform.

The append/prepend behavior differs slightly depending on
the destination content type. Strings are concatenated,
numbers are added, and objects are recursively merged.
Arrays are concatenated by default, but that behavior can
be customized via the 'merge' enum.

Replace and delete behave consistently across all types."""

_ACTION_COMMENTS = (
    "Append to the destination content.",
    "Prepend to the destination content.",
    "Replace the destination.",
    "Delete the destination content.",
)

_MERGE_TYPE_DESCRIPTION = """Determines merge behavior for arrays - either when modifying them directly
or when recursively merging objects containing arrays."""

_MERGE_TYPE_COMMENTS = (
    "Concatenate source and destination arrays.",
    "Add source array items if not present in the destination.",
    "Replace the destination with the source.",
)


class Action(str, Enum):
    """The kind of modification to perform on a destination value."""

    APPEND = "append"
    PREPEND = "prepend"
    REPLACE = "replace"
    DELETE = "delete"

    def __str__(self) -> str:
        return self.value

    def description(self) -> str:
        """Return the long description of the enum."""
        return _ACTION_DESCRIPTION

    def enum_comments(self) -> list[str]:
        """Return the comment for each member, in member order."""
        return list(_ACTION_COMMENTS)

    def json_schema(self) -> dict:
        """Return the JSON schema fragment describing the enum."""
        return {
            "title": "Action",
            "description": self.description(),
            "enum": action_names(),
            "enumDescriptions": self.enum_comments(),
        }


class MergeType(str, Enum):
    """How arrays are merged when modified or recursively merged."""

    CONCAT = "concat"
    UPSERT = "upsert"
    REPLACE = "replace"

    def __str__(self) -> str:
        return self.value

    def description(self) -> str:
        """Return the long description of the enum."""
        return _MERGE_TYPE_DESCRIPTION

    def enum_comments(self) -> list[str]:
        """Return the comment for each member, in member order."""
        return list(_MERGE_TYPE_COMMENTS)

    def json_schema(self) -> dict:
        """Return the JSON schema fragment describing the enum."""
        return {
            "title": "MergeType",
            "description": self.description(),
            "enum": merge_type_names(),
            "enumDescriptions": self.enum_comments(),
        }


def action_names() -> list[str]:
    """Return the possible string values of Action."""
    return [member.value for member in Action]


def merge_type_names() -> list[str]:
    """Return the possible string values of MergeType."""
    return [member.value for member in MergeType]


def parse_action(name: str) -> Action:
    """Convert a string to an Action, raising ValueError if it is not one."""
    try:
        return Action(name)
    except ValueError:
        raise ValueError(
            f"{name} is not a valid Action, try [{', '.join(action_names())}]"
        ) from None


def parse_merge_type(name: str) -> MergeType:
    """Convert a string to a MergeType, raising ValueError if it is not one."""
    try:
        return MergeType(name)
    except ValueError:
        raise ValueError(
            f"{name} is not a valid MergeType, try [{', '.join(merge_type_names())}]"
        ) from None