"""Helpers for turning indented help text into Markdown."""

from __future__ import annotations

import re

_WHITESPACE_ONLY = re.compile(r"^[ \t]+$", re.MULTILINE)
_LEADING_WHITESPACE = re.compile(r"^([ \t]*)[^ \t\n]", re.MULTILINE)


def dedent(text: str) -> str:
    """Remove whitespace common to the start of every line in text.

    A single leading newline is dropped and whitespace-only lines are emptied.
    """
    if text.startswith("\n"):
        text = text[1:]
    text = _WHITESPACE_ONLY.sub("", text)

    margin: str | None = None
    for indent in _LEADING_WHITESPACE.findall(text):
        if margin is None:
            margin = indent
        elif indent.startswith(margin):
            continue
        elif margin.startswith(indent):
            margin = indent
        else:
            margin = ""
            break

    if margin:
        text = re.sub("^" + re.escape(margin), "", text, flags=re.MULTILINE)
    return text


def to_markdown(text: str) -> str:
    """Expand code placeholders, dedent, and replace tabs with two spaces."""
    text = text.replace("__CODE_SPAN__", "`")
    text = text.replace("__CODE_BLOCK__", "```")
    text = dedent(text)
    return text.replace("\t", "  ")