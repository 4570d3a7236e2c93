"""YAML front matter splitting for markdown-style documents."""

from __future__ import annotations

import re
from typing import Any

import yaml

from .errors import FrontMatterError

_OPEN = "---"
_CLOSE = ("---", "...")


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split *text* into ``(data, content)``.

    A document has front matter when its first line is ``---``; the block
    runs to the next ``---`` (or ``...``) line and must be a YAML mapping.
    Documents without a complete block come back unchanged with ``{}``.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    # "\n"-only split: \x0c, \u2028 and the like stay inside their line
    lines = re.split(r"(?<=\n)", text)
    if not lines or lines[0].rstrip("\r\n").rstrip() != _OPEN:
        return {}, text

    for i, line in enumerate(lines[1:], start=1):
        if line.rstrip("\r\n").rstrip() in _CLOSE:
            block = "".join(lines[1:i])
            content = "".join(lines[i + 1 :])
            return _load(block), content

    return {}, text


def _load(block: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML front matter: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError("Front matter must be a mapping")
    return data
