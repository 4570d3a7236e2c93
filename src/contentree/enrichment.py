"""Stock enrichment callbacks for markdown content trees.

These produce the attributes a static-site style content index usually
wants: name and extension, the path split into segments, file timestamps,
and the parsed front matter with the remaining body.
"""

from __future__ import annotations

import asyncio
import os
import re
from datetime import datetime, timezone
from typing import Any

from .frontmatter import parse_front_matter

_NAME_RE = re.compile(r"^(.+?)(\.[^.]*$|$)")


def split_name(name: str) -> tuple[str, str]:
    """Split a file name into stem and last extension (``"a.tar.gz"`` -> ``("a.tar", ".gz")``)."""
    m = _NAME_RE.match(name)
    if m is None:  # empty name
        return "", ""
    return m.group(1), m.group(2)


def path_array(relative_path: str) -> list[str]:
    """Relative path segments with the extension of the last one removed."""
    *parents, last = relative_path.split("/")
    return [*parents, split_name(last)[0]]


def _timestamp(value: float) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


def _read_file(entry_path: str) -> tuple[os.stat_result, str]:
    stat = os.stat(entry_path)
    with open(entry_path, encoding="utf-8", errors="replace") as fh:
        return stat, fh.read()


async def markdown_file_attributes(
    entry: os.DirEntry, entry_path: str, relative_path: str
) -> dict[str, Any]:
    """File enricher: stat and read *entry_path*, then split its front matter."""
    stat, text = await asyncio.to_thread(_read_file, entry_path)
    data, content = parse_front_matter(text)
    stem, extension = split_name(entry.name)
    created = getattr(stat, "st_birthtime", None) or stat.st_ctime
    return {
        "name": stem,
        "extension": extension,
        "path_array": path_array(relative_path),
        "timestamps": {
            "created": _timestamp(created),
            "modified": _timestamp(stat.st_mtime),
        },
        "data": data,
        "content": content,
    }


async def directory_attributes(
    entry: os.DirEntry, entry_path: str, relative_path: str
) -> dict[str, Any]:
    return {
        "name": entry.name,
        "path_array": path_array(relative_path),
    }
