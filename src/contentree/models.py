"""Entries, references and the flat collection produced by a scan."""

from __future__ import annotations

import json
import os
from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class EntryType(str, Enum):
    """JSON:API resource type of an entry."""

    FILE = "files"
    DIRECTORY = "directories"


class TypeFilter(str, Enum):
    """Which entry types the resolver includes in its output."""

    FILES = "files"
    DIRECTORIES = "directories"
    ALL = "all"

    def allows(self, entry_type: EntryType) -> bool:
        return self is TypeFilter.ALL or self.value == entry_type.value


EntryCallback = Callable[[os.DirEntry, str, str], Awaitable[Mapping[str, Any]]]
"""Enrichment hook: ``(entry, entry_path, relative_path) -> attributes``."""


@dataclass(frozen=True)
class EntryReference:
    """Non-owning ``(type, id)`` pointer into a :class:`FlatCollection`."""

    type: EntryType
    id: str

    def to_resource(self) -> dict[str, str]:
        return {"type": self.type.value, "id": self.id}


@dataclass(frozen=True)
class FileEntry:
    """A matched regular file."""

    id: str
    attributes: dict[str, Any]

    @property
    def type(self) -> EntryType:
        return EntryType.FILE

    @property
    def depth(self) -> int:
        return self.attributes["depth"]

    def reference(self) -> EntryReference:
        return EntryReference(self.type, self.id)

    # attributes is a dict; hash on the (type, id) identity
    def __hash__(self) -> int:
        return hash((self.type, self.id))

    def to_resource(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "id": self.id,
            "attributes": dict(self.attributes),
        }


@dataclass(frozen=True)
class DirectoryEntry:
    """A matched directory with references to its matched direct children."""

    id: str
    attributes: dict[str, Any]
    children: tuple[EntryReference, ...] = field(default_factory=tuple)

    @property
    def type(self) -> EntryType:
        return EntryType.DIRECTORY

    @property
    def depth(self) -> int:
        return self.attributes["depth"]

    def reference(self) -> EntryReference:
        return EntryReference(self.type, self.id)

    # attributes is a dict; hash on the (type, id) identity
    def __hash__(self) -> int:
        return hash((self.type, self.id))

    def to_resource(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "id": self.id,
            "attributes": dict(self.attributes),
            "relationships": {
                "children": {"data": [c.to_resource() for c in self.children]},
            },
        }


Entry = Union[FileEntry, DirectoryEntry]


class FlatCollection:
    """Ordered, id-indexed sequence of every entry a scan matched.

    Child references held by directories are only meaningful relative to the
    collection they were produced with.
    """

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: tuple[Entry, ...] = tuple(entries)
        self._index: dict[str, Entry] = {}
        for entry in self._entries:
            if entry.id in self._index:
                raise ValueError(f"Duplicate entry id: {entry.id!r}")
            self._index[entry.id] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __getitem__(self, position: int) -> Entry:
        return self._entries[position]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, (FileEntry, DirectoryEntry)):
            return self._index.get(item.id) == item
        return item in self._index

    def __repr__(self) -> str:
        return f"FlatCollection({len(self)} entries)"

    def get(self, entry_id: str) -> Entry | None:
        return self._index.get(entry_id)

    def files(self) -> list[FileEntry]:
        return [e for e in self._entries if isinstance(e, FileEntry)]

    def directories(self) -> list[DirectoryEntry]:
        return [e for e in self._entries if isinstance(e, DirectoryEntry)]

    def to_document(self) -> dict[str, Any]:
        """Return a JSON:API-style ``{"data": [...]}`` document."""
        return {"data": [e.to_resource() for e in self._entries]}

    def to_json(self, *, indent: int | None = None) -> str:
        return dumps(self.to_document(), indent=indent)


def dumps(obj: Any, *, indent: int | None = None) -> str:
    """``json.dumps`` that renders dates and other odd values as strings."""
    return json.dumps(obj, indent=indent, ensure_ascii=False, default=_json_default)


def _json_default(value: Any) -> str:
    isoformat = getattr(value, "isoformat", None)
    if callable(isoformat):
        return isoformat()
    return str(value)
