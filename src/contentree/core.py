"""ContentTree: high-level scan-and-resolve API."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .enrichment import directory_attributes, markdown_file_attributes
from .models import DirectoryEntry, Entry, EntryCallback, FlatCollection, TypeFilter
from .resolver import get_children
from .scanner import Matcher, scan_directory

logger = logging.getLogger(__name__)


class ContentTree:
    """Index a content directory and query subtrees of the result.

    Parameters
    ----------
    root:
        Directory to index.
    match:
        Regex (string or compiled) or predicate over relative paths.
        ``None`` includes everything.
    file_callback / directory_callback:
        Enrichment coroutines; see :func:`contentree.scanner.scan_directory`.
    max_concurrency:
        Bound on concurrent listing/enrichment work (``None`` = unbounded).
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        *,
        match: Matcher = None,
        file_callback: EntryCallback | None = None,
        directory_callback: EntryCallback | None = None,
        max_concurrency: int | None = None,
    ) -> None:
        self._root = Path(root).expanduser().resolve()
        self._match = match
        self._file_callback = file_callback
        self._directory_callback = directory_callback
        self._max_concurrency = max_concurrency
        self._collection: FlatCollection | None = None

    @classmethod
    def markdown(
        cls,
        root: str | os.PathLike[str],
        *,
        match: Matcher = None,
        max_concurrency: int | None = None,
    ) -> ContentTree:
        """Build a tree that enriches entries with the stock markdown attributes."""
        return cls(
            root,
            match=match,
            file_callback=markdown_file_attributes,
            directory_callback=directory_attributes,
            max_concurrency=max_concurrency,
        )

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    @property
    def root(self) -> Path:
        return self._root

    @property
    def collection(self) -> FlatCollection | None:
        """Result of the last :meth:`scan`, or ``None`` before the first one."""
        return self._collection

    async def scan(self) -> FlatCollection:
        """Scan the root directory; every call starts from scratch."""
        self._collection = await scan_directory(
            self._root,
            self._match,
            self._file_callback,
            self._directory_callback,
            max_concurrency=self._max_concurrency,
        )
        return self._collection

    # ------------------------------------------------------------------
    # Subtrees
    # ------------------------------------------------------------------

    async def children(
        self,
        ids: Iterable[str],
        *,
        with_types: TypeFilter | str = TypeFilter.ALL,
        recurse: bool = True,
    ) -> list[Entry]:
        """Resolve the children of the directories with the given ids.

        Scans first if no scan has run yet.  Raises ``KeyError`` for ids that
        are not directories of the collection.
        """
        collection = self._collection
        if collection is None:
            collection = await self.scan()

        directories: list[DirectoryEntry] = []
        for entry_id in ids:
            entry = collection.get(entry_id)
            if not isinstance(entry, DirectoryEntry):
                raise KeyError(entry_id)
            directories.append(entry)

        results = get_children(collection, directories, with_types, recurse)
        logger.debug(
            "Resolved %d entries below %s", len(results), [d.id for d in directories]
        )
        return results
