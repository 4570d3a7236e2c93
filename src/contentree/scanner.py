"""Concurrent, pattern-filtered directory walker."""

from __future__ import annotations

import asyncio
import logging
import os
import re
from collections.abc import Awaitable, Callable, Iterable, Mapping
from pathlib import Path
from typing import Any, TypeVar, Union

from .errors import EnrichmentError, ListingError
from .models import (
    DirectoryEntry,
    Entry,
    EntryCallback,
    EntryReference,
    FileEntry,
    FlatCollection,
)

logger = logging.getLogger(__name__)

Matcher = Union[str, "re.Pattern[str]", Callable[[str], bool], None]

T = TypeVar("T")

# (entries emitted by the subtree, reference for the parent or None)
_ScanResult = tuple[list[Entry], Union[EntryReference, None]]


async def _no_attributes(
    entry: os.DirEntry, entry_path: str, relative_path: str
) -> Mapping[str, Any]:
    return {}


def compile_matcher(match: Matcher) -> Callable[[str], bool]:
    """Turn *match* into a predicate over relative paths.

    ``None`` matches everything.  Strings and compiled patterns are tested
    with :meth:`re.Pattern.search`; callables are used as-is.
    """
    if match is None:
        return lambda relative_path: True
    if isinstance(match, str):
        match = re.compile(match)
    if isinstance(match, re.Pattern):
        pattern = match
        return lambda relative_path: pattern.search(relative_path) is not None
    if callable(match):
        return match
    raise TypeError(f"Unsupported match type: {type(match).__name__}")


async def scan_directory(
    root: str | os.PathLike[str],
    match: Matcher = None,
    file_callback: EntryCallback | None = None,
    directory_callback: EntryCallback | None = None,
    *,
    max_concurrency: int | None = None,
) -> FlatCollection:
    """Scan *root* recursively into a flat collection of entries.

    Parameters
    ----------
    root:
        Directory to index.  It never appears in the result itself; its
        direct children have depth 0.
    match:
        Filter over each entry's path relative to *root* (``/``-separated).
        Entries that fail it are left out of the collection and of their
        parent's children.  Non-matching directories are still descended
        into, so their matching descendants are kept.
    file_callback, directory_callback:
        Coroutines returning extra attributes for a matched file or
        directory.  A directory's callback runs once its subtree is done.
    max_concurrency:
        Upper bound on simultaneous listing/enrichment operations.
        ``None`` means unbounded.

    Raises
    ------
    ListingError
        A directory could not be listed.
    EnrichmentError
        A callback failed or returned a non-mapping.
    """
    if max_concurrency is not None and max_concurrency < 1:
        raise ValueError("max_concurrency must be a positive integer")

    base = Path(root).expanduser().resolve()
    scanner = _Scanner(
        matcher=compile_matcher(match),
        file_callback=file_callback or _no_attributes,
        directory_callback=directory_callback or _no_attributes,
        limit=asyncio.Semaphore(max_concurrency) if max_concurrency else None,
    )
    entries, _ = await scanner.scan(str(base), "", 0)
    logger.info("Scanned %d entries under %s", len(entries), base)
    return FlatCollection(entries)


class _Scanner:
    def __init__(
        self,
        *,
        matcher: Callable[[str], bool],
        file_callback: EntryCallback,
        directory_callback: EntryCallback,
        limit: asyncio.Semaphore | None,
    ) -> None:
        self._matcher = matcher
        self._file_callback = file_callback
        self._directory_callback = directory_callback
        self._limit = limit

    async def scan(
        self, current_path: str, parent_relative: str, depth: int
    ) -> tuple[list[Entry], list[EntryReference]]:
        """Scan one directory level; return its subtree's entries and child refs."""
        listing = await self._bounded(_list_directory(current_path))
        logger.debug("Listed %s (%d entries)", current_path, len(listing))

        results = await _gather_or_cancel(
            self._visit(dir_entry, parent_relative, depth) for dir_entry in listing
        )

        entries: list[Entry] = []
        children: list[EntryReference] = []
        for sub_entries, reference in results:
            entries.extend(sub_entries)
            if reference is not None:
                children.append(reference)
        return entries, children

    async def _visit(
        self, dir_entry: os.DirEntry, parent_relative: str, depth: int
    ) -> _ScanResult:
        relative_path = (
            f"{parent_relative}/{dir_entry.name}" if parent_relative else dir_entry.name
        )
        matched = bool(self._matcher(relative_path))

        if dir_entry.is_file(follow_symlinks=False):
            if not matched:
                return [], None
            attributes = await self._enrich(
                self._file_callback, dir_entry, relative_path
            )
            entry = FileEntry(relative_path, {**attributes, "depth": depth})
            return [entry], entry.reference()

        if dir_entry.is_dir(follow_symlinks=False):
            entries, children = await self.scan(dir_entry.path, relative_path, depth + 1)
            if not matched:
                return entries, None
            attributes = await self._enrich(
                self._directory_callback, dir_entry, relative_path
            )
            directory = DirectoryEntry(
                relative_path, {**attributes, "depth": depth}, tuple(children)
            )
            entries.append(directory)
            return entries, directory.reference()

        logger.debug("Skipping %s: not a regular file or directory", dir_entry.path)
        return [], None

    async def _enrich(
        self, callback: EntryCallback, dir_entry: os.DirEntry, relative_path: str
    ) -> Mapping[str, Any]:
        try:
            attributes = await self._bounded(
                callback(dir_entry, dir_entry.path, relative_path)
            )
        except Exception as e:
            raise EnrichmentError(dir_entry.path, f"Enrichment failed: {e}") from e
        if not isinstance(attributes, Mapping):
            raise EnrichmentError(
                dir_entry.path,
                f"Enrichment returned {type(attributes).__name__}, expected a mapping",
            )
        return attributes

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        if self._limit is None:
            return await awaitable
        async with self._limit:
            return await awaitable


async def _list_directory(path: str) -> list[os.DirEntry]:
    def _read() -> list[os.DirEntry]:
        with os.scandir(path) as it:
            return list(it)

    try:
        return await asyncio.to_thread(_read)
    except FileNotFoundError as e:
        raise ListingError(path, "Directory does not exist") from e
    except NotADirectoryError as e:
        raise ListingError(path, "Path is not a directory") from e
    except OSError as e:
        raise ListingError(path, f"Cannot list directory: {e.strerror or e}") from e


async def _gather_or_cancel(coros: Iterable[Awaitable[T]]) -> list[T]:
    """Run *coros* concurrently; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(c) for c in coros]
    if not tasks:
        return []
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
