"""Rebuild nested views of a subtree from a flat collection."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import ReferenceIntegrityError
from .models import DirectoryEntry, Entry, EntryReference, FlatCollection, TypeFilter


def get_children(
    collection: FlatCollection | Iterable[Entry],
    directories: Iterable[DirectoryEntry],
    with_types: TypeFilter | str = TypeFilter.ALL,
    recurse: bool = True,
) -> list[Entry]:
    """Resolve the children of *directories* against *collection*.

    Results are grouped per start directory, in input order.  Within a
    group, children follow reference order and each directory is followed
    by its own resolved descendants when *recurse* is true.  *with_types*
    only decides what is returned: excluded directories are still walked.

    Raises :class:`ReferenceIntegrityError` if a reference does not resolve
    to an entry of the same type in *collection*.
    """
    type_filter = TypeFilter(with_types)
    if not isinstance(collection, FlatCollection):
        collection = FlatCollection(collection)

    results: list[Entry] = []
    for directory in directories:
        _collect(collection, directory, type_filter, recurse, results)
    return results


def _collect(
    index: FlatCollection,
    directory: DirectoryEntry,
    type_filter: TypeFilter,
    recurse: bool,
    results: list[Entry],
) -> None:
    for reference in directory.children:
        child = _lookup(index, reference)
        if type_filter.allows(child.type):
            results.append(child)
        if recurse and isinstance(child, DirectoryEntry):
            _collect(index, child, type_filter, recurse, results)


def _lookup(index: FlatCollection, reference: EntryReference) -> Entry:
    entry = index.get(reference.id)
    if entry is None:
        raise ReferenceIntegrityError(reference, "no such entry in the collection")
    if entry.type != reference.type:
        raise ReferenceIntegrityError(
            reference, f"entry is of type {entry.type.value!r}"
        )
    return entry
