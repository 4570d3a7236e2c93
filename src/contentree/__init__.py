"""contentree: index a directory tree into a flat, JSON:API-style collection."""

from .core import ContentTree
from .errors import (
    EnrichmentError,
    FrontMatterError,
    ListingError,
    ReferenceIntegrityError,
    ScanError,
)
from .models import (
    DirectoryEntry,
    Entry,
    EntryReference,
    EntryType,
    FileEntry,
    FlatCollection,
    TypeFilter,
)
from .resolver import get_children
from .scanner import scan_directory

__all__ = [
    "ContentTree",
    "DirectoryEntry",
    "EnrichmentError",
    "Entry",
    "EntryReference",
    "EntryType",
    "FileEntry",
    "FlatCollection",
    "FrontMatterError",
    "ListingError",
    "ReferenceIntegrityError",
    "ScanError",
    "TypeFilter",
    "get_children",
    "scan_directory",
]
