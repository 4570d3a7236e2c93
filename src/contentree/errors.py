"""Exception types raised by the scanner and the resolver."""

from __future__ import annotations

from .models import EntryReference


class ScanError(Exception):
    """A directory scan failed; nothing from the scan is returned."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(path, message)
        self.path = path
        self.message = message

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class ListingError(ScanError):
    """A directory could not be listed (missing, not a directory, unreadable)."""


class EnrichmentError(ScanError):
    """An enrichment callback raised or returned something other than a mapping."""


class FrontMatterError(ValueError):
    """The YAML front matter block of a document is invalid."""


class ReferenceIntegrityError(AssertionError):
    """A child reference does not resolve inside the collection it came with.

    This is a caller bug (e.g. a directory entry taken from a different scan),
    never an "empty result".
    """

    def __init__(self, reference: EntryReference, message: str) -> None:
        super().__init__(f"{reference.type.value}/{reference.id}: {message}")
        self.reference = reference
