"""Error taxonomy shared by the domain and its adapters."""

from __future__ import annotations


class NovalistError(Exception):
    """Base class for recoverable pipeline errors."""


class TransientFetchError(NovalistError):
    """A playlist page could not be fetched, even after retries."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LookupNotFoundError(NovalistError, LookupError):
    """The search service returned no usable match for a query."""

    def __init__(self, query: str, kind: str = "track") -> None:
        super().__init__(f"No {kind} match for {query!r}")
        self.query = query
        self.kind = kind


class SearchError(NovalistError):
    """The search service failed to answer."""


class PersistenceError(NovalistError):
    """A snapshot could not be read, decoded or written."""


class ExportError(NovalistError):
    """The playlist service refused or failed an export call."""
