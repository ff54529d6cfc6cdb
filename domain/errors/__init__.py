"""Exceptions raised by the search engine domain."""
from __future__ import annotations


class SearchEngineError(Exception):
    """Base class for domain errors."""


class InvalidDocumentError(SearchEngineError):
    """The document cannot be indexed (missing id, blank title or content)."""


class DocumentNotFoundError(SearchEngineError):
    """A document could not be resolved from the document store."""

    def __init__(self, document_id: int | None = None, message: str | None = None) -> None:
        if message is None:
            message = f"Document not found with id={document_id}"
        super().__init__(message)
        self.document_id = document_id
        self.message = message


__all__ = [
    "SearchEngineError",
    "InvalidDocumentError",
    "DocumentNotFoundError",
]
