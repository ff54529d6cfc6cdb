"""Abstract interfaces for the search engine."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from domain.entities import Document, ScoredDocument


class DocumentRepository(ABC):
    """Persists documents; the source of truth the index is rebuilt from."""

    @abstractmethod
    def save(self, document: Document) -> Document:
        """Insert or update a document, assigning an id to new ones."""

    @abstractmethod
    def find_by_id_and_owner_id(self, document_id: int, owner_id: int) -> Document | None:
        """Return the document if it exists and belongs to the owner."""

    @abstractmethod
    def find_all_by_owner_id(self, owner_id: int) -> list[Document]:
        """Return every document of one owner."""

    @abstractmethod
    def find_all(self) -> list[Document]:
        """Return all stored documents."""

    @abstractmethod
    def delete(self, document: Document) -> None:
        """Delete a stored document."""


class SearchIndex(ABC):
    """Full-text index over document titles and contents."""

    @abstractmethod
    def index(self, document: Document) -> None:
        """Index (or re-index) the given document.

        Called after a document is created or its content changes.
        """

    @abstractmethod
    def remove(self, document_id: int | None) -> None:
        """Remove a document from the index. Unknown ids are ignored."""

    @abstractmethod
    def rank(self, owner_id: int, tokens: Sequence[str]) -> list[ScoredDocument]:
        """Return the owner's documents matching the tokens, best first."""

    @abstractmethod
    def owner_of(self, document_id: int) -> int | None:
        """Return the owner recorded for an indexed document."""

    @abstractmethod
    def document_frequency(self, term: str) -> int:
        """Return how many indexed documents contain ``term``, across all owners."""

    @property
    @abstractmethod
    def document_count(self) -> int:
        """Return the number of indexed documents."""


__all__ = [
    "DocumentRepository",
    "SearchIndex",
]
