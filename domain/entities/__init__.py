"""Domain entities for the search engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 100_000


class DocumentStatus(str, Enum):
    """Lifecycle state of a stored document."""

    NEW = "NEW"
    INDEXING = "INDEXING"
    READY = "READY"
    FAILED = "FAILED"


@dataclass(slots=True)
class Document:
    """A titled text owned by a single user."""

    id: int | None
    title: str
    content: str
    owner_id: int
    status: DocumentStatus = DocumentStatus.NEW

    @classmethod
    def new(cls, title: str, content: str, owner_id: int) -> Document:
        return cls(id=None, title=title, content=content, owner_id=owner_id, status=DocumentStatus.NEW)

    def mark_indexing(self) -> None:
        self.status = DocumentStatus.INDEXING

    def mark_ready(self) -> None:
        self.status = DocumentStatus.READY

    def mark_failed(self) -> None:
        self.status = DocumentStatus.FAILED


@dataclass(slots=True, frozen=True)
class ScoredDocument:
    """Id of a matching document together with its relevance score."""

    document_id: int
    score: float


@dataclass(slots=True)
class WordContextSnippet:
    """Fragments of a document's content around one query term."""

    term: str
    snippets: list[str] = field(default_factory=list)


@dataclass(slots=True)
class DocumentSummary:
    """Short summary of a document shown in search results."""

    document_id: int
    document_title: str
    document_status: DocumentStatus
    relevance_score: float
    word_snippets: list[WordContextSnippet] = field(default_factory=list)


@dataclass(slots=True)
class SearchResultPage:
    """One page of ranked search results with pagination metadata."""

    original_query: str | None
    page: int
    size: int
    total_elements: int
    total_pages: int
    has_previous: bool
    has_next: bool
    document_summaries: list[DocumentSummary] = field(default_factory=list)


__all__ = [
    "CONTENT_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "Document",
    "DocumentStatus",
    "DocumentSummary",
    "ScoredDocument",
    "SearchResultPage",
    "WordContextSnippet",
]
