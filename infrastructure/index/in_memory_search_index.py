"""In-memory inverted index with owner-scoped TF-IDF ranking."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Sequence

from application.services.scoring import MIN_SCORE, TITLE_BOOST, smoothed_idf, term_frequency
from application.services.tokenizer import tokenize
from domain.entities import Document, ScoredDocument
from domain.errors import InvalidDocumentError
from domain.interfaces import SearchIndex

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _TermStats:
    title_freq: int = 0
    content_freq: int = 0

    def tf(self, title_boost: float) -> float:
        return term_frequency(self.title_freq, self.content_freq, title_boost)


class InMemorySearchIndex(SearchIndex):
    """Inverted index kept entirely in process memory.

    ``term -> {document_id -> _TermStats}`` holds the postings and
    ``document_id -> owner_id`` scopes every query to a single owner.
    Mutations and reads of both maps happen under one instance lock, so a
    reader never sees postings of a document whose owner entry is gone.
    Searches are serialized with writers and with each other while scoring;
    tokenizing and sorting run outside the lock.
    """

    def __init__(self, title_boost: float = TITLE_BOOST, min_score: float = MIN_SCORE) -> None:
        self._title_boost = title_boost
        self._min_score = min_score
        self._postings: dict[str, dict[int, _TermStats]] = {}
        self._owners: dict[int, int] = {}
        self._document_terms: dict[int, set[str]] = {}
        self._lock = threading.RLock()

    def index(self, document: Document) -> None:
        logger.debug("Indexing document: id=%s, owner_id=%s", document.id, document.owner_id)

        if document.id is None:
            raise InvalidDocumentError("Cannot index document with null id")
        if not document.title or not document.title.strip():
            raise InvalidDocumentError("Cannot index document because of empty title.")
        if not document.content or not document.content.strip():
            raise InvalidDocumentError("Cannot index document because of empty content.")

        stats: dict[str, _TermStats] = {}
        for token in tokenize(document.title):
            stats.setdefault(token, _TermStats()).title_freq += 1
        for token in tokenize(document.content):
            stats.setdefault(token, _TermStats()).content_freq += 1

        with self._lock:
            self._drop_postings(document.id)
            for term, term_stats in stats.items():
                self._postings.setdefault(term, {})[document.id] = term_stats
            self._document_terms[document.id] = set(stats)
            self._owners[document.id] = document.owner_id

    def remove(self, document_id: int | None) -> None:
        logger.debug("Removing document from index: id=%s", document_id)
        if document_id is None:
            return
        with self._lock:
            self._owners.pop(document_id, None)
            self._drop_postings(document_id)

    def rank(self, owner_id: int, tokens: Sequence[str]) -> list[ScoredDocument]:
        scores: dict[int, float] = {}
        with self._lock:
            total_documents = len(self._owners)
            for token in dict.fromkeys(tokens):
                postings = self._postings.get(token)
                if not postings:
                    continue
                idf = smoothed_idf(total_documents, len(postings))
                for document_id, term_stats in postings.items():
                    if self._owners.get(document_id) != owner_id:
                        continue
                    scores[document_id] = scores.get(document_id, 0.0) + term_stats.tf(self._title_boost) * idf

        ranked = [
            ScoredDocument(document_id=document_id, score=score)
            for document_id, score in scores.items()
            if score >= self._min_score
        ]
        ranked.sort(key=lambda item: (-item.score, item.document_id))
        return ranked

    def owner_of(self, document_id: int) -> int | None:
        with self._lock:
            return self._owners.get(document_id)

    @property
    def document_count(self) -> int:
        with self._lock:
            return len(self._owners)

    def document_frequency(self, term: str) -> int:
        """Number of indexed documents containing ``term``, across all owners."""
        with self._lock:
            return len(self._postings.get(term, {}))

    def _drop_postings(self, document_id: int) -> None:
        for term in self._document_terms.pop(document_id, ()):
            postings = self._postings.get(term)
            if postings is None:
                continue
            postings.pop(document_id, None)
            if not postings:
                del self._postings[term]


__all__ = ["InMemorySearchIndex"]
