"""Use case that fills the search index from the document store."""
from __future__ import annotations

import logging

from domain.entities import DocumentStatus
from domain.errors import InvalidDocumentError
from domain.interfaces import DocumentRepository, SearchIndex

logger = logging.getLogger(__name__)


def rebuild_index(*, document_repository: DocumentRepository, search_index: SearchIndex) -> int:
    """Index every stored document that is not FAILED and return how many were indexed.

    A document the index rejects is marked FAILED in the store; the rest of
    the rebuild goes on.
    """
    logger.info("Indexing all stored documents")

    indexed = 0
    for document in document_repository.find_all():
        if document.status is DocumentStatus.FAILED:
            continue
        try:
            search_index.index(document)
        except InvalidDocumentError:
            logger.exception(
                "Failed to index document on startup: id=%s, owner_id=%s",
                document.id,
                document.owner_id,
            )
            document.mark_failed()
            document_repository.save(document)
            continue
        indexed += 1

    logger.info("Indexed %d documents", indexed)
    return indexed
