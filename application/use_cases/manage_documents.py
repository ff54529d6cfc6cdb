"""Use cases for creating, reading and deleting documents.

Every change is pushed into the search index synchronously, so a document is
searchable as soon as the call returns.
"""
from __future__ import annotations

import logging

from domain.entities import Document
from domain.errors import DocumentNotFoundError
from domain.interfaces import DocumentRepository, SearchIndex

logger = logging.getLogger(__name__)


def create_document(
    owner_id: int,
    title: str,
    content: str,
    *,
    document_repository: DocumentRepository,
    search_index: SearchIndex,
) -> Document:
    """Store a new document for ``owner_id`` and index it."""

    document = Document.new(title=title, content=content, owner_id=owner_id)
    document.mark_indexing()
    document = document_repository.save(document)
    return _index_and_mark_ready(document, document_repository=document_repository, search_index=search_index)


def update_document(
    document_id: int,
    owner_id: int,
    title: str,
    content: str,
    *,
    document_repository: DocumentRepository,
    search_index: SearchIndex,
) -> Document:
    """Replace the title and content of a document and re-index it."""

    document = get_document(document_id, owner_id, document_repository=document_repository)
    document.title = title
    document.content = content
    document.mark_indexing()
    document = document_repository.save(document)
    return _index_and_mark_ready(document, document_repository=document_repository, search_index=search_index)


def get_document(document_id: int, owner_id: int, *, document_repository: DocumentRepository) -> Document:
    document = document_repository.find_by_id_and_owner_id(document_id, owner_id)
    if document is None:
        raise DocumentNotFoundError(document_id)
    return document


def list_documents(owner_id: int, *, document_repository: DocumentRepository) -> list[Document]:
    documents = document_repository.find_all_by_owner_id(owner_id)
    if not documents:
        raise DocumentNotFoundError(message="User does not have any documents loaded")
    return documents


def delete_document(
    document_id: int,
    owner_id: int,
    *,
    document_repository: DocumentRepository,
    search_index: SearchIndex,
) -> None:
    logger.debug("Deleting document: id=%s, owner_id=%s", document_id, owner_id)

    document = get_document(document_id, owner_id, document_repository=document_repository)
    document_repository.delete(document)
    search_index.remove(document_id)

    logger.info("Document deleted: id=%s, owner_id=%s", document_id, owner_id)


def delete_all_documents(
    owner_id: int,
    *,
    document_repository: DocumentRepository,
    search_index: SearchIndex,
) -> int:
    """Delete every document of ``owner_id`` and return how many were deleted."""

    logger.debug("Deleting all documents: owner_id=%s", owner_id)

    documents = document_repository.find_all_by_owner_id(owner_id)
    if not documents:
        raise DocumentNotFoundError(message="Cannot delete documents: User does not have any documents loaded")

    for document in documents:
        document_repository.delete(document)
        search_index.remove(document.id)

    logger.info("All documents deleted: owner_id=%s, count=%d", owner_id, len(documents))
    return len(documents)


def _index_and_mark_ready(
    document: Document,
    *,
    document_repository: DocumentRepository,
    search_index: SearchIndex,
) -> Document:
    try:
        search_index.index(document)
    except Exception:
        logger.exception("Failed to index document: id=%s, owner_id=%s", document.id, document.owner_id)
        search_index.remove(document.id)
        document.mark_failed()
        document_repository.save(document)
        raise
    document.mark_ready()
    return document_repository.save(document)
