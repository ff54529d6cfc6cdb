"""Use case that runs a ranked, paginated full-text search for one owner."""
from __future__ import annotations

import logging
import math

from application.services.snippets import build_word_snippets
from application.services.tokenizer import unique_tokens
from domain.entities import DocumentSummary, ScoredDocument, SearchResultPage
from domain.errors import DocumentNotFoundError
from domain.interfaces import DocumentRepository, SearchIndex

logger = logging.getLogger(__name__)

PAGE_DEFAULT = 1
SIZE_DEFAULT = 20


def search_documents(
    owner_id: int,
    query: str | None,
    page: int | None = None,
    page_size: int | None = None,
    *,
    search_index: SearchIndex,
    document_repository: DocumentRepository,
) -> SearchResultPage:
    """Search all documents of ``owner_id`` and return one page of summaries.

    ``page`` is 1-based. Missing or non-positive ``page``/``page_size`` fall
    back to 1 and 20; a page past the end is clamped to the last page.
    """
    logger.debug(
        "Search started: owner_id=%s, query=%r, page=%s, page_size=%s",
        owner_id,
        query,
        page,
        page_size,
    )

    page = PAGE_DEFAULT if page is None or page < 1 else page
    page_size = SIZE_DEFAULT if page_size is None or page_size < 1 else page_size

    normalized = (query or "").strip()
    ranked: list[ScoredDocument] = []
    tokens: list[str] = []
    if normalized:
        tokens = unique_tokens(normalized)
        ranked = search_index.rank(owner_id, tokens)

    total_elements = len(ranked)
    if total_elements == 0:
        return SearchResultPage(
            original_query=query,
            page=page,
            size=page_size,
            total_elements=0,
            total_pages=0,
            has_previous=False,
            has_next=False,
            document_summaries=[],
        )

    total_pages = math.ceil(total_elements / page_size)
    page = min(page, total_pages)
    offset = (page - 1) * page_size

    summaries: list[DocumentSummary] = []
    for scored in ranked[offset : offset + page_size]:
        document = document_repository.find_by_id_and_owner_id(scored.document_id, owner_id)
        if document is None:
            raise DocumentNotFoundError(scored.document_id)
        summaries.append(
            DocumentSummary(
                document_id=scored.document_id,
                document_title=document.title,
                document_status=document.status,
                relevance_score=scored.score,
                word_snippets=build_word_snippets(document.content, tokens),
            )
        )

    return SearchResultPage(
        original_query=query,
        page=page,
        size=page_size,
        total_elements=total_elements,
        total_pages=total_pages,
        has_previous=page > 1,
        has_next=page < total_pages,
        document_summaries=summaries,
    )
