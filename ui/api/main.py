"""FastAPI layer that exposes document and search operations."""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Header, Query as FastAPIQuery, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator

from application.use_cases.manage_documents import (
    create_document,
    delete_all_documents,
    delete_document,
    get_document,
    list_documents,
    update_document,
)
from application.use_cases.rebuild_index import rebuild_index
from application.use_cases.search_documents import search_documents
from domain.entities import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH, DocumentStatus
from domain.errors import DocumentNotFoundError, InvalidDocumentError
from infrastructure.config import Container, ContainerConfig, build_default_container, load_config_from_env
from ui.logging_utils import setup_logging

logger = logging.getLogger(__name__)

OWNER_HEADER = "X-User-Id"


class DocumentPayload(BaseModel):
    title: str = Field(..., max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., max_length=CONTENT_MAX_LENGTH)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title must not be blank")
        return value

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Content must not be blank")
        return value


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    status: DocumentStatus


class WordSnippetsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    term: str
    snippets: list[str]


class DocumentSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    document_id: int
    document_title: str
    document_status: DocumentStatus
    relevance_score: float
    word_snippets: list[WordSnippetsResponse]


class SearchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    original_query: str | None
    page: int
    size: int
    total_elements: int
    total_pages: int
    has_previous: bool
    has_next: bool
    document_summaries: list[DocumentSummaryResponse]


class ErrorResponse(BaseModel):
    code: str
    message: str
    timestamp: datetime


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(code=code, message=message, timestamp=datetime.now(timezone.utc))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _format_validation_error(error: dict) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "header", "path")]
    message = str(error.get("msg", "invalid value")).removeprefix("Value error, ")
    return f"{'.'.join(location)}: {message}" if location else message


def get_container(request: Request) -> Container:
    return request.app.state.container


def create_app(container: Container | None = None, config: ContainerConfig | None = None) -> FastAPI:
    """Build the API application.

    Without an explicit ``container`` the default one is built on startup from
    ``config`` (or the environment).
    """

    cfg = config or load_config_from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "container", None) is None:
            app.state.container = build_default_container(cfg)
        if cfg.index_on_startup:
            rebuild_index(
                document_repository=app.state.container.document_repository,
                search_index=app.state.container.search_index,
            )
        yield

    app = FastAPI(title="Search Engine API", lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(DocumentNotFoundError)
    async def _document_not_found(request: Request, exc: DocumentNotFoundError) -> JSONResponse:
        logger.warning("Document not found: %s", exc.message)
        return _error(status.HTTP_404_NOT_FOUND, "DOCUMENT_NOT_FOUND", exc.message)

    @app.exception_handler(InvalidDocumentError)
    async def _invalid_document(request: Request, exc: InvalidDocumentError) -> JSONResponse:
        logger.warning("Invalid document: %s", exc)
        return _error(status.HTTP_400_BAD_REQUEST, "INVALID_DOCUMENT", str(exc))

    @app.exception_handler(RequestValidationError)
    async def _validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = "; ".join(_format_validation_error(error) for error in exc.errors())
        return _error(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", details or "Validation failure")

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unexpected error on %s %s from %s",
            request.method,
            request.url.path,
            request.client.host if request.client else "unknown",
            exc_info=exc,
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "Unexpected error")

    @app.post("/documents", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
    def create_endpoint(
        payload: DocumentPayload,
        owner_id: int = Header(..., alias=OWNER_HEADER),
        container: Container = Depends(get_container),
    ) -> DocumentResponse:
        logger.info("Create document: owner_id=%s", owner_id)
        document = create_document(
            owner_id,
            payload.title,
            payload.content,
            document_repository=container.document_repository,
            search_index=container.search_index,
        )
        return DocumentResponse.model_validate(document)

    @app.get("/documents/all", response_model=list[DocumentResponse])
    def list_endpoint(
        owner_id: int = Header(..., alias=OWNER_HEADER),
        container: Container = Depends(get_container),
    ) -> list[DocumentResponse]:
        logger.info("Get all documents: owner_id=%s", owner_id)
        documents = list_documents(owner_id, document_repository=container.document_repository)
        return [DocumentResponse.model_validate(document) for document in documents]

    @app.get("/documents/search/all", response_model=SearchResponse)
    def search_endpoint(
        query: str = FastAPIQuery(..., description="Free text query"),
        page: int | None = FastAPIQuery(None, description="1-based page number"),
        size: int | None = FastAPIQuery(None, description="Page size"),
        owner_id: int = Header(..., alias=OWNER_HEADER),
        container: Container = Depends(get_container),
    ) -> SearchResponse:
        logger.info("Search documents: owner_id=%s, query=%r", owner_id, query)
        result = search_documents(
            owner_id,
            query,
            page,
            size,
            search_index=container.search_index,
            document_repository=container.document_repository,
        )
        return SearchResponse.model_validate(result)

    @app.get("/documents/{document_id}", response_model=DocumentResponse)
    def get_endpoint(
        document_id: int,
        owner_id: int = Header(..., alias=OWNER_HEADER),
        container: Container = Depends(get_container),
    ) -> DocumentResponse:
        logger.info("Get document by id: id=%s, owner_id=%s", document_id, owner_id)
        document = get_document(document_id, owner_id, document_repository=container.document_repository)
        return DocumentResponse.model_validate(document)

    @app.put("/documents/{document_id}", response_model=DocumentResponse)
    def update_endpoint(
        document_id: int,
        payload: DocumentPayload,
        owner_id: int = Header(..., alias=OWNER_HEADER),
        container: Container = Depends(get_container),
    ) -> DocumentResponse:
        logger.info("Update document: id=%s, owner_id=%s", document_id, owner_id)
        document = update_document(
            document_id,
            owner_id,
            payload.title,
            payload.content,
            document_repository=container.document_repository,
            search_index=container.search_index,
        )
        return DocumentResponse.model_validate(document)

    @app.delete("/documents/delete/all")
    def delete_all_endpoint(
        owner_id: int = Header(..., alias=OWNER_HEADER),
        container: Container = Depends(get_container),
    ) -> Response:
        logger.info("Delete all documents: owner_id=%s", owner_id)
        delete_all_documents(
            owner_id,
            document_repository=container.document_repository,
            search_index=container.search_index,
        )
        return Response(status_code=status.HTTP_200_OK)

    @app.delete("/documents/delete/{document_id}")
    def delete_endpoint(
        document_id: int,
        owner_id: int = Header(..., alias=OWNER_HEADER),
        container: Container = Depends(get_container),
    ) -> Response:
        logger.info("Delete document: id=%s, owner_id=%s", document_id, owner_id)
        delete_document(
            document_id,
            owner_id,
            document_repository=container.document_repository,
            search_index=container.search_index,
        )
        return Response(status_code=status.HTTP_200_OK)

    return app


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    level = setup_logging()
    host = os.getenv("SEARCHENGINE_HOST", "127.0.0.1")
    port = int(os.getenv("SEARCHENGINE_PORT", "8080"))
    logger.info("Starting server on %s:%d", host, port)
    uvicorn.run(create_app(), host=host, port=port, log_level=logging.getLevelName(level).lower(), log_config=None)


if __name__ == "__main__":
    main()
