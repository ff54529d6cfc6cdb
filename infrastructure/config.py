"""Dependency wiring for the search engine."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from domain.interfaces import DocumentRepository, SearchIndex
from infrastructure.index.in_memory_search_index import InMemorySearchIndex
from infrastructure.repositories import SqliteDocumentRepository

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(slots=True)
class Container:
    """Simple container bundling concrete infrastructure implementations."""

    document_repository: DocumentRepository
    search_index: SearchIndex


@dataclass(slots=True)
class ContainerConfig:
    """Configuration for the document store and startup indexing."""

    db_path: str | Path = "searchengine.db"
    index_on_startup: bool = True


def load_config_from_env() -> ContainerConfig:
    """Build a config from ``SEARCHENGINE_*`` environment variables."""

    db_path = os.getenv("SEARCHENGINE_DB_PATH", "searchengine.db")
    index_on_startup = os.getenv("SEARCHENGINE_INDEX_ON_STARTUP", "true").strip().lower() not in _FALSE_VALUES
    return ContainerConfig(db_path=db_path, index_on_startup=index_on_startup)


def build_default_container(config: ContainerConfig | None = None) -> Container:
    """Instantiate the default infrastructure stack."""

    cfg = config or load_config_from_env()
    return Container(
        document_repository=SqliteDocumentRepository(db_path=cfg.db_path),
        search_index=InMemorySearchIndex(),
    )


__all__ = ["Container", "ContainerConfig", "build_default_container", "load_config_from_env"]
