"""SQLite-репозиторий для хранения документов пользователей."""
from __future__ import annotations

import sqlite3
from pathlib import Path

from domain.entities import Document, DocumentStatus
from domain.interfaces import DocumentRepository

_COLUMNS = "id, title, content, owner_id, status"


class SqliteDocumentRepository(DocumentRepository):
    """Хранит документы в лёгкой SQLite-базе."""

    def __init__(self, db_path: str | Path = "searchengine.db") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_version (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    version INTEGER NOT NULL
                )
                """
            )
            conn.execute(
                """
                INSERT OR IGNORE INTO schema_version (id, version) VALUES (1, 1)
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    owner_id INTEGER NOT NULL,
                    status TEXT NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_documents_owner ON documents (owner_id)")

    def save(self, document: Document) -> Document:
        with self._connect() as conn:
            if document.id is None:
                cursor = conn.execute(
                    "INSERT INTO documents (title, content, owner_id, status) VALUES (?, ?, ?, ?)",
                    (document.title, document.content, document.owner_id, document.status.value),
                )
                document.id = cursor.lastrowid
            else:
                conn.execute(
                    f"REPLACE INTO documents ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                    (document.id, document.title, document.content, document.owner_id, document.status.value),
                )
        return document

    def find_by_id_and_owner_id(self, document_id: int, owner_id: int) -> Document | None:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM documents WHERE id = ? AND owner_id = ?",
                (document_id, owner_id),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_document(row)

    def find_all_by_owner_id(self, owner_id: int) -> list[Document]:
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM documents WHERE owner_id = ? ORDER BY id",
                (owner_id,),
            ).fetchall()
        return [self._row_to_document(row) for row in rows]

    def find_all(self) -> list[Document]:
        with self._connect() as conn:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM documents ORDER BY id").fetchall()
        return [self._row_to_document(row) for row in rows]

    def delete(self, document: Document) -> None:
        if document.id is None:
            return
        with self._connect() as conn:
            conn.execute("DELETE FROM documents WHERE id = ?", (document.id,))

    @staticmethod
    def _row_to_document(row: tuple) -> Document:
        return Document(
            id=row[0],
            title=row[1],
            content=row[2],
            owner_id=row[3],
            status=DocumentStatus(row[4]),
        )


__all__ = ["SqliteDocumentRepository"]
