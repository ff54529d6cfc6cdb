from infrastructure.repositories.sqlite_document_repository import SqliteDocumentRepository

__all__ = ["SqliteDocumentRepository"]
