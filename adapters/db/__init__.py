"""
데이터베이스 어댑터

SQLite(WAL) 기반 문서 저장소.
"""

from adapters.db.document_store import SQLiteDocumentStore, open_connection

__all__ = [
    "SQLiteDocumentStore",
    "open_connection",
]
