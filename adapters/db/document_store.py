"""
SQLite 문서 저장소

IDocumentStore Protocol 구현.
컬렉션마다 테이블 하나, 문서 본문은 JSON으로 저장.
연결은 WAL 모드로 열고, 쓰기는 모두 트랜잭션 안에서 실행.

주의: 컬렉션 이름은 테이블 이름으로 쓰이므로 식별자 형식만 허용
"""

import json
import logging
import re
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from adapters.interfaces import StoreError, StoreWriteError
from core.constants import Collections, DocumentFields

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

BUSY_TIMEOUT_MS = 30000


async def open_connection(db_path: Path | str) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드, 부모 디렉토리 자동 생성)"""
    path = Path(db_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(str(path))
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}")
    except (aiosqlite.Error, OSError) as e:
        raise StoreError(f"SQLite 연결 실패: {path} ({e})") from e

    logger.info(f"SQLite 연결: {path}")
    return conn


def _table_name(collection: str) -> str:
    if not _IDENTIFIER_RE.match(collection):
        raise StoreError(f"유효하지 않은 컬렉션 이름: {collection!r}")
    return collection


def _decode(doc_id: str, body_json: str) -> dict[str, Any]:
    try:
        doc = json.loads(body_json)
    except ValueError as e:
        raise StoreError(f"문서 본문 해석 실패: {doc_id} ({e})") from e
    if not isinstance(doc, dict):
        raise StoreError(f"문서 본문이 객체가 아닙니다: {doc_id}")
    doc[DocumentFields.ID] = doc_id
    return doc


def _encode(doc: dict[str, Any]) -> str:
    body = {k: v for k, v in doc.items() if k != DocumentFields.ID}
    return json.dumps(body, ensure_ascii=False)


class SQLiteDocumentStore:
    """SQLite 기반 문서 저장소

    batch_update는 단일 SQLite 트랜잭션으로 실행 (all-or-nothing).

    Args:
        db_path: DB 파일 경로

    사용 예시:
    ```python
    async with SQLiteDocumentStore(Paths.DEFAULT_DB) as store:
        await store.init_schema()
        accounts = await store.get_all(Collections.ACCOUNTS)
    ```
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    # -------------------------------------------------------------------------
    # 연결 관리
    # -------------------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    async def connect(self) -> None:
        if self._conn is None:
            self._conn = await open_connection(self.db_path)

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("SQLite 연결 종료")

    @property
    def conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StoreError("문서 저장소가 연결되지 않았습니다")
        return self._conn

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """성공 시 커밋, 예외 시 롤백 후 재발생"""
        conn = self.conn
        try:
            yield conn
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise

    async def __aenter__(self) -> "SQLiteDocumentStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # 스키마
    # -------------------------------------------------------------------------

    async def init_schema(
        self,
        collections: tuple[str, ...] = (Collections.ACCOUNTS, Collections.TRANSACTIONS),
    ) -> None:
        """컬렉션 테이블 생성 (이미 있으면 유지)"""
        async with self._transaction() as conn:
            for collection in collections:
                table = _table_name(collection)
                await conn.execute(f"""
                    CREATE TABLE IF NOT EXISTS {table} (
                        doc_id       TEXT PRIMARY KEY,
                        body_json    TEXT NOT NULL,
                        updated_at   TEXT NOT NULL DEFAULT (datetime('now'))
                    )
                """)

        logger.info(f"문서 저장소 스키마 초기화 완료: {', '.join(collections)}")

    # -------------------------------------------------------------------------
    # IDocumentStore 구현
    # -------------------------------------------------------------------------

    async def get_all(self, collection: str) -> list[dict[str, Any]]:
        table = _table_name(collection)
        try:
            cursor = await self.conn.execute(
                f"SELECT doc_id, body_json FROM {table} ORDER BY doc_id"
            )
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StoreError(f"{collection} 조회 실패: {e}") from e

        return [_decode(doc_id, body) for doc_id, body in rows]

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        table = _table_name(collection)
        try:
            cursor = await self.conn.execute(
                f"SELECT body_json FROM {table} WHERE doc_id = ?",
                (doc_id,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StoreError(f"{collection}/{doc_id} 조회 실패: {e}") from e

        if row is None:
            return None
        return _decode(doc_id, row[0])

    async def put(self, collection: str, doc_id: str, doc: dict[str, Any]) -> None:
        """문서 저장 (있으면 덮어씀, 데이터 적재용)"""
        table = _table_name(collection)
        try:
            async with self._transaction() as conn:
                await conn.execute(
                    f"""
                    INSERT INTO {table} (doc_id, body_json) VALUES (?, ?)
                    ON CONFLICT(doc_id) DO UPDATE SET
                        body_json = excluded.body_json,
                        updated_at = datetime('now')
                    """,
                    (doc_id, _encode(doc)),
                )
        except (aiosqlite.Error, TypeError, ValueError) as e:
            raise StoreWriteError(f"{collection}/{doc_id} 저장 실패: {e}") from e

    async def _merge(
        self,
        conn: aiosqlite.Connection,
        table: str,
        doc_id: str,
        fields: dict[str, Any],
    ) -> None:
        """트랜잭션 내부에서 필드 병합 (문서가 없으면 StoreWriteError)"""
        cursor = await conn.execute(
            f"SELECT body_json FROM {table} WHERE doc_id = ?",
            (doc_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            raise StoreWriteError(f"문서가 없습니다: {table}/{doc_id}")

        body = json.loads(row[0])
        body.update(fields)

        await conn.execute(
            f"UPDATE {table} SET body_json = ?, updated_at = datetime('now') WHERE doc_id = ?",
            (_encode(body), doc_id),
        )

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
    ) -> None:
        table = _table_name(collection)
        try:
            async with self._transaction() as conn:
                await self._merge(conn, table, doc_id, fields)
        except (aiosqlite.Error, TypeError, ValueError) as e:
            raise StoreWriteError(f"{collection}/{doc_id} 갱신 실패: {e}") from e

    async def batch_update(
        self,
        collection: str,
        updates: dict[str, dict[str, Any]],
    ) -> None:
        if not updates:
            return

        table = _table_name(collection)
        try:
            async with self._transaction() as conn:
                for doc_id, fields in updates.items():
                    await self._merge(conn, table, doc_id, fields)
        except (aiosqlite.Error, TypeError, ValueError) as e:
            raise StoreWriteError(f"{collection} batch 갱신 실패: {e}") from e

        logger.debug(f"{collection} batch 갱신: {len(updates)}건")
