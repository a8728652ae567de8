"""
Mock 문서 저장소

테스트용 메모리 내 문서 저장소.
IDocumentStore Protocol 준수.
"""

import copy
from dataclasses import dataclass, field
from typing import Any

from adapters.interfaces import StoreError, StoreWriteError
from core.constants import DocumentFields


@dataclass
class WriteRecord:
    """쓰기 기록"""

    kind: str  # update, batch_update
    collection: str
    updates: dict[str, dict[str, Any]]


@dataclass
class MockStoreState:
    """Mock 상태 (메모리 내 저장)"""

    # collection -> doc_id -> 문서 본문 (id 제외)
    collections: dict[str, dict[str, dict[str, Any]]] = field(default_factory=dict)

    # 시뮬레이션 옵션
    should_fail_reads: bool = False
    should_fail_next_update: bool = False
    should_fail_next_batch: bool = False
    error_message: str = "Mock store error"


class InMemoryDocumentStore:
    """Mock 문서 저장소

    IDocumentStore Protocol 구현.
    모든 쓰기를 기록하여 테스트에서 검증 가능.

    사용 예시:
    ```python
    store = InMemoryDocumentStore()
    store.put("cariler", "acc_1", {"unvan": "Test", "bakiye": 500})

    store.state.should_fail_next_batch = True  # 다음 batch 거부
    ```
    """

    def __init__(self, state: MockStoreState | None = None):
        self.state = state or MockStoreState()
        self.writes: list[WriteRecord] = []

    # -------------------------------------------------------------------------
    # 상태 조작 메서드 (테스트용)
    # -------------------------------------------------------------------------

    def put(self, collection: str, doc_id: str, doc: dict[str, Any]) -> None:
        """문서 저장 (쓰기 기록에 남기지 않음)"""
        body = {k: v for k, v in doc.items() if k != DocumentFields.ID}
        self.state.collections.setdefault(collection, {})[doc_id] = copy.deepcopy(body)

    def raw(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """저장된 문서 본문 직접 조회 (id 제외)"""
        return self.state.collections.get(collection, {}).get(doc_id)

    @property
    def write_count(self) -> int:
        return len(self.writes)

    def writes_to(self, collection: str) -> list[WriteRecord]:
        return [w for w in self.writes if w.collection == collection]

    # -------------------------------------------------------------------------
    # IDocumentStore 구현
    # -------------------------------------------------------------------------

    def _check_reads(self) -> None:
        if self.state.should_fail_reads:
            raise StoreError(self.state.error_message)

    async def get_all(self, collection: str) -> list[dict[str, Any]]:
        self._check_reads()
        docs = self.state.collections.get(collection, {})
        return [
            {**copy.deepcopy(body), DocumentFields.ID: doc_id}
            for doc_id, body in docs.items()
        ]

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        self._check_reads()
        body = self.raw(collection, doc_id)
        if body is None:
            return None
        return {**copy.deepcopy(body), DocumentFields.ID: doc_id}

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
    ) -> None:
        if self.state.should_fail_next_update:
            self.state.should_fail_next_update = False
            raise StoreWriteError(self.state.error_message)

        body = self.raw(collection, doc_id)
        if body is None:
            raise StoreWriteError(f"문서가 없습니다: {collection}/{doc_id}")

        body.update(copy.deepcopy(fields))
        self.writes.append(WriteRecord(
            kind="update",
            collection=collection,
            updates={doc_id: dict(fields)},
        ))

    async def batch_update(
        self,
        collection: str,
        updates: dict[str, dict[str, Any]],
    ) -> None:
        if self.state.should_fail_next_batch:
            self.state.should_fail_next_batch = False
            raise StoreWriteError(self.state.error_message)

        # 전부 검증한 뒤에 반영 (all-or-nothing)
        missing = [doc_id for doc_id in updates if self.raw(collection, doc_id) is None]
        if missing:
            raise StoreWriteError(f"문서가 없습니다: {collection}/{', '.join(missing)}")

        for doc_id, fields in updates.items():
            self.state.collections[collection][doc_id].update(copy.deepcopy(fields))

        self.writes.append(WriteRecord(
            kind="batch_update",
            collection=collection,
            updates={doc_id: dict(fields) for doc_id, fields in updates.items()},
        ))
