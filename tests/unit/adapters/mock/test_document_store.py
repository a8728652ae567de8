"""
Mock 문서 저장소 테스트

InMemoryDocumentStore 테스트.
"""

import pytest

from adapters.interfaces import StoreError, StoreWriteError
from adapters.mock.document_store import InMemoryDocumentStore


class TestInMemoryDocumentStore:
    """InMemoryDocumentStore 테스트"""

    @pytest.fixture
    def store(self) -> InMemoryDocumentStore:
        store = InMemoryDocumentStore()
        store.put("cariler", "acc_1", {"id": "acc_1", "unvan": "A", "bakiye": 10})
        store.put("cariler", "acc_2", {"unvan": "B", "bakiye": 20})
        return store

    @pytest.mark.asyncio
    async def test_get_all_includes_id(self, store: InMemoryDocumentStore) -> None:
        """조회 결과에 id 포함"""
        docs = await store.get_all("cariler")

        assert [d["id"] for d in docs] == ["acc_1", "acc_2"]
        assert docs[0]["unvan"] == "A"

    @pytest.mark.asyncio
    async def test_get_missing(self, store: InMemoryDocumentStore) -> None:
        """없는 문서는 None"""
        assert await store.get("cariler", "acc_x") is None
        assert await store.get_all("islemler") == []

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(self, store: InMemoryDocumentStore) -> None:
        """조회 결과 수정이 저장소에 영향 없음"""
        doc = await store.get("cariler", "acc_1")
        doc["bakiye"] = 999

        assert store.raw("cariler", "acc_1")["bakiye"] == 10

    @pytest.mark.asyncio
    async def test_put_not_recorded(self, store: InMemoryDocumentStore) -> None:
        """put은 쓰기 기록에 남지 않음"""
        assert store.write_count == 0

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, store: InMemoryDocumentStore) -> None:
        """필드 병합"""
        await store.update("cariler", "acc_1", {"bakiye": 15, "balanceAutoFixed": True})

        doc = store.raw("cariler", "acc_1")
        assert doc == {"unvan": "A", "bakiye": 15, "balanceAutoFixed": True}
        assert store.writes[0].kind == "update"
        assert store.writes[0].updates == {"acc_1": {"bakiye": 15, "balanceAutoFixed": True}}

    @pytest.mark.asyncio
    async def test_update_missing_document(self, store: InMemoryDocumentStore) -> None:
        """없는 문서 갱신 거부"""
        with pytest.raises(StoreWriteError):
            await store.update("cariler", "acc_x", {"bakiye": 1})

        assert store.write_count == 0

    @pytest.mark.asyncio
    async def test_batch_update(self, store: InMemoryDocumentStore) -> None:
        """batch 갱신"""
        await store.batch_update("cariler", {
            "acc_1": {"bakiye": 1},
            "acc_2": {"bakiye": 2},
        })

        assert store.raw("cariler", "acc_1")["bakiye"] == 1
        assert store.raw("cariler", "acc_2")["bakiye"] == 2
        assert len(store.writes_to("cariler")) == 1

    @pytest.mark.asyncio
    async def test_batch_all_or_nothing(self, store: InMemoryDocumentStore) -> None:
        """하나라도 없으면 전체 거부"""
        with pytest.raises(StoreWriteError, match="acc_x"):
            await store.batch_update("cariler", {
                "acc_1": {"bakiye": 1},
                "acc_x": {"bakiye": 2},
            })

        assert store.raw("cariler", "acc_1")["bakiye"] == 10
        assert store.write_count == 0

    @pytest.mark.asyncio
    async def test_fail_next_batch_once(self, store: InMemoryDocumentStore) -> None:
        """다음 batch 한 번만 실패"""
        store.state.should_fail_next_batch = True

        with pytest.raises(StoreWriteError):
            await store.batch_update("cariler", {"acc_1": {"bakiye": 1}})

        await store.batch_update("cariler", {"acc_1": {"bakiye": 1}})
        assert store.raw("cariler", "acc_1")["bakiye"] == 1

    @pytest.mark.asyncio
    async def test_fail_next_update_once(self, store: InMemoryDocumentStore) -> None:
        """다음 update 한 번만 실패"""
        store.state.should_fail_next_update = True

        with pytest.raises(StoreWriteError):
            await store.update("cariler", "acc_1", {"bakiye": 1})

        await store.update("cariler", "acc_1", {"bakiye": 1})
        assert store.write_count == 1

    @pytest.mark.asyncio
    async def test_fail_reads(self, failing_store: InMemoryDocumentStore) -> None:
        """읽기 실패 시뮬레이션"""
        with pytest.raises(StoreError, match="down"):
            await failing_store.get_all("cariler")

        with pytest.raises(StoreError):
            await failing_store.get("cariler", "acc_1")
