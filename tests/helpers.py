"""
테스트 헬퍼

레거시 필드 이름으로 문서를 만드는 함수 모음
"""

from typing import Any

from adapters.mock.document_store import InMemoryDocumentStore


# 기본 시나리오 계정 ID
SEZON_ID = "acc_sezon"
LENDER_ID = "acc_lender"
CREDITOR_ID = "acc_creditor"


def account_doc(doc_id: str, name: str, balance: Any, **extra: Any) -> dict[str, Any]:
    """cariler 문서 생성"""
    doc = {"id": doc_id, "unvan": name, "bakiye": balance}
    doc.update(extra)
    return doc


def tx_doc(doc_id: str, tx_type: str, amount: Any, **extra: Any) -> dict[str, Any]:
    """islemler 문서 생성 (toplamTutar 사용)"""
    doc = {"id": doc_id, "islemTipi": tx_type, "toplamTutar": amount}
    doc.update(extra)
    return doc


def seed(store: Any, collection: str, docs: list[dict[str, Any]]) -> None:
    """메모리 저장소에 문서 적재 (쓰기 기록 없음)"""
    for doc in docs:
        store.put(collection, doc["id"], doc)


async def seed_async(store: Any, collection: str, docs: list[dict[str, Any]]) -> None:
    """SQLite 저장소에 문서 적재"""
    for doc in docs:
        await store.put(collection, doc["id"], doc)


def sezon_documents() -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """채무 이전 플래그가 누락된 기본 시나리오 (계정, 거래)

    저장 잔액 500, 실제 계산 잔액 -100:
    - 수입 200 (주 계정)
    - 지출 999 (affectsBalance=False, 제외)
    - 채무 이전 300 (출처, 플래그 없음 → 보정 대상)
    """
    accounts = [
        account_doc(SEZON_ID, "Sezon Tekstil", 500, durum="active"),
        account_doc(LENDER_ID, "Lender Ltd", 0),
        account_doc(CREDITOR_ID, "Old Creditor", 0),
    ]
    transactions = [
        tx_doc("tx_1", "gelir", 200, islemCari=SEZON_ID),
        tx_doc("tx_2", "gider", 999, islemCari=SEZON_ID, affectsBalance=False),
        tx_doc(
            "tx_3",
            "borç transferi",
            300,
            islemCari=LENDER_ID,
            kaynakCari=SEZON_ID,
            hedefCari=CREDITOR_ID,
            aciklama="Sezon borcu devri",
        ),
    ]
    return accounts, transactions


def make_sezon_store() -> InMemoryDocumentStore:
    store = InMemoryDocumentStore()
    accounts, transactions = sezon_documents()
    seed(store, "cariler", accounts)
    seed(store, "islemler", transactions)
    return store
