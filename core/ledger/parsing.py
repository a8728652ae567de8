"""
문서 -> Ledger 레코드 변환

문서 저장소의 원본 dict를 core.ledger.types의 엄격한 레코드로 변환.
레거시 필드 이름(toplamTutar/tutar 등)과 3상태 플래그 처리는 이 모듈에만 존재.
모든 금액은 Decimal로 변환.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from core.constants import DocumentFields
from core.ledger.types import Account, Transaction, classify_type
from core.types import AccountStatus
from core.utils.timezone import parse_iso

logger = logging.getLogger(__name__)


def to_decimal(value: Any) -> Decimal | None:
    """문서 숫자 값 -> Decimal

    float는 str()을 거쳐 변환 (이진 오차 전파 방지).
    변환 불가하거나 유한하지 않으면 None.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not result.is_finite():
        return None
    return result


def _is_empty(value: Any) -> bool:
    """JS falsy 규칙과 동일하게 비어 있는 값 판단 (None, "", 0)"""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float, Decimal)):
        return value == 0
    return False


def _optional_ref(value: Any) -> str | None:
    """계정 참조 값 (빈 값은 None)"""
    if _is_empty(value):
        return None
    return str(value)


def parse_amount(data: dict[str, Any]) -> Decimal:
    """거래 금액 추출

    toplamTutar → tutar 순서로 비어 있지 않은 첫 값 사용.
    부호는 무시하고 절대값 반환. 변환 불가 시 0 (경고 로그).
    """
    raw: Any = None
    for field_name in (DocumentFields.TOTAL_AMOUNT, DocumentFields.AMOUNT):
        candidate = data.get(field_name)
        if not _is_empty(candidate):
            raw = candidate
            break

    if raw is None:
        return Decimal("0")

    amount = to_decimal(raw)
    if amount is None:
        logger.warning(
            f"금액 변환 실패, 0으로 처리: {data.get(DocumentFields.ID)} ({raw!r})"
        )
        return Decimal("0")

    return abs(amount)


def parse_affects_balance(value: Any) -> bool | None:
    """affectsBalance 3상태 변환

    bool 값만 그대로 사용하고 그 외(없음 포함)는 None.
    """
    if isinstance(value, bool):
        return value
    return None


def parse_transaction(data: dict[str, Any]) -> Transaction:
    """islemler 문서 -> Transaction

    문서 예시:
    {
        "id": "tx_001",
        "islemTipi": "Borç Transferi",
        "toplamTutar": 300,
        "islemCari": "acc_company",
        "kaynakCari": "acc_lender",
        "hedefCari": "acc_old_creditor",
        "affectsBalance": true,
        "isDeleted": false,
        "aciklama": "..."
    }
    """
    raw_type = str(data.get(DocumentFields.TRANSACTION_TYPE) or "")

    return Transaction(
        id=str(data[DocumentFields.ID]),
        kind=classify_type(raw_type),
        raw_type=raw_type,
        amount=parse_amount(data),
        primary_account=_optional_ref(data.get(DocumentFields.PRIMARY_ACCOUNT)),
        source_account=_optional_ref(data.get(DocumentFields.SOURCE_ACCOUNT)),
        target_account=_optional_ref(data.get(DocumentFields.TARGET_ACCOUNT)),
        affects_balance=parse_affects_balance(data.get(DocumentFields.AFFECTS_BALANCE)),
        is_deleted=bool(data.get(DocumentFields.IS_DELETED)),
        description=str(data.get(DocumentFields.DESCRIPTION) or ""),
    )


def parse_account(data: dict[str, Any]) -> Account:
    """cariler 문서 -> Account

    bakiye가 없거나 변환 불가하면 0.
    """
    balance = to_decimal(data.get(DocumentFields.ACCOUNT_BALANCE))

    return Account(
        id=str(data[DocumentFields.ID]),
        name=str(data.get(DocumentFields.ACCOUNT_NAME) or ""),
        status=AccountStatus.from_raw(data.get(DocumentFields.ACCOUNT_STATUS)),
        balance=balance if balance is not None else Decimal("0"),
        auto_fixed=data.get(DocumentFields.BALANCE_AUTO_FIXED) is True,
        last_recalculated_at=parse_iso(data.get(DocumentFields.LAST_BALANCE_RECALCULATION)),
    )


def parse_transactions(documents: list[dict[str, Any]]) -> list[Transaction]:
    return [parse_transaction(doc) for doc in documents]


def parse_accounts(documents: list[dict[str, Any]]) -> list[Account]:
    return [parse_account(doc) for doc in documents]
