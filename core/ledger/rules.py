"""
잔액 변화 규칙

거래 1건이 특정 계정 잔액에 주는 변화량 계산.
선택 조건(삭제/관련성/플래그)과 부호 규칙만 담당하며 I/O 없음.

부호 규칙 (첫 번째 일치 분기만 적용: 주 계정 → 출처 → 대상):

| 유형            | 주 계정    | 출처(kaynak) | 대상(hedef) |
|-----------------|-----------|--------------|-------------|
| 채무 이전        | 0         | -금액         | +금액        |
| 수입            | +금액      | -금액         | +금액        |
| 지출            | -금액      | -금액         | +금액        |
| 관리자 리셋      | +금액      | -금액         | +금액        |
| 기타            | 0         | -금액         | +금액        |
"""

from decimal import Decimal

from core.ledger.types import Transaction, TransactionKind


ZERO = Decimal("0")

# 주 계정 분기에서 유형별 부호
_PRIMARY_SIGN: dict[TransactionKind, int] = {
    TransactionKind.INCOME: 1,
    TransactionKind.EXPENSE: -1,
    # 이름과 달리 리셋이 아니라 무조건 입금으로 처리됨
    TransactionKind.ADMINISTRATIVE_RESET: 1,
    TransactionKind.DEBT_TRANSFER: 0,
    TransactionKind.OTHER: 0,
}


def is_selected(tx: Transaction, account_id: str) -> bool:
    """재계산 대상 여부

    - 소프트 삭제: 제외
    - 주 계정/출처/대상 모두 불일치: 제외
    - affects_balance 명시적 False: 제외 (None/True는 포함)
    """
    if tx.is_deleted:
        return False
    if not tx.involves(account_id):
        return False
    return tx.counts_toward_balance


def balance_change(tx: Transaction, account_id: str) -> Decimal:
    """거래 1건의 잔액 변화량

    선택 조건은 검사하지 않음 (is_selected 이후 호출).
    금액은 이미 절대값이므로 저장된 부호가 중복 적용되지 않음.

    Args:
        tx: 정규화된 거래
        account_id: 재계산 대상 계정 ID

    Returns:
        부호가 적용된 변화량 (관련 없으면 0)
    """
    amount = abs(tx.amount)

    if tx.primary_account == account_id:
        return amount * _PRIMARY_SIGN[tx.kind]

    if tx.source_account == account_id:
        return -amount

    if tx.target_account == account_id:
        return amount

    return ZERO
