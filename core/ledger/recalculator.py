"""
Balance Recalculator

대상 계정과 관련된 모든 거래를 재생(fold)하여 잔액을 다시 계산하고,
저장된 잔액과 허용 오차 이상 차이가 나면 계정 문서를 갱신.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable

from core.constants import Collections, Defaults, DocumentFields
from core.ledger.rules import ZERO, balance_change, is_selected
from core.ledger.types import Account, Transaction
from core.types import AutoFixReason
from core.utils.timezone import now_utc, to_iso_z

if TYPE_CHECKING:
    from adapters.interfaces import IDocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceContribution:
    """거래 1건의 잔액 기여분"""

    transaction_id: str
    raw_type: str
    change: Decimal
    description: str = ""


@dataclass
class RecalculationResult:
    """재계산 결과

    folded_count: 선택 조건을 통과한 거래 수 (변화량 0 포함)
    """

    account: Account
    calculated_balance: Decimal
    folded_count: int
    contributions: list[BalanceContribution] = field(default_factory=list)

    @property
    def stored_balance(self) -> Decimal:
        return self.account.balance

    @property
    def difference(self) -> Decimal:
        """계산 - 저장 (부호 포함)"""
        return self.calculated_balance - self.stored_balance

    @property
    def abs_difference(self) -> Decimal:
        return abs(self.difference)

    def needs_update(self, tolerance: Decimal = Defaults.BALANCE_TOLERANCE) -> bool:
        """허용 오차 초과 여부"""
        return self.abs_difference > tolerance


def fold_balance(
    transactions: Iterable[Transaction],
    account_id: str,
) -> tuple[Decimal, int, list[BalanceContribution]]:
    """거래 재생 (순서 무관한 합계)

    Decimal 덧셈이므로 거래 순서를 바꿔도 결과가 같음.

    Returns:
        (계산 잔액, 통과 거래 수, 0이 아닌 기여분 목록)
    """
    total = ZERO
    count = 0
    contributions: list[BalanceContribution] = []

    for tx in transactions:
        if not is_selected(tx, account_id):
            continue

        count += 1
        change = balance_change(tx, account_id)
        total += change

        if change != ZERO:
            contributions.append(BalanceContribution(
                transaction_id=tx.id,
                raw_type=tx.raw_type,
                change=change,
                description=tx.description,
            ))
            logger.debug(f"  {change:+} - {tx.raw_type} - {tx.description or tx.id}")

    return total, count, contributions


def balance_patch(
    calculated_balance: Decimal,
    recalculated_at: datetime,
    reason: AutoFixReason | str | None = None,
) -> dict[str, object]:
    """계정 문서 업데이트 필드 구성

    잔액은 문서 저장소의 숫자 타입(float)으로 기록.
    시각은 UTC ISO-8601 (밀리초, 'Z' 접미사).
    """
    fields: dict[str, object] = {
        DocumentFields.ACCOUNT_BALANCE: float(calculated_balance),
        DocumentFields.BALANCE_AUTO_FIXED: True,
        DocumentFields.LAST_BALANCE_RECALCULATION: to_iso_z(recalculated_at),
    }
    if reason:
        fields[DocumentFields.AUTO_FIX_REASON] = (
            reason.value if isinstance(reason, AutoFixReason) else reason
        )
    return fields


class BalanceRecalculator:
    """잔액 재계산기

    Args:
        store: 문서 저장소
        tolerance: 쓰기 생략 허용 오차 (기본 0.01)
    """

    def __init__(
        self,
        store: IDocumentStore,
        tolerance: Decimal = Defaults.BALANCE_TOLERANCE,
    ):
        self.store = store
        self.tolerance = tolerance

    def recalculate(
        self,
        account: Account,
        transactions: Iterable[Transaction],
    ) -> RecalculationResult:
        """잔액 재계산 (I/O 없음)

        Args:
            account: 대상 계정
            transactions: 보정이 반영된 전체 거래

        Returns:
            RecalculationResult
        """
        total, count, contributions = fold_balance(transactions, account.id)

        logger.info(
            f"재계산: {account.name or account.id} "
            f"거래 {count}건, 저장 {account.balance} → 계산 {total}"
        )

        return RecalculationResult(
            account=account,
            calculated_balance=total,
            folded_count=count,
            contributions=contributions,
        )

    async def apply(
        self,
        result: RecalculationResult,
        reason: AutoFixReason | str | None = AutoFixReason.DEBT_TRANSFER_FIX,
        recalculated_at: datetime | None = None,
    ) -> bool:
        """차이가 허용 오차를 넘으면 계정 문서 갱신

        Args:
            result: 재계산 결과
            reason: autoFixReason 값 (None이면 기록 안 함)
            recalculated_at: 재계산 시각 (None이면 현재 UTC)

        Returns:
            쓰기 수행 여부

        Raises:
            StoreWriteError: 저장소 거부 시 (그대로 전파)
        """
        if not result.needs_update(self.tolerance):
            logger.info(
                f"잔액 일치, 갱신 생략: {result.account.name or result.account.id} "
                f"(차이 {result.abs_difference})"
            )
            return False

        fields = balance_patch(
            result.calculated_balance,
            recalculated_at or now_utc(),
            reason,
        )

        await self.store.update(Collections.ACCOUNTS, result.account.id, fields)

        logger.info(
            f"잔액 갱신: {result.account.name or result.account.id} "
            f"{result.stored_balance} → {result.calculated_balance}"
        )
        return True
