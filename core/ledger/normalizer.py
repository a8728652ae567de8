"""
Transaction Normalizer

affectsBalance 표시가 누락된 채무 이전 거래를 찾아 True로 보정.
보정은 하나의 원자적 batch로 저장소에 반영 (all-or-nothing).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core.constants import Collections, DocumentFields
from core.ledger.types import Transaction

if TYPE_CHECKING:
    from adapters.interfaces import IDocumentStore

logger = logging.getLogger(__name__)


@dataclass
class NormalizationResult:
    """보정 결과

    transactions는 보정이 반영된 전체 거래 목록 (재계산에서 재사용).
    """

    transactions: list[Transaction]
    fixed_ids: list[str] = field(default_factory=list)

    @property
    def fixed_count(self) -> int:
        return len(self.fixed_ids)


def needs_flag_fix(tx: Transaction) -> bool:
    """채무 이전이면서 affects_balance가 정확히 True가 아닌 경우"""
    return tx.is_debt_transfer and tx.affects_balance is not True


class TransactionNormalizer:
    """채무 이전 affectsBalance 보정기

    삭제된 거래도 보정 대상 (재계산에서는 어차피 제외됨).
    금액/유형/계정 참조는 절대 변경하지 않음.

    Args:
        store: 문서 저장소
    """

    def __init__(self, store: IDocumentStore):
        self.store = store

    async def normalize(self, transactions: list[Transaction]) -> NormalizationResult:
        """보정 대상 플래그를 한 번의 batch로 저장

        Args:
            transactions: 저장소에서 읽은 전체 거래

        Returns:
            NormalizationResult

        Raises:
            StoreWriteError: batch 거부 시 (부분 반영 없음, 재계산 진행 불가)
        """
        updates: dict[str, dict[str, bool]] = {}
        corrected: list[Transaction] = []

        for tx in transactions:
            if needs_flag_fix(tx):
                updates[tx.id] = {DocumentFields.AFFECTS_BALANCE: True}
                corrected.append(tx.with_affects_balance(True))
                logger.info(
                    f"채무 이전 플래그 보정 대상: {tx.description or tx.id} "
                    f"(amount={tx.amount}, affectsBalance={tx.affects_balance})"
                )
            else:
                corrected.append(tx)

        if not updates:
            logger.info("보정할 채무 이전 거래 없음")
            return NormalizationResult(transactions=corrected)

        # 저장소 batch가 성공한 경우에만 메모리 보정본을 반환
        await self.store.batch_update(Collections.TRANSACTIONS, updates)

        logger.info(f"채무 이전 {len(updates)}건 affectsBalance=True 보정 완료")

        return NormalizationResult(
            transactions=corrected,
            fixed_ids=list(updates),
        )
