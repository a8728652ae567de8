"""
잔액 보정 서비스

보정 → 재계산 → 조건부 쓰기 순서로 실행.
저장소 핸들은 생성자로 명시적으로 전달 (전역 DB 객체 사용 안 함).

사용 예시:
```python
service = BalanceFixService(store)

report = await service.fix_account("acc_123")
print(report.summary())

all_report = await service.fix_all_accounts()
```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.constants import Collections, Defaults
from core.ledger.normalizer import NormalizationResult, TransactionNormalizer
from core.ledger.parsing import parse_accounts, parse_transactions
from core.ledger.recalculator import BalanceContribution, BalanceRecalculator, RecalculationResult
from core.ledger.selection import resolve_account
from core.ledger.types import Account
from core.types import AutoFixReason
from core.utils.timezone import now_utc

if TYPE_CHECKING:
    from adapters.interfaces import IDocumentStore

logger = logging.getLogger(__name__)


@dataclass
class BalanceFixReport:
    """단일 계정 보정 결과 (운영자 표시용)"""

    account_id: str
    account_name: str
    flags_fixed: int
    transactions_folded: int
    old_balance: Decimal
    new_balance: Decimal
    updated: bool
    contributions: list[BalanceContribution] = field(default_factory=list)

    @property
    def difference(self) -> Decimal:
        return abs(self.new_balance - self.old_balance)

    @classmethod
    def from_result(
        cls,
        result: RecalculationResult,
        flags_fixed: int,
        updated: bool,
    ) -> "BalanceFixReport":
        return cls(
            account_id=result.account.id,
            account_name=result.account.name,
            flags_fixed=flags_fixed,
            transactions_folded=result.folded_count,
            old_balance=result.stored_balance,
            new_balance=result.calculated_balance,
            updated=updated,
            contributions=list(result.contributions),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "account_id": self.account_id,
            "account_name": self.account_name,
            "flags_fixed": self.flags_fixed,
            "transactions_folded": self.transactions_folded,
            "old_balance": str(self.old_balance),
            "new_balance": str(self.new_balance),
            "difference": str(self.difference),
            "updated": self.updated,
        }

    def summary(self) -> str:
        status = "갱신됨" if self.updated else "이미 일치"
        lines = [
            f"계정: {self.account_name} ({self.account_id})",
            f"채무 이전 보정: {self.flags_fixed}건",
            f"재계산 거래 수: {self.transactions_folded}건",
            f"이전 잔액: {self.old_balance:,.2f}",
            f"새 잔액: {self.new_balance:,.2f}",
            f"차이: {self.difference:,.2f} ({status})",
        ]
        if self.contributions:
            lines.append("거래별 기여분:")
            for c in self.contributions:
                lines.append(f"  {c.change:+,.2f}  {c.raw_type}  {c.description or c.transaction_id}")
        return "\n".join(lines)


@dataclass
class AllAccountsFixReport:
    """전체 계정 보정 결과"""

    flags_fixed: int
    accounts: list[BalanceFixReport] = field(default_factory=list)

    @property
    def accounts_checked(self) -> int:
        return len(self.accounts)

    @property
    def updated_accounts(self) -> list[BalanceFixReport]:
        return [r for r in self.accounts if r.updated]

    @property
    def accounts_updated(self) -> int:
        return len(self.updated_accounts)

    @property
    def total_difference(self) -> Decimal:
        return sum((r.difference for r in self.updated_accounts), Decimal("0"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "flags_fixed": self.flags_fixed,
            "accounts_checked": self.accounts_checked,
            "accounts_updated": self.accounts_updated,
            "total_difference": str(self.total_difference),
        }

    def summary(self) -> str:
        lines = [
            f"채무 이전 보정: {self.flags_fixed}건",
            f"확인한 계정: {self.accounts_checked}개",
            f"갱신한 계정: {self.accounts_updated}개",
            f"총 보정 차이: {self.total_difference:,.2f}",
        ]
        for r in self.updated_accounts:
            lines.append(f"  • {r.account_name}: {r.old_balance:,.2f} → {r.new_balance:,.2f}")
        return "\n".join(lines)


class BalanceFixService:
    """잔액 보정 서비스

    동시 실행은 조정하지 않음 (한 번에 한 운영자 실행 가정).

    Args:
        store: 문서 저장소
        tolerance: 쓰기 생략 허용 오차
    """

    def __init__(
        self,
        store: IDocumentStore,
        tolerance: Decimal = Defaults.BALANCE_TOLERANCE,
    ):
        self.store = store
        self.normalizer = TransactionNormalizer(store)
        self.recalculator = BalanceRecalculator(store, tolerance)

    async def _load_and_normalize(self) -> NormalizationResult:
        """전체 거래 조회 후 채무 이전 플래그 보정"""
        documents = await self.store.get_all(Collections.TRANSACTIONS)
        transactions = parse_transactions(documents)
        logger.info(f"거래 {len(transactions)}건 로드")
        return await self.normalizer.normalize(transactions)

    async def fix_account(
        self,
        account_id: str,
        reason: AutoFixReason | str | None = AutoFixReason.DEBT_TRANSFER_FIX,
    ) -> BalanceFixReport:
        """단일 계정 보정

        1. 계정 조회 (실패 시 아무것도 쓰지 않음)
        2. 채무 이전 플래그 보정 (batch)
        3. 잔액 재계산
        4. 차이가 있으면 계정 문서 갱신

        Raises:
            AccountNotFoundError: 계정 없음
            StoreError: 저장소 실패 (보정 batch는 이미 반영되었을 수 있음)
        """
        account = await resolve_account(self.store, account_id)
        logger.info(f"대상 계정: {account.name} (ID: {account.id}, 잔액 {account.balance})")

        normalized = await self._load_and_normalize()

        result = self.recalculator.recalculate(account, normalized.transactions)
        updated = await self.recalculator.apply(result, reason=reason)

        report = BalanceFixReport.from_result(result, normalized.fixed_count, updated)
        logger.info(
            f"보정 완료: {report.account_name} "
            f"flags={report.flags_fixed}, folded={report.transactions_folded}, "
            f"{report.old_balance} → {report.new_balance} (차이 {report.difference})"
        )
        return report

    async def fix_all_accounts(
        self,
        reason: AutoFixReason | str | None = AutoFixReason.COMPREHENSIVE_FIX,
    ) -> AllAccountsFixReport:
        """활성 계정 전체 보정

        보정 batch는 한 번만 실행하고, 계정별로 재계산/갱신.
        삭제/보관 계정은 제외.
        """
        normalized = await self._load_and_normalize()

        documents = await self.store.get_all(Collections.ACCOUNTS)
        accounts: list[Account] = [a for a in parse_accounts(documents) if a.is_active]
        logger.info(f"활성 계정 {len(accounts)}개")

        report = AllAccountsFixReport(flags_fixed=normalized.fixed_count)
        recalculated_at = now_utc()

        for account in accounts:
            result = self.recalculator.recalculate(account, normalized.transactions)
            updated = await self.recalculator.apply(
                result,
                reason=reason,
                recalculated_at=recalculated_at,
            )
            report.accounts.append(
                BalanceFixReport.from_result(result, normalized.fixed_count, updated)
            )

        logger.info(
            f"전체 보정 완료: 확인 {report.accounts_checked}, "
            f"갱신 {report.accounts_updated}, 총 차이 {report.total_difference}"
        )
        return report
