"""
Ledger 잔액 보정 시스템

거래 로그를 재생하여 계정의 캐시된 잔액을 다시 계산.
재계산 전에 affectsBalance가 누락된 채무 이전 거래를 보정.

사용 예시:
```python
from core.ledger import BalanceFixService

service = BalanceFixService(store)

# 단일 계정
report = await service.fix_account("acc_123")

# 전체 활성 계정
all_report = await service.fix_all_accounts()
```
"""

from core.ledger.normalizer import NormalizationResult, TransactionNormalizer
from core.ledger.parsing import parse_account, parse_transaction
from core.ledger.recalculator import (
    BalanceContribution,
    BalanceRecalculator,
    RecalculationResult,
    fold_balance,
)
from core.ledger.rules import balance_change, is_selected
from core.ledger.selection import (
    AccountNotFoundError,
    AccountResolutionError,
    AmbiguousAccountError,
    find_accounts,
    pick_single,
    resolve_account,
)
from core.ledger.service import AllAccountsFixReport, BalanceFixReport, BalanceFixService
from core.ledger.types import Account, Transaction, TransactionKind, classify_type

__all__ = [
    # 핵심 클래스
    "BalanceFixService",
    "TransactionNormalizer",
    "BalanceRecalculator",
    # 레코드
    "Account",
    "Transaction",
    "TransactionKind",
    "NormalizationResult",
    "RecalculationResult",
    "BalanceContribution",
    "BalanceFixReport",
    "AllAccountsFixReport",
    # 함수
    "parse_account",
    "parse_transaction",
    "classify_type",
    "balance_change",
    "is_selected",
    "fold_balance",
    "resolve_account",
    "find_accounts",
    "pick_single",
    # 예외
    "AccountResolutionError",
    "AccountNotFoundError",
    "AmbiguousAccountError",
]
