"""
Ledger 타입 정의

거래 유형 Enum과 정규화된 계정/거래 레코드.
원본 문서(dict)는 parsing 모듈에서 이 레코드로 변환된 뒤에만 사용.
"""

import re
import unicodedata
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum

from core.types import AccountStatus


class TransactionKind(str, Enum):
    """거래 유형

    문서의 islemTipi 값을 접어서(fold) 분류.
    인식하지 못한 유형은 OTHER (잔액 변화 없음, 이체 fallback만 적용).
    """

    INCOME = "INCOME"  # 수입 (gelir)
    EXPENSE = "EXPENSE"  # 지출 (gider)
    DEBT_TRANSFER = "DEBT_TRANSFER"  # 채무 이전 (borç transferi)
    ADMINISTRATIVE_RESET = "ADMINISTRATIVE_RESET"  # 관리자 리셋 (실제로는 무조건 입금)
    OTHER = "OTHER"


# 접힌(folded) 유형 이름 → TransactionKind
TYPE_ALIASES: dict[str, TransactionKind] = {
    "gelir": TransactionKind.INCOME,
    "income": TransactionKind.INCOME,
    "gider": TransactionKind.EXPENSE,
    "expense": TransactionKind.EXPENSE,
    "borc transferi": TransactionKind.DEBT_TRANSFER,
    "debt transfer": TransactionKind.DEBT_TRANSFER,
    "administrative reset": TransactionKind.ADMINISTRATIVE_RESET,
}

_WHITESPACE_RE = re.compile(r"\s+")


def fold_type_name(raw: object) -> str:
    """유형 문자열 접기

    소문자화(casefold) → 발음 구별 기호 제거 → '_'를 공백으로 → 공백 정리.

    Example:
        >>> fold_type_name("Borç Transferi")
        'borc transferi'
        >>> fold_type_name("debt_transfer")
        'debt transfer'
    """
    text = str(raw or "").casefold()
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    # 터키어 점 없는 i
    stripped = stripped.replace("ı", "i")
    stripped = stripped.replace("_", " ")
    return _WHITESPACE_RE.sub(" ", stripped).strip()


def classify_type(raw: object) -> TransactionKind:
    """문서의 유형 값 → TransactionKind"""
    return TYPE_ALIASES.get(fold_type_name(raw), TransactionKind.OTHER)


@dataclass(frozen=True)
class Account:
    """계정 레코드 (cariler 문서)

    balance는 캐시된 누적 잔액. 재계산 결과와 비교 대상.
    """

    id: str
    name: str
    status: AccountStatus
    balance: Decimal
    auto_fixed: bool = False
    last_recalculated_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return not self.status.is_inactive


@dataclass(frozen=True)
class Transaction:
    """거래 레코드 (islemler 문서)

    amount는 항상 절대값. 부호는 sign 규칙에서 결정.
    affects_balance는 3상태: True / False / None(없음 = True로 간주).
    """

    id: str
    kind: TransactionKind
    raw_type: str
    amount: Decimal
    primary_account: str | None = None
    source_account: str | None = None
    target_account: str | None = None
    affects_balance: bool | None = None
    is_deleted: bool = False
    description: str = ""

    @property
    def is_debt_transfer(self) -> bool:
        return self.kind == TransactionKind.DEBT_TRANSFER

    @property
    def counts_toward_balance(self) -> bool:
        """명시적으로 False인 경우에만 제외"""
        return self.affects_balance is not False

    def involves(self, account_id: str) -> bool:
        """주 계정/출처/대상 중 하나라도 일치하는지"""
        return account_id in (
            self.primary_account,
            self.source_account,
            self.target_account,
        )

    def with_affects_balance(self, value: bool) -> "Transaction":
        return replace(self, affects_balance=value)
