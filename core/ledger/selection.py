"""
계정 선택

재계산 대상은 명시적 계정 ID로만 결정.
표시 이름 부분 일치 검색은 운영자 조회 보조 기능으로만 제공.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from core.constants import Collections
from core.ledger.parsing import parse_account
from core.ledger.types import Account

if TYPE_CHECKING:
    from adapters.interfaces import IDocumentStore

logger = logging.getLogger(__name__)


class AccountResolutionError(Exception):
    """대상 계정을 결정할 수 없는 경우 (쓰기 전에 중단)"""

    pass


class AccountNotFoundError(AccountResolutionError):
    """대상 계정 없음"""

    pass


class AmbiguousAccountError(AccountResolutionError):
    """검색 조건에 여러 계정이 일치"""

    def __init__(self, message: str, candidates: list[Account]):
        super().__init__(message)
        self.candidates = candidates


async def resolve_account(store: IDocumentStore, account_id: str) -> Account:
    """계정 ID로 대상 계정 조회

    Raises:
        AccountNotFoundError: 문서가 없는 경우
    """
    if not account_id:
        raise AccountNotFoundError("계정 ID가 비어 있습니다")

    doc = await store.get(Collections.ACCOUNTS, account_id)
    if doc is None:
        raise AccountNotFoundError(f"계정을 찾을 수 없습니다: {account_id}")

    return parse_account(doc)


def find_accounts(
    accounts: Iterable[Account],
    terms: Iterable[str],
    include_inactive: bool = False,
) -> list[Account]:
    """표시 이름 부분 일치 검색

    모든 검색어가 이름에 포함되어야 함 (대소문자 무시).
    결과는 (이름, ID) 순으로 정렬하여 결정적.

    Args:
        accounts: 전체 계정
        terms: 검색어 목록
        include_inactive: 삭제/보관 계정 포함 여부
    """
    needles = [term.casefold() for term in terms if term and term.strip()]

    matches = [
        account for account in accounts
        if (include_inactive or account.is_active)
        and all(needle in account.name.casefold() for needle in needles)
    ]

    return sorted(matches, key=lambda a: (a.name.casefold(), a.id))


def pick_single(matches: list[Account], terms: Iterable[str]) -> Account:
    """검색 결과에서 정확히 하나의 계정 선택

    Raises:
        AccountNotFoundError: 일치 없음
        AmbiguousAccountError: 둘 이상 일치
    """
    label = " + ".join(terms)

    if not matches:
        raise AccountNotFoundError(f"일치하는 계정이 없습니다: {label}")

    if len(matches) > 1:
        names = ", ".join(f"{a.name} ({a.id})" for a in matches)
        raise AmbiguousAccountError(
            f"여러 계정이 일치합니다: {label} -> {names}",
            candidates=matches,
        )

    return matches[0]
