"""
타입 정의 모듈

공통 Enum 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class AccountStatus(str, Enum):
    """계정 상태

    문서에 없는 값은 OTHER로 취급 (활성으로 간주).
    """

    ACTIVE = "active"
    DELETED = "deleted"
    ARCHIVED = "archived"
    OTHER = "other"

    @classmethod
    def from_raw(cls, value: object) -> "AccountStatus":
        """문서 값 → AccountStatus (대소문자 무시, 없으면 ACTIVE)"""
        text = str(value or "").strip().lower()
        if not text:
            return cls.ACTIVE
        try:
            return cls(text)
        except ValueError:
            return cls.OTHER

    @property
    def is_inactive(self) -> bool:
        """삭제/보관 상태 여부"""
        return self in (AccountStatus.DELETED, AccountStatus.ARCHIVED)


class AutoFixReason(str, Enum):
    """잔액 자동 수정 사유 코드 (계정 문서의 autoFixReason)"""

    DEBT_TRANSFER_FIX = "migration_debt_transfer_fix"  # 단일 계정 재계산
    COMPREHENSIVE_FIX = "comprehensive_migration_fix"  # 전체 계정 재계산
