"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Collections:
    """문서 저장소 컬렉션 이름 (외부 저장소 스키마, 변경 불가)"""

    ACCOUNTS: str = "cariler"
    TRANSACTIONS: str = "islemler"


class DocumentFields:
    """문서 필드 이름 (레거시 스키마)

    원본 문서의 필드 이름은 이 클래스에서만 참조.
    나머지 코드는 parsing 모듈이 만든 엄격한 레코드만 사용.
    """

    ID: str = "id"

    # 계정 (cariler)
    ACCOUNT_NAME: str = "unvan"
    ACCOUNT_STATUS: str = "durum"
    ACCOUNT_BALANCE: str = "bakiye"
    BALANCE_AUTO_FIXED: str = "balanceAutoFixed"
    LAST_BALANCE_RECALCULATION: str = "lastBalanceRecalculation"
    AUTO_FIX_REASON: str = "autoFixReason"

    # 거래 (islemler)
    TRANSACTION_TYPE: str = "islemTipi"
    TOTAL_AMOUNT: str = "toplamTutar"  # 우선
    AMOUNT: str = "tutar"  # 레거시
    PRIMARY_ACCOUNT: str = "islemCari"
    SOURCE_ACCOUNT: str = "kaynakCari"
    TARGET_ACCOUNT: str = "hedefCari"
    AFFECTS_BALANCE: str = "affectsBalance"
    IS_DELETED: str = "isDeleted"
    DESCRIPTION: str = "aciklama"


class Defaults:
    """기본값 상수"""

    # 저장된 잔액과 계산 잔액 허용 오차 (이하이면 쓰기 생략)
    BALANCE_TOLERANCE: Decimal = Decimal("0.01")

    SLACK_USERNAME: str = "LedgerFix"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일
    DEFAULT_DB: Path = DATA_DIR / "ledger.db"
