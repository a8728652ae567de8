"""
설정 로더

settings.yaml 로드 및 저장소/알림 설정 생성
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths, PROJECT_ROOT


@dataclass(frozen=True)
class SlackConfig:
    """Slack 알림 설정

    webhook_url이 비어 있으면 알림 비활성화
    """

    webhook_url: str
    channel: str | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)


@dataclass(frozen=True)
class Settings:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지.
    저장소 핸들은 이 설정으로 생성하여 명시적으로 전달.
    """

    db_path: Path
    tolerance: Decimal
    slack: SlackConfig


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def default_settings() -> Settings:
    """파일이 없을 때 사용하는 기본 설정"""
    return Settings(
        db_path=Paths.DEFAULT_DB,
        tolerance=Defaults.BALANCE_TOLERANCE,
        slack=SlackConfig(webhook_url=""),
    )


def _resolve_path(value: str) -> Path:
    """상대 경로는 프로젝트 루트 기준으로 해석"""
    path = Path(value)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise SettingsLoadError(f"settings.yaml의 '{name}' 섹션 형식이 잘못되었습니다")
    return section


def load_settings(path: Path | None = None) -> Settings:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 인스턴스 (파일이 없으면 기본값)

    Raises:
        SettingsLoadError: 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        return default_settings()

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        return default_settings()

    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    store = _section(data, "store")
    reconcile = _section(data, "reconcile")
    slack = _section(data, "slack")

    db_path_str = store.get("db_path")
    db_path = _resolve_path(str(db_path_str)) if db_path_str else Paths.DEFAULT_DB

    tolerance_raw = reconcile.get("tolerance", str(Defaults.BALANCE_TOLERANCE))
    try:
        tolerance = Decimal(str(tolerance_raw))
    except InvalidOperation as e:
        raise SettingsLoadError(
            f"유효하지 않은 tolerance입니다: '{tolerance_raw}'"
        ) from e

    if not tolerance.is_finite() or tolerance < 0:
        raise SettingsLoadError(f"tolerance는 0 이상이어야 합니다: {tolerance}")

    channel = slack.get("channel") or None

    return Settings(
        db_path=db_path,
        tolerance=tolerance,
        slack=SlackConfig(
            webhook_url=str(slack.get("webhook_url") or ""),
            channel=channel,
        ),
    )
