"""
시각 유틸리티

계정 문서의 lastBalanceRecalculation은 UTC ISO-8601 문자열
(밀리초, 'Z' 접미사)로 기록하고, 운영자 표시는 KST로 변환.
"""

from datetime import datetime, timedelta, timezone

KST = timezone(timedelta(hours=9), "KST")


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    # naive datetime은 UTC로 간주
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso_z(dt: datetime) -> str:
    """문서 기록용 UTC 문자열

    Example:
        >>> to_iso_z(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))
        '2024-03-01T12:00:00.000Z'
    """
    return _as_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: object) -> datetime | None:
    """문서의 시각 문자열 -> UTC datetime

    'Z' 접미사와 오프셋 표기 모두 허용. 해석 불가하면 None.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def format_kst(dt: datetime) -> str:
    """운영자 표시용 KST 문자열 (예: '2026-02-21 01:00:00 KST')"""
    return _as_utc(dt).astimezone(KST).strftime("%Y-%m-%d %H:%M:%S %Z")
