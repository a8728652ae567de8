"""
유틸리티 패키지

문서 기록용 UTC 시각 / 운영자 표시용 KST 변환
"""

from core.utils.timezone import (
    KST,
    format_kst,
    now_utc,
    parse_iso,
    to_iso_z,
)

__all__ = [
    "KST",
    "format_kst",
    "now_utc",
    "parse_iso",
    "to_iso_z",
]
