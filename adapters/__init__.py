"""
어댑터 레이어

외부 서비스(문서 저장소, 알림 등)와의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from adapters.interfaces import (
    IDocumentStore,
    INotifier,
    StoreError,
    StoreWriteError,
)

__all__ = [
    # Interfaces
    "IDocumentStore",
    "INotifier",
    # Errors
    "StoreError",
    "StoreWriteError",
]
