"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Any, Protocol, runtime_checkable


class StoreError(Exception):
    """문서 저장소 예외 (읽기/쓰기 공통)"""

    pass


class StoreWriteError(StoreError):
    """문서 저장소가 쓰기를 거부한 경우

    batch_update 실패 시 어떤 문서도 변경되지 않은 상태여야 함.
    """

    pass


@runtime_checkable
class IDocumentStore(Protocol):
    """문서 저장소 인터페이스

    컬렉션 단위로 문서(dict)를 조회/수정.
    반환되는 문서는 "id" 키에 문서 ID를 포함.
    문서 생성/삭제는 제공하지 않음 (재계산은 기존 문서만 수정).
    """

    async def get_all(self, collection: str) -> list[dict[str, Any]]:
        """컬렉션 전체 문서 조회

        Args:
            collection: 컬렉션 이름

        Returns:
            문서 목록 (각 문서에 "id" 포함)
        """
        ...

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """단일 문서 조회

        Returns:
            문서 또는 None (없음)
        """
        ...

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
    ) -> None:
        """단일 문서 필드 병합 업데이트

        Raises:
            StoreWriteError: 문서가 없거나 저장소가 거부한 경우
        """
        ...

    async def batch_update(
        self,
        collection: str,
        updates: dict[str, dict[str, Any]],
    ) -> None:
        """다중 문서 원자적 업데이트 (all-or-nothing)

        Args:
            collection: 컬렉션 이름
            updates: doc_id -> 병합할 필드

        Raises:
            StoreWriteError: 하나라도 실패하면 전체 롤백 후 발생
        """
        ...


@runtime_checkable
class INotifier(Protocol):
    """알림 서비스 인터페이스

    재계산 결과 보고용. 전송 실패가 재계산을 실패시키면 안 됨.
    """

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송

        Args:
            message: 알림 메시지
            level: 알림 레벨 (INFO, WARNING, ERROR, CRITICAL)
            extra: 추가 데이터

        Returns:
            전송 성공 여부
        """
        ...

    async def send_report(
        self,
        title: str,
        fields: dict[str, Any],
        level: str = "INFO",
    ) -> bool:
        """재계산 결과 보고 (포맷팅된 메시지)

        Args:
            title: 보고 제목
            fields: 표시할 항목 (이름 -> 값)
            level: 알림 레벨

        Returns:
            전송 성공 여부
        """
        ...
