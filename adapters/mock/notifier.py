"""
Mock 알림 서비스

보정 결과 보고를 메모리에 쌓아 두는 INotifier 구현.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from core.utils.timezone import now_utc


@dataclass(frozen=True)
class SentNotification:
    """기록된 알림 한 건

    kind가 "report"면 title은 보고 제목, fields는 보고 항목.
    """

    kind: Literal["message", "report"]
    title: str
    level: str
    fields: dict[str, Any] = field(default_factory=dict)
    delivered: bool = True
    sent_at: datetime = field(default_factory=now_utc)


class MockNotifier:
    """Mock 알림 서비스

    fail_delivery=True면 기록은 남기되 전송 실패(False)를 반환.

    사용 예시:
    ```python
    notifier = MockNotifier()
    await notifier.send_report("계정 잔액 보정 완료", report.to_dict())

    assert notifier.last.fields["updated"] is True
    ```
    """

    def __init__(self, fail_delivery: bool = False):
        self.fail_delivery = fail_delivery
        self.sent: list[SentNotification] = []

    def _record(
        self,
        kind: Literal["message", "report"],
        title: str,
        level: str,
        fields: dict[str, Any] | None,
    ) -> bool:
        self.sent.append(SentNotification(
            kind=kind,
            title=title,
            level=level,
            fields=dict(fields or {}),
            delivered=not self.fail_delivery,
        ))
        return not self.fail_delivery

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        return self._record("message", message, level, extra)

    async def send_report(
        self,
        title: str,
        fields: dict[str, Any],
        level: str = "INFO",
    ) -> bool:
        return self._record("report", title, level, fields)

    async def close(self) -> None:
        pass

    # -------------------------------------------------------------------------
    # 검증 헬퍼
    # -------------------------------------------------------------------------

    @property
    def last(self) -> SentNotification | None:
        return self.sent[-1] if self.sent else None

    @property
    def reports(self) -> list[SentNotification]:
        return [n for n in self.sent if n.kind == "report"]

    def at_level(self, level: str) -> list[SentNotification]:
        return [n for n in self.sent if n.level == level]
