"""
Slack 알림 서비스

잔액 보정 결과를 Slack Incoming Webhook으로 보고.
전송 실패는 로그로만 남기고 보정 결과에는 영향을 주지 않음.
"""

import logging
from typing import Any

import httpx

from core.constants import Defaults
from core.utils.timezone import format_kst, now_utc

logger = logging.getLogger(__name__)


# level -> (이모지, attachment 색상)
LEVEL_STYLE: dict[str, tuple[str, str]] = {
    "INFO": (":white_check_mark:", "#36A64F"),
    "WARNING": (":warning:", "#FFA500"),
    "ERROR": (":x:", "#FF0000"),
    "CRITICAL": (":rotating_light:", "#8B0000"),
}
DEFAULT_STYLE = (":bell:", "#808080")

# 보고 항목 표시 이름 (없는 키는 그대로 표시)
FIELD_LABELS = {
    "account_id": "계정 ID",
    "account_name": "계정",
    "flags_fixed": "채무 이전 보정",
    "transactions_folded": "재계산 거래 수",
    "old_balance": "이전 잔액",
    "new_balance": "새 잔액",
    "difference": "차이",
    "updated": "갱신 여부",
    "accounts_checked": "확인한 계정",
    "accounts_updated": "갱신한 계정",
    "total_difference": "총 보정 차이",
}


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "예" if value else "아니오"
    return str(value)


def build_fields(values: dict[str, Any]) -> list[dict[str, Any]]:
    """보고 항목 → Slack attachment fields"""
    return [
        {"title": FIELD_LABELS.get(key, key), "value": _format_value(value), "short": True}
        for key, value in values.items()
    ]


class SlackNotifier:
    """Slack Webhook 알림

    Args:
        webhook_url: Slack Incoming Webhook URL
        channel: 채널 오버라이드 (None이면 Webhook 기본 채널)
        username: 발송자 이름
        timeout: HTTP 타임아웃 (초)
        client: 외부에서 주입할 httpx 클라이언트 (None이면 첫 전송 시 생성)

    사용 예시:
    ```python
    async with SlackNotifier(webhook_url=settings.slack.webhook_url) as notifier:
        await notifier.send_report("계정 잔액 보정 완료", report.to_dict())
    ```
    """

    def __init__(
        self,
        webhook_url: str,
        channel: str | None = None,
        username: str = Defaults.SLACK_USERNAME,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        if not webhook_url:
            raise ValueError("webhook_url은 필수입니다")

        self.webhook_url = webhook_url
        self.channel = channel
        self.username = username
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "SlackNotifier":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # INotifier 구현
    # -------------------------------------------------------------------------

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        emoji, color = LEVEL_STYLE.get(level, DEFAULT_STYLE)
        attachment: dict[str, Any] = {"color": color, "text": f"{emoji} *[{level}]* {message}"}
        if extra:
            attachment["fields"] = build_fields(extra)
        return await self._post(attachment)

    async def send_report(
        self,
        title: str,
        fields: dict[str, Any],
        level: str = "INFO",
    ) -> bool:
        emoji, color = LEVEL_STYLE.get(level, DEFAULT_STYLE)
        attachment = {
            "color": color,
            "title": f"{emoji} {title}",
            "fields": build_fields(fields),
        }
        return await self._post(attachment)

    # -------------------------------------------------------------------------
    # 전송
    # -------------------------------------------------------------------------

    def build_payload(self, attachment: dict[str, Any]) -> dict[str, Any]:
        attachment = {**attachment, "footer": f"{self.username} | {format_kst(now_utc())}"}
        payload: dict[str, Any] = {"username": self.username, "attachments": [attachment]}
        if self.channel:
            payload["channel"] = self.channel
        return payload

    async def _post(self, attachment: dict[str, Any]) -> bool:
        try:
            response = await self.client.post(self.webhook_url, json=self.build_payload(attachment))
        except httpx.TimeoutException:
            logger.error("Slack 알림 전송 타임아웃")
            return False
        except httpx.HTTPError as e:
            logger.error(f"Slack 알림 전송 HTTP 에러: {e}")
            return False

        if response.status_code != 200:
            logger.warning(f"Slack 알림 전송 실패: status={response.status_code}, body={response.text}")
            return False

        logger.debug("Slack 알림 전송 성공")
        return True
