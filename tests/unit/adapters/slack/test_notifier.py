"""
Slack Notifier 테스트

httpx.MockTransport로 Webhook 응답을 흉내 내어 네트워크 없이 검증.
"""

import json

import httpx
import pytest

from adapters.slack.notifier import LEVEL_STYLE, SlackNotifier, build_fields

WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXX"


def make_notifier(handler, **kwargs) -> tuple[SlackNotifier, list[dict]]:
    """요청 본문을 모으는 MockTransport 기반 Notifier"""
    payloads: list[dict] = []

    def record(request: httpx.Request) -> httpx.Response:
        payloads.append(json.loads(request.content))
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(record))
    return SlackNotifier(webhook_url=WEBHOOK_URL, client=client, **kwargs), payloads


def ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, text="ok")


class TestBuildFields:
    """build_fields 테스트"""

    def test_known_labels(self) -> None:
        """보고 키는 한글 표시 이름으로"""
        fields = build_fields({"old_balance": "500", "new_balance": "-100", "updated": True})

        assert fields == [
            {"title": "이전 잔액", "value": "500", "short": True},
            {"title": "새 잔액", "value": "-100", "short": True},
            {"title": "갱신 여부", "value": "예", "short": True},
        ]

    def test_unknown_key_kept(self) -> None:
        """모르는 키는 그대로"""
        assert build_fields({"db": "ledger.db"})[0]["title"] == "db"


class TestInit:
    """초기화 테스트"""

    def test_defaults(self) -> None:
        notifier = SlackNotifier(webhook_url=WEBHOOK_URL)

        assert notifier.channel is None
        assert notifier.username == "LedgerFix"
        assert notifier.timeout == 10.0

    def test_webhook_required(self) -> None:
        with pytest.raises(ValueError, match="webhook_url"):
            SlackNotifier(webhook_url="")


class TestSendReport:
    """send_report 테스트"""

    @pytest.mark.asyncio
    async def test_report_payload(self) -> None:
        """제목, 항목, KST 푸터"""
        notifier, payloads = make_notifier(ok)

        delivered = await notifier.send_report(
            "계정 잔액 보정 완료",
            {"account_name": "Sezon Tekstil", "new_balance": "-100"},
        )
        await notifier.close()

        assert delivered is True
        payload = payloads[0]
        attachment = payload["attachments"][0]
        assert payload["username"] == "LedgerFix"
        assert "channel" not in payload
        assert attachment["title"] == f"{LEVEL_STYLE['INFO'][0]} 계정 잔액 보정 완료"
        assert attachment["color"] == LEVEL_STYLE["INFO"][1]
        assert {"title": "계정", "value": "Sezon Tekstil", "short": True} in attachment["fields"]
        assert attachment["footer"].startswith("LedgerFix | ")
        assert attachment["footer"].endswith("KST")
        assert attachment["footer"].count("KST") == 1

    @pytest.mark.asyncio
    async def test_channel_override(self) -> None:
        notifier, payloads = make_notifier(ok, channel="#ledger")

        await notifier.send_report("전체 계정 잔액 보정 완료", {"accounts_updated": 2})
        await notifier.close()

        assert payloads[0]["channel"] == "#ledger"


class TestSend:
    """send 테스트"""

    @pytest.mark.asyncio
    async def test_error_message(self) -> None:
        """에러 레벨 메시지 형식"""
        notifier, payloads = make_notifier(ok)

        await notifier.send("잔액 보정 실패: 계정 없음", level="ERROR", extra={"account_id": "acc_x"})
        await notifier.close()

        attachment = payloads[0]["attachments"][0]
        assert attachment["text"] == ":x: *[ERROR]* 잔액 보정 실패: 계정 없음"
        assert attachment["fields"] == [{"title": "계정 ID", "value": "acc_x", "short": True}]

    @pytest.mark.asyncio
    async def test_unknown_level_style(self) -> None:
        notifier, payloads = make_notifier(ok)

        await notifier.send("메시지", level="DEBUG")
        await notifier.close()

        assert payloads[0]["attachments"][0]["color"] == "#808080"
        assert "fields" not in payloads[0]["attachments"][0]


class TestDeliveryFailure:
    """전송 실패는 False 반환, 예외 없음"""

    @pytest.mark.asyncio
    async def test_non_200(self) -> None:
        notifier, _ = make_notifier(lambda r: httpx.Response(500, text="server error"))

        assert await notifier.send_report("보고", {}) is False
        await notifier.close()

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        def timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timeout", request=request)

        notifier, _ = make_notifier(timeout)

        assert await notifier.send("보고") is False
        await notifier.close()

    @pytest.mark.asyncio
    async def test_connect_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        notifier, _ = make_notifier(refuse)

        assert await notifier.send("보고") is False
        await notifier.close()


class TestLifecycle:
    """클라이언트 수명 테스트"""

    @pytest.mark.asyncio
    async def test_client_reused(self) -> None:
        notifier = SlackNotifier(webhook_url=WEBHOOK_URL)

        assert notifier.client is notifier.client

        await notifier.close()

    @pytest.mark.asyncio
    async def test_context_manager_closes(self) -> None:
        async with SlackNotifier(webhook_url=WEBHOOK_URL) as notifier:
            client = notifier.client

        assert client.is_closed
        assert notifier._client is None
