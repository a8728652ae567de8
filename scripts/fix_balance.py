"""
계정 잔액 보정 스크립트

채무 이전 affectsBalance 플래그를 보정한 뒤 계정 잔액을 거래 로그에서 다시 계산.

사용법:
    python -m scripts.fix_balance --account-id acc_123
    python -m scripts.fix_balance --name sezon --name tekstil
    python -m scripts.fix_balance --all
    python -m scripts.fix_balance --list --name sezon
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.db.document_store import SQLiteDocumentStore
from adapters.interfaces import IDocumentStore, INotifier, StoreError
from adapters.slack.notifier import SlackNotifier
from core.config.loader import Settings, SettingsLoadError, load_settings
from core.constants import Collections
from core.ledger.parsing import parse_accounts
from core.ledger.selection import AccountResolutionError, find_accounts, pick_single
from core.ledger.service import BalanceFixService
from core.ledger.types import Account
from core.logging import setup_logging

logger = logging.getLogger("fix_balance")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fix_balance",
        description="채무 이전 플래그 보정 및 계정 잔액 재계산",
    )

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--account-id", help="대상 계정 ID")
    target.add_argument(
        "--name",
        action="append",
        help="계정 이름 검색어 (여러 번 지정하면 모두 포함해야 일치)",
    )
    target.add_argument("--all", action="store_true", help="활성 계정 전체 보정")

    parser.add_argument("--list", action="store_true", help="--name 검색 결과만 출력 (쓰기 없음)")
    parser.add_argument("--include-inactive", action="store_true", help="삭제/보관 계정도 검색")
    parser.add_argument("--db", type=Path, help="DB 파일 경로 (설정 파일보다 우선)")
    parser.add_argument("--config", type=Path, help="settings.yaml 경로")
    parser.add_argument("--no-notify", action="store_true", help="Slack 알림 비활성화")
    parser.add_argument("--log-dir", type=Path, help="로그 디렉토리")
    parser.add_argument("-v", "--verbose", action="store_true", help="콘솔에 DEBUG 로그 출력")

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """인자 해석 (--list는 --name과 함께만 허용)"""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.list and not args.name:
        parser.error("--list는 --name과 함께 사용해야 합니다")
    return args


def create_notifier(settings: Settings, disabled: bool = False) -> SlackNotifier | None:
    """Slack Notifier 생성 (설정이 있는 경우에만)"""
    if disabled or not settings.slack.enabled:
        logger.info("Slack 알림 비활성화")
        return None

    return SlackNotifier(
        webhook_url=settings.slack.webhook_url,
        channel=settings.slack.channel,
    )


async def _resolve_by_name(
    store: IDocumentStore,
    terms: list[str],
    include_inactive: bool,
) -> list[Account]:
    documents = await store.get_all(Collections.ACCOUNTS)
    return find_accounts(parse_accounts(documents), terms, include_inactive=include_inactive)


async def execute(
    args: argparse.Namespace,
    store: IDocumentStore,
    settings: Settings,
    notifier: INotifier | None = None,
) -> int:
    """보정 실행

    Returns:
        종료 코드 (0: 성공, 1: 실패)
    """
    if args.list and not args.name:
        logger.error("--list는 --name과 함께 사용해야 합니다")
        return 1

    service = BalanceFixService(store, tolerance=settings.tolerance)

    try:
        if args.all:
            all_report = await service.fix_all_accounts()
            print(all_report.summary())
            if notifier:
                await notifier.send_report("전체 계정 잔액 보정 완료", all_report.to_dict())
            return 0

        if args.name:
            matches = await _resolve_by_name(store, args.name, args.include_inactive)
            if args.list:
                for account in matches:
                    print(f"{account.id}\t{account.name}\t{account.status.value}\t{account.balance}")
                return 0
            account_id = pick_single(matches, args.name).id
        else:
            account_id = args.account_id

        report = await service.fix_account(account_id)
        print(report.summary())
        if notifier:
            await notifier.send_report("계정 잔액 보정 완료", report.to_dict())
        return 0

    except (AccountResolutionError, StoreError) as e:
        logger.error(f"잔액 보정 실패: {e}")
        if notifier:
            await notifier.send(f"잔액 보정 실패: {e}", level="ERROR")
        return 1


async def run(args: argparse.Namespace) -> int:
    """설정 로드 → DB 연결 → 보정 실행"""
    try:
        settings = load_settings(args.config)
    except SettingsLoadError as e:
        logger.error(f"설정 로드 실패: {e}")
        return 1

    db_path = args.db or settings.db_path
    logger.info(f"DB: {db_path}")

    notifier = create_notifier(settings, disabled=args.no_notify)

    try:
        async with SQLiteDocumentStore(db_path) as store:
            await store.init_schema()
            return await execute(args, store, settings, notifier)
    except StoreError as e:
        logger.error(f"문서 저장소 연결 실패: {e}")
        return 1
    finally:
        if notifier:
            await notifier.close()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging("fix_balance", log_dir=args.log_dir, verbose=args.verbose)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
