"""
로깅 설정

운영 스크립트 공통. 루트 로거에 콘솔(stdout)과 일 단위 회전 파일 핸들러를 붙임.

    from core.logging import setup_logging
    setup_logging("fix_balance", verbose=args.verbose)
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_RETENTION_DAYS = 7

# 쿼리/요청마다 로그를 남기는 라이브러리
NOISY_LOGGERS = ("aiosqlite", "httpcore", "httpx", "asyncio")


def get_log_file_path(process_name: str, log_dir: Path | None = None) -> Path:
    return (log_dir or Paths.LOGS_DIR) / f"{process_name}.log"


def _file_handler(log_file: Path) -> TimedRotatingFileHandler:
    handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        backupCount=LOG_RETENTION_DAYS,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"  # fix_balance.log.2024-03-01
    return handler


def setup_logging(
    process_name: str,
    log_dir: Path | None = None,
    verbose: bool = False,
) -> logging.Logger:
    """루트 로거 초기화

    기존 핸들러는 교체됨 (여러 번 호출해도 중복 출력 없음).
    파일에는 항상 DEBUG까지 기록하고, 콘솔은 verbose일 때만 DEBUG.

    Args:
        process_name: 로그 파일 이름
        log_dir: 로그 디렉토리 (None이면 Paths.LOGS_DIR)
        verbose: 콘솔 DEBUG 출력 여부

    Returns:
        루트 Logger
    """
    log_file = get_log_file_path(process_name, log_dir)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.DEBUG if verbose else logging.INFO)

    file_handler = _file_handler(log_file)
    file_handler.setLevel(logging.DEBUG)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(logging.DEBUG)
    for handler in (console, file_handler):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root.debug(f"로깅 초기화: {process_name} -> {log_file} (console={logging.getLevelName(console.level)})")
    return root
