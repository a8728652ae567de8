"""
pytest 공통 fixture 정의

문서 저장소/설정 파일 테스트용 fixture
"""

import tempfile
from pathlib import Path

import pytest

from adapters.mock.document_store import InMemoryDocumentStore
from tests.helpers import make_sezon_store


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_content = """# 테스트용 settings.yaml
store:
  db_path: "ledger_test.db"

reconcile:
  tolerance: "0.05"

slack:
  webhook_url: "https://hooks.slack.com/services/T000/B000/XXXX"
  channel: "#ledger"
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """빈 메모리 문서 저장소"""
    return InMemoryDocumentStore()


@pytest.fixture
def sezon_store() -> InMemoryDocumentStore:
    """채무 이전 플래그가 누락된 기본 시나리오 저장소"""
    return make_sezon_store()
