"""
어댑터 테스트 픽스처

공통 테스트 설정 및 픽스처 제공.
"""

import pytest

from adapters.mock.document_store import InMemoryDocumentStore, MockStoreState
from adapters.mock.notifier import MockNotifier


@pytest.fixture
def mock_notifier() -> MockNotifier:
    """Mock Notifier"""
    return MockNotifier()


@pytest.fixture
def failing_store() -> InMemoryDocumentStore:
    """읽기가 실패하는 Mock 저장소"""
    return InMemoryDocumentStore(MockStoreState(should_fail_reads=True, error_message="down"))
