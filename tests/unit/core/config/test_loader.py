"""
core/config/loader.py 테스트

settings.yaml 로드, 검증, 기본값 적용 테스트
"""

from decimal import Decimal
from pathlib import Path

import pytest

from core.config.loader import (
    Settings,
    SettingsLoadError,
    SlackConfig,
    default_settings,
    load_settings,
)
from core.constants import PROJECT_ROOT, Defaults, Paths


class TestSlackConfig:
    """SlackConfig 데이터클래스 테스트"""

    def test_enabled(self) -> None:
        """webhook_url이 있으면 활성"""
        config = SlackConfig(webhook_url="https://hooks.slack.com/test")

        assert config.enabled is True
        assert config.channel is None

    def test_disabled_without_url(self) -> None:
        """webhook_url이 비어 있으면 비활성"""
        assert SlackConfig(webhook_url="").enabled is False

    def test_frozen(self) -> None:
        """불변성 확인"""
        config = SlackConfig(webhook_url="url")

        with pytest.raises(AttributeError):
            config.webhook_url = "new_url"  # type: ignore


class TestDefaultSettings:
    """default_settings 테스트"""

    def test_defaults(self) -> None:
        """기본 경로와 허용 오차"""
        settings = default_settings()

        assert settings.db_path == Paths.DEFAULT_DB
        assert settings.tolerance == Defaults.BALANCE_TOLERANCE
        assert settings.slack.enabled is False

    def test_frozen(self) -> None:
        """불변성 확인"""
        settings = default_settings()

        with pytest.raises(AttributeError):
            settings.tolerance = Decimal("1")  # type: ignore


class TestLoadSettings:
    """load_settings 함수 테스트"""

    def test_load_valid_file(self, temp_settings_file: Path) -> None:
        """유효한 파일 로드"""
        settings = load_settings(temp_settings_file)

        assert isinstance(settings, Settings)
        assert settings.tolerance == Decimal("0.05")
        assert settings.slack.webhook_url.startswith("https://hooks.slack.com/")
        assert settings.slack.channel == "#ledger"

    def test_relative_db_path_resolved_from_project_root(
        self, temp_settings_file: Path
    ) -> None:
        """상대 경로는 프로젝트 루트 기준"""
        settings = load_settings(temp_settings_file)

        assert settings.db_path == PROJECT_ROOT / "ledger_test.db"
        assert settings.db_path.is_absolute()

    def test_absolute_db_path_kept(self, temp_dir: Path) -> None:
        """절대 경로는 그대로 사용"""
        db_path = temp_dir / "abs.db"
        path = temp_dir / "settings.yaml"
        path.write_text(f'store:\n  db_path: "{db_path.as_posix()}"\n', encoding="utf-8")

        settings = load_settings(path)

        assert settings.db_path == db_path

    def test_missing_file_returns_defaults(self, temp_dir: Path) -> None:
        """파일이 없으면 기본값"""
        settings = load_settings(temp_dir / "nonexistent.yaml")

        assert settings == default_settings()

    def test_empty_file_returns_defaults(self, temp_dir: Path) -> None:
        """빈 파일이면 기본값"""
        path = temp_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_settings(path) == default_settings()

    def test_missing_sections_use_defaults(self, temp_dir: Path) -> None:
        """섹션이 없으면 해당 항목만 기본값"""
        path = temp_dir / "partial.yaml"
        path.write_text("reconcile:\n  tolerance: 0.5\n", encoding="utf-8")

        settings = load_settings(path)

        assert settings.tolerance == Decimal("0.5")
        assert settings.db_path == Paths.DEFAULT_DB
        assert settings.slack.enabled is False

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """YAML 문법 오류"""
        path = temp_dir / "invalid.yaml"
        path.write_text("store: [unclosed\n", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="settings.yaml 파싱 실패"):
            load_settings(path)

    def test_top_level_not_mapping(self, temp_dir: Path) -> None:
        """최상위가 매핑이 아닌 경우"""
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="최상위"):
            load_settings(path)

    def test_section_not_mapping(self, temp_dir: Path) -> None:
        """섹션 형식 오류"""
        path = temp_dir / "bad_section.yaml"
        path.write_text("slack: 123\n", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="'slack'"):
            load_settings(path)

    def test_invalid_tolerance(self, temp_dir: Path) -> None:
        """숫자가 아닌 허용 오차"""
        path = temp_dir / "bad_tolerance.yaml"
        path.write_text('reconcile:\n  tolerance: "abc"\n', encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="유효하지 않은 tolerance입니다"):
            load_settings(path)

    def test_negative_tolerance(self, temp_dir: Path) -> None:
        """음수 허용 오차"""
        path = temp_dir / "negative.yaml"
        path.write_text("reconcile:\n  tolerance: -1\n", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="0 이상"):
            load_settings(path)
