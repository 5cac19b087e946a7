# tests/cli/test_console_helpers.py
"""
cli/ui/console 헬퍼 함수 단위 테스트

print_success, print_error, print_panel_header, print_table.
"""

import importlib

import pytest
from rich.console import Console

# cli.ui 패키지가 같은 이름의 console 객체를 재노출하므로 모듈은 import_module로 가져옴
console_module = importlib.import_module("cli.ui.console")


@pytest.fixture
def captured(monkeypatch):
    """전역 콘솔을 기록용 콘솔로 교체"""
    recorder = Console(record=True, width=120, color_system=None)
    monkeypatch.setattr(console_module, "console", recorder)
    return recorder


# =============================================================================
# 상태 메시지
# =============================================================================


class TestStatusMessages:
    """print_success / print_error / print_warning / print_info"""

    def test_success_symbol(self, captured):
        console_module.print_success("완료")
        assert "✓ 완료" in captured.export_text()

    def test_error_symbol(self, captured):
        console_module.print_error("실패")
        assert "✗ 실패" in captured.export_text()

    def test_warning_and_info(self, captured):
        console_module.print_warning("주의")
        console_module.print_info("참고")
        text = captured.export_text()
        assert "! 주의" in text
        assert "• 참고" in text

    def test_brackets_not_treated_as_markup(self, captured):
        """대괄호가 포함된 메시지도 그대로 출력"""
        console_module.print_error("설정 오류 [ALICLOUD_ACCESS_KEY]: 누락")
        assert "[ALICLOUD_ACCESS_KEY]" in captured.export_text()


# =============================================================================
# 패널 / 테이블
# =============================================================================


class TestPanelAndTable:
    """print_panel_header / print_table"""

    def test_panel_header(self, captured):
        console_module.print_panel_header("ECS Security Group: ID: sg-1 in eu-west-1", "설명")
        text = captured.export_text()
        assert "sg-1" in text
        assert "설명" in text

    def test_table_rows(self, captured):
        console_module.print_table("규칙", ["Direction", "PortRange"], [["ingress", "-1/-1"], ["egress", 443]])
        text = captured.export_text()
        assert "-1/-1" in text
        assert "443" in text

    def test_import_from_cli_ui(self):
        from cli.ui import console, print_error, print_success, print_table

        assert console is not None
        assert callable(print_error)
        assert callable(print_success)
        assert callable(print_table)
