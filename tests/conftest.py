"""
tests/conftest.py - pytest 공통 픽스처

AliCloud API 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(mock_ecs_client, sg_response):
        mock_ecs_client.request.return_value = sg_response([...])
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """테스트 환경 설정 (실제 자격 증명 사용 방지)"""
    monkeypatch.setenv("ALICLOUD_REGION", "eu-west-1")
    monkeypatch.setenv("ALICLOUD_ACCESS_KEY", "testing")
    monkeypatch.setenv("ALICLOUD_SECRET_KEY", "testing")
    monkeypatch.delenv("ALICLOUD_SECURITY_TOKEN", raising=False)
    for key in ("ALICLOUD_MAX_RETRY", "ALICLOUD_CONNECT_TIMEOUT", "ALICLOUD_READ_TIMEOUT", "ACC_DEBUG"):
        monkeypatch.delenv(key, raising=False)
    yield


# =============================================================================
# AliCloud 모킹 픽스처
# =============================================================================


def make_permission(
    direction: str = "ingress",
    policy: str = "Accept",
    source_cidr_ip: str = "0.0.0.0/0",
    port_range: Optional[str] = "-1/-1",
    ip_protocol: str = "TCP",
    **extra: Any,
) -> Dict[str, Any]:
    """DescribeSecurityGroupAttribute Permission 항목 생성"""
    permission: Dict[str, Any] = {
        "Direction": direction,
        "Policy": policy,
        "SourceCidrIp": source_cidr_ip,
        "IpProtocol": ip_protocol,
        "Priority": 1,
        "Description": "",
    }
    if port_range is not None:
        permission["PortRange"] = port_range
    permission.update(extra)
    return permission


@pytest.fixture
def permission():
    """Permission 항목 팩토리"""
    return make_permission


@pytest.fixture
def sg_response():
    """DescribeSecurityGroupAttribute 응답 팩토리"""

    def _make(
        permissions: Optional[List[Dict[str, Any]]] = None,
        group_id: str = "sg-12345678",
        name: str = "sg-test",
        vpc_id: str = "vpc-12345678",
        description: str = "Test security group for inspec",
    ) -> Dict[str, Any]:
        return {
            "RequestId": "473469C7-AA6F-4DC5-B3DB-A3DC0DE3C83E",
            "RegionId": "eu-west-1",
            "SecurityGroupId": group_id,
            "SecurityGroupName": name,
            "VpcId": vpc_id,
            "Description": description,
            "InnerAccessPolicy": "Accept",
            "Permissions": {"Permission": permissions or []},
        }

    return _make


@pytest.fixture
def mock_ecs_client():
    """ECSClient 모킹"""
    mock_client = MagicMock()
    mock_client.region = "eu-west-1"
    yield mock_client


@pytest.fixture
def server_error():
    """aliyunsdkcore ServerException 팩토리"""
    from aliyunsdkcore.acs_exception.exceptions import ServerException

    def _make(error_code: str, error_message: str = "Test error", http_status: int = 404) -> Exception:
        return ServerException(error_code, error_message, http_status, "request-id-123")

    return _make


@pytest.fixture
def api_error():
    """APICallError 팩토리"""
    from core.exceptions import APICallError

    def _make(error_code: str, error_message: str = "Test error") -> Exception:
        return APICallError(
            service="ecs",
            operation="DescribeSecurityGroupAttribute",
            error_code=error_code,
            error_message=error_message,
        )

    return _make


# =============================================================================
# 유틸리티
# =============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    """ALICLOUD_* 환경변수 제거"""
    for key in list(os.environ):
        if key.upper().startswith("ALICLOUD_"):
            monkeypatch.delenv(key, raising=False)
    yield
