"""
core/alicloud/client.py - AcsClient 생성 헬퍼 및 ECS 요청 래퍼

Retry + 타임아웃이 설정된 aliyunsdkcore AcsClient를 생성하고,
CommonRequest 기반으로 ECS OpenAPI를 호출합니다.

주요 구성 요소:
- get_client: retry 설정이 적용된 AcsClient 생성
- ECSClient: Action 단위 요청, JSON 응답 파싱, 예외 변환
- create_ecs_client: 환경변수 자격 증명으로 ECSClient 생성

Example:
    from core.alicloud.client import get_client, ECSClient

    acs = get_client("eu-west-1", credentials=("AK", "SK", None))
    ecs = ECSClient(acs, region="eu-west-1")
    resp = ecs.request("DescribeSecurityGroupAttribute", {"SecurityGroupId": "sg-123"})
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

from aliyunsdkcore.acs_exception.exceptions import ClientException, ServerException
from aliyunsdkcore.auth.credentials import AccessKeyCredential, StsTokenCredential
from aliyunsdkcore.client import AcsClient
from aliyunsdkcore.request import CommonRequest

from core.config import get_credentials, get_env_int, settings
from core.exceptions import APICallError

logger = logging.getLogger(__name__)

# retry / 타임아웃 재정의 환경변수 (없으면 settings 값)
MAX_RETRY_ENV = "ALICLOUD_MAX_RETRY"
CONNECT_TIMEOUT_ENV = "ALICLOUD_CONNECT_TIMEOUT"
READ_TIMEOUT_ENV = "ALICLOUD_READ_TIMEOUT"

Credentials = tuple[str, str, Optional[str]]


def get_client(
    region_name: str,
    credentials: Credentials | None = None,
    max_retry: int | None = None,
    connect_timeout: int | None = None,
    read_timeout: int | None = None,
    **kwargs: Any,
) -> AcsClient:
    """Retry가 적용된 AcsClient 생성

    Args:
        region_name: 리전 ID (eu-west-1 등)
        credentials: (access_key, secret, security_token). None이면 환경변수 사용
        max_retry: 최대 재시도 횟수 (None이면 ALICLOUD_MAX_RETRY, 기본 3)
        connect_timeout: 연결 타임아웃 초 (None이면 ALICLOUD_CONNECT_TIMEOUT, 기본 10)
        read_timeout: 읽기 타임아웃 초 (None이면 ALICLOUD_READ_TIMEOUT, 기본 30)
        **kwargs: AcsClient()에 전달할 추가 인자

    Returns:
        AcsClient

    Raises:
        ConfigError: 자격 증명 환경변수 누락
    """
    access_key, secret_key, token = credentials or get_credentials()

    if max_retry is None:
        max_retry = get_env_int(MAX_RETRY_ENV, settings.API_MAX_RETRY)
    if connect_timeout is None:
        connect_timeout = get_env_int(CONNECT_TIMEOUT_ENV, settings.API_CONNECT_TIMEOUT)
    if read_timeout is None:
        read_timeout = get_env_int(READ_TIMEOUT_ENV, settings.API_READ_TIMEOUT)

    if token:
        credential = StsTokenCredential(access_key, secret_key, token)
    else:
        credential = AccessKeyCredential(access_key, secret_key)

    return AcsClient(
        region_id=region_name,
        credential=credential,
        auto_retry=max_retry > 0,
        max_retry_time=max_retry,
        connect_timeout=connect_timeout,
        timeout=read_timeout,
        **kwargs,
    )


class ECSClient:
    """ECS OpenAPI 호출 래퍼

    SDK 예외(ServerException, ClientException)를 APICallError로 변환하므로
    호출자는 error_code 하나로 실패 유형을 구분할 수 있습니다.
    """

    service = "ecs"

    def __init__(self, acs_client: AcsClient, region: str):
        self.acs_client = acs_client
        self.region = region

    def _build_request(self, action: str, params: Mapping[str, Any]) -> CommonRequest:
        request = CommonRequest(
            version=settings.ECS_API_VERSION,
            action_name=action,
            product=settings.ECS_PRODUCT,
        )
        request.set_accept_format("json")
        request.set_method("POST")
        request.set_protocol_type("https")
        for key, value in params.items():
            request.add_query_param(key, value)
        return request

    def request(self, action: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """ECS Action 호출 후 JSON 응답을 딕셔너리로 반환

        Args:
            action: API Action 이름 (DescribeSecurityGroupAttribute 등)
            params: 쿼리 파라미터 (RegionId 미지정 시 클라이언트 리전 사용)

        Returns:
            파싱된 응답 딕셔너리

        Raises:
            APICallError: API 에러, 네트워크/SDK 에러, 응답 파싱 실패
        """
        query = {"RegionId": self.region}
        query.update(params or {})

        logger.debug(f"{self.service}.{action} 호출: {query}")
        try:
            body = self.acs_client.do_action_with_exception(self._build_request(action, query))
        except (ServerException, ClientException) as e:
            raise APICallError.from_sdk_error(self.service, action, e) from e

        try:
            result = json.loads(body)
        except (TypeError, ValueError) as e:
            raise APICallError(
                service=self.service,
                operation=action,
                error_code="MalformedResponse",
                error_message="JSON 응답을 파싱할 수 없습니다",
                cause=e,
            ) from e

        if not isinstance(result, dict):
            raise APICallError(
                service=self.service,
                operation=action,
                error_code="MalformedResponse",
                error_message=f"예상하지 못한 응답 형식: {type(result).__name__}",
            )
        return result


def create_ecs_client(
    region: str,
    credentials: Credentials | None = None,
    **kwargs: Any,
) -> ECSClient:
    """리전용 ECSClient 생성

    Args:
        region: 리전 ID
        credentials: (access_key, secret, security_token). None이면 환경변수 사용
        **kwargs: get_client()에 전달할 추가 인자

    Returns:
        ECSClient
    """
    return ECSClient(get_client(region, credentials=credentials, **kwargs), region=region)
