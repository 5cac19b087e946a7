"""
resources/base.py - 리소스 공통 베이스

파라미터 검증과 ECS 클라이언트 연결을 담당합니다.
검증은 네트워크 호출 전에 수행됩니다.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from typing import Any

from core.alicloud import ECSClient, create_ecs_client
from core.exceptions import ValidationError


class AliCloudResourceBase:
    """AliCloud 리소스 베이스 클래스

    Attributes:
        opts: 생성자에 전달된 옵션 (region 미지정 시 ALICLOUD_REGION으로 보충)
        client: ECS API 클라이언트 (주입되지 않으면 필요할 때 생성)
    """

    def __init__(
        self,
        opts: Mapping[str, Any],
        client: ECSClient | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        self.opts: dict[str, Any] = dict(opts)
        if not self.opts.get("region"):
            # 리전 미지정 시 ALICLOUD_REGION만 사용 (하드코딩 기본값 없음)
            env = os.environ if environ is None else environ
            self.opts["region"] = env.get("ALICLOUD_REGION")
        self._client = client

    @property
    def region(self) -> str:
        return self.opts["region"]

    @property
    def client(self) -> ECSClient:
        """ECS 클라이언트 (지연 생성)"""
        if self._client is None:
            self._client = create_ecs_client(self.region)
        return self._client

    def validate_parameters(self, required: Iterable[str]) -> None:
        """필수 파라미터 검증

        Raises:
            ValidationError: 필수 파라미터가 없거나 빈 값
        """
        for name in required:
            value = self.opts.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(name, value, "비어있지 않은 문자열")
