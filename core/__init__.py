# core/__init__.py
"""
core - AliCloud 점검 도구 공통 인프라

설정, 예외 계층, AliCloud API 클라이언트를 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── alicloud/       # AcsClient 생성, ECS 요청 래퍼
    ├── config.py       # 불변 설정 + 환경변수 헬퍼
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 설정 사용
    from core.config import settings, get_default_region
    region = get_default_region()  # "eu-west-1"

    # 예외 처리
    from core.exceptions import APICallError, is_not_found
    try:
        resp = ecs.request("DescribeSecurityGroupAttribute", params)
    except APICallError as e:
        if is_not_found(e):
            print("리소스가 없습니다")
"""

from core import alicloud, config, exceptions

__all__: list[str] = [
    # 서브패키지
    "alicloud",
    # 모듈
    "config",
    "exceptions",
]
