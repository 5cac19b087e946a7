"""
core/alicloud - AliCloud OpenAPI 클라이언트

주요 구성 요소:
- get_client: retry/타임아웃이 설정된 AcsClient 생성
- ECSClient: ECS OpenAPI 호출 래퍼 (SDK 예외 → APICallError 변환)

Example:
    from core.alicloud import create_ecs_client

    ecs = create_ecs_client("eu-west-1")
    resp = ecs.request("DescribeSecurityGroupAttribute", {"SecurityGroupId": "sg-123"})
"""

from .client import ECSClient, create_ecs_client, get_client

__all__: list[str] = [
    "ECSClient",
    "create_ecs_client",
    "get_client",
]
