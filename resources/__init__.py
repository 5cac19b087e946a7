"""
resources - AliCloud 리소스 점검용 테스트 리소스

각 리소스는 생성 시 한 번 API를 조회하고, 이후에는 읽기 전용
속성과 판정 메서드(exists, allows 등)만 제공합니다.

Usage:
    from resources import AliCloudSecurityGroup

    sg = AliCloudSecurityGroup("sg-12345678", region="eu-west-1")
    assert sg.exists
    assert not sg.allows(ipv4_range="0.0.0.0/0", port=22)
"""

from .base import AliCloudResourceBase
from .security_group import (
    EMPTY_GROUP_ID,
    AliCloudSecurityGroup,
    RulePolicy,
    SecurityGroup,
    SGRule,
    fetch_security_group,
    parse_security_group,
)

__all__: list[str] = [
    "AliCloudResourceBase",
    "AliCloudSecurityGroup",
    "EMPTY_GROUP_ID",
    "RulePolicy",
    "SecurityGroup",
    "SGRule",
    "fetch_security_group",
    "parse_security_group",
]
