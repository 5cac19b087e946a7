"""
resources/security_group.py - ECS Security Group 점검 리소스

DescribeSecurityGroupAttribute 응답을 SecurityGroup / SGRule로 파싱하고,
인바운드 규칙 기준으로 특정 CIDR(및 포트) 트래픽 허용 여부를 판정합니다.

Example:
    sg = AliCloudSecurityGroup("sg-12345678", region="eu-west-1")

    assert sg.exists
    assert not sg.allows(ipv4_range="0.0.0.0/0", port=443)
"""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from core.alicloud import ECSClient
from core.config import settings
from core.exceptions import APICallError, is_not_found

from .base import AliCloudResourceBase

logger = logging.getLogger(__name__)

DESCRIBE_ACTION = "DescribeSecurityGroupAttribute"

# 그룹이 존재하지 않을 때 group_id 자리에 들어가는 값
EMPTY_GROUP_ID = "empty response"

# AliCloud에서 "전체 포트"를 의미하는 PortRange
ALL_PORTS = "-1/-1"

INGRESS = "ingress"
EGRESS = "egress"


class RulePolicy(str, Enum):
    """규칙 정책"""

    ACCEPT = "Accept"
    DROP = "Drop"

    @classmethod
    def parse(cls, value: str | None) -> RulePolicy | None:
        """대소문자 무시 파싱 (알 수 없는 값은 None)"""
        if not value:
            return None
        for policy in cls:
            if policy.value.lower() == value.lower():
                return policy
        return None


@dataclass
class SGRule:
    """Security Group 개별 규칙.

    DescribeSecurityGroupAttribute 응답의 Permission 한 건을 나타낸다.

    Attributes:
        direction: 규칙 방향 (``ingress`` 또는 ``egress``).
        policy: 규칙 정책. 알 수 없는 값이면 ``None``.
        source_cidr_ip: 소스 IPv4 CIDR (SG 참조 규칙이면 빈 문자열).
        port_range: 원본 포트 범위 문자열 (``80/443``, ``-1/-1`` 등).
        ip_protocol: 프로토콜 (``TCP``, ``UDP``, ``ALL`` 등).
        priority: 규칙 우선순위 (판정에는 사용하지 않음).
        source_group_id: 참조된 소스 Security Group ID.
        dest_cidr_ip: 대상 CIDR (egress 규칙).
        description: 규칙 설명.
        raw: 원본 Permission 딕셔너리.
    """

    direction: str
    policy: RulePolicy | None
    source_cidr_ip: str = ""
    port_range: str = ""
    ip_protocol: str = ""
    priority: str = ""
    source_group_id: str = ""
    dest_cidr_ip: str = ""
    description: str = ""
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_permission(cls, permission: Mapping[str, Any]) -> SGRule:
        return cls(
            direction=permission.get("Direction", ""),
            policy=RulePolicy.parse(permission.get("Policy")),
            source_cidr_ip=permission.get("SourceCidrIp") or "",
            port_range=permission.get("PortRange") or "",
            ip_protocol=permission.get("IpProtocol", ""),
            priority=str(permission.get("Priority", "")),
            source_group_id=permission.get("SourceGroupId") or "",
            dest_cidr_ip=permission.get("DestCidrIp") or "",
            description=permission.get("Description", ""),
            raw=dict(permission),
        )

    @property
    def is_accept(self) -> bool:
        return self.policy is RulePolicy.ACCEPT

    @property
    def is_all_ports(self) -> bool:
        return self.port_range.strip() == ALL_PORTS

    def port_bounds(self) -> tuple[int, int] | None:
        """``<start>/<end>`` 포트 범위 파싱

        Returns:
            (start, end). 값이 없거나 형식이 잘못되면 None.
        """
        parts = self.port_range.strip().split("/")
        if len(parts) != 2:
            return None
        try:
            start, end = int(parts[0]), int(parts[1])
        except ValueError:
            return None
        if start > end:
            return None
        return start, end

    def matches_port(self, port: int) -> bool:
        """포트가 규칙 범위에 포함되는지 (양 끝 포함)"""
        if self.is_all_ports:
            return True
        bounds = self.port_bounds()
        if bounds is None:
            logger.warning(f"포트 범위 파싱 실패 (불일치로 처리): {self.port_range!r}")
            return False
        return bounds[0] <= port <= bounds[1]

    def source_network(self) -> ipaddress.IPv4Network | None:
        """소스 CIDR을 IPv4Network로 변환 (없거나 IPv4가 아니면 None)"""
        if not self.source_cidr_ip:
            return None
        try:
            network = ipaddress.ip_network(self.source_cidr_ip, strict=False)
        except ValueError:
            logger.warning(f"소스 CIDR 파싱 실패 (불일치로 처리): {self.source_cidr_ip!r}")
            return None
        if not isinstance(network, ipaddress.IPv4Network):
            return None
        return network


@dataclass
class SecurityGroup:
    """Security Group 상세 정보.

    인바운드/아웃바운드 규칙은 하나의 Permission 목록을 Direction으로
    나눈 결과이며, API가 반환한 순서를 유지한다.
    """

    group_id: str
    group_name: str
    description: str
    vpc_id: str
    region: str
    inbound_rules: list[SGRule] = field(default_factory=list)
    outbound_rules: list[SGRule] = field(default_factory=list)

    @property
    def inbound_rules_count(self) -> int:
        return len(self.inbound_rules)

    @property
    def outbound_rules_count(self) -> int:
        return len(self.outbound_rules)


def parse_security_group(response: Mapping[str, Any], region: str) -> SecurityGroup:
    """DescribeSecurityGroupAttribute 응답을 SecurityGroup으로 파싱

    ``Permissions.Permission``이 없으면 규칙이 없는 것으로 간주한다.
    """
    permissions = (response.get("Permissions") or {}).get("Permission") or []
    rules = [SGRule.from_permission(p) for p in permissions]

    return SecurityGroup(
        group_id=response.get("SecurityGroupId", ""),
        group_name=response.get("SecurityGroupName", ""),
        description=response.get("Description", ""),
        vpc_id=response.get("VpcId", ""),
        region=response.get("RegionId") or region,
        inbound_rules=[r for r in rules if r.direction == INGRESS],
        outbound_rules=[r for r in rules if r.direction == EGRESS],
    )


def fetch_security_group(
    client: ECSClient,
    region: str,
    group_id: str,
    not_found_code: str = settings.SG_NOT_FOUND_CODE,
) -> SecurityGroup | None:
    """Security Group 조회

    Args:
        client: ECS 클라이언트
        region: 리전 ID
        group_id: Security Group ID
        not_found_code: "존재하지 않음"으로 처리할 에러 코드

    Returns:
        SecurityGroup. 그룹이 없으면 None.

    Raises:
        APICallError: not_found_code 이외의 모든 API 실패
    """
    try:
        response = client.request(
            DESCRIBE_ACTION,
            {"RegionId": region, "SecurityGroupId": group_id},
        )
    except APICallError as e:
        if is_not_found(e, codes={not_found_code}):
            logger.info(f"Security Group 없음 [{region}/{group_id}]: {e.error_code}")
            return None
        raise

    return parse_security_group(response, region)


class AliCloudSecurityGroup(AliCloudResourceBase):
    """ECS Security Group 점검 리소스

    생성 시 한 번 조회하며, 그룹이 없으면 규칙 목록은 비어 있고
    group_id는 EMPTY_GROUP_ID가 된다. 존재 여부는 ``exists``로 확인한다.

    Example:
        sg = AliCloudSecurityGroup("sg-12345678", region="eu-west-1")
        sg = AliCloudSecurityGroup(id="sg-12345678")  # id는 group_id 별칭
    """

    def __init__(
        self,
        group_id: str | None = None,
        region: str | None = None,
        *,
        client: ECSClient | None = None,
        environ: Mapping[str, str] | None = None,
        **opts: Any,
    ):
        if "id" in opts:
            alias = opts.pop("id")
            group_id = group_id or alias
        opts.update({"group_id": group_id, "region": region})
        super().__init__(opts, client=client, environ=environ)
        self.validate_parameters(required=("group_id", "region"))

        self._security_group = fetch_security_group(self.client, self.region, self.opts["group_id"])

    # -------------------------------------------------------------------------
    # 읽기 전용 속성
    # -------------------------------------------------------------------------

    @property
    def security_group(self) -> SecurityGroup | None:
        return self._security_group

    @property
    def group_id(self) -> str:
        if self._security_group is None:
            return EMPTY_GROUP_ID
        return self._security_group.group_id

    @property
    def group_name(self) -> str | None:
        return self._security_group.group_name if self._security_group else None

    @property
    def description(self) -> str | None:
        return self._security_group.description if self._security_group else None

    @property
    def vpc_id(self) -> str | None:
        return self._security_group.vpc_id if self._security_group else None

    @property
    def inbound_rules(self) -> list[SGRule]:
        return list(self._security_group.inbound_rules) if self._security_group else []

    @property
    def outbound_rules(self) -> list[SGRule]:
        return list(self._security_group.outbound_rules) if self._security_group else []

    @property
    def inbound_rules_count(self) -> int:
        return len(self.inbound_rules)

    @property
    def outbound_rules_count(self) -> int:
        return len(self.outbound_rules)

    # -------------------------------------------------------------------------
    # 판정
    # -------------------------------------------------------------------------

    @property
    def exists(self) -> bool:
        return self._security_group is not None

    def allows(self, ipv4_range: str | None = None, port: int | None = None) -> bool:
        """인바운드 규칙이 ipv4_range(및 port) 트래픽을 허용하는지 판정

        API가 반환한 순서대로 Accept 규칙만 검사하며, 처음 일치하는 규칙에서
        True를 반환한다. Drop 규칙은 판정에 영향을 주지 않으므로 앞선 Drop
        규칙이 뒤의 Accept 규칙을 막지 않는다. 규칙 순서는 API 응답을 그대로
        따르므로 순서가 호출마다 달라지면 결과도 달라질 수 있다.

        Args:
            ipv4_range: 조회할 IPv4 CIDR. 규칙의 소스 CIDR에 완전히 포함되어야 한다.
            port: 조회할 포트 (선택). 없으면 CIDR 일치만으로 허용.

        Returns:
            허용되면 True

        Raises:
            ValueError: ipv4_range가 올바른 IP 대역이 아닌 경우
        """
        rules = self.inbound_rules
        if not rules or not ipv4_range:
            return False

        query = ipaddress.ip_network(ipv4_range, strict=False)

        for rule in rules:
            if not rule.is_accept:
                continue

            network = rule.source_network()
            if network is None or query.version != network.version:
                continue
            if not query.subnet_of(network):
                continue

            # 포트를 지정하지 않으면 CIDR 일치만으로 충분
            if port is None:
                return True
            if rule.matches_port(port):
                return True

        return False

    allow_in = allows

    def __str__(self) -> str:
        if self._security_group is not None:
            sg = f" ID: {self.group_id}"
            if self.group_name:
                sg += f" Name: {self.group_name}"
            if self.vpc_id:
                sg += f" VPC ID: {self.vpc_id}"
        else:
            sg = f" {self.opts['group_id']}"
        return f"ECS Security Group:{sg} in {self.region}"
