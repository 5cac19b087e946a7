"""
provisioning/config.py - Terraform / 테스트 공용 설정 생성

- Terraform은 JSON 변수 파일을 읽는다.
- 테스트 스위트는 YAML 속성 파일을 읽는다.
모든 임시 파라미터를 한 곳에서 관리하며, 키를 대문자로 바꾼 이름의
환경변수가 있으면 그 값이 우선한다.

Usage:
    config = FixtureConfig.create("test/integration/build")
    config.store_json()   # alicloud-inspec.tfvars.json
    config.store_yaml()   # alicloud-inspec-attributes.yaml

    # terraform apply 이후
    config.update_yaml()  # outputs.tf의 output 값 병합
"""

from __future__ import annotations

import json
import logging
import os
import random
import string
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from core.config import settings

from .attributes import dump_attributes, load_attributes
from .terraform import TerraformRunner, read_output_names

logger = logging.getLogger(__name__)

# 리전 기본값을 읽는 환경변수 (소문자 이름)
REGION_ENV = "alicloud_region"


def random_suffix(length: int = 25, rng: random.Random | None = None) -> str:
    """소문자 알파벳으로 구성된 임의 문자열"""
    generator = rng or random
    return "".join(generator.choice(string.ascii_lowercase) for _ in range(length))


def default_values(
    environ: Mapping[str, str] | None = None,
    rng: random.Random | None = None,
) -> dict[str, Any]:
    """기본 파라미터 생성 (리소스 이름에 임의 접미사 부여)"""
    env = os.environ if environ is None else environ

    def name(prefix: str) -> str:
        return f"{prefix}-{random_suffix(rng=rng)}"

    return {
        # 공통 리소스 파라미터
        "alicloud_region": env.get(REGION_ENV) or settings.DEFAULT_REGION,
        "alicloud_vpc_name": name("vpc"),
        "alicloud_vpc_cidr": "10.0.1.0/24",
        "alicloud_security_group_name": name("sg"),
        "alicloud_security_group_description": "Test security group for inspec",
        "alicloud_action_trail_ram_role_name": name("atrr"),
        "alicloud_action_trail_ram_role_description": "ActionTrail ram role",
        "alicloud_action_trail_ram_policy_name": name("atrp"),
        "alicloud_action_trail_ram_policy_description": "ActionTrail ram policy",
        "alicloud_action_trail_name": name("at"),
        "alicloud_action_trail_bucket_name": name("atb"),
        # 0이면 리소스 생성을 건너뜀 (새 리소스를 단독으로 시험할 때)
        "alicloud_enable_create": 1,
    }


@dataclass
class FixtureConfig:
    """프로비저닝 파라미터 묶음

    프로세스 시작 시 한 번 만들고 필요한 곳에 전달한다.

    Attributes:
        build_dir: 산출물 디렉토리 (tfvars, 속성 파일, outputs.tf)
        values: 파라미터 딕셔너리
        environ: 덮어쓰기에 사용할 환경변수
    """

    build_dir: Path
    values: dict[str, Any]
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ, repr=False)

    @classmethod
    def create(
        cls,
        build_dir: str | Path = settings.BUILD_DIR,
        environ: Mapping[str, str] | None = None,
        rng: random.Random | None = None,
    ) -> FixtureConfig:
        env = os.environ if environ is None else environ
        return cls(build_dir=Path(build_dir), values=default_values(env, rng), environ=env)

    def update_from_environment(self) -> dict[str, Any]:
        """대문자 키 이름의 환경변수 값으로 덮어쓰기"""
        for key in list(self.values):
            override = self.environ.get(key.upper())
            if override is not None:
                logger.debug(f"환경변수로 덮어씀: {key.upper()}")
                self.values[key] = override
        return self.values

    def store_json(self, file_name: str = settings.TFVARS_FILE) -> Path:
        """Terraform 변수 파일 저장"""
        self.update_from_environment()
        path = self.build_dir / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.values), encoding="utf-8")
        logger.info(f"tfvars 저장: {path}")
        return path

    def store_yaml(self, file_name: str = settings.ATTRIBUTES_FILE) -> Path:
        """테스트 속성 파일 저장"""
        self.update_from_environment()
        path = dump_attributes(self.build_dir / file_name, self.values)
        logger.info(f"속성 파일 저장: {path}")
        return path

    def get_tf_output_vars(self, file_name: str = settings.OUTPUTS_FILE) -> list[str]:
        """outputs.tf에 선언된 output 이름 목록"""
        return read_output_names(self.build_dir / file_name)

    def update_yaml(
        self,
        file_name: str = settings.ATTRIBUTES_FILE,
        runner: TerraformRunner | None = None,
    ) -> dict[str, Any]:
        """Terraform output 값을 속성 파일에 병합

        Args:
            file_name: 속성 파일 이름
            runner: terraform 실행기 (None이면 build_dir 기준으로 생성)

        Returns:
            병합된 속성 딕셔너리

        Raises:
            ConfigError: 속성 파일이 없는 경우
            TerraformError: terraform output 실패
        """
        path = self.build_dir / file_name
        contents = load_attributes(path)
        runner = runner or TerraformRunner(self.build_dir)

        outputs = self.get_tf_output_vars()
        for name in outputs:
            contents[name] = runner.output(name)

        dump_attributes(path, contents)
        logger.info(f"terraform output {len(outputs)}개 병합: {path}")
        return contents
