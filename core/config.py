"""
core/config.py - 중앙 설정 관리

불변 Settings 데이터클래스와 환경변수 헬퍼를 제공합니다.
런타임에 변경되는 전역 상태는 두지 않습니다.

Usage:
    from core.config import settings, get_default_region, get_credentials

    region = get_default_region()           # ALICLOUD_REGION 또는 "eu-west-1"
    access_key, secret, token = get_credentials()
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from core.exceptions import ConfigError


@dataclass(frozen=True)
class Settings:
    """애플리케이션 설정 (불변)"""

    # 리전
    DEFAULT_REGION: str = "eu-west-1"

    # ECS OpenAPI
    ECS_API_VERSION: str = "2014-05-26"
    ECS_PRODUCT: str = "Ecs"
    SG_NOT_FOUND_CODE: str = "InvalidSecurityGroupId.NotFound"

    # API 클라이언트
    API_CONNECT_TIMEOUT: int = 10  # 초
    API_READ_TIMEOUT: int = 30  # 초
    API_MAX_RETRY: int = 3

    # 프로비저닝
    TERRAFORM_BIN: str = "terraform"
    BUILD_DIR: str = "test/integration/build"
    TFVARS_FILE: str = "alicloud-inspec.tfvars.json"
    ATTRIBUTES_FILE: str = "alicloud-inspec-attributes.yaml"
    OUTPUTS_FILE: str = "outputs.tf"


settings = Settings()


# =============================================================================
# 프로젝트 경로
# =============================================================================


def get_project_root() -> Path:
    """프로젝트 루트 경로 반환"""
    return Path(__file__).resolve().parent.parent


def get_version() -> str:
    """version.txt에서 버전 문자열 반환"""
    version_file = get_project_root() / "version.txt"
    try:
        return version_file.read_text(encoding="utf-8").strip()
    except OSError:
        return "0.0.0"


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_env_bool(name: str, default: bool = False, environ: Optional[Mapping[str, str]] = None) -> bool:
    """환경변수를 bool로 읽기 ("1", "true", "yes", "on" → True)"""
    env = os.environ if environ is None else environ
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_env_int(name: str, default: int, environ: Optional[Mapping[str, str]] = None) -> int:
    """환경변수를 int로 읽기 (변환 실패 시 기본값)"""
    env = os.environ if environ is None else environ
    value = env.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_default_region(environ: Optional[Mapping[str, str]] = None) -> str:
    """기본 리전 반환

    우선순위: ALICLOUD_REGION > ALICLOUD_DEFAULT_REGION > settings.DEFAULT_REGION
    """
    env = os.environ if environ is None else environ
    return env.get("ALICLOUD_REGION") or env.get("ALICLOUD_DEFAULT_REGION") or settings.DEFAULT_REGION


def get_credentials(environ: Optional[Mapping[str, str]] = None) -> Tuple[str, str, Optional[str]]:
    """AccessKey 자격 증명 반환

    terraform alicloud provider와 같은 환경변수 이름을 사용합니다.

    Returns:
        (access_key_id, access_key_secret, security_token)

    Raises:
        ConfigError: ALICLOUD_ACCESS_KEY 또는 ALICLOUD_SECRET_KEY 누락
    """
    env = os.environ if environ is None else environ
    access_key = env.get("ALICLOUD_ACCESS_KEY")
    secret_key = env.get("ALICLOUD_SECRET_KEY")

    if not access_key:
        raise ConfigError("ALICLOUD_ACCESS_KEY", "환경변수가 설정되지 않았습니다")
    if not secret_key:
        raise ConfigError("ALICLOUD_SECRET_KEY", "환경변수가 설정되지 않았습니다")

    return access_key, secret_key, env.get("ALICLOUD_SECURITY_TOKEN") or None
