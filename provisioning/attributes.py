"""
provisioning/attributes.py - YAML 속성 파일 입출력

테스트 스위트가 읽는 속성 파일(alicloud-inspec-attributes.yaml)을
로드/저장합니다.
"""

from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from core.exceptions import ConfigError


def load_attributes(path: str | Path) -> dict[str, Any]:
    """속성 파일 로드

    Args:
        path: YAML 파일 경로

    Returns:
        속성 딕셔너리 (빈 파일이면 빈 딕셔너리)

    Raises:
        ConfigError: 파일이 없거나 최상위가 매핑이 아닌 경우
    """
    file_path = Path(path)
    try:
        with file_path.open(encoding="utf-8") as f:
            result = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(str(file_path), "속성 파일이 없습니다", cause=e) from e
    except yaml.YAMLError as e:
        raise ConfigError(str(file_path), "YAML 파싱 실패", cause=e) from e

    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ConfigError(str(file_path), f"최상위는 매핑이어야 합니다 (실제: {type(result).__name__})")
    return result


def dump_attributes(path: str | Path, attributes: dict[str, Any]) -> Path:
    """속성 파일 저장"""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(attributes, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return file_path
