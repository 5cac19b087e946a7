"""
provisioning - 통합 테스트용 프로비저닝 설정

Terraform은 JSON 변수 파일을, 테스트 스위트는 YAML 속성 파일을 읽습니다.
두 파일의 값을 한 곳(FixtureConfig)에서 생성하고, Terraform output을
다시 YAML 속성 파일로 병합합니다.

Usage:
    from provisioning import FixtureConfig

    config = FixtureConfig.create("test/integration/build")
    config.store_json()
    config.store_yaml()
    # terraform apply ...
    config.update_yaml()
"""

from .attributes import dump_attributes, load_attributes
from .config import FixtureConfig, default_values, random_suffix
from .terraform import TerraformRunner, read_output_names

__all__: list[str] = [
    "FixtureConfig",
    "TerraformRunner",
    "default_values",
    "dump_attributes",
    "load_attributes",
    "random_suffix",
    "read_output_names",
]
