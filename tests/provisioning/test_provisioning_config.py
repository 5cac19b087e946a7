"""
tests/provisioning/test_provisioning_config.py - FixtureConfig 테스트
"""

import json
import random
import string
from unittest.mock import MagicMock

import pytest
import yaml

from core.exceptions import ConfigError
from provisioning.config import FixtureConfig, default_values, random_suffix


class TestRandomSuffix:
    """random_suffix 테스트"""

    def test_default_length_lowercase(self):
        suffix = random_suffix()
        assert len(suffix) == 25
        assert set(suffix) <= set(string.ascii_lowercase)

    def test_custom_length(self):
        assert len(random_suffix(8)) == 8

    def test_seeded_rng(self):
        assert random_suffix(rng=random.Random(1)) == random_suffix(rng=random.Random(1))


class TestDefaultValues:
    """default_values 테스트"""

    def test_keys_and_prefixes(self):
        values = default_values(environ={})

        assert values["alicloud_region"] == "eu-west-1"
        assert values["alicloud_vpc_cidr"] == "10.0.1.0/24"
        assert values["alicloud_vpc_name"].startswith("vpc-")
        assert values["alicloud_security_group_name"].startswith("sg-")
        assert values["alicloud_action_trail_ram_role_name"].startswith("atrr-")
        assert values["alicloud_action_trail_ram_policy_name"].startswith("atrp-")
        assert values["alicloud_action_trail_name"].startswith("at-")
        assert values["alicloud_action_trail_bucket_name"].startswith("atb-")
        assert values["alicloud_security_group_description"] == "Test security group for inspec"
        assert values["alicloud_enable_create"] == 1

    def test_region_from_lowercase_env(self):
        assert default_values(environ={"alicloud_region": "cn-beijing"})["alicloud_region"] == "cn-beijing"

    def test_random_names_differ(self):
        values = default_values(environ={}, rng=random.Random(7))
        assert values["alicloud_vpc_name"][4:] != values["alicloud_security_group_name"][3:]


class TestFixtureConfig:
    """FixtureConfig 테스트"""

    def test_update_from_environment(self, tmp_path):
        """대문자 키 환경변수가 우선"""
        config = FixtureConfig.create(
            tmp_path,
            environ={"ALICLOUD_VPC_CIDR": "10.9.0.0/16", "ALICLOUD_ENABLE_CREATE": "0"},
        )

        values = config.update_from_environment()

        assert values["alicloud_vpc_cidr"] == "10.9.0.0/16"
        assert values["alicloud_enable_create"] == "0"
        assert values["alicloud_region"] == "eu-west-1"

    def test_lowercase_env_does_not_override(self, tmp_path):
        config = FixtureConfig.create(tmp_path, environ={"alicloud_vpc_cidr": "10.9.0.0/16"})

        assert config.update_from_environment()["alicloud_vpc_cidr"] == "10.0.1.0/24"

    def test_instances_are_independent(self, tmp_path):
        """모듈 전역 상태 없음"""
        first = FixtureConfig.create(tmp_path, environ={"ALICLOUD_VPC_CIDR": "10.9.0.0/16"})
        second = FixtureConfig.create(tmp_path, environ={})

        first.update_from_environment()

        assert second.values["alicloud_vpc_cidr"] == "10.0.1.0/24"

    def test_store_json(self, tmp_path):
        config = FixtureConfig.create(tmp_path / "build", environ={"ALICLOUD_REGION": "cn-hangzhou"})

        path = config.store_json()

        assert path == tmp_path / "build" / "alicloud-inspec.tfvars.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["alicloud_region"] == "cn-hangzhou"
        assert data["alicloud_vpc_name"] == config.values["alicloud_vpc_name"]

    def test_store_yaml(self, tmp_path):
        config = FixtureConfig.create(tmp_path, environ={})

        path = config.store_yaml("attrs.yaml")

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data == config.values

    def test_get_tf_output_vars(self, tmp_path):
        (tmp_path / "outputs.tf").write_text(
            'output "alicloud_security_group_id" {\n'
            "  value = alicloud_security_group.sg.id\n"
            "}\n"
            "\n"
            'output "alicloud_vpc_id" {\n'
            "  value = alicloud_vpc.vpc.id\n"
            "}\n",
            encoding="utf-8",
        )
        config = FixtureConfig.create(tmp_path, environ={})

        assert config.get_tf_output_vars() == ["alicloud_security_group_id", "alicloud_vpc_id"]

    def test_update_yaml(self, tmp_path):
        """terraform output 값 병합"""
        (tmp_path / "outputs.tf").write_text(
            'output "alicloud_security_group_id" {\n  value = "x"\n}\n',
            encoding="utf-8",
        )
        config = FixtureConfig.create(tmp_path, environ={})
        config.store_yaml()

        runner = MagicMock()
        runner.output.return_value = "sg-0abc"

        contents = config.update_yaml(runner=runner)

        runner.output.assert_called_once_with("alicloud_security_group_id")
        assert contents["alicloud_security_group_id"] == "sg-0abc"
        stored = yaml.safe_load((tmp_path / "alicloud-inspec-attributes.yaml").read_text(encoding="utf-8"))
        assert stored["alicloud_security_group_id"] == "sg-0abc"
        assert stored["alicloud_region"] == "eu-west-1"

    def test_update_yaml_missing_attributes(self, tmp_path):
        config = FixtureConfig.create(tmp_path, environ={})

        with pytest.raises(ConfigError):
            config.update_yaml(runner=MagicMock())
