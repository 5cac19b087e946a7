"""
tests/provisioning/test_terraform.py - terraform output 조회 테스트
"""

import subprocess
from unittest.mock import patch

import pytest

from core.exceptions import TerraformError
from provisioning.terraform import TerraformRunner, read_output_names


class TestReadOutputNames:
    """read_output_names 테스트"""

    def test_only_top_level_declarations(self, tmp_path):
        path = tmp_path / "outputs.tf"
        path.write_text(
            "# outputs\n"
            'output "sg_id" {\n'
            "  value = 1\n"
            "}\n"
            '  output "indented" {\n'
            "}\n"
            'output   "spaced_name" {\n'
            "}\n"
            "outputs_note = 1\n",
            encoding="utf-8",
        )

        assert read_output_names(path) == ["sg_id", "spaced_name"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "outputs.tf"
        path.write_text("", encoding="utf-8")

        assert read_output_names(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_output_names(tmp_path / "outputs.tf")


class TestTerraformRunner:
    """TerraformRunner 테스트"""

    @patch("provisioning.terraform.subprocess.run")
    def test_output(self, mock_run, tmp_path):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="sg-0abc\n", stderr="")

        value = TerraformRunner(tmp_path).output("sg_id")

        assert value == "sg-0abc"
        args, kwargs = mock_run.call_args
        assert args[0] == ["terraform", "output", "-raw", "sg_id"]
        assert kwargs["cwd"] == tmp_path
        assert kwargs["check"] is False

    @patch("provisioning.terraform.subprocess.run")
    def test_custom_binary(self, mock_run, tmp_path):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="x", stderr="")

        TerraformRunner(tmp_path, binary="/usr/local/bin/tofu").output("sg_id")

        assert mock_run.call_args[0][0][0] == "/usr/local/bin/tofu"

    @patch("provisioning.terraform.subprocess.run")
    def test_nonzero_exit(self, mock_run, tmp_path):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=1, stdout="", stderr="Error: Output not found"
        )

        with pytest.raises(TerraformError) as exc_info:
            TerraformRunner(tmp_path).output("missing")

        assert exc_info.value.returncode == 1
        assert "Output not found" in str(exc_info.value)

    @patch("provisioning.terraform.subprocess.run", side_effect=FileNotFoundError("terraform"))
    def test_binary_not_found(self, mock_run, tmp_path):
        with pytest.raises(TerraformError) as exc_info:
            TerraformRunner(tmp_path).output("sg_id")

        assert exc_info.value.returncode == 127
