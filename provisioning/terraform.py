"""
provisioning/terraform.py - Terraform output 조회

outputs.tf에서 output 이름을 찾고, ``terraform output``으로 값을 읽습니다.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from core.config import settings
from core.exceptions import TerraformError

logger = logging.getLogger(__name__)

# output "name" { 형식의 선언 (한 줄에 하나라고 가정)
OUTPUT_DECLARATION = re.compile(r'^output\s+"([^"]+)"')


def read_output_names(path: str | Path) -> list[str]:
    """outputs.tf에서 선언된 output 이름 목록 반환

    ``output``으로 시작하는 줄만 본다. 들여쓰기된 선언이나 모듈 내부의
    output은 대상이 아니다.
    """
    names = []
    with Path(path).open(encoding="utf-8") as f:
        for line in f:
            if not line.startswith("output"):
                continue
            match = OUTPUT_DECLARATION.match(line)
            if match:
                names.append(match.group(1))
    return names


class TerraformRunner:
    """terraform CLI 실행기

    Args:
        working_dir: terraform 상태가 있는 디렉토리
        binary: terraform 실행 파일 (기본: settings.TERRAFORM_BIN)
    """

    def __init__(self, working_dir: str | Path, binary: str = settings.TERRAFORM_BIN):
        self.working_dir = Path(working_dir)
        self.binary = binary

    def _run(self, *args: str) -> str:
        command = [self.binary, *args]
        logger.debug(f"실행: {' '.join(command)} (cwd={self.working_dir})")
        try:
            completed = subprocess.run(
                command,
                cwd=self.working_dir,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise TerraformError(command, 127, f"{self.binary} 실행 파일을 찾을 수 없습니다", cause=e) from e

        if completed.returncode != 0:
            raise TerraformError(command, completed.returncode, completed.stderr)
        return completed.stdout

    def output(self, name: str) -> str:
        """단일 output 값 반환 (문자열 output만 지원)"""
        return self._run("output", "-raw", name).strip()
