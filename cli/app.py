"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    acc --version                                   # 버전 표시
    acc sg show sg-123 -r eu-west-1                 # Security Group 규칙 조회
    acc sg check sg-123 --ipv4-range 0.0.0.0/0 --port 22 --expect-deny
    acc provision init --build-dir test/integration/build
    acc provision outputs --build-dir test/integration/build

종료 코드:
    0: 성공 (check: 기대와 일치)
    1: check 결과가 기대와 다름
    2: 설정/API/입력 오류

Usage:
    $ acc sg check sg-123 --ipv4-range 10.0.0.0/8
    $ python -m cli.app sg show sg-123
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

# 프로젝트 루트를 sys.path에 추가 (core/resources 모듈 임포트를 위함)
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import click  # noqa: E402

from cli.ui import (  # noqa: E402
    console,
    print_error,
    print_info,
    print_panel_header,
    print_success,
    print_table,
    print_warning,
)
from core.config import get_default_region, get_env_bool, get_version, settings  # noqa: E402
from core.exceptions import ACError, format_error_for_user  # noqa: E402
from provisioning import FixtureConfig  # noqa: E402
from resources import AliCloudSecurityGroup  # noqa: E402

# WARNING 레벨로 설정하여 INFO 로그가 도구 출력에 섞이지 않도록 함
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

VERSION = get_version()

EXIT_MISMATCH = 1
EXIT_ERROR = 2


def _fail(error: Exception) -> NoReturn:
    """에러 출력 후 종료"""
    logger.debug(f"명령 실패: {error!r}")
    print_error(format_error_for_user(error))
    raise SystemExit(EXIT_ERROR)


@click.group()
@click.version_option(version=VERSION, prog_name="acc")
@click.option("-v", "--verbose", is_flag=True, help="DEBUG 로그 출력 (ACC_DEBUG=1과 동일)")
def cli(verbose: bool) -> None:
    """AliCloud Security Group 점검 도구"""
    if verbose or get_env_bool("ACC_DEBUG"):
        logging.getLogger().setLevel(logging.DEBUG)


# =============================================================================
# sg 명령어
# =============================================================================


@cli.group()
def sg() -> None:
    """Security Group 조회/점검"""


@sg.command("show")
@click.argument("group_id")
@click.option("-r", "--region", default=None, help="리전 (기본: ALICLOUD_REGION)")
def sg_show(group_id: str, region: str | None) -> None:
    """Security Group 메타데이터와 규칙 출력"""
    try:
        group = AliCloudSecurityGroup(group_id, region=region or get_default_region())
    except ACError as e:
        _fail(e)

    if not group.exists:
        print_error(f"{group_id}: Security Group이 존재하지 않습니다")
        raise SystemExit(EXIT_MISMATCH)

    print_panel_header(str(group), group.description or None)

    rows = [
        [
            rule.direction,
            rule.policy.value if rule.policy else "-",
            rule.ip_protocol or "-",
            rule.port_range or "-",
            rule.source_cidr_ip or rule.source_group_id or rule.dest_cidr_ip or "-",
            rule.priority or "-",
        ]
        for rule in group.inbound_rules + group.outbound_rules
    ]
    print_table(
        f"규칙 (인바운드 {group.inbound_rules_count}개, 아웃바운드 {group.outbound_rules_count}개)",
        ["Direction", "Policy", "Protocol", "PortRange", "Source/Dest", "Priority"],
        rows,
    )

    if not group.inbound_rules:
        print_info("인바운드 규칙이 없습니다 (모든 허용 점검이 차단으로 판정됨)")
    for rule in group.inbound_rules:
        if not rule.is_all_ports and rule.port_bounds() is None:
            print_warning(f"포트 범위 형식 오류 (포트 점검에서 제외): {rule.port_range or '-'}")


@sg.command("check")
@click.argument("group_id")
@click.option("--ipv4-range", required=True, help="조회할 IPv4 CIDR (예: 0.0.0.0/0)")
@click.option("--port", type=int, default=None, help="조회할 포트 (선택)")
@click.option("--expect-deny", is_flag=True, help="허용되지 않아야 통과")
@click.option("-r", "--region", default=None, help="리전 (기본: ALICLOUD_REGION)")
def sg_check(group_id: str, ipv4_range: str, port: int | None, expect_deny: bool, region: str | None) -> None:
    """인바운드 규칙이 CIDR/포트 트래픽을 허용하는지 점검"""
    try:
        group = AliCloudSecurityGroup(group_id, region=region or get_default_region())
        allowed = group.allows(ipv4_range=ipv4_range, port=port)
    except ACError as e:
        _fail(e)
    except ValueError as e:
        print_error(f"잘못된 IPv4 대역: {ipv4_range} ({e})")
        raise SystemExit(EXIT_ERROR)

    target = ipv4_range if port is None else f"{ipv4_range}:{port}"
    verdict = "허용" if allowed else "차단"

    if allowed != expect_deny:
        print_success(f"{group.group_id}: {target} {verdict}")
        return

    print_error(f"{group.group_id}: {target} {verdict} (기대: {'차단' if expect_deny else '허용'})")
    raise SystemExit(EXIT_MISMATCH)


# =============================================================================
# provision 명령어
# =============================================================================


@cli.group()
def provision() -> None:
    """통합 테스트용 프로비저닝 파일 관리"""


@provision.command("init")
@click.option(
    "--build-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=settings.BUILD_DIR,
    show_default=True,
    help="산출물 디렉토리",
)
def provision_init(build_dir: Path) -> None:
    """Terraform 변수 파일(JSON)과 속성 파일(YAML) 생성"""
    config = FixtureConfig.create(build_dir)
    try:
        json_path = config.store_json()
        yaml_path = config.store_yaml()
    except OSError as e:
        print_error(f"파일 저장 실패: {e}")
        raise SystemExit(EXIT_ERROR)

    print_success(f"tfvars: {json_path}")
    print_success(f"attributes: {yaml_path}")


@provision.command("outputs")
@click.option(
    "--build-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=settings.BUILD_DIR,
    show_default=True,
    help="산출물 디렉토리",
)
def provision_outputs(build_dir: Path) -> None:
    """terraform output 값을 속성 파일에 병합"""
    config = FixtureConfig.create(build_dir)
    try:
        contents = config.update_yaml()
    except ACError as e:
        _fail(e)
    except OSError as e:
        print_error(f"outputs 파일을 읽을 수 없습니다: {e}")
        raise SystemExit(EXIT_ERROR)

    console.print(f"[dim]{len(contents)}개 속성[/dim]")
    print_success(f"attributes: {build_dir / settings.ATTRIBUTES_FILE}")


if __name__ == "__main__":
    cli()
