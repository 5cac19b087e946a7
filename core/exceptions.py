"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    ACError (베이스)
    ├── APICallError (AliCloud API 호출)
    ├── ConfigError (설정 관련)
    ├── ValidationError (입력 검증)
    └── TerraformError (프로비저닝 도구 실행)

Usage:
    from core.exceptions import APICallError, is_not_found

    try:
        resp = client.request("DescribeSecurityGroupAttribute", params)
    except APICallError as e:
        if is_not_found(e):
            ...
        raise
"""

from typing import Any, Dict, List, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class ACError(Exception):
    """AliCloud Compliance 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# API 호출 관련 예외
# =============================================================================


class APICallError(ACError):
    """AliCloud API 호출 관련 예외

    aliyunsdkcore의 ServerException / ClientException을 래핑하여
    에러 코드 기반의 일관된 예외 처리를 제공합니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        request_id: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        message = f"{service}.{operation}"
        if error_code:
            message = f"{message} 실패 ({error_code})"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.request_id = request_id
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
                "request_id": request_id,
            }
        )

    @classmethod
    def from_sdk_error(
        cls,
        service: str,
        operation: str,
        sdk_error: Exception,
    ) -> "APICallError":
        """aliyunsdkcore 예외로부터 생성

        ServerException(API 응답 에러)과 ClientException(SDK/네트워크 에러)
        모두 get_error_code() / get_error_msg()를 제공합니다.

        Args:
            service: 서비스 이름 (ecs 등)
            operation: API Action 이름
            sdk_error: ServerException 또는 ClientException

        Returns:
            APICallError 인스턴스
        """
        error_code = None
        error_message = None
        request_id = None

        if hasattr(sdk_error, "get_error_code"):
            error_code = sdk_error.get_error_code()
            error_message = sdk_error.get_error_msg()
        if hasattr(sdk_error, "get_request_id"):
            request_id = sdk_error.get_request_id()

        return cls(
            service=service,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            request_id=request_id,
            cause=sdk_error,
        )


# =============================================================================
# 설정 / 검증 관련 예외
# =============================================================================


class ConfigError(ACError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


class ValidationError(ACError):
    """입력 검증 오류"""

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        cause: Optional[Exception] = None,
    ):
        message = f"검증 오류 [{field}]: 예상값 '{expected}', 실제값 '{value}'"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.expected = expected
        self.details.update(
            {
                "field": field,
                "value": str(value),
                "expected": expected,
            }
        )


# =============================================================================
# 프로비저닝 도구 관련 예외
# =============================================================================


class TerraformError(ACError):
    """terraform 실행 실패"""

    def __init__(
        self,
        command: List[str],
        returncode: int,
        stderr: str = "",
        cause: Optional[Exception] = None,
    ):
        message = f"terraform 실행 실패 [{' '.join(command)}] (exit {returncode})"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message, cause)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.details.update({"command": command, "returncode": returncode})


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def _error_code_of(error: Exception) -> str:
    """APICallError 또는 SDK 예외에서 에러 코드 추출"""
    if isinstance(error, APICallError):
        return error.error_code or ""
    if hasattr(error, "get_error_code"):
        return error.get_error_code() or ""
    return ""


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        액세스 거부 오류이면 True
    """
    error_code = _error_code_of(error)
    return error_code in (
        "Forbidden.RAM",
        "Forbidden",
        "InvalidAccessKeyId.NotFound",
        "SignatureDoesNotMatch",
    ) or error_code.startswith("Forbidden.")


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        스로틀링 오류이면 True
    """
    throttling_codes = {
        "Throttling",
        "Throttling.User",
        "Throttling.Api",
        "ServiceUnavailable",
    }
    return _error_code_of(error) in throttling_codes


def is_not_found(error: Exception, codes: Optional[set] = None) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인

    특정 에러 코드 집합과 정확히 일치할 때만 True를 반환합니다.
    접두사/부분 문자열 매칭은 하지 않습니다.

    Args:
        error: 확인할 예외
        codes: 허용할 not-found 에러 코드 (None이면 기본 집합)

    Returns:
        리소스 없음 오류이면 True
    """
    not_found_codes = codes or {
        "InvalidSecurityGroupId.NotFound",
        "InvalidVpcId.NotFound",
        "InvalidInstanceId.NotFound",
    }
    return _error_code_of(error) in not_found_codes


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, APICallError):
        friendly_messages = {
            "InvalidAccessKeyId.NotFound": "잘못된 AccessKey 입니다.",
            "SignatureDoesNotMatch": "AccessKey Secret이 올바르지 않습니다.",
        }
        if error.error_code in friendly_messages:
            return friendly_messages[error.error_code]
        if is_access_denied(error):
            return "권한이 없습니다. RAM 정책을 확인하세요."
        if is_throttling(error):
            return "요청이 너무 많습니다. 잠시 후 다시 시도하세요."
        return str(error)

    if isinstance(error, ACError):
        # 커스텀 예외는 이미 포맷팅됨
        return str(error)

    return str(error)
