# app/core/exceptions.py

"""
애플리케이션 공통 오류 분류와 HTTP 응답 변환을 담당하는 모듈입니다.

- 모든 도메인 오류는 `AppError` 하나로 표현하며, `kind` 필드(ErrorKind)로 구분합니다.
  호출자는 예외 객체의 동일성이 아니라 `kind` 값으로 분기합니다.
- 응답은 항상 `{error_code, message}` 봉투(envelope) 형태로 직렬화됩니다.
- 직렬화에 실패하면 고정된 최소 오류 페이로드로 대체합니다.
"""

import enum
import json
import logging
from typing import Any, Dict, Sequence

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response


logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json; charset=utf-8"

# 직렬화 실패 시 그대로 내려보내는 고정 페이로드
JSON_ERROR_RESPONSE = b'{"error_code": 500, "message": "JSON marshal error"}'


class ErrorKind(str, enum.Enum):
    BAD_REQUEST = "bad_request"
    MISSING_AUTH_HEADER = "missing_auth_header"
    MALFORMED_AUTH_HEADER = "malformed_auth_header"
    INVALID_TOKEN = "invalid_token"
    NOT_FOUND = "not_found"
    AMBIGUOUS_RESULT = "ambiguous_result"
    INTERNAL = "internal"


# ErrorKind 별 HTTP 상태 코드.
# NOT_FOUND / AMBIGUOUS_RESULT 는 저장소 계층 오류이므로 라우터에서 500 으로 노출됩니다.
_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.MISSING_AUTH_HEADER: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.MALFORMED_AUTH_HEADER: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.AMBIGUOUS_RESULT: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AppError(Exception):
    """
    종류(kind)와 사람이 읽을 수 있는 메시지를 가진 애플리케이션 공통 예외입니다.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind.value!r}, message={self.message!r})"


def render_json(payload: Any) -> bytes:
    """
    페이로드를 JSON 바이트열로 직렬화합니다.
    실패하면 예외를 전파하지 않고 JSON_ERROR_RESPONSE 를 반환합니다.
    """
    try:
        return json.dumps(jsonable_encoder(payload), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        logger.error("render_json: serialization failed error=%s", e)
        return JSON_ERROR_RESPONSE


def json_response(status_code: int, payload: Any) -> Response:
    """봉투 페이로드를 `application/json; charset=utf-8` 응답으로 감쌉니다."""
    body = render_json(payload)
    if body is JSON_ERROR_RESPONSE:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return Response(content=body, status_code=status_code, media_type=JSON_MEDIA_TYPE)


def error_response(status_code: int, message: str) -> Response:
    return json_response(status_code, {"error_code": status_code, "message": message})


def describe_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """
    첫 번째 검증 오류를 "필드: 사유" 형태의 한 줄 메시지로 만듭니다.
    위치 정보 중 "body" 와 정수(JSON 디코딩 오류의 바이트 오프셋 등)는 제외합니다.
    """
    if not errors:
        return "invalid request"
    first = errors[0]
    location = ".".join(
        str(part) for part in first.get("loc", ()) if part != "body" and not isinstance(part, int)
    )
    message = first.get("msg", "invalid request")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """
    AppError, 요청 검증 오류, 예상치 못한 예외를 모두 봉투 형태의 응답으로 변환하는
    예외 핸들러를 애플리케이션에 등록합니다.
    """

    @app.exception_handler(AppError)
    async def _app_error_handler(request: Request, exc: AppError) -> Response:
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        message = describe_validation_errors(exc.errors())
        logger.info("%s %s: request validation failed error=%s", request.method, request.url.path, message)
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        logger.exception("%s %s: unhandled exception", request.method, request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")
