# app/core/security.py

"""
애플리케이션의 보안 관련 유틸리티 함수 및 의존성 주입을 정의하는 모듈입니다.

- Authorization 헤더의 Bearer 토큰(JWT) 검증 (요청 단위, 세션 없음).
- 대칭키(HMAC) 알고리즘으로 서명된 토큰만 허용합니다.
  'none' 이나 비대칭 알고리즘으로 위조된 토큰은 거부됩니다.
- 운영/테스트용 Access Token 발급.

토큰의 역할(role)이나 권한(scope) 클레임은 검사하지 않습니다.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional
import logging

from fastapi import Request
from jose import JWTError, jwt

from app.core.config import HMAC_ALGORITHMS, settings
from app.core.exceptions import AppError, ErrorKind


logger = logging.getLogger(__name__)

AUTH_HEADER_MISSING = "Authorization header missing"
TOKEN_INCORRECT_FORMAT = "Incorrectly formatted authorization header"

# 서명과 시간 클레임(exp, nbf, iat)만 검사합니다. 나머지 등록 클레임은 내용과 무관하게 통과합니다.
DECODE_OPTIONS = {
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
}


# --- JWT 토큰 생성 및 검증 ---
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Access Token 을 생성합니다.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)


def verify_token(token: str, secret: str) -> Dict[str, Any]:
    """
    서명된 토큰을 검증하고 클레임을 반환합니다.
    서명 불일치, 구조 오류, HMAC 이외의 알고리즘, 클레임이 매핑이 아닌 경우 INVALID_TOKEN 입니다.
    """
    try:
        claims = jwt.decode(token, secret, algorithms=list(HMAC_ALGORITHMS), options=DECODE_OPTIONS)
    except JWTError as e:
        raise AppError(ErrorKind.INVALID_TOKEN, str(e)) from e

    if not isinstance(claims, Mapping):
        raise AppError(ErrorKind.INVALID_TOKEN, "invalid token")
    return dict(claims)


def authenticate_header(authorization: Optional[str], secret: str) -> Dict[str, Any]:
    """
    Authorization 헤더 값을 단계별로 검사합니다.
    1. 헤더 없음 -> MISSING_AUTH_HEADER
    2. 'Bearer <token>' 형식이 아님 -> MALFORMED_AUTH_HEADER
    3. 토큰 검증 실패 -> INVALID_TOKEN
    """
    if not authorization:
        raise AppError(ErrorKind.MISSING_AUTH_HEADER, AUTH_HEADER_MISSING)

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise AppError(ErrorKind.MALFORMED_AUTH_HEADER, TOKEN_INCORRECT_FORMAT)

    return verify_token(parts[1], secret)


async def require_bearer_token(request: Request) -> Dict[str, Any]:
    """
    변경 계열(create/patch/delete) 엔드포인트에 사용하는 인증 의존성입니다.
    """
    try:
        claims = authenticate_header(
            request.headers.get("Authorization"),
            settings.SECRET_KEY.get_secret_value(),
        )
    except AppError as e:
        logger.info("CheckAuth: rejected kind=%s error=%s", e.kind.value, e.message)
        raise
    logger.debug("CheckAuth: token is good claims=%s", claims)
    return claims
