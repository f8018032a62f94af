# tests/core/test_security.py

"""
Authorization 헤더 검사 및 토큰 검증 로직에 대한 단위 테스트입니다.
"""

import base64
import json
from datetime import timedelta

import pytest
from jose import jws, jwt

from app.core.config import settings
from app.core.exceptions import AppError, ErrorKind
from app.core.security import (
    AUTH_HEADER_MISSING,
    TOKEN_INCORRECT_FORMAT,
    authenticate_header,
    create_access_token,
    verify_token,
)

SECRET = settings.SECRET_KEY.get_secret_value()


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def assert_kind(kind: ErrorKind, header, secret: str = SECRET) -> AppError:
    with pytest.raises(AppError) as exc_info:
        authenticate_header(header, secret)
    assert exc_info.value.kind == kind
    assert exc_info.value.status_code == 401
    return exc_info.value


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header(header):
    error = assert_kind(ErrorKind.MISSING_AUTH_HEADER, header)
    assert error.message == AUTH_HEADER_MISSING


@pytest.mark.parametrize("header", ["abc", "Basic abc", "Bearer", "Bearer a b", "BEARER abc", " Bearer abc"])
def test_malformed_header(header):
    error = assert_kind(ErrorKind.MALFORMED_AUTH_HEADER, header)
    assert error.message == TOKEN_INCORRECT_FORMAT


def test_valid_token_returns_claims():
    token = create_access_token({"sub": "tester", "role": "anything"})
    claims = authenticate_header(f"Bearer {token}", SECRET)
    assert claims["sub"] == "tester"
    # 역할 클레임은 검사하지 않고 그대로 전달됩니다.
    assert claims["role"] == "anything"


@pytest.mark.parametrize("algorithm", ["HS256", "HS384", "HS512"])
def test_any_hmac_algorithm_is_accepted(algorithm):
    token = jwt.encode({"sub": "tester"}, SECRET, algorithm=algorithm)
    assert authenticate_header(f"Bearer {token}", SECRET) == {"sub": "tester"}


def test_token_without_exp_is_accepted():
    token = jwt.encode({"sub": "tester"}, SECRET, algorithm="HS256")
    assert verify_token(token, SECRET) == {"sub": "tester"}


def test_wrong_secret_is_rejected():
    token = jwt.encode({"sub": "tester"}, "wrong-secret", algorithm="HS256")
    assert_kind(ErrorKind.INVALID_TOKEN, f"Bearer {token}")


def test_garbage_token_is_rejected():
    assert_kind(ErrorKind.INVALID_TOKEN, "Bearer not-a-jwt")


def test_unsigned_none_algorithm_token_is_rejected():
    """'alg: none' 으로 서명을 생략한 위조 토큰은 거부됩니다."""
    token = f"{_b64({'alg': 'none', 'typ': 'JWT'})}.{_b64({'sub': 'mallory'})}."
    assert_kind(ErrorKind.INVALID_TOKEN, f"Bearer {token}")


def test_asymmetric_algorithm_header_is_rejected():
    """헤더가 비대칭 알고리즘을 주장하는 토큰은 서명과 무관하게 거부됩니다."""
    token = jws.sign(
        json.dumps({"sub": "mallory"}).encode("utf-8"),
        SECRET,
        headers={"alg": "RS256"},
        algorithm="HS256",
    )
    assert_kind(ErrorKind.INVALID_TOKEN, f"Bearer {token}")


def test_non_mapping_claims_are_rejected():
    token = jws.sign(b"[1, 2, 3]", SECRET, algorithm="HS256")
    assert_kind(ErrorKind.INVALID_TOKEN, f"Bearer {token}")


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "tester"}, expires_delta=timedelta(seconds=-30))
    assert_kind(ErrorKind.INVALID_TOKEN, f"Bearer {token}")


def test_create_access_token_sets_exp():
    token = create_access_token({"sub": "tester"})
    claims = jwt.get_unverified_claims(token)
    assert "exp" in claims
    assert jwt.get_unverified_header(token)["alg"] == settings.ALGORITHM


@pytest.mark.parametrize("claims", [
    {"sub": "tester", "aud": "some-service"},
    {"sub": "tester", "aud": ["a", "b"], "iss": "elsewhere"},
    {"sub": 42},
    {"jti": 7},
    {"at_hash": "abc"},
])
def test_registered_claims_are_not_inspected(claims):
    """서명이 올바르면 aud, iss, sub, jti, at_hash 의 내용과 무관하게 통과합니다."""
    token = jwt.encode(dict(claims), SECRET, algorithm="HS256")
    assert authenticate_header(f"Bearer {token}", SECRET) == claims


def test_not_yet_valid_token_is_rejected():
    token = jwt.encode({"sub": "tester", "nbf": 32503680000}, SECRET, algorithm="HS256")
    assert_kind(ErrorKind.INVALID_TOKEN, f"Bearer {token}")
