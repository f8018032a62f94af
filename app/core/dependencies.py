# app/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 공유 엔진(커넥션 풀)과 저장소 포트 구현체는 애플리케이션 수명 주기(lifespan)에서
  `app.state` 에 등록되며, 여기서는 요청마다 이를 꺼내 전달합니다.
- 테스트에서는 `app.dependency_overrides` 로 인메모리 저장소를 주입합니다.
"""

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.crud_base import StorageBase
from app.domains.company.models import Company

# 인증 의존성은 security 모듈의 것을 그대로 노출합니다.
from app.core.security import require_bearer_token  # noqa: F401


def get_engine(request: Request) -> AsyncEngine:
    """애플리케이션 시작 시 생성된 공유 엔진을 반환합니다."""
    return request.app.state.engine


def get_company_storage(request: Request) -> StorageBase[Company]:
    """회사 리소스의 저장소 포트 구현체를 반환합니다."""
    return request.app.state.company_storage
