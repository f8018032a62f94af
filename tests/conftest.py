# tests/conftest.py

import sys
import os
from typing import AsyncGenerator, Dict

# 설정 모듈이 임포트되기 전에 테스트용 비밀키를 지정합니다.
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-company-api")
os.environ.setdefault("APP_ENV", "testing")

# --- 경로 설정 ---
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine  # noqa: E402

from app.main import app as main_app  # noqa: E402
from app.core import dependencies as deps  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.core.database import migrate  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.domains.company.crud import CRUDCompany  # noqa: E402

from tests.fakes import InMemoryCompanyStorage  # noqa: E402


# --- 데이터베이스 픽스처 ---
# 테스트마다 임시 디렉토리에 SQLite 파일을 만들고 실제 마이그레이션을 적용합니다.
@pytest_asyncio.fixture(scope="function")
async def sqlite_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """마이그레이션이 적용된 테스트 전용 비동기 엔진을 제공합니다."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'company.db'}")
    await migrate(engine, settings.MIGRATIONS_DIR)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
def sql_storage(sqlite_engine: AsyncEngine) -> CRUDCompany:
    """관계형 저장소 어댑터 (SQLite)."""
    return CRUDCompany(sqlite_engine)


@pytest.fixture(scope="function")
def memory_storage() -> InMemoryCompanyStorage:
    """인메모리 저장소 (API 테스트용)."""
    return InMemoryCompanyStorage()


# --- 인증 픽스처 ---
@pytest.fixture(scope="function")
def access_token() -> str:
    return create_access_token({"sub": "tester"})


@pytest.fixture(scope="function")
def auth_headers(access_token: str) -> Dict[str, str]:
    """유효한 Bearer 토큰이 담긴 헤더를 반환합니다."""
    return {"Authorization": f"Bearer {access_token}"}


# --- 클라이언트 픽스처 ---
# lifespan 은 실행되지 않으므로, 저장소는 의존성 오버라이드로 주입합니다.
@pytest_asyncio.fixture(scope="function")
async def client(memory_storage: InMemoryCompanyStorage) -> AsyncGenerator[AsyncClient, None]:
    """인메모리 저장소를 사용하는 AsyncClient 를 반환합니다."""
    original_overrides = main_app.dependency_overrides.copy()
    main_app.dependency_overrides[deps.get_company_storage] = lambda: memory_storage

    transport = ASGITransport(app=main_app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


@pytest_asyncio.fixture(scope="function")
async def sql_client(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncClient, None]:
    """실제 관계형 어댑터(SQLite)를 사용하는 AsyncClient 를 반환합니다."""
    storage = CRUDCompany(sqlite_engine)
    original_overrides = main_app.dependency_overrides.copy()
    main_app.dependency_overrides.update({
        deps.get_company_storage: lambda: storage,
        deps.get_engine: lambda: sqlite_engine,
    })

    transport = ASGITransport(app=main_app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)
