# app/main.py

from typing import AsyncGenerator
from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI
from fastapi.responses import Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

# 핵심 설정 및 데이터베이스 모듈 임포트
from app.core.config import settings
from app.core import dependencies as deps
from app.core.database import init_and_migrate
from app.core.exceptions import AppError, ErrorKind, json_response, register_exception_handlers
from app.core.logging_setup import setup_logging

from app.domains.company.crud import CRUDCompany
from app.domains.company.routers import router as company_router


logger = logging.getLogger(__name__)


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    시작 시 엔진(커넥션 풀)을 만들고 마이그레이션을 적용한 뒤 저장소를 등록합니다.
    마이그레이션이 실패하면 예외가 전파되어 서버가 요청을 받지 않습니다.
    """
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting %s v%s env=%s", settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV)

    engine = await init_and_migrate(settings)
    app.state.engine = engine
    app.state.company_storage = CRUDCompany(engine)

    yield  # 애플리케이션 실행

    logger.info("Stopping service")
    await engine.dispose()
    logger.info("Database connection pool closed")


# -- FastAPI 애플리케이션 인스턴스 생성 --
app = FastAPI(
    title=settings.APP_NAME,
    description="Company API: create, patch, delete and look up companies by id.",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

register_exception_handlers(app)

# -- 도메인 라우터 포함 --
app.include_router(company_router, prefix="/company")


# -- 루트 엔드포인트 --
@app.get("/", summary="API Root")
async def read_root():
    """
    API 의 루트 엔드포인트입니다.
    """
    return {"message": f"Welcome to {settings.APP_NAME}. Visit /docs for interactive API documentation."}


# -- 헬스 체크 엔드포인트 --
@app.get("/health-check", summary="Health Check")
async def health_check(engine: AsyncEngine = Depends(deps.get_engine)) -> Response:
    """
    데이터베이스에 `SELECT 1` 을 실행하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            value = result.scalar_one_or_none()
    except SQLAlchemyError as e:
        raise AppError(ErrorKind.INTERNAL, f"Database connection error during health check: {e}") from e

    if value != 1:
        raise AppError(ErrorKind.INTERNAL, "Database health check failed: No result from test query")
    return json_response(200, {"status": "ok", "database_connection": "successful"})


def run() -> None:
    """uvicorn 으로 서버를 실행합니다 (console script: company-api)."""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.SERVER_HOST, port=settings.SERVER_PORT)


if __name__ == "__main__":
    run()
