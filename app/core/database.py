# app/core/database.py

"""
애플리케이션의 데이터베이스 연결 및 마이그레이션을 담당하는 모듈입니다.

- 설정(Settings)으로부터 비동기 엔진(커넥션 풀)을 생성합니다.
  엔진은 프로세스 시작 시 한 번 만들어져 모든 요청이 공유합니다.
- 풀을 서비스에 투입하기 전에 Alembic 마이그레이션을 동기적으로 실행합니다.
  마이그레이션 실패는 시작 실패로 처리되며, 적용할 마이그레이션이 없으면 성공입니다.
"""

import logging

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import Settings


logger = logging.getLogger(__name__)


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    설정값으로 비동기 엔진을 생성합니다.
    max_idle 은 상시 유지 연결 수(pool_size), 나머지는 max_overflow 로 매핑됩니다.
    """
    pool = settings.pool
    engine = create_async_engine(
        settings.database_url,
        echo=settings.DEBUG_MODE,  # 디버그 모드일 때만 SQL 쿼리 출력
        pool_size=pool.pool_size,
        max_overflow=pool.max_overflow,
        pool_recycle=3600,  # 1시간마다 연결 재활용
        pool_pre_ping=True,
    )
    logger.info(
        "Database engine created max_open=%d max_idle=%d",
        pool.max_open, pool.max_idle,
    )
    return engine


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    """
    저장소 어댑터가 구문마다 새 세션을 여는 데 사용하는 세션 팩토리를 만듭니다.
    세션은 엔진의 커넥션 풀을 공유합니다.
    """
    return sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


def run_migrations(migrations_dir: str, connection: Connection) -> None:
    """
    주어진 디렉토리의 Alembic 마이그레이션을 살아있는 연결 위에서 head 까지 적용합니다.
    이미 최신 상태라면 아무 작업도 하지 않고 정상 종료합니다.
    """
    alembic_cfg = AlembicConfig()
    alembic_cfg.set_main_option("script_location", migrations_dir)
    # migrations/env.py 가 새 연결을 만들지 않고 이 연결을 사용합니다.
    alembic_cfg.attributes["connection"] = connection
    command.upgrade(alembic_cfg, "head")


async def migrate(engine: AsyncEngine, migrations_dir: str) -> None:
    """엔진의 연결 하나를 빌려 마이그레이션을 실행하고 커밋합니다."""
    async with engine.begin() as conn:
        await conn.run_sync(lambda sync_conn: run_migrations(migrations_dir, sync_conn))
    logger.info("Database migrations applied dir=%s", migrations_dir)


async def init_and_migrate(settings: Settings) -> AsyncEngine:
    """
    엔진을 만들고 마이그레이션을 적용한 뒤 반환합니다.
    마이그레이션이 실패하면 엔진을 정리하고 예외를 그대로 전파합니다.
    """
    engine = create_engine_from_settings(settings)
    try:
        await migrate(engine, settings.MIGRATIONS_DIR)
    except Exception:
        logger.error("Database migration failed, refusing to start")
        await engine.dispose()
        raise
    return engine
