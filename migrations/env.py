# migrations/env.py

import os
import sys
import asyncio
from logging.config import fileConfig

from alembic import context

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel

# --- 1. 프로젝트 루트 경로 설정 ---
# alembic CLI 로 실행할 때에도 'app' 모듈을 찾을 수 있게 합니다.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# --- 2. 모든 모델 임포트 ---
# autogenerate 가 모델과 데이터베이스를 비교할 수 있도록 metadata 에 등록합니다.
import app.domains.company.models           # noqa: F401, E402

# --- 3. Alembic 기본 설정 ---
config = context.config

target_metadata = SQLModel.metadata

# 애플리케이션(app.core.database.run_migrations)이 넘겨준 살아있는 연결
shared_connection = config.attributes.get("connection", None)

# CLI 로 실행된 경우에만 .ini 로깅 설정을 적용합니다. (애플리케이션 로깅을 덮어쓰지 않음)
if shared_connection is None and config.config_file_name is not None:
    fileConfig(config.config_file_name)


def do_run_migrations(connection: Connection) -> None:
    """
    Alembic 컨텍스트를 데이터베이스 연결로 구성하고 마이그레이션을 실행합니다.
    """
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """오프라인 모드는 지원하지 않습니다."""
    raise NotImplementedError("Offline mode is not supported in this configuration.")


async def run_migrations_online() -> None:
    """
    'alembic upgrade head' CLI 실행 시 설정(Settings)의 URL 로 직접 연결합니다.
    """
    from app.core.config import settings

    engine: AsyncEngine = create_async_engine(
        settings.database_url,
        echo=settings.DEBUG_MODE,
        poolclass=pool.NullPool,  # 마이그레이션 시에는 풀을 사용하지 않아 즉시 연결/해제
    )

    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
elif shared_connection is not None:
    do_run_migrations(shared_connection)
else:
    asyncio.run(run_migrations_online())
