# app/core/config.py

from typing import Optional
import os

from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

DEFAULT_MAX_OPEN_CONNS = 100
DEFAULT_MAX_IDLE_CONNS = 20

# 토큰 검증에 허용되는 대칭키(HMAC) 알고리즘 목록
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class PoolConfig(BaseModel):
    """
    데이터베이스 커넥션 풀 크기 설정입니다.
    0 (미설정) 값은 생성 시점에 기본값으로 치환됩니다.
    """
    max_open: int = Field(0, ge=0, description="최대 동시 연결 수 (0이면 기본값)")
    max_idle: int = Field(0, ge=0, description="유휴 상태로 유지할 연결 수 (0이면 기본값)")

    @field_validator("max_open")
    @classmethod
    def _default_max_open(cls, value: int) -> int:
        return value or DEFAULT_MAX_OPEN_CONNS

    @field_validator("max_idle")
    @classmethod
    def _default_max_idle(cls, value: int) -> int:
        return value or DEFAULT_MAX_IDLE_CONNS

    @model_validator(mode="after")
    def _clamp_idle(self) -> "PoolConfig":
        # 유휴 연결 수는 최대 연결 수를 넘을 수 없습니다.
        if self.max_idle > self.max_open:
            self.max_idle = self.max_open
        return self

    @property
    def pool_size(self) -> int:
        """SQLAlchemy QueuePool 의 상시 유지 연결 수."""
        return self.max_idle

    @property
    def max_overflow(self) -> int:
        """pool_size 를 넘어 추가로 열 수 있는 연결 수."""
        return self.max_open - self.max_idle


class Settings(BaseSettings):
    """
    애플리케이션의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드합니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일
        env_file_encoding='utf-8',
        extra='ignore',                      # 모델에 없는 변수는 무시
        case_sensitive=True                  # 환경 변수 이름 대소문자 구분
    )

    # --- 애플리케이션 기본 설정 ---
    APP_NAME: str = "Company API"
    APP_VERSION: str = "0.1.0"
    APP_ENV: str = Field("development", description="Application environment (e.g., development, production, testing)")
    DEBUG_MODE: bool = Field(False, description="Enable SQL echo and verbose logging")
    LOG_LEVEL: str = Field("INFO", description="Root log level (DEBUG, INFO, WARNING, ...)")

    # --- 서버 설정 ---
    SERVER_HOST: str = Field("0.0.0.0", description="Bind address for uvicorn")
    SERVER_PORT: int = Field(8080, description="Port for uvicorn")

    # --- JWT (JSON Web Token) 설정 ---
    SECRET_KEY: SecretStr = Field(..., description="Symmetric secret for JWT signing. Keep this highly secure!")
    ALGORITHM: str = Field("HS256", description="HMAC algorithm used for JWT signing")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(30, description="Lifetime of issued access tokens in minutes")

    # --- 데이터베이스 설정 ---
    # DATABASE_URL 이 지정되면 아래 POSTGRES_* 항목보다 우선합니다.
    DATABASE_URL: Optional[SecretStr] = Field(None, description="Full SQLAlchemy async database URL")
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: SecretStr = SecretStr("postgres")
    POSTGRES_DB: str = "company"

    # 커넥션 풀 설정 (0 이면 기본값 적용)
    DB_MAX_OPEN_CONNS: int = Field(0, ge=0)
    DB_MAX_IDLE_CONNS: int = Field(0, ge=0)

    # 마이그레이션 스크립트 디렉토리 (Alembic script_location)
    MIGRATIONS_DIR: str = Field(os.path.join(BASE_DIR, "migrations"), description="Alembic migrations directory")

    @field_validator("ALGORITHM")
    @classmethod
    def _hmac_only(cls, value: str) -> str:
        if value not in HMAC_ALGORITHMS:
            raise ValueError(f"ALGORITHM must be one of {', '.join(HMAC_ALGORITHMS)}")
        return value

    @property
    def database_url(self) -> str:
        """엔진 생성에 사용할 접속 문자열을 반환합니다."""
        if self.DATABASE_URL is not None:
            return self.DATABASE_URL.get_secret_value()
        return build_connection_url(
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            user=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD.get_secret_value(),
            dbname=self.POSTGRES_DB,
        )

    @property
    def pool(self) -> PoolConfig:
        return PoolConfig(max_open=self.DB_MAX_OPEN_CONNS, max_idle=self.DB_MAX_IDLE_CONNS)


def build_connection_url(host: str, port: int, user: str, password: str, dbname: str) -> str:
    """asyncpg 드라이버용 PostgreSQL 접속 URL 을 조립합니다. (특수문자는 URL 인코딩)"""
    url = URL.create(
        "postgresql+asyncpg",
        username=user,
        password=password,
        host=host,
        port=port,
        database=dbname,
    )
    return url.render_as_string(hide_password=False)


settings = Settings()
