# app/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

주요 서브모듈은 다음과 같습니다:

- `config.py`: 애플리케이션 설정 및 커넥션 풀 설정 (Pydantic Settings).
- `database.py`: 비동기 엔진(커넥션 풀) 생성, 마이그레이션 실행.
- `crud_base.py`: 저장소 포트(추상 CRUD 계약)와 행 수(row count) 검사 헬퍼.
- `security.py`: Bearer 토큰(JWT) 검증 및 발급.
- `exceptions.py`: 오류 분류(ErrorKind)와 응답 봉투(envelope) 변환 핸들러.
- `dependencies.py`: FastAPI 의존성 주입에서 사용할 공통 의존성 함수들.
- `logging_setup.py`: 표준 logging 초기화.
"""

__title__ = "Company API Core"
__description__ = "Core components for the Company API application."
__version__ = "0.1.0"
__all__ = []
