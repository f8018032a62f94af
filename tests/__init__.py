# tests/__init__.py

"""
Company API 테스트 스위트 패키지입니다.

- `core/`: 설정, 보안(토큰 검증), 저장소 포트 헬퍼, 데이터베이스 초기화 테스트.
- `domains/`: 'company' 도메인의 모델, 관계형 어댑터, API 엔드포인트 테스트.
- `fakes.py`: 저장소 포트의 인메모리 구현체.
- `conftest.py`: 테스트 클라이언트, SQLite 엔진, 인증 헤더 등 공용 픽스처.
"""

__title__ = "Company API Tests"
__description__ = "Test suite for the Company API application."
__version__ = "0.1.0"
__all__ = []
