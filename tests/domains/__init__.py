# tests/domains/__init__.py

"""
도메인별 테스트 스위트 패키지입니다.

- `test_company_models_n.py`: 엔티티 생성과 업무 규칙 검증.
- `test_company_crud_n.py`: 관계형 저장소 어댑터 (SQLite + 실제 마이그레이션).
- `test_company_n.py`: API 엔드포인트 (인증, 입력 검증, 응답 봉투).
"""

__title__ = "Company Domain Tests"
__version__ = "0.1.0"
__all__ = []
