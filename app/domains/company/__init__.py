# app/domains/company/__init__.py

"""
FastAPI 애플리케이션의 'company' 도메인 패키지입니다.

회사(Company) 레코드 하나만을 다루며, 식별자(UUID)로만 조회합니다.

주요 서브모듈:
- `models.py`: 'company' 테이블에 매핑되는 SQLModel 정의와 업무 규칙 검증.
- `schemas.py`: 요청 본문과 응답 봉투(envelope)에 대한 Pydantic 모델.
- `crud.py`: 저장소 포트를 관계형 데이터베이스로 구현한 어댑터.
- `routers.py`: 'company' 리소스에 대한 FastAPI API 엔드포인트 정의.
"""

__title__ = "Company Domain"
__description__ = "Create, patch, delete and look up Company records by id."
__version__ = "0.1.0"
__all__ = ["models", "schemas", "crud", "routers"]
