# app/domains/company/models.py

from typing import Optional
import uuid

from sqlalchemy import BigInteger
from sqlmodel import Field, SQLModel

from app.core.exceptions import AppError, ErrorKind

NAME_MAX_LENGTH = 15
DESCRIPTION_MAX_LENGTH = 300
# amount_of_employees 컬럼(BIGINT)이 담을 수 있는 최댓값
MAX_AMOUNT_OF_EMPLOYEES = 2**63 - 1

# 변경(patch) 시 갱신되는 필드 목록. id 는 생성 후 변경되지 않습니다.
MUTABLE_FIELDS = ("name", "description", "amount_of_employees", "registered", "type")


class Company(SQLModel, table=True):
    """
    company 테이블 모델을 정의하는 클래스입니다.
    레코드는 id 로만 식별되며, 다른 조회 경로는 없습니다.
    """
    __tablename__ = "company"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, description="고유 ID (UUID)")
    name: str = Field(max_length=NAME_MAX_LENGTH, description="회사명")
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH, description="회사 설명")
    amount_of_employees: int = Field(sa_type=BigInteger, description="직원 수")
    registered: bool = Field(default=False, description="등록 여부")
    type: str = Field(default="", description="회사 유형")


def new_company(
    id: Optional[uuid.UUID],
    name: str,
    description: str,
    amount_of_employees: int,
    registered: bool,
    company_type: str,
) -> Company:
    """
    Company 객체를 생성합니다.
    id 가 없거나 nil UUID 이면 새로운 UUID 를 발급하고, 그 외에는 그대로 유지합니다.
    """
    if id is None or id == uuid.UUID(int=0):
        id = uuid.uuid4()

    return Company(
        id=id,
        name=name,
        description=description,
        amount_of_employees=amount_of_employees,
        registered=registered,
        type=company_type,
    )


def validate_company(company: Company) -> None:
    """
    저장 전에 업무 규칙을 검사합니다. 가장 먼저 실패한 규칙의 사유로
    BAD_REQUEST 오류를 발생시킵니다. 저장소에는 접근하지 않습니다.
    """
    if not company.name or len(company.name) > NAME_MAX_LENGTH:
        raise AppError(
            ErrorKind.BAD_REQUEST,
            f"name must not be empty and not more than {NAME_MAX_LENGTH} characters",
        )
    if len(company.description) > DESCRIPTION_MAX_LENGTH:
        raise AppError(
            ErrorKind.BAD_REQUEST,
            f"description must not be more than {DESCRIPTION_MAX_LENGTH} characters",
        )
    if company.amount_of_employees <= 0:
        raise AppError(ErrorKind.BAD_REQUEST, "amount of employees must be more than 0")
