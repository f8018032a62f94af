# app/domains/company/schemas.py

import uuid

from pydantic import BaseModel, ConfigDict, Field

from .models import MAX_AMOUNT_OF_EMPLOYEES


class CompanyRequest(BaseModel):
    """
    생성(POST) 및 변경(PATCH) 요청 본문입니다.
    길이/범위 검사는 models.validate_company 에서 우선순위대로 수행합니다.
    JSON 타입은 엄격하게 검사합니다 ("5" 는 정수가 아니고, "yes" 는 불리언이 아닙니다).
    """
    model_config = ConfigDict(strict=True)

    name: str = Field(..., description="회사명")
    description: str = Field("", description="회사 설명")
    amount_of_employees: int = Field(..., le=MAX_AMOUNT_OF_EMPLOYEES, description="직원 수")
    registered: bool = Field(..., description="등록 여부")
    type: str = Field(..., description="회사 유형")


class CompanyRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str
    amount_of_employees: int
    registered: bool
    type: str


# --- 응답 봉투(envelope) ---
class ResponseStatus(BaseModel):
    error_code: int
    message: str


class ResponseStatusWithID(ResponseStatus):
    id: str


class CompanyResponse(BaseModel):
    status: ResponseStatus
    company: CompanyRead
