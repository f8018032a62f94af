# app/domains/company/routers.py

"""
'company' 도메인의 API 엔드포인트를 정의하는 모듈입니다.

각 핸들러의 처리 순서:
0. (create/patch/delete) Bearer 토큰 검사 - 실패 시 401
   본문은 FastAPI 가 미리 파싱하지 않고, 인증을 통과한 뒤 핸들러에서 직접 읽습니다.
1. 입력 파싱 (본문 / 경로의 id) - 실패 시 400
2. 엔티티 생성 및 업무 규칙 검증 (create/patch) - 실패 시 400
3. 저장소 포트 호출 - 실패 시 500 (하부 메시지 그대로 전달)
4. 상태 봉투 + 엔티티 직렬화
"""

from typing import Any, Dict
import logging
import uuid

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response

from app.core import dependencies as deps
from app.core.crud_base import StorageBase
from pydantic import ValidationError

from app.core.exceptions import AppError, ErrorKind, describe_validation_errors, json_response
from . import models as company_models
from . import schemas as company_schemas


logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Company Management"],
)

# 본문을 직접 읽는 엔드포인트의 OpenAPI 요청 스키마
COMPANY_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": company_schemas.CompanyRequest.model_json_schema()}},
    }
}


def parse_company_id(raw_id: str, operation: str) -> uuid.UUID:
    """경로의 id 가 올바른 UUID 형식인지 확인합니다."""
    try:
        return uuid.UUID(raw_id)
    except ValueError as e:
        logger.info("%s: invalid id id=%r error=%s", operation, raw_id, e)
        raise AppError(ErrorKind.BAD_REQUEST, f"invalid company id {raw_id!r}: {e}") from e


async def read_company_request(request: Request, operation: str) -> company_schemas.CompanyRequest:
    """요청 본문을 JSON 으로 읽어 CompanyRequest 로 검증합니다. 실패 시 400 입니다."""
    body = await request.body()
    try:
        return company_schemas.CompanyRequest.model_validate_json(body)
    except ValidationError as e:
        message = describe_validation_errors(e.errors())
        logger.info("%s: invalid request body error=%s", operation, message)
        raise AppError(ErrorKind.BAD_REQUEST, message) from e


def check_company(company: company_models.Company, operation: str) -> None:
    try:
        company_models.validate_company(company)
    except AppError as e:
        logger.info("%s: validation failed error=%s", operation, e.message)
        raise


async def call_storage(operation: str, coro) -> Any:
    """
    저장소 호출 결과를 그대로 반환하고, 실패는 500 (INTERNAL) 로 변환합니다.
    NOT_FOUND 도 구분하지 않고 500 으로 노출합니다.
    """
    try:
        return await coro
    except AppError as e:
        logger.info("%s: storage failed kind=%s error=%s", operation, e.kind.value, e.message)
        raise AppError(ErrorKind.INTERNAL, e.message) from e


def company_response(message: str, company: company_models.Company) -> Response:
    payload: Dict[str, Any] = {
        "status": company_schemas.ResponseStatus(error_code=status.HTTP_200_OK, message=message),
        "company": company_schemas.CompanyRead.model_validate(company),
    }
    return json_response(status.HTTP_200_OK, payload)


@router.post(
    "",
    summary="회사 생성",
    responses={200: {"model": company_schemas.CompanyResponse}},
    openapi_extra=COMPANY_REQUEST_BODY,
)
async def create_company(
    request: Request,
    _claims: dict = Depends(deps.require_bearer_token),
    storage: StorageBase[company_models.Company] = Depends(deps.get_company_storage),
) -> Response:
    """
    새 회사를 생성합니다. id 는 서버에서 발급합니다.
    """
    company_in = await read_company_request(request, "CreateCompany")
    logger.info("CreateCompany: request=%s", company_in.model_dump())
    company = company_models.new_company(
        None,
        company_in.name,
        company_in.description,
        company_in.amount_of_employees,
        company_in.registered,
        company_in.type,
    )
    check_company(company, "CreateCompany")

    await call_storage("CreateCompany", storage.create(company))

    logger.info("CreateCompany: created id=%s", company.id)
    return company_response("Company created", company)


@router.patch(
    "/{company_id}",
    summary="회사 정보 수정",
    responses={200: {"model": company_schemas.CompanyResponse}},
    openapi_extra=COMPANY_REQUEST_BODY,
)
async def patch_company(
    company_id: str,
    request: Request,
    _claims: dict = Depends(deps.require_bearer_token),
    storage: StorageBase[company_models.Company] = Depends(deps.get_company_storage),
) -> Response:
    """
    id 를 제외한 모든 필드를 요청 본문 값으로 교체합니다 (전체 교체).
    """
    id = parse_company_id(company_id, "PatchCompany")
    company_in = await read_company_request(request, "PatchCompany")
    logger.info("PatchCompany: id=%s request=%s", id, company_in.model_dump())

    company = company_models.new_company(
        id,
        company_in.name,
        company_in.description,
        company_in.amount_of_employees,
        company_in.registered,
        company_in.type,
    )
    check_company(company, "PatchCompany")

    await call_storage("PatchCompany", storage.patch(company))

    logger.info("PatchCompany: changed id=%s", company.id)
    return company_response("Company patched", company)


@router.delete("/{company_id}", summary="회사 삭제", responses={200: {"model": company_schemas.ResponseStatusWithID}})
async def delete_company(
    company_id: str,
    _claims: dict = Depends(deps.require_bearer_token),
    storage: StorageBase[company_models.Company] = Depends(deps.get_company_storage),
) -> Response:
    id = parse_company_id(company_id, "DeleteCompany")
    logger.info("DeleteCompany: id=%s", id)

    await call_storage("DeleteCompany", storage.delete(id))

    logger.info("DeleteCompany: deleted id=%s", id)
    body = company_schemas.ResponseStatusWithID(
        error_code=status.HTTP_200_OK, message="Company deleted", id=str(id)
    )
    return json_response(status.HTTP_200_OK, body)


@router.get("/{company_id}", summary="회사 조회", responses={200: {"model": company_schemas.CompanyResponse}})
async def get_company(
    company_id: str,
    storage: StorageBase[company_models.Company] = Depends(deps.get_company_storage),
) -> Response:
    """
    id 로 회사를 조회합니다. 인증이 필요하지 않습니다.
    """
    id = parse_company_id(company_id, "GetCompany")
    logger.info("GetCompany: id=%s", id)

    company = await call_storage("GetCompany", storage.get(id))

    logger.info("GetCompany: found id=%s", company.id)
    return company_response("Company found", company)
