# app/core/crud_base.py

"""
저장소 포트(Storage Port): 비즈니스 계층이 의존하는 추상 CRUD 계약 모듈입니다.
특정 데이터베이스 엔진과 무관하며, 모든 메서드는 비동기(async)입니다.

변경 계열 연산(create/patch/delete)은 구문 실행 직후 영향받은 행 수를 검사하여
정확히 1행이 아닐 경우 실패로 처리합니다. 이 검사가 patch/delete 대상이
존재하지 않음을 감지하는 유일한 방법입니다.
"""

from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar
import uuid

from sqlmodel import SQLModel

from app.core.exceptions import AppError, ErrorKind

ModelType = TypeVar("ModelType", bound=SQLModel)
RowType = TypeVar("RowType")


def expect_one_row_affected(rowcount: int) -> None:
    """
    변경 구문이 정확히 1행에 영향을 주었는지 확인합니다.
    0행이면 NOT_FOUND, 그 외의 값이면 INTERNAL 오류를 발생시킵니다.
    """
    if rowcount == 1:
        return
    message = f"expected to affect 1 row, affected {rowcount}"
    if rowcount == 0:
        raise AppError(ErrorKind.NOT_FOUND, message)
    raise AppError(ErrorKind.INTERNAL, message)


def expect_single_row(rows: Sequence[RowType], *, entity: str = "record") -> RowType:
    """
    조회 결과가 정확히 1행인지 확인하고 해당 행을 반환합니다.
    (기본키 제약으로 2행 이상은 발생할 수 없지만 방어적으로 검사합니다.)
    """
    if len(rows) == 0:
        raise AppError(ErrorKind.NOT_FOUND, f"{entity} not found")
    if len(rows) > 1:
        raise AppError(ErrorKind.AMBIGUOUS_RESULT, f"more than one {entity} found")
    return rows[0]


class StorageBase(ABC, Generic[ModelType]):
    """
    단일 리소스에 대한 CRUD 계약을 정의하는 추상 기본 클래스입니다.
    모든 실패는 `AppError` 로 전달되며, 호출자는 `kind` 로 분기합니다.
    """

    @abstractmethod
    async def create(self, obj: ModelType) -> None:
        """obj.id 를 키로 새 레코드를 삽입합니다."""

    @abstractmethod
    async def patch(self, obj: ModelType) -> None:
        """obj.id 에 해당하는 레코드의 변경 가능한 필드를 모두 갱신합니다."""

    @abstractmethod
    async def delete(self, id: uuid.UUID) -> None:
        """id 에 해당하는 레코드를 삭제합니다."""

    @abstractmethod
    async def get(self, id: uuid.UUID) -> ModelType:
        """id 에 해당하는 단일 레코드를 반환합니다."""
