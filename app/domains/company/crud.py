# app/domains/company/crud.py

"""
'company' 도메인의 저장소 포트를 관계형 데이터베이스로 구현한 모듈입니다.

- 모든 구문은 파라미터 바인딩 구문으로 AsyncSession 을 통해 실행합니다.
- 각 구문은 독립된 세션(트랜잭션)에서 실행되며, 행 수 검사에 실패하면 커밋하지 않고 롤백됩니다.
- 드라이버 오류는 INTERNAL 종류의 AppError 로 변환합니다.
"""

import logging
import uuid

from sqlalchemy import delete, insert, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import select

from app.core.crud_base import StorageBase, expect_one_row_affected, expect_single_row
from app.core.database import create_session_factory
from app.core.exceptions import AppError, ErrorKind
from . import models as company_models


logger = logging.getLogger(__name__)


def _driver_error(operation: str, e: Exception) -> AppError:
    logger.error("%s: database error error=%s", operation, e)
    return AppError(ErrorKind.INTERNAL, str(getattr(e, "orig", None) or e))


class CRUDCompany(StorageBase[company_models.Company]):
    def __init__(self, engine: AsyncEngine):
        self.model = company_models.Company
        self.table = company_models.Company.__table__  # type: ignore[attr-defined]
        self.session_factory = create_session_factory(engine)

    def _mutable_values(self, obj: company_models.Company) -> dict:
        return {field: getattr(obj, field) for field in company_models.MUTABLE_FIELDS}

    async def _execute_expect_one(self, statement, operation: str) -> None:
        """변경 구문을 실행하고 정확히 1행이 영향받았을 때만 커밋합니다."""
        try:
            async with self.session_factory() as db:
                result = await db.exec(statement)
                expect_one_row_affected(result.rowcount)
                await db.commit()
        # 범위를 벗어난 정수는 일부 드라이버에서 SQLAlchemy 로 감싸지지 않은 OverflowError 로 올라옵니다.
        except (SQLAlchemyError, OverflowError) as e:
            raise _driver_error(operation, e) from e

    async def create(self, obj: company_models.Company) -> None:
        """새 회사 레코드를 삽입합니다. 기본키 중복 등 제약 위반은 INTERNAL 오류입니다."""
        statement = insert(self.table).values(id=obj.id, **self._mutable_values(obj))
        await self._execute_expect_one(statement, "CreateCompany")

    async def patch(self, obj: company_models.Company) -> None:
        """id 를 제외한 모든 필드를 한 번에 갱신합니다. 대상이 없으면 NOT_FOUND 입니다."""
        statement = (
            update(self.table)
            .where(self.table.c.id == obj.id)
            .values(**self._mutable_values(obj))
        )
        await self._execute_expect_one(statement, "PatchCompany")

    async def delete(self, id: uuid.UUID) -> None:
        statement = delete(self.table).where(self.table.c.id == id)
        await self._execute_expect_one(statement, "DeleteCompany")

    async def get(self, id: uuid.UUID) -> company_models.Company:
        statement = select(self.model).where(self.model.id == id).order_by(self.model.id)
        try:
            async with self.session_factory() as db:
                result = await db.exec(statement)
                rows = result.all()
        except SQLAlchemyError as e:
            raise _driver_error("GetCompany", e) from e

        return expect_single_row(rows, entity="company")
