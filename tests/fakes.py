# tests/fakes.py

"""
테스트용 저장소 포트 구현체입니다.
관계형 어댑터와 동일한 계약(행 수 검사, 오류 종류)을 메모리 상에서 흉내냅니다.
"""

from typing import Dict
import uuid

from app.core.crud_base import StorageBase, expect_one_row_affected, expect_single_row
from app.core.exceptions import AppError, ErrorKind
from app.domains.company.models import Company, MUTABLE_FIELDS


class InMemoryCompanyStorage(StorageBase[Company]):
    def __init__(self):
        self.rows: Dict[uuid.UUID, Company] = {}

    @staticmethod
    def _copy(obj: Company) -> Company:
        return Company(**obj.model_dump())

    async def create(self, obj: Company) -> None:
        if obj.id in self.rows:
            raise AppError(ErrorKind.INTERNAL, f"duplicate key value violates unique constraint (id={obj.id})")
        self.rows[obj.id] = self._copy(obj)
        expect_one_row_affected(1)

    async def patch(self, obj: Company) -> None:
        row = self.rows.get(obj.id)
        expect_one_row_affected(0 if row is None else 1)
        for field in MUTABLE_FIELDS:
            setattr(row, field, getattr(obj, field))

    async def delete(self, id: uuid.UUID) -> None:
        expect_one_row_affected(1 if self.rows.pop(id, None) is not None else 0)

    async def get(self, id: uuid.UUID) -> Company:
        matches = [row for key, row in self.rows.items() if key == id]
        return self._copy(expect_single_row(matches, entity="company"))
