from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import selectinload

from ..models import Company
from .base import Repository


class CompanyRepository(Repository[Company]):
    model = Company
    entity_name = "Company"

    def _eager(self, include_parent: bool, include_children: bool) -> list:
        # Companies have no parent.
        return [selectinload(Company.stores)] if include_children else []

    def get_by_code(self, code: int, *, include_children: bool = False) -> Optional[Company]:
        return self._query(self._eager(False, include_children)).filter(Company.code == code).first()

    def get_by_name(self, name: str) -> Optional[Company]:
        return self.session.query(Company).filter(Company.name == name).first()

    def get_with_stores(self, company_id) -> Optional[Company]:
        return self.get_by_id(company_id, include_children=True)

    def get_with_stores_by_code(self, code: int) -> Optional[Company]:
        return self.get_by_code(code, include_children=True)

    def code_taken(self, code: int, *, exclude_id=None) -> bool:
        query = self.session.query(Company.id).filter(Company.code == code)
        if exclude_id is not None:
            query = query.filter(Company.id != exclude_id)
        return query.first() is not None
