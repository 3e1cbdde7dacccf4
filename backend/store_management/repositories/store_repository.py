from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import joinedload, selectinload

from ..models import Company, Store
from .base import Repository, coerce_id


class StoreRepository(Repository[Store]):
    model = Store
    entity_name = "Store"

    def _eager(self, include_parent: bool, include_children: bool) -> list:
        options = []
        if include_parent:
            options.append(joinedload(Store.company))
        if include_children:
            options.append(selectinload(Store.products))
        return options

    def get_by_code(self, code: int) -> Optional[Store]:
        """First store carrying this code; store codes repeat across companies, see find_by_code()."""
        return (
            self._query(self._eager(True, False))
            .filter(Store.code == code)
            .order_by(Store.created_at.asc())
            .first()
        )

    def find_by_code(self, code: int) -> list[Store]:
        return (
            self._query(self._eager(True, False))
            .filter(Store.code == code)
            .order_by(Store.created_at.asc())
            .all()
        )

    def get_by_codes(self, company_code: int, store_code: int, *, include_children: bool = False) -> Optional[Store]:
        return (
            self._query(self._eager(True, include_children))
            .join(Store.company)
            .filter(Company.code == company_code, Store.code == store_code)
            .first()
        )

    def get_by_company_id(self, company_id) -> list[Store]:
        return (
            self._query(self._eager(True, False))
            .filter(Store.company_id == coerce_id(company_id))
            .order_by(Store.code.asc())
            .all()
        )

    def get_active_by_company_id(self, company_id) -> list[Store]:
        return (
            self._query(self._eager(True, False))
            .filter(Store.company_id == coerce_id(company_id), Store.is_active.is_(True))
            .order_by(Store.code.asc())
            .all()
        )

    def get_with_products(self, store_id) -> Optional[Store]:
        return self.get_by_id(store_id, include_children=True)

    def code_taken(self, code: int, company_id, *, exclude_id=None) -> bool:
        query = self.session.query(Store.id).filter(Store.code == code, Store.company_id == company_id)
        if exclude_id is not None:
            query = query.filter(Store.id != exclude_id)
        return query.first() is not None
