from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import joinedload

from ..models import Company, Product, Store
from .base import Repository, coerce_id


class ProductRepository(Repository[Product]):
    model = Product
    entity_name = "Product"

    def _eager(self, include_parent: bool, include_children: bool) -> list:
        # Products are leaves; the parent store is needed for store name/code on the DTO.
        return [joinedload(Product.store)] if include_parent else []

    def get_by_codes(self, store_code: int, code: int, *, company_code: int | None = None) -> Optional[Product]:
        query = (
            self._query(self._eager(True, False))
            .join(Product.store)
            .filter(Store.code == store_code, Product.code == code)
        )
        if company_code is not None:
            query = query.join(Store.company).filter(Company.code == company_code)
        return query.order_by(Product.created_at.asc()).first()

    def get_by_store_id(self, store_id) -> list[Product]:
        return (
            self._query(self._eager(True, False))
            .filter(Product.store_id == coerce_id(store_id))
            .order_by(Product.code.asc())
            .all()
        )

    def get_by_company_id(self, company_id) -> list[Product]:
        return (
            self._query(self._eager(True, False))
            .join(Product.store)
            .filter(Store.company_id == coerce_id(company_id))
            .order_by(Store.code.asc(), Product.code.asc())
            .all()
        )

    def count_by_store_id(self, store_id) -> int:
        return self.session.query(Product).filter(Product.store_id == coerce_id(store_id)).count()

    def code_taken(self, code: int, store_id, *, exclude_id=None) -> bool:
        query = self.session.query(Product.id).filter(Product.code == code, Product.store_id == store_id)
        if exclude_id is not None:
            query = query.filter(Product.id != exclude_id)
        return query.first() is not None
