# backend/store_management/services/product_service.py
"""
Product Service

MULTI-TENANT: products live in a store, which lives in a company.
- Writes name the target store by store_code; company_code is only needed
  when that store code exists under more than one company
- (code, store) is unique; the pre-check here is optimistic and the
  unique index stays the final authority
- Prices are Decimal with two fractional digits and never negative
"""
from __future__ import annotations

import json
import logging

from ..dtos import CreateProductDto, PatchProductDto, ProductDto, UpdateProductDto
from ..errors import ConstraintViolationError, NotFoundError, ValidationError
from ..mappers import product_to_dto
from ..models import Product, Store
from ..repositories import ProductRepository, StoreRepository
from ..unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, products: ProductRepository, stores: StoreRepository, unit_of_work: UnitOfWork):
        self.products = products
        self.stores = stores
        self.unit_of_work = unit_of_work

    def get_all(self) -> list[ProductDto]:
        return [product_to_dto(p) for p in self.products.get_all()]

    def get_active(self) -> list[ProductDto]:
        return [product_to_dto(p) for p in self.products.get_active()]

    def get_by_id(self, product_id) -> ProductDto | None:
        product = self.products.get_by_id(product_id)
        return product_to_dto(product) if product else None

    def get_by_codes(self, store_code: int, code: int, *, company_code: int | None = None) -> ProductDto | None:
        product = self.products.get_by_codes(store_code, code, company_code=company_code)
        return product_to_dto(product) if product else None

    def get_by_store(self, store_id) -> list[ProductDto]:
        return [product_to_dto(p) for p in self.products.get_by_store_id(store_id)]

    def get_by_store_code(self, store_code: int, *, company_code: int | None = None) -> list[ProductDto]:
        if company_code is not None:
            stores = [s for s in [self.stores.get_by_codes(company_code, store_code)] if s is not None]
        else:
            stores = self.stores.find_by_code(store_code)
        if not stores:
            raise NotFoundError("Store", store_code, by="code")

        result: list[ProductDto] = []
        for store in stores:
            result.extend(self.get_by_store(store.id))
        return result

    def get_by_company(self, company_id) -> list[ProductDto]:
        return [product_to_dto(p) for p in self.products.get_by_company_id(company_id)]

    def get_products_as_json(self, company_id) -> str:
        """JSON array of every product under a company's stores ("[]" when none)."""
        return json.dumps([dto.to_dict() for dto in self.get_by_company(company_id)])

    def count(self) -> int:
        return self.products.count()

    def count_by_store(self, store_id) -> int:
        return self.products.count_by_store_id(store_id)

    def exists(self, product_id) -> bool:
        return self.products.exists(product_id)

    def exists_by_codes(self, store_code: int, code: int, *, company_code: int | None = None) -> bool:
        return self.products.get_by_codes(store_code, code, company_code=company_code) is not None

    def store_exists(self, store_id) -> bool:
        return self.stores.exists(store_id)

    def store_exists_by_code(self, store_code: int) -> bool:
        return self.stores.get_by_code(store_code) is not None

    def create(self, dto: CreateProductDto) -> ProductDto:
        store = self._resolve_store(dto.store_code, dto.company_code)
        self._ensure_code_free(dto.code, store)

        product = Product(
            name=dto.name,
            code=dto.code,
            description=dto.description,
            price=dto.price,
            is_active=dto.is_active,
            store_id=store.id,
        )
        self.products.add(product)
        self.unit_of_work.commit()

        logger.info("Created product %s (code=%s, store=%s)", product.id, product.code, store.code)
        return product_to_dto(product)

    def update(self, product_id, dto: UpdateProductDto) -> ProductDto:
        product = self._require(product_id)
        store = self._resolve_store(dto.store_code, dto.company_code)
        self._ensure_code_free(dto.code, store, exclude_id=product.id)

        product.name = dto.name
        product.code = dto.code
        product.description = dto.description
        product.price = dto.price
        product.is_active = dto.is_active
        product.store_id = store.id

        self.products.update(product)
        self.unit_of_work.commit()

        logger.info("Updated product %s (code=%s, store=%s)", product.id, product.code, store.code)
        return product_to_dto(product)

    def patch(self, product_id, dto: PatchProductDto) -> ProductDto:
        product = self._require(product_id)
        fields = dto.provided()

        store_code = fields.pop("store_code", None)
        company_code = fields.pop("company_code", None)
        if company_code is None and store_code == product.store.code:
            # Re-sending the current store code is not a move.
            store = product.store
        elif store_code is not None or company_code is not None:
            store = self._resolve_store(
                store_code if store_code is not None else product.store.code,
                company_code,
            )
        else:
            store = product.store

        code = fields.get("code", product.code)
        if code != product.code or store.id != product.store_id:
            self._ensure_code_free(code, store, exclude_id=product.id)

        for key, value in fields.items():
            setattr(product, key, value)
        product.store_id = store.id

        self.products.update(product)
        self.unit_of_work.commit()

        logger.info("Patched product %s fields: %s", product.id, ", ".join(sorted(dto.provided())))
        return product_to_dto(product)

    def delete(self, product_id) -> None:
        self._delete(self._require(product_id))

    def delete_by_codes(self, store_code: int, code: int, *, company_code: int | None = None) -> None:
        product = self.products.get_by_codes(store_code, code, company_code=company_code)
        if product is None:
            raise NotFoundError("Product", f"{store_code}/{code}", by="store/product code")
        self._delete(product)

    def _require(self, product_id) -> Product:
        product = self.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    def _resolve_store(self, store_code: int, company_code: int | None) -> Store:
        if company_code is not None:
            store = self.stores.get_by_codes(company_code, store_code)
            if store is None:
                logger.warning("Store code %s did not resolve in company %s", store_code, company_code)
                raise ValidationError(f"Store with code {store_code} not found for company {company_code}.")
            return store

        matches = self.stores.find_by_code(store_code)
        if not matches:
            logger.warning("Store code %s did not resolve", store_code)
            raise ValidationError(f"Store with code {store_code} not found.")
        if len(matches) > 1:
            raise ValidationError(
                f"Store code {store_code} exists in {len(matches)} companies; company_code is required."
            )
        return matches[0]

    def _ensure_code_free(self, code: int, store: Store, *, exclude_id=None) -> None:
        if self.products.code_taken(code, store.id, exclude_id=exclude_id):
            logger.warning("Rejected duplicate product code %s for store %s", code, store.code)
            raise ConstraintViolationError(
                f"Product code {code} already exists for store {store.code}.",
                entity="Product",
                key=code,
            )

    def _delete(self, product: Product) -> None:
        product_id, code = product.id, product.code
        self.products.delete(product_id)
        self.unit_of_work.commit()
        logger.info("Deleted product %s (code=%s)", product_id, code)
