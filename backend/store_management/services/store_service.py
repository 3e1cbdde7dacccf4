from __future__ import annotations

import logging

from ..dtos import CreateStoreDto, PatchStoreDto, StoreDto, UpdateStoreDto
from ..errors import ConstraintViolationError, NotFoundError, ValidationError
from ..mappers import store_to_dto
from ..models import Company, Store
from ..repositories import CompanyRepository, StoreRepository
from ..unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class StoreService:
    """
    Stores belong to one company; (code, company) is unique.

    Creation and updates name the owning company by code. The code is
    resolved before the store is touched, so an unknown company code never
    leaves a partial write behind.
    """

    def __init__(self, stores: StoreRepository, companies: CompanyRepository, unit_of_work: UnitOfWork):
        self.stores = stores
        self.companies = companies
        self.unit_of_work = unit_of_work

    def get_all(self) -> list[StoreDto]:
        return [store_to_dto(s) for s in self.stores.get_all()]

    def get_active(self) -> list[StoreDto]:
        return [store_to_dto(s) for s in self.stores.get_active()]

    def get_by_id(self, store_id) -> StoreDto | None:
        store = self.stores.get_by_id(store_id)
        return store_to_dto(store) if store else None

    def get_by_codes(self, company_code: int, store_code: int) -> StoreDto | None:
        store = self.stores.get_by_codes(company_code, store_code)
        return store_to_dto(store) if store else None

    def get_with_products(self, store_id) -> StoreDto | None:
        store = self.stores.get_with_products(store_id)
        return store_to_dto(store, include_products=True) if store else None

    def get_with_products_by_codes(self, company_code: int, store_code: int) -> StoreDto | None:
        store = self.stores.get_by_codes(company_code, store_code, include_children=True)
        return store_to_dto(store, include_products=True) if store else None

    def get_by_company(self, company_id) -> list[StoreDto]:
        return [store_to_dto(s) for s in self.stores.get_by_company_id(company_id)]

    def get_active_by_company(self, company_id) -> list[StoreDto]:
        return [store_to_dto(s) for s in self.stores.get_active_by_company_id(company_id)]

    def get_by_company_code(self, company_code: int) -> list[StoreDto]:
        company = self.companies.get_by_code(company_code)
        if company is None:
            raise NotFoundError("Company", company_code, by="code")
        return self.get_by_company(company.id)

    def exists(self, store_id) -> bool:
        return self.stores.exists(store_id)

    def exists_by_codes(self, company_code: int, store_code: int) -> bool:
        return self.stores.get_by_codes(company_code, store_code) is not None

    def company_exists(self, company_id) -> bool:
        return self.companies.exists(company_id)

    def company_exists_by_code(self, company_code: int) -> bool:
        return self.companies.get_by_code(company_code) is not None

    def create(self, dto: CreateStoreDto) -> StoreDto:
        company = self._resolve_company(dto.company_code)
        self._ensure_code_free(dto.code, company)

        store = Store(
            name=dto.name,
            code=dto.code,
            address=dto.address,
            is_active=dto.is_active,
            company_id=company.id,
        )
        self.stores.add(store)
        self.unit_of_work.commit()

        logger.info("Created store %s (code=%s, company=%s)", store.id, store.code, company.code)
        return store_to_dto(store)

    def update(self, store_id, dto: UpdateStoreDto) -> StoreDto:
        store = self._require(store_id)
        company = self._resolve_company(dto.company_code)
        self._ensure_code_free(dto.code, company, exclude_id=store.id)

        store.name = dto.name
        store.code = dto.code
        store.address = dto.address
        store.is_active = dto.is_active
        store.company_id = company.id

        self.stores.update(store)
        self.unit_of_work.commit()

        logger.info("Updated store %s (code=%s, company=%s)", store.id, store.code, company.code)
        return store_to_dto(store)

    def patch(self, store_id, dto: PatchStoreDto) -> StoreDto:
        store = self._require(store_id)
        fields = dto.provided()

        company_code = fields.pop("company_code", None)
        company = self._resolve_company(company_code) if company_code is not None else store.company

        code = fields.get("code", store.code)
        if code != store.code or company.id != store.company_id:
            self._ensure_code_free(code, company, exclude_id=store.id)

        for key, value in fields.items():
            setattr(store, key, value)
        store.company_id = company.id

        self.stores.update(store)
        self.unit_of_work.commit()

        changed = sorted([*fields, *(["company_code"] if company_code is not None else [])])
        logger.info("Patched store %s fields: %s", store.id, ", ".join(changed))
        return store_to_dto(store)

    def delete(self, store_id) -> None:
        self._delete(self._require(store_id))

    def delete_by_codes(self, company_code: int, store_code: int) -> None:
        store = self.stores.get_by_codes(company_code, store_code)
        if store is None:
            raise NotFoundError("Store", f"{company_code}/{store_code}", by="company/store code")
        self._delete(store)

    def _require(self, store_id) -> Store:
        store = self.stores.get_by_id(store_id)
        if store is None:
            raise NotFoundError("Store", store_id)
        return store

    def _resolve_company(self, company_code: int) -> Company:
        company = self.companies.get_by_code(company_code)
        if company is None:
            logger.warning("Company code %s did not resolve", company_code)
            raise ValidationError(f"Company with code {company_code} not found.")
        return company

    def _ensure_code_free(self, code: int, company: Company, *, exclude_id=None) -> None:
        if self.stores.code_taken(code, company.id, exclude_id=exclude_id):
            logger.warning("Rejected duplicate store code %s for company %s", code, company.code)
            raise ConstraintViolationError(
                f"Store code {code} already exists for company {company.code}.",
                entity="Store",
                key=code,
            )

    def _delete(self, store: Store) -> None:
        store_id, code = store.id, store.code
        self.stores.delete(store_id)
        self.unit_of_work.commit()
        logger.info("Deleted store %s (code=%s) with its products", store_id, code)
