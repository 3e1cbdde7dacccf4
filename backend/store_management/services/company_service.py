# backend/store_management/services/company_service.py
"""
Company Service

Companies are the tenant root and are addressed by a globally unique code.
Deleting a company removes its stores and their products through the
database's ON DELETE CASCADE.
"""
from __future__ import annotations

import logging

from ..dtos import CompanyDto, CreateCompanyDto, PatchCompanyDto, UpdateCompanyDto
from ..errors import ConstraintViolationError, NotFoundError
from ..mappers import company_to_dto
from ..models import Company
from ..repositories import CompanyRepository
from ..unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CompanyService:
    def __init__(self, companies: CompanyRepository, unit_of_work: UnitOfWork):
        self.companies = companies
        self.unit_of_work = unit_of_work

    # -- reads -------------------------------------------------------------

    def get_all(self) -> list[CompanyDto]:
        return [company_to_dto(c) for c in self.companies.get_all()]

    def get_active(self) -> list[CompanyDto]:
        return [company_to_dto(c) for c in self.companies.get_active()]

    def get_by_id(self, company_id) -> CompanyDto | None:
        company = self.companies.get_by_id(company_id)
        return company_to_dto(company) if company else None

    def get_by_code(self, code: int) -> CompanyDto | None:
        company = self.companies.get_by_code(code)
        return company_to_dto(company) if company else None

    def get_with_stores(self, company_id) -> CompanyDto | None:
        company = self.companies.get_with_stores(company_id)
        return company_to_dto(company, include_stores=True) if company else None

    def get_with_stores_by_code(self, code: int) -> CompanyDto | None:
        company = self.companies.get_with_stores_by_code(code)
        return company_to_dto(company, include_stores=True) if company else None

    def exists(self, company_id) -> bool:
        return self.companies.exists(company_id)

    def exists_by_code(self, code: int) -> bool:
        return self.companies.get_by_code(code) is not None

    # -- writes ------------------------------------------------------------

    def create(self, dto: CreateCompanyDto) -> CompanyDto:
        self._ensure_code_free(dto.code)

        company = Company(name=dto.name, code=dto.code, is_active=dto.is_active)
        self.companies.add(company)
        self.unit_of_work.commit()

        logger.info("Created company %s (code=%s)", company.id, company.code)
        return company_to_dto(company)

    def update(self, company_id, dto: UpdateCompanyDto) -> CompanyDto:
        return self._update(self._require(company_id), dto)

    def update_by_code(self, code: int, dto: UpdateCompanyDto) -> CompanyDto:
        return self._update(self._require_code(code), dto)

    def patch(self, company_id, dto: PatchCompanyDto) -> CompanyDto:
        return self._patch(self._require(company_id), dto)

    def patch_by_code(self, code: int, dto: PatchCompanyDto) -> CompanyDto:
        return self._patch(self._require_code(code), dto)

    def delete(self, company_id) -> None:
        self._delete(self._require(company_id))

    def delete_by_code(self, code: int) -> None:
        self._delete(self._require_code(code))

    # -- helpers -----------------------------------------------------------

    def _require(self, company_id) -> Company:
        company = self.companies.get_by_id(company_id)
        if company is None:
            raise NotFoundError("Company", company_id)
        return company

    def _require_code(self, code: int) -> Company:
        company = self.companies.get_by_code(code)
        if company is None:
            raise NotFoundError("Company", code, by="code")
        return company

    def _ensure_code_free(self, code: int, *, exclude_id=None) -> None:
        if self.companies.code_taken(code, exclude_id=exclude_id):
            logger.warning("Rejected duplicate company code %s", code)
            raise ConstraintViolationError(
                f"Company code {code} already exists.", entity="Company", key=code
            )

    def _update(self, company: Company, dto: UpdateCompanyDto) -> CompanyDto:
        self._ensure_code_free(dto.code, exclude_id=company.id)

        company.name = dto.name
        company.code = dto.code
        company.is_active = dto.is_active

        self.companies.update(company)
        self.unit_of_work.commit()

        logger.info("Updated company %s (code=%s)", company.id, company.code)
        return company_to_dto(company)

    def _patch(self, company: Company, dto: PatchCompanyDto) -> CompanyDto:
        fields = dto.provided()
        if "code" in fields and fields["code"] != company.code:
            self._ensure_code_free(fields["code"], exclude_id=company.id)

        for key, value in fields.items():
            setattr(company, key, value)

        self.companies.update(company)
        self.unit_of_work.commit()

        logger.info("Patched company %s fields: %s", company.id, ", ".join(sorted(fields)))
        return company_to_dto(company)

    def _delete(self, company: Company) -> None:
        company_id, code = company.id, company.code
        self.companies.delete(company_id)
        self.unit_of_work.commit()
        logger.info("Deleted company %s (code=%s) with its stores and products", company_id, code)
