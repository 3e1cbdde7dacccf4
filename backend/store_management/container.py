"""
Composition root: builds repositories, the unit of work and services for one
session. There is no global registry; callers hold on to the returned
ServiceContainer for the length of a request (or CLI command).
"""
from __future__ import annotations

from dataclasses import dataclass

from .extensions import db
from .repositories import CompanyRepository, ProductRepository, StoreRepository
from .services import CompanyService, ProductService, StoreService
from .unit_of_work import UnitOfWork


@dataclass(frozen=True)
class ServiceContainer:
    unit_of_work: UnitOfWork
    companies: CompanyService
    stores: StoreService
    products: ProductService


def build_services(session=None) -> ServiceContainer:
    """Wire everything against `session` (defaults to the Flask-SQLAlchemy scoped session)."""
    session = session if session is not None else db.session

    company_repository = CompanyRepository(session)
    store_repository = StoreRepository(session)
    product_repository = ProductRepository(session)
    unit_of_work = UnitOfWork(session)

    return ServiceContainer(
        unit_of_work=unit_of_work,
        companies=CompanyService(company_repository, unit_of_work),
        stores=StoreService(store_repository, company_repository, unit_of_work),
        products=ProductService(product_repository, store_repository, unit_of_work),
    )
