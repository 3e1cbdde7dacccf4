# Overview: entity -> DTO projection, denormalizing parent names and codes.

from __future__ import annotations

from .dtos import CompanyDto, ProductDto, StoreDto
from .models import Company, Product, Store


def product_to_dto(product: Product) -> ProductDto:
    store = product.store
    return ProductDto(
        id=product.id,
        name=product.name,
        code=product.code,
        description=product.description,
        price=product.price,
        is_active=product.is_active,
        created_at=product.created_at,
        updated_at=product.updated_at,
        store_id=product.store_id,
        store_name=store.name if store is not None else "",
        store_code=store.code if store is not None else 0,
    )


def store_to_dto(store: Store, *, include_products: bool = False) -> StoreDto:
    company = store.company
    return StoreDto(
        id=store.id,
        name=store.name,
        code=store.code,
        address=store.address,
        is_active=store.is_active,
        created_at=store.created_at,
        updated_at=store.updated_at,
        company_id=store.company_id,
        company_name=company.name if company is not None else "",
        company_code=company.code if company is not None else 0,
        products=[product_to_dto(p) for p in store.products] if include_products else None,
    )


def company_to_dto(company: Company, *, include_stores: bool = False) -> CompanyDto:
    return CompanyDto(
        id=company.id,
        name=company.name,
        code=company.code,
        is_active=company.is_active,
        created_at=company.created_at,
        updated_at=company.updated_at,
        stores=[store_to_dto(s) for s in company.stores] if include_stores else None,
    )
