"""
Transfer objects exchanged with the presentation layer.

Read DTOs (CompanyDto, StoreDto, ProductDto) are built by mappers.py and
carry denormalized parent names/codes. Write DTOs come in three shapes:

- Create*: parent addressed by code, optional fields default
- Update*: full replace; an omitted optional field resets it to None
- Patch*:  every field defaults to UNSET; only provided() fields are written

Every write DTO runs its fields through validation.validate_payload() on
construction; from_payload(dict) additionally rejects unknown keys.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import Column, Integer

from .models import Company, Product, Store
from .time_utils import to_utc_z
from .validation import (
    ModelValidationPolicy,
    enforce_rules_product,
    validate_payload,
)


class _Unset:
    """Marker for a patch field the client did not send."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


# ---------------------------------------------------------------------------
# Read DTOs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProductDto:
    id: uuid.UUID
    name: str
    code: int
    description: Optional[str]
    price: Decimal
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime]
    store_id: uuid.UUID
    store_name: str
    store_code: int

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "code": self.code,
            "description": self.description,
            "price": f"{self.price:.2f}",
            "is_active": self.is_active,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
            "store_id": str(self.store_id),
            "store_name": self.store_name,
            "store_code": self.store_code,
        }


@dataclass(frozen=True)
class StoreDto:
    id: uuid.UUID
    name: str
    code: int
    address: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime]
    company_id: uuid.UUID
    company_name: str
    company_code: int
    products: Optional[list[ProductDto]] = None

    def to_dict(self) -> dict:
        data = {
            "id": str(self.id),
            "name": self.name,
            "code": self.code,
            "address": self.address,
            "is_active": self.is_active,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
            "company_id": str(self.company_id),
            "company_name": self.company_name,
            "company_code": self.company_code,
        }
        if self.products is not None:
            data["products"] = [p.to_dict() for p in self.products]
        return data


@dataclass(frozen=True)
class CompanyDto:
    id: uuid.UUID
    name: str
    code: int
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime]
    stores: Optional[list[StoreDto]] = None

    def to_dict(self) -> dict:
        data = {
            "id": str(self.id),
            "name": self.name,
            "code": self.code,
            "is_active": self.is_active,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
        if self.stores is not None:
            data["stores"] = [s.to_dict() for s in self.stores]
        return data


# ---------------------------------------------------------------------------
# Validation policies
# ---------------------------------------------------------------------------

_COMPANY_CODE_REF = Column("company_code", Integer, nullable=False)
_OPTIONAL_COMPANY_CODE_REF = Column("company_code", Integer, nullable=True)
_STORE_CODE_REF = Column("store_code", Integer, nullable=False)

COMPANY_CREATE_POLICY = ModelValidationPolicy(
    writable_fields={"name", "code", "is_active"},
    required_on_create={"name", "code"},
)
COMPANY_UPDATE_POLICY = ModelValidationPolicy(
    writable_fields=COMPANY_CREATE_POLICY.writable_fields,
    required_on_create={"name", "code", "is_active"},
)

STORE_CREATE_POLICY = ModelValidationPolicy(
    writable_fields={"name", "code", "address", "is_active", "company_code"},
    required_on_create={"name", "code", "company_code"},
    reference_fields={"company_code": _COMPANY_CODE_REF},
)
STORE_UPDATE_POLICY = ModelValidationPolicy(
    writable_fields=STORE_CREATE_POLICY.writable_fields,
    required_on_create={"name", "code", "is_active", "company_code"},
    reference_fields=STORE_CREATE_POLICY.reference_fields,
)

PRODUCT_CREATE_POLICY = ModelValidationPolicy(
    writable_fields={"name", "code", "description", "price", "is_active", "store_code", "company_code"},
    required_on_create={"name", "code", "price", "store_code"},
    reference_fields={"store_code": _STORE_CODE_REF, "company_code": _OPTIONAL_COMPANY_CODE_REF},
)
PRODUCT_UPDATE_POLICY = ModelValidationPolicy(
    writable_fields=PRODUCT_CREATE_POLICY.writable_fields,
    required_on_create={"name", "code", "price", "is_active", "store_code"},
    reference_fields=PRODUCT_CREATE_POLICY.reference_fields,
)


class _WriteDto:
    model = None
    policy: ModelValidationPolicy
    partial = False

    @classmethod
    def from_payload(cls, payload: dict):
        # Rejects unknown keys before they reach the dataclass constructor.
        patch = validate_payload(model=cls.model, payload=payload, policy=cls.policy, partial=cls.partial)
        return cls(**patch)

    def __post_init__(self):
        # Direct construction gets the same column checks as from_payload().
        cleaned = validate_payload(
            model=self.model, payload=self.provided(), policy=self.policy, partial=self.partial
        )
        for key, value in cleaned.items():
            setattr(self, key, value)
        self._enforce_rules(cleaned)

    def _enforce_rules(self, cleaned: dict) -> None:
        pass

    def provided(self) -> dict:
        """Fields that carry a value (for Patch DTOs: the ones the client sent)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


class _ProductWriteDto(_WriteDto):
    model = Product

    def _enforce_rules(self, cleaned: dict) -> None:
        enforce_rules_product(cleaned)


# ---------------------------------------------------------------------------
# Company
# ---------------------------------------------------------------------------

@dataclass
class CreateCompanyDto(_WriteDto):
    name: str
    code: int
    is_active: bool = True

    model = Company
    policy = COMPANY_CREATE_POLICY


@dataclass
class UpdateCompanyDto(_WriteDto):
    name: str
    code: int
    is_active: bool

    model = Company
    policy = COMPANY_UPDATE_POLICY


@dataclass
class PatchCompanyDto(_WriteDto):
    name: str = UNSET
    code: int = UNSET
    is_active: bool = UNSET

    model = Company
    policy = COMPANY_UPDATE_POLICY
    partial = True


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

@dataclass
class CreateStoreDto(_WriteDto):
    name: str
    code: int
    company_code: int
    address: Optional[str] = None
    is_active: bool = True

    model = Store
    policy = STORE_CREATE_POLICY


@dataclass
class UpdateStoreDto(_WriteDto):
    name: str
    code: int
    is_active: bool
    company_code: int
    address: Optional[str] = None

    model = Store
    policy = STORE_UPDATE_POLICY


@dataclass
class PatchStoreDto(_WriteDto):
    name: str = UNSET
    code: int = UNSET
    address: Optional[str] = UNSET
    is_active: bool = UNSET
    company_code: int = UNSET

    model = Store
    policy = STORE_UPDATE_POLICY
    partial = True


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------

@dataclass
class CreateProductDto(_ProductWriteDto):
    name: str
    code: int
    price: Decimal
    store_code: int
    description: Optional[str] = None
    is_active: bool = True
    company_code: Optional[int] = None

    policy = PRODUCT_CREATE_POLICY


@dataclass
class UpdateProductDto(_ProductWriteDto):
    name: str
    code: int
    price: Decimal
    is_active: bool
    store_code: int
    description: Optional[str] = None
    company_code: Optional[int] = None

    policy = PRODUCT_UPDATE_POLICY


@dataclass
class PatchProductDto(_ProductWriteDto):
    name: str = UNSET
    code: int = UNSET
    description: Optional[str] = UNSET
    price: Decimal = UNSET
    is_active: bool = UNSET
    store_code: int = UNSET
    company_code: Optional[int] = UNSET

    policy = PRODUCT_UPDATE_POLICY
    partial = True
