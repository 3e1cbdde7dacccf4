from __future__ import annotations

from ..extensions import db
from .base import BaseEntity


class Company(BaseEntity):
    """
    Tenant root: every store belongs to exactly one company.

    Company.code is the human-assigned identifier clients address companies
    by; it is unique across the whole system.
    """
    __tablename__ = "companies"

    name = db.Column(db.String(255), nullable=False)
    code = db.Column(db.Integer, nullable=False, unique=True, index=True)

    # Deletion of stores (and their products) is left to ON DELETE CASCADE.
    stores = db.relationship(
        "Store",
        back_populates="company",
        order_by="Store.code",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"<Company id={self.id} code={self.code} name={self.name!r}>"


class Store(BaseEntity):
    """
    Store within a company.

    MULTI-TENANT: store codes are unique within a company, not globally.
    """
    __tablename__ = "stores"
    __table_args__ = (
        db.UniqueConstraint("code", "company_id", name="uq_stores_code_company"),
        db.Index("ix_stores_company_active", "company_id", "is_active"),
    )

    name = db.Column(db.String(255), nullable=False)
    code = db.Column(db.Integer, nullable=False, index=True)
    address = db.Column(db.String(500), nullable=True)

    company_id = db.Column(
        db.Uuid,
        db.ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    company = db.relationship("Company", back_populates="stores")
    products = db.relationship(
        "Product",
        back_populates="store",
        order_by="Product.code",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"<Store id={self.id} code={self.code} company_id={self.company_id}>"
