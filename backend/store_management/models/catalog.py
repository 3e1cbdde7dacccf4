from __future__ import annotations

from ..extensions import db
from .base import BaseEntity


class Product(BaseEntity):
    """
    Product master data.

    MULTI-TENANT: products are scoped to stores via store_id. Store belongs
    to a company, so products are transitively company-scoped.

    LOOKUP PATTERN:
    - Code lookup is always store-scoped: (store_id, code) is unique
    - Price is stored as DECIMAL(18,2) and never negative
    """
    __tablename__ = "products"
    __table_args__ = (
        db.UniqueConstraint("code", "store_id", name="uq_products_code_store"),
        db.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        db.Index("ix_products_store_name", "store_id", "name"),
    )

    name = db.Column(db.String(255), nullable=False)
    code = db.Column(db.Integer, nullable=False, index=True)
    description = db.Column(db.String(1000), nullable=True)
    price = db.Column(db.Numeric(18, 2), nullable=False)

    store_id = db.Column(
        db.Uuid,
        db.ForeignKey("stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    store = db.relationship("Store", back_populates="products")

    def __repr__(self) -> str:
        return f"<Product id={self.id} code={self.code} name={self.name!r} store_id={self.store_id}>"
