from .base import BaseEntity
from .tenancy import Company, Store
from .catalog import Product

__all__ = [
    'BaseEntity',
    'Company', 'Store',
    'Product',
]
