from .base import Repository, coerce_id
from .company_repository import CompanyRepository
from .store_repository import StoreRepository
from .product_repository import ProductRepository

__all__ = [
    'Repository', 'coerce_id',
    'CompanyRepository', 'StoreRepository', 'ProductRepository',
]
