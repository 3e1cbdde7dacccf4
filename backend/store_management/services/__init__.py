from .company_service import CompanyService
from .store_service import StoreService
from .product_service import ProductService

__all__ = ['CompanyService', 'StoreService', 'ProductService']
