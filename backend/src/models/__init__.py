"""SQLAlchemy models for the bakery operations backend"""

from .base import Base, TenantScoped, GlobalTable
from .tenant import Tenant
from .user import User
from .category import Category
from .supplier import Supplier
from .storage_location import StorageLocation
from .quality_status import QualityStatus
from .material import Material
from .product import Product
from .recipe import Recipe
from .production_run import ProductionRun
from .customer import Customer
from .customer_order import CustomerOrder
from .reference import Permission, UnitOfMeasure

__all__ = [
    "Base",
    "TenantScoped",
    "GlobalTable",
    "Tenant",
    "User",
    "Category",
    "Supplier",
    "StorageLocation",
    "QualityStatus",
    "Material",
    "Product",
    "Recipe",
    "ProductionRun",
    "Customer",
    "CustomerOrder",
    "Permission",
    "UnitOfMeasure",
]
