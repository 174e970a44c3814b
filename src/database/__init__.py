"""Database package: order and product models and their repositories."""

from .connection import Database
from .models import Base, Order, Product
from .orders import OrderRepository
from .products import ProductRepository
from .repository import CrudRepository, Page, SQLAlchemyRepository

__all__ = [
    "Base",
    "CrudRepository",
    "Database",
    "Order",
    "OrderRepository",
    "Page",
    "Product",
    "ProductRepository",
    "SQLAlchemyRepository",
]
