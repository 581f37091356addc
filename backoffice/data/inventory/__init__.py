"""Inventory models - CRUD only, no business logic"""

from backoffice.data.inventory.product import Product
from backoffice.data.inventory.stock_movement import StockMovement

__all__ = [
    'Product',
    'StockMovement'
]
