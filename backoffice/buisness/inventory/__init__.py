"""
Inventory business layer.

All quantity changes go through the ledger; the catalog owns product metadata.
"""

from backoffice.buisness.inventory.ledger import InventoryLedger
from backoffice.buisness.inventory.product_catalog import ProductCatalog

__all__ = [
    'InventoryLedger',
    'ProductCatalog'
]
