"""
Inventory Report Service
Stock valuation per product plus totals.
"""

from typing import Any, Dict, List, Optional

from backoffice.data.core.store import Store
from backoffice.data.inventory.product import Product


class InventoryReportService:
    """
    Service for inventory valuation data.

    Provides methods for:
    - Per-product rows with total_value = quantity * price
    - Summary totals across the catalog
    """

    @staticmethod
    def get_report_rows(store: Optional[Store] = None) -> List[Dict[str, Any]]:
        store = store or Store()
        rows = []
        for product in store.products.list(order_by=Product.product_code):
            row = product.to_dict(include_audit_fields=False)
            row['total_value'] = product.total_value
            rows.append(row)
        return rows

    @staticmethod
    def get_report(store: Optional[Store] = None) -> Dict[str, Any]:
        """
        Get the full inventory report.

        Returns:
            {"products": [...], "summary": {"total_products", "total_inventory_value"}}
        """
        rows = InventoryReportService.get_report_rows(store)
        return {
            'products': rows,
            'summary': {
                'total_products': len(rows),
                'total_inventory_value': round(sum(row['total_value'] for row in rows), 2),
            },
        }
