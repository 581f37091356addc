"""
Inventory Movement Service
Read-only movement history for traceability.
"""

from typing import Any, Dict, List, Optional

from backoffice.data.core.store import Store
from backoffice.data.inventory.stock_movement import StockMovement


class InventoryMovementService:
    """Service for stock movement history"""

    @staticmethod
    def get_movement_history(
        product_code: Optional[str] = None,
        movement_type: Optional[str] = None,
        limit: Optional[int] = None,
        store: Optional[Store] = None
    ) -> List[StockMovement]:
        """
        Get movement history, most recent first.

        Args:
            product_code: Optional product filter
            movement_type: Optional type filter (Initial, Adjustment, WipInput, ...)
            limit: Optional limit on number of results
        """
        store = store or Store()
        filters = {}
        if product_code:
            filters['product_code'] = product_code
        if movement_type:
            filters['movement_type'] = movement_type

        movements = store.movements.list(
            order_by=[StockMovement.movement_date.desc(), StockMovement.id.desc()],
            **filters
        )
        if limit:
            movements = movements[:limit]
        return movements

    @staticmethod
    def list_movements(
        product_code: Optional[str] = None,
        movement_type: Optional[str] = None,
        limit: Optional[int] = None,
        store: Optional[Store] = None
    ) -> List[Dict[str, Any]]:
        """Movement history as dictionaries, each with the product's current name (None once deleted)."""
        store = store or Store()
        names = {}
        result = []
        history = InventoryMovementService.get_movement_history(
            product_code, movement_type, limit, store=store
        )
        for movement in history:
            if movement.product_code not in names:
                product = store.products.find_by_key(movement.product_code)
                names[movement.product_code] = product.name if product else None
            row = movement.to_dict(include_audit_fields=False)
            row['product_name'] = names[movement.product_code]
            result.append(row)
        return result
