"""
Inventory Services
Read-only inventory reports and movement history.
"""

from .inventory_report_service import InventoryReportService
from .inventory_movement_service import InventoryMovementService

__all__ = [
    'InventoryReportService',
    'InventoryMovementService',
]
