"""Production managers - WIP batches"""

from backoffice.buisness.production.wip_batch_manager import WipBatchManager
from backoffice.buisness.production.status_validator import WipStatusValidator

__all__ = [
    'WipBatchManager',
    'WipStatusValidator'
]
