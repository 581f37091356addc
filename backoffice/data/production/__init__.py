"""Production (WIP) models - CRUD only, no business logic"""

from backoffice.data.production.wip_batch import WipBatch
from backoffice.data.production.wip_batch_item import WipBatchItem

__all__ = [
    'WipBatch',
    'WipBatchItem'
]
