"""
WipBatchManager - Business logic for production batches

Responsibilities:
- Validate batch payloads
- Deduct raw materials and create the batch record in one transaction
- Record actual outputs on completion and credit them to inventory
"""

from __future__ import annotations

from backoffice.buisness.core.errors import (
    ConflictError,
    InvalidTransitionError,
    MaterialNotFoundError,
    NotFoundError,
)
from backoffice.buisness.core.validation import (
    optional_text,
    parse_quantity_items,
    parse_timestamp,
    require_text,
)
from backoffice.buisness.inventory.ledger import InventoryLedger
from backoffice.buisness.production.status_validator import WipStatusValidator
from backoffice.data.core.store import Store
from backoffice.data.core.timestamped_base import utc_now
from backoffice.data.inventory.stock_movement import StockMovement
from backoffice.data.production.wip_batch import WipBatch
from backoffice.data.production.wip_batch_item import WipBatchItem
from backoffice.logger import get_logger

logger = get_logger("backoffice.buisness.production.wip_batch_manager")

WIP_OUTPUT_DETAILS = {
    "description": "Auto-generated from WIP completion",
    "price": 0.0,
    "weight": 0.0,
}


class WipBatchManager:
    """Handles the planned -> in_progress -> completed batch workflow"""

    def __init__(self, store: Store | None = None, ledger: InventoryLedger | None = None):
        self.store = store or Store()
        self.ledger = ledger or InventoryLedger(self.store)

    def list_batches(self, status: str | None = None) -> list[WipBatch]:
        filters = {"status": status} if status else {}
        return self.store.batches.list(order_by=WipBatch.start_date.desc(), **filters)

    def get_batch(self, batch_number: str) -> WipBatch:
        batch = self.store.batches.find_by_key(batch_number)
        if batch is None:
            raise NotFoundError(f"WIP batch '{batch_number}' not found")
        return batch

    @staticmethod
    def _replace_items(batch: WipBatch, role: str, entries) -> None:
        batch.items = [item for item in batch.items if item.role != role] + [
            WipBatchItem(role=role, line_number=index, product_code=code, quantity=quantity)
            for index, (code, quantity) in enumerate(entries, start=1)
        ]

    def create_batch(self, batch_number, raw_materials, output, status, start_date, notes=None) -> WipBatch:
        """
        Create a batch and consume its raw materials.

        Args:
            batch_number: Unique batch identifier
            raw_materials: Non-empty list of {product_code, quantity > 0}
            output: Expected outputs (may be empty), same shape
            status: Initial status, usually 'in_progress'
            start_date: ISO-8601 timestamp

        Returns:
            WipBatch object

        Raises:
            ValidationError: malformed payload
            ConflictError: batch_number already used
            MaterialNotFoundError / InsufficientStockError: a material cannot be
                consumed; no quantity changes and no batch record remain
        """
        batch_number = require_text(batch_number, "batch_number")
        materials = parse_quantity_items(raw_materials, "raw_materials")
        outputs = parse_quantity_items(output, "output", allow_empty=True)
        status = require_text(status, "status")
        started = parse_timestamp(start_date, "start_date")
        notes = optional_text(notes, "notes")

        with self.store.transaction():
            if self.store.batches.exists(batch_number):
                logger.warning(f"Rejected duplicate WIP batch {batch_number}")
                raise ConflictError(f"Batch number '{batch_number}' already exists")

            for code, quantity in materials:
                self.ledger.deduct_strict(
                    code,
                    quantity,
                    movement_type=StockMovement.WIP_INPUT,
                    reference_type="wip_batch",
                    reference_id=batch_number,
                    notes="Materials used in production",
                    not_found_error=MaterialNotFoundError,
                )

            batch = WipBatch(
                batch_number=batch_number,
                status=status,
                start_date=started,
                notes=notes,
            )
            self._replace_items(batch, WipBatchItem.RAW_MATERIAL, materials)
            self._replace_items(batch, WipBatchItem.OUTPUT, outputs)
            self.store.batches.create(batch)

        logger.info(
            f"Created WIP batch {batch_number}: {len(materials)} material(s) deducted, "
            f"{len(outputs)} expected output(s)"
        )
        return batch

    def complete_batch(self, batch_number, status=WipStatusValidator.COMPLETED, end_date=None, output=None) -> WipBatch:
        """
        Move a batch forward; on 'completed' record the actual outputs and credit them.

        Outputs unknown to the catalog are created with placeholder details.

        Raises:
            NotFoundError: no such batch
            ValidationError: malformed payload (outputs are required to complete)
            InvalidTransitionError: batch already completed, or transition not allowed
        """
        batch = self.get_batch(batch_number)
        status = require_text(status if status is not None else WipStatusValidator.COMPLETED, "status")
        completing = status == WipStatusValidator.COMPLETED
        outputs = None
        if completing or output is not None:
            outputs = parse_quantity_items(output, "output", allow_empty=not completing)
        ended = parse_timestamp(end_date, "end_date") if end_date is not None else utc_now()

        with self.store.transaction():
            # re-read under lock so a concurrent completion cannot credit twice
            batch = self.store.batches.find_by_key(batch_number, for_update=True)
            if not WipStatusValidator.can_transition(batch.status, status):
                logger.warning(f"Rejected WIP transition {batch_number}: {batch.status} -> {status}")
                raise InvalidTransitionError(
                    f"Batch '{batch_number}' cannot move from '{batch.status}' to '{status}'"
                )

            batch.status = status
            if completing:
                batch.end_date = ended
            if outputs is not None:
                self._replace_items(batch, WipBatchItem.OUTPUT, outputs)
            self.store.session.flush()

            if completing:
                for code, quantity in outputs:
                    details = dict(WIP_OUTPUT_DETAILS, name=code)
                    self.ledger.apply_delta(
                        code,
                        quantity,
                        details,
                        movement_type=StockMovement.WIP_OUTPUT,
                        reference_type="wip_batch",
                        reference_id=batch_number,
                        notes="Products completed from batch",
                    )

        logger.info(f"WIP batch {batch_number} moved to {status}")
        return batch
