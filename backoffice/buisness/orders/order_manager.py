"""
OrderManager - Business logic for quotations, sales orders and purchase orders

Responsibilities:
- Validate and create order documents (always starting as quotations)
- Drive the per-type status machine
- Record partial purchase receipts
- Apply stock effects through the inventory ledger exactly once per order
"""

from __future__ import annotations

from dataclasses import dataclass

from backoffice.buisness.core.errors import (
    AlreadyCompletedError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    UnrecognizedTypeError,
    ValidationError,
)
from backoffice.buisness.core.validation import (
    is_number,
    optional_number,
    optional_text,
    require_number,
    require_text,
)
from backoffice.buisness.inventory.ledger import InventoryLedger
from backoffice.buisness.orders.order_status import OrderStatus
from backoffice.buisness.parties.party_directory import CustomerDirectory, SupplierDirectory
from backoffice.data.core.store import Store
from backoffice.data.core.timestamped_base import utc_now
from backoffice.data.orders.order_header import OrderHeader
from backoffice.data.orders.order_line import OrderLine
from backoffice.logger import get_logger

logger = get_logger("backoffice.buisness.orders.order_manager")


@dataclass(frozen=True)
class TransitionResult:
    order: OrderHeader
    message: str
    completed: bool = False

    @property
    def status(self) -> str:
        return self.order.status

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "status": self.status,
            "completed": self.completed,
        }


class OrderManager:
    """Creates orders and moves them through their lifecycle"""

    def __init__(self, store: Store | None = None, ledger: InventoryLedger | None = None):
        self.store = store or Store()
        self.ledger = ledger or InventoryLedger(self.store)
        self.customers = CustomerDirectory(self.store)
        self.suppliers = SupplierDirectory(self.store)

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> OrderHeader:
        order = self.store.orders.find_by_key(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    # ------------------------------------------------------------------
    # creation
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_line(item, index: int, order_type: str) -> OrderLine:
        if not isinstance(item, dict):
            raise ValidationError(f"Invalid products entry at position {index}: {item!r}")
        line = OrderLine(
            line_number=index + 1,
            product_code=require_text(item.get("product_code"), f"products[{index}].product_code"),
            price=optional_number(item.get("price"), f"products[{index}].price", default=0.0, non_negative=True),
            name=optional_text(item.get("name"), f"products[{index}].name"),
            description=optional_text(item.get("description"), f"products[{index}].description"),
            weight=optional_number(item.get("weight"), f"products[{index}].weight", non_negative=True),
        )
        if order_type == OrderHeader.SALES:
            line.quantity = require_number(item.get("quantity"), f"products[{index}].quantity", positive=True)
        else:
            ordered = require_number(
                item.get("quantity_ordered"), f"products[{index}].quantity_ordered", positive=True
            )
            received = optional_number(
                item.get("quantity_received"), f"products[{index}].quantity_received", default=0.0
            )
            line.quantity_ordered = ordered
            line.quantity_received = min(max(received, 0.0), ordered)
        return line

    def create_order(self, data: dict) -> OrderHeader:
        """
        Create an order document in status 'quotation'.

        Args:
            data: {order_id, party_id, type, products[], notes?, bom?}

        Returns:
            OrderHeader object

        Raises:
            ValidationError: malformed fields or empty products
            UnrecognizedTypeError: type is neither 'sales' nor 'purchase'
            ConflictError: order_id already used
        """
        order_id = require_text(data.get("order_id"), "order_id")
        party_id = require_text(data.get("party_id"), "party_id")
        order_type = data.get("type")
        if order_type not in OrderStatus.TYPES:
            raise UnrecognizedTypeError(f"Unrecognized order type: {order_type!r}")

        products = data.get("products")
        if not isinstance(products, list) or not products:
            raise ValidationError("'products' must be a non-empty array")
        lines = [self._parse_line(item, index, order_type) for index, item in enumerate(products)]

        with self.store.transaction():
            if self.store.orders.exists(order_id):
                logger.warning(f"Rejected duplicate order id {order_id}")
                raise ConflictError(f"Order '{order_id}' already exists")

            directory = self.customers if order_type == OrderHeader.SALES else self.suppliers
            directory.ensure(party_id)

            order = OrderHeader(
                order_id=order_id,
                type=order_type,
                party_id=party_id,
                status=OrderStatus.QUOTATION,
                date=utc_now(),
                notes=optional_text(data.get("notes"), "notes"),
                bom=data.get("bom"),
            )
            order.lines = lines
            self.store.orders.create(order)

        logger.info(f"Created {order_type} quotation {order_id} for {party_id} with {len(lines)} line(s)")
        return order

    # ------------------------------------------------------------------
    # transitions
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_receipts(updated_products) -> list[tuple[str, float]]:
        if not isinstance(updated_products, list):
            raise ValidationError("'updated_products' must be an array")
        receipts = []
        for index, item in enumerate(updated_products):
            if not isinstance(item, dict):
                raise ValidationError(f"Invalid updated_products entry at position {index}: {item!r}")
            code = require_text(item.get("product_code"), f"updated_products[{index}].product_code")
            received = item.get("quantity_received")
            if not is_number(received) or received < 0:
                raise ValidationError(
                    f"Invalid updated_products entry at position {index}: "
                    f"quantity_received must be a non-negative number"
                )
            receipts.append((code, float(received)))
        return receipts

    def _receive_partial(self, order: OrderHeader, receipts) -> TransitionResult:
        for line in order.lines:
            received = next((qty for code, qty in receipts if code == line.product_code), None)
            if received is None:
                continue
            line.quantity_received = min((line.quantity_received or 0.0) + received, line.quantity_ordered)
        self.store.session.flush()

        if order.all_received:
            order.status = OrderStatus.COMPLETED
            self.ledger.update_inventory(order.lines, True, reference_id=order.order_id)
            return TransitionResult(order, "Purchase completed and inventory updated", completed=True)
        return TransitionResult(order, "Partial quantities updated", completed=False)

    def _force_complete(self, order: OrderHeader) -> TransitionResult:
        for line in order.lines:
            line.quantity_received = line.quantity_ordered
        order.status = OrderStatus.COMPLETED
        self.store.session.flush()
        self.ledger.update_inventory(order.lines, True, reference_id=order.order_id)
        return TransitionResult(order, "Purchase force-completed and inventory updated", completed=True)

    def _transition_purchase(self, order: OrderHeader, target_status, updated_products) -> TransitionResult:
        if order.status == OrderStatus.COMPLETED:
            raise AlreadyCompletedError("Order already marked as completed")
        if updated_products is not None:
            return self._receive_partial(order, self._parse_receipts(updated_products))
        if target_status == OrderStatus.COMPLETED:
            return self._force_complete(order)
        raise ValidationError("Invalid purchase update request")

    def _transition_sales(self, order: OrderHeader, target_status) -> TransitionResult:
        if not OrderStatus.can_transition(OrderHeader.SALES, order.status, target_status):
            raise InvalidTransitionError("Invalid sales order transition")

        if target_status == OrderStatus.PACKING:
            order.status = OrderStatus.PACKING
            self.store.session.flush()
            return TransitionResult(order, "Sales order moved to current orders (packing)")

        self.ledger.update_inventory(order.lines, False, reference_id=order.order_id)
        order.status = OrderStatus.DISPATCHED
        self.store.session.flush()
        return TransitionResult(order, "Sales order dispatched and inventory updated", completed=True)

    def transition(self, order_id, target_status=None, updated_products=None) -> TransitionResult:
        """
        Move an order to its next state.

        Purchase orders take either `updated_products` (partial receipt, clamped
        to the ordered quantity) or `target_status='completed'` (force-complete).
        Inventory is credited once, when the order reaches 'completed'.
        Sales orders go quotation -> packing -> dispatched; dispatch deducts stock
        with a zero floor.

        Raises:
            NotFoundError: no such order, or a dispatched product is not in inventory
            AlreadyCompletedError: purchase order already completed
            ValidationError: purchase request with neither branch
            InvalidTransitionError: sales transition not allowed from the current status
            UnrecognizedTypeError: order type is neither sales nor purchase
        """
        with self.store.transaction():
            order = self.store.orders.find_by_key(order_id, for_update=True)
            if order is None:
                raise NotFoundError("Order not found")

            previous = order.status
            try:
                if order.is_purchase:
                    result = self._transition_purchase(order, target_status, updated_products)
                elif order.is_sales:
                    result = self._transition_sales(order, target_status)
                else:
                    raise UnrecognizedTypeError(f"Unrecognized order type: {order.type!r}")
            except (AlreadyCompletedError, InvalidTransitionError, ValidationError) as e:
                logger.warning(f"Rejected transition for order {order_id} ({previous} -> {target_status}): {e}")
                raise

        logger.info(f"Order {order_id}: {previous} -> {result.status} ({result.message})")
        return result

    # ------------------------------------------------------------------
    # removal
    # ------------------------------------------------------------------

    def delete_order(self, order_id) -> dict:
        """Administrative removal; no stock effect."""
        with self.store.transaction():
            order = self.store.orders.find_by_key(order_id)
            if order is None:
                raise NotFoundError("Order not found")
            payload = order.to_dict()
            self.store.orders.delete(order)
        logger.info(f"Deleted order {order_id}")
        return payload

    def delete_all_quotations(self) -> int:
        with self.store.transaction():
            count = self.store.orders.delete_where(status=OrderStatus.QUOTATION)
        logger.info(f"Deleted {count} quotation(s)")
        return count
