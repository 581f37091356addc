from __future__ import annotations

from backoffice.buisness.core.errors import InsufficientStockError, NotFoundError, ValidationError
from backoffice.buisness.core.validation import is_number, optional_bool, optional_number, optional_text
from backoffice.data.core.store import Store
from backoffice.data.inventory.product import Product
from backoffice.data.inventory.stock_movement import StockMovement
from backoffice.logger import get_logger

logger = get_logger("backoffice.buisness.inventory.ledger")

# Placeholder details for products created by a stock delta on an unknown code
DEFAULT_PRODUCT_DETAILS = {
    "name": "Unnamed Product",
    "description": "",
    "weight": 1.0,
    "price": 0.0,
}

DESCRIPTIVE_FIELDS = ("name", "description", "weight", "price", "category", "is_raw_material")


def clean_product_details(details: dict | None) -> dict:
    """Validated descriptive fields from `details`; unset or empty values are left out."""
    if details is None:
        return {}
    if not isinstance(details, dict):
        raise ValidationError("Product details must be an object")
    checks = {
        "name": lambda v: optional_text(v, "name"),
        "description": lambda v: optional_text(v, "description"),
        "category": lambda v: optional_text(v, "category"),
        "weight": lambda v: optional_number(v, "weight", non_negative=True),
        "price": lambda v: optional_number(v, "price", non_negative=True),
        "is_raw_material": lambda v: optional_bool(v, "is_raw_material"),
    }
    cleaned = {}
    for key, check in checks.items():
        value = details.get(key)
        if value is None or value == "":
            continue
        cleaned[key] = check(value)
    return cleaned


class InventoryLedger:
    """
    Core stock operations.

    Responsibilities:
    - Maintain Product.quantity as the single source of truth for stock
    - Create the product on first reference where the caller allows it
    - Create a StockMovement row for every quantity change

    Methods flush but never commit; each runs inside `store.transaction()`,
    which joins the caller's transaction when there is one.
    """

    def __init__(self, store: Store | None = None):
        self.store = store or Store()

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    def _record(self, product: Product, delta: float, movement_type: str,
                reference_type: str | None = None, reference_id: str | None = None,
                notes: str | None = None) -> StockMovement:
        movement = StockMovement(
            product_code=product.product_code,
            movement_type=movement_type,
            quantity_delta=delta,
            quantity_after=product.quantity,
            reference_type=reference_type,
            reference_id=reference_id,
            notes=notes,
        )
        return self.store.movements.create(movement)

    def _create_product(self, product_code: str, quantity: float, details: dict) -> Product:
        merged = dict(DEFAULT_PRODUCT_DETAILS)
        merged.update(details)
        product = Product(product_code=product_code, quantity=quantity, **merged)
        product.touch()
        return self.store.products.create(product)

    @staticmethod
    def _check_delta(delta):
        if not is_number(delta):
            raise ValidationError("Quantity delta must be a number")
        return float(delta)

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------

    def apply_delta(self, product_code: str, delta: float, fallback_details: dict | None = None, *,
                    movement_type: str = StockMovement.ADJUSTMENT,
                    reference_type: str | None = None, reference_id: str | None = None,
                    notes: str | None = None) -> Product:
        """
        Add `delta` to the product's quantity; create the product when the code is unknown.

        A new product starts at `quantity = delta` with `fallback_details`
        (name, description, weight, price) over placeholder values.
        """
        delta = self._check_delta(delta)
        details = clean_product_details(fallback_details)
        with self.store.transaction():
            product = self.store.lock_product(product_code)
            if product is None:
                product = self._create_product(product_code, delta, details)
                logger.info(f"Auto-created product {product_code} with quantity {delta}")
            else:
                product.quantity = (product.quantity or 0.0) + delta
                product.touch()
                self.store.session.flush()
            self._record(product, delta, movement_type, reference_type, reference_id, notes)
        return product

    def apply_delta_clamped(self, product_code: str, delta: float, fallback_details: dict | None = None, *,
                            movement_type: str = StockMovement.DISPATCH,
                            reference_type: str | None = None, reference_id: str | None = None,
                            notes: str | None = None) -> Product:
        """
        Same as apply_delta but the resulting quantity never drops below zero.

        The recorded movement carries the delta actually applied.
        """
        delta = self._check_delta(delta)
        details = clean_product_details(fallback_details)
        with self.store.transaction():
            product = self.store.lock_product(product_code)
            if product is None:
                product = self._create_product(product_code, max(0.0, delta), details)
                applied = product.quantity
            else:
                old_qty = product.quantity or 0.0
                product.quantity = max(0.0, old_qty + delta)
                product.touch()
                self.store.session.flush()
                applied = product.quantity - old_qty
                if applied != delta:
                    logger.warning(
                        f"Clamped stock change for {product_code}: requested {delta}, applied {applied}"
                    )
            self._record(product, applied, movement_type, reference_type, reference_id, notes)
        return product

    def require_available(self, product_code: str, amount: float) -> Product:
        """Pre-flight check: the product exists and holds at least `amount`."""
        product = self.store.products.find_by_key(product_code, refresh=True)
        if product is None:
            raise NotFoundError(f"Product '{product_code}' not found")
        if (product.quantity or 0.0) < amount:
            raise InsufficientStockError(product_code, product.quantity, amount)
        return product

    def deduct_strict(self, product_code: str, amount: float, *,
                      movement_type: str = StockMovement.WIP_INPUT,
                      reference_type: str | None = None, reference_id: str | None = None,
                      notes: str | None = None, not_found_error=NotFoundError) -> Product:
        """
        Remove `amount` only if it is available; never goes negative.

        Check and write are one conditional UPDATE, so two concurrent callers
        cannot both pass the check against the same stock.
        """
        with self.store.transaction():
            if not self.store.deduct_if_available(product_code, amount):
                product = self.store.products.find_by_key(product_code, refresh=True)
                if product is None:
                    raise not_found_error(f"Product '{product_code}' not found")
                raise InsufficientStockError(product_code, product.quantity, amount)

            product = self.store.products.find_by_key(product_code, refresh=True)
            self._record(product, -amount, movement_type, reference_type, reference_id, notes)
        return product

    def set_absolute(self, product_code: str, fields: dict) -> Product:
        """Update descriptive fields without touching quantity."""
        with self.store.transaction():
            product = self.store.lock_product(product_code)
            if product is None:
                raise NotFoundError(f"Product with code '{product_code}' not found.")
            for key in DESCRIPTIVE_FIELDS:
                if key in fields and fields[key] is not None:
                    setattr(product, key, fields[key])
            product.touch()
            self.store.session.flush()
        logger.info(f"Updated product details for {product_code}")
        return product

    def update_inventory(self, line_items, is_purchase: bool, *, reference_id: str | None = None) -> list[Product]:
        """
        Apply an order's line items to stock.

        Purchase: credit `quantity_received`; unknown codes are created from the
        line's descriptive fields.
        Sales: deduct `quantity` with a zero floor; every code must already exist
        (checked for all lines before anything changes).
        """
        touched = []
        with self.store.transaction():
            if not is_purchase:
                missing = [line.product_code for line in line_items
                           if self.store.products.find_by_key(line.product_code) is None]
                if missing:
                    raise NotFoundError(
                        f"Cannot dispatch: product(s) not in inventory: {', '.join(missing)}"
                    )

            for line in line_items:
                if is_purchase:
                    details = {
                        "name": line.name,
                        "description": line.description,
                        "weight": line.weight,
                        "price": line.price,
                    }
                    product = self.apply_delta(
                        line.product_code,
                        line.quantity_received or 0.0,
                        details,
                        movement_type=StockMovement.RECEIPT,
                        reference_type="order",
                        reference_id=reference_id,
                    )
                else:
                    product = self.apply_delta_clamped(
                        line.product_code,
                        -(line.quantity or 0.0),
                        movement_type=StockMovement.DISPATCH,
                        reference_type="order",
                        reference_id=reference_id,
                    )
                touched.append(product)
        return touched
