from __future__ import annotations

from backoffice.buisness.core.errors import ConflictError, NotFoundError, ValidationError
from backoffice.buisness.core.validation import optional_bool, optional_number, optional_text, require_text
from backoffice.buisness.inventory.ledger import InventoryLedger
from backoffice.data.core.store import Store
from backoffice.data.inventory.product import Product
from backoffice.data.inventory.stock_movement import StockMovement
from backoffice.logger import get_logger

logger = get_logger("backoffice.buisness.inventory.product_catalog")


class ProductCatalog:
    """Product metadata keyed by product_code; quantity changes go through the ledger"""

    def __init__(self, store: Store | None = None, ledger: InventoryLedger | None = None):
        self.store = store or Store()
        self.ledger = ledger or InventoryLedger(self.store)

    def list_products(self) -> list[Product]:
        return self.store.products.list(order_by=Product.product_code)

    def get_product(self, product_code: str) -> Product:
        product = self.store.products.find_by_key(product_code)
        if product is None:
            raise NotFoundError(f"Product with code '{product_code}' not found.")
        return product

    def search_products(self, prefix) -> list[Product]:
        if not isinstance(prefix, str) or not prefix.strip():
            raise ValidationError("Missing or invalid query")
        prefix = prefix.strip()
        return self.store.products.list(
            Product.product_code.startswith(prefix, autoescape=True),
            order_by=Product.product_code,
        )

    def add_product(self, data: dict) -> Product:
        """
        Create a catalog entry. A non-zero starting quantity is recorded as an
        Initial stock movement.

        Raises:
            ConflictError: product_code already exists
            ValidationError: malformed fields
        """
        product_code = require_text(data.get("product_code"), "product_code")
        name = require_text(data.get("name"), "name")
        quantity = optional_number(data.get("quantity"), "quantity", default=0.0, non_negative=True)

        fields = {
            "product_code": product_code,
            "name": name,
            "description": optional_text(data.get("description"), "description") or "",
            "weight": optional_number(data.get("weight"), "weight", default=0.0, non_negative=True),
            "price": optional_number(data.get("price"), "price", default=0.0, non_negative=True),
            "quantity": 0.0,
            "category": optional_text(data.get("category"), "category"),
            "is_raw_material": optional_bool(data.get("is_raw_material"), "is_raw_material"),
        }

        with self.store.transaction():
            if self.store.products.exists(product_code):
                logger.warning(f"Rejected duplicate product code {product_code}")
                raise ConflictError("Product code already exists")

            product = Product.from_dict(fields)
            product.touch()
            self.store.products.create(product)

            if quantity:
                self.ledger.apply_delta(
                    product_code,
                    quantity,
                    movement_type=StockMovement.INITIAL,
                    notes="Opening quantity",
                )

        logger.info(f"Added product {product_code} with quantity {quantity}")
        return product

    def update_product_fields(self, product_code: str, data: dict) -> Product:
        fields = {
            "name": data.get("name"),
            "description": optional_text(data.get("description"), "description"),
            "weight": optional_number(data.get("weight"), "weight", non_negative=True),
            "price": optional_number(data.get("price"), "price", non_negative=True),
            "category": optional_text(data.get("category"), "category"),
            "is_raw_material": optional_bool(data.get("is_raw_material"), "is_raw_material"),
        }
        if fields["name"] is not None:
            fields["name"] = require_text(fields["name"], "name")
        return self.ledger.set_absolute(product_code, fields)

    def adjust_stock(self, product_code, qty_delta, *, create_if_missing=False, details=None, notes=None) -> Product:
        """
        Direct stock adjustment.

        Unknown codes raise NotFoundError unless `create_if_missing` is set, in
        which case the ledger creates the product from `details`.
        """
        product_code = require_text(product_code, "product_code")
        notes = optional_text(notes, "notes")
        with self.store.transaction():
            if not create_if_missing and not self.store.products.exists(product_code):
                raise NotFoundError(f"Product with code '{product_code}' not found.")
            product = self.ledger.apply_delta(product_code, qty_delta, details, notes=notes)
        logger.info(f"Adjusted stock for {product_code} by {qty_delta}; now {product.quantity}")
        return product

    def delete_product(self, product_code: str) -> Product:
        """Administrative removal; movement history is kept."""
        with self.store.transaction():
            product = self.store.products.find_by_key(product_code)
            if product is None:
                raise NotFoundError(f"Product with code '{product_code}' not found.")
            self.store.products.delete(product)
        logger.info(f"Deleted product {product_code}")
        return product
