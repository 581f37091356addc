"""
Persistence adapter used by the business layer.

Managers never reach for a module-level session: they receive a `Store`
(built from the Flask-SQLAlchemy session by default) and run every state
change inside `Store.transaction()`.
"""

from contextlib import contextmanager

from sqlalchemy import inspect, select, update

from backoffice import db
from backoffice.data.core.timestamped_base import utc_now
from backoffice.data.core.parties.customer import Customer
from backoffice.data.core.parties.supplier import Supplier
from backoffice.data.inventory.product import Product
from backoffice.data.inventory.stock_movement import StockMovement
from backoffice.data.orders.order_header import OrderHeader
from backoffice.data.production.wip_batch import WipBatch


class Repository:
    """Keyed access to one model: find_by_key, list, create, update, delete"""

    def __init__(self, session, model):
        self.session = session
        self.model = model
        self.key_column = inspect(model).primary_key[0]

    def find_by_key(self, key, *, for_update=False, refresh=False):
        """
        Args:
            key: primary key value
            for_update: take a row lock (SELECT ... FOR UPDATE) where the backend supports it
            refresh: bypass the identity map and reload column values
        """
        if key is None:
            return None
        if not for_update and not refresh:
            return self.session.get(self.model, key)
        stmt = select(self.model).where(self.key_column == key)
        if for_update:
            stmt = stmt.with_for_update()
        stmt = stmt.execution_options(populate_existing=True)
        return self.session.execute(stmt).scalar_one_or_none()

    def exists(self, key) -> bool:
        return self.find_by_key(key) is not None

    def list(self, *criteria, order_by=None, **filters):
        stmt = select(self.model)
        if filters:
            stmt = stmt.filter_by(**filters)
        if criteria:
            stmt = stmt.where(*criteria)
        if order_by is not None:
            if not isinstance(order_by, (list, tuple)):
                order_by = [order_by]
            stmt = stmt.order_by(*order_by)
        return list(self.session.scalars(stmt))

    def create(self, instance):
        self.session.add(instance)
        self.session.flush()
        return instance

    def update(self, instance, **fields):
        for key, value in fields.items():
            setattr(instance, key, value)
        self.session.flush()
        return instance

    def delete(self, instance):
        self.session.delete(instance)
        self.session.flush()
        return instance

    def delete_where(self, *criteria, **filters) -> int:
        # Row by row so relationship cascades (order lines, batch items) apply
        instances = self.list(*criteria, **filters)
        for instance in instances:
            self.session.delete(instance)
        self.session.flush()
        return len(instances)


class Store:
    """One repository per entity plus a transaction boundary"""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session
        self.products = Repository(self.session, Product)
        self.movements = Repository(self.session, StockMovement)
        self.orders = Repository(self.session, OrderHeader)
        self.batches = Repository(self.session, WipBatch)
        self.customers = Repository(self.session, Customer)
        self.suppliers = Repository(self.session, Supplier)
        self._depth = 0

    @contextmanager
    def transaction(self):
        """
        Commit on success, roll back on any exception and re-raise.

        Nested use joins the outer transaction; only the outermost block commits.
        """
        if self._depth:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield self
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        finally:
            self._depth = 0

    def lock_product(self, product_code):
        return self.products.find_by_key(product_code, for_update=True)

    def deduct_if_available(self, product_code, amount) -> bool:
        """
        Single conditional UPDATE: subtract `amount` only while quantity >= amount.

        Returns False when nothing matched (product missing or short); the check
        and the write cannot interleave with another request.
        """
        now = utc_now()
        stmt = (
            update(Product)
            .where(Product.product_code == product_code, Product.quantity >= amount)
            .values(quantity=Product.quantity - amount, last_updated=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return result.rowcount == 1
