from backoffice import db
from backoffice.data.core.timestamped_base import TimestampedBase, utc_now

# this class holds catalog information and the on-hand quantity for a product
# quantity only changes through the inventory ledger (backoffice/buisness/inventory/ledger.py)


class Product(TimestampedBase):
    __tablename__ = 'products'

    product_code = db.Column(db.String(100), primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True, default='')
    weight = db.Column(db.Float, nullable=False, default=0.0)
    price = db.Column(db.Float, nullable=False, default=0.0)
    quantity = db.Column(db.Float, nullable=False, default=0.0)

    # Passthrough metadata, no rules depend on these
    category = db.Column(db.String(100), nullable=True)
    is_raw_material = db.Column(db.Boolean, nullable=True)

    last_updated = db.Column(db.DateTime, nullable=False, default=utc_now)

    def __repr__(self):
        return f'<Product {self.product_code}: {self.name} qty={self.quantity}>'

    @property
    def total_value(self) -> float:
        return (self.quantity or 0.0) * (self.price or 0.0)

    def touch(self):
        self.last_updated = utc_now()
